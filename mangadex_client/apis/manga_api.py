from __future__ import annotations

from mangadex_client.endpoint import Endpoint, PayloadKind, RequestBuilder
from mangadex_client.schema import MangaReadingStatusesResponse
from mangadex_client.state import ClientRef
from mangadex_client.static_data import ReadingStatus


class MangaReadingStatuses(Endpoint):
    """Reading status of every manga the logged-in user follows: ``GET /manga/status``."""

    METHOD = "GET"
    PATH = "/manga/status"
    PAYLOAD = PayloadKind.QUERY
    REQUIRE_AUTH = True
    RESPONSE = MangaReadingStatusesResponse

    status: ReadingStatus | None = None


class MangaApi:
    def __init__(self, http_client: ClientRef):
        self._http_client = http_client

    def reading_statuses(self) -> RequestBuilder[MangaReadingStatuses]:
        return MangaReadingStatuses.builder(self._http_client)
