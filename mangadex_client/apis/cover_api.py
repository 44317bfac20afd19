from __future__ import annotations

from uuid import UUID

from pydantic import Field

from mangadex_client.endpoint import Endpoint, RequestBuilder
from mangadex_client.models import MultipartForm
from mangadex_client.schema import CoverResponse
from mangadex_client.state import ClientRef


class UploadCover(Endpoint):
    METHOD = "POST"
    PATH = "/cover/{manga_id}"
    REQUIRE_AUTH = True
    RESPONSE = CoverResponse

    manga_id: UUID
    file: bytes
    file_name: str = "cover.jpg"
    content_type: str = "image/jpeg"
    volume: str | None = None
    description: str | None = None
    locale: str | None = None

    def multipart(self) -> MultipartForm:
        fields = {
            name: value
            for name, value in (
                ("volume", self.volume),
                ("description", self.description),
                ("locale", self.locale),
            )
            if value is not None
        }
        return MultipartForm(
            files={"file": (self.file_name, self.file, self.content_type)},
            fields=fields,
        )


class CoverApi:
    def __init__(self, http_client: ClientRef):
        self._http_client = http_client

    def upload(self) -> RequestBuilder[UploadCover]:
        return UploadCover.builder(self._http_client)
