from __future__ import annotations

from pydantic import Field

from mangadex_client.endpoint import Endpoint, PayloadKind, RequestBuilder
from mangadex_client.schema import LegacyMappingCollection
from mangadex_client.state import ClientRef
from mangadex_client.static_data import LegacyMappingType


class LegacyIdMapping(Endpoint):
    """Map numeric ids from the legacy site to current UUIDs: ``POST /legacy/mapping``."""

    METHOD = "POST"
    PATH = "/legacy/mapping"
    PAYLOAD = PayloadKind.BODY
    RESPONSE = LegacyMappingCollection
    APPEND_SETTERS = {"add_id": "ids"}

    mapping_type: LegacyMappingType = Field(alias="type")
    ids: list[int] = Field(default_factory=list)


class LegacyApi:
    def __init__(self, http_client: ClientRef):
        self._http_client = http_client

    def id_mapping(self) -> RequestBuilder[LegacyIdMapping]:
        return LegacyIdMapping.builder(self._http_client)
