from __future__ import annotations

from uuid import UUID

from pydantic import Field

from mangadex_client.endpoint import Endpoint, PayloadKind, RequestBuilder
from mangadex_client.schema import CustomListResponse, NoData
from mangadex_client.state import ClientRef
from mangadex_client.static_data import CustomListVisibility


class CreateCustomList(Endpoint):
    METHOD = "POST"
    PATH = "/list"
    PAYLOAD = PayloadKind.BODY
    REQUIRE_AUTH = True
    RESPONSE = CustomListResponse
    APPEND_SETTERS = {"add_manga": "manga"}

    name: str
    visibility: CustomListVisibility | None = None
    manga: list[UUID] = Field(default_factory=list)


class DeleteCustomList(Endpoint):
    METHOD = "DELETE"
    PATH = "/list/{list_id}"
    REQUIRE_AUTH = True
    RESPONSE = NoData

    list_id: UUID = Field(exclude=True)

    async def send(self) -> None:
        await super().send()


class CustomListApi:
    def __init__(self, http_client: ClientRef):
        self._http_client = http_client

    def create(self) -> RequestBuilder[CreateCustomList]:
        return CreateCustomList.builder(self._http_client)

    def delete(self) -> RequestBuilder[DeleteCustomList]:
        return DeleteCustomList.builder(self._http_client)
