from __future__ import annotations

from uuid import UUID

from pydantic import Field

from mangadex_client.classifier import decode_error_list
from mangadex_client.endpoint import Endpoint, RequestBuilder
from mangadex_client.errors import ApiError, ServerError
from mangadex_client.schema import IsFollowingResponse
from mangadex_client.state import ClientRef


class IsFollowingGroup(Endpoint):
    """
    Check whether the logged-in user follows a scanlation group.

    ``GET /user/follows/group/{id}`` answers with its status code rather than
    an envelope: 200 means following, 404 means not following. A 404 whose
    body carries structured errors (for example an unknown group) is raised
    as ``ApiError`` instead of being read as ``False``.
    """

    METHOD = "GET"
    PATH = "/user/follows/group/{group_id}"
    REQUIRE_AUTH = True
    RESPONSE = IsFollowingResponse

    group_id: UUID = Field(exclude=True)

    async def send(self) -> IsFollowingResponse:
        async with self.client_ref().borrow() as http_client:
            response = await http_client.send_request_raw(self)

            if response.status_code == 200:
                return IsFollowingResponse(is_following=True)

            if response.status_code == 404:
                errors = decode_error_list(response.text)
                if errors:
                    raise ApiError(errors, status_code=response.status_code)
                return IsFollowingResponse(is_following=False)

            raise ServerError(response.status_code, response.text)


class UserApi:
    def __init__(self, http_client: ClientRef):
        self._http_client = http_client

    def is_following_group(self) -> RequestBuilder[IsFollowingGroup]:
        return IsFollowingGroup.builder(self._http_client)
