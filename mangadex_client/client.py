from __future__ import annotations

import requests

from mangadex_client.apis import ChapterApi, CoverApi, CustomListApi, LegacyApi, MangaApi, UserApi
from mangadex_client.config import AppSettings
from mangadex_client.http import HttpClient
from mangadex_client.logging_utils import configure_logging
from mangadex_client.models import AuthTokens
from mangadex_client.state import ClientRef, ConcurrencyMode, new_client_ref


class MangaDexClient:
    """
    Entry point for the MangaDex API.

    All request builders created from one client share its ``HttpClient``, so
    tokens and captcha solutions set here apply to every request built later.

    Example:
        client = MangaDexClient()
        chapters = await client.chapter().list().title("summoning").limit(10).build().send()

    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        mode: ConcurrencyMode | str = ConcurrencyMode.EXCLUSIVE,
    ):
        self._http_client_ref = new_client_ref(http_client or HttpClient(), mode)

    @classmethod
    def from_settings(cls, settings: AppSettings, session: requests.Session | None = None) -> "MangaDexClient":
        settings.validate()
        configure_logging(settings.log_level)
        return cls(HttpClient.from_settings(settings, session=session), settings.concurrency_mode)

    @classmethod
    def api_dev_client(
        cls,
        mode: ConcurrencyMode | str = ConcurrencyMode.EXCLUSIVE,
        session: requests.Session | None = None,
    ) -> "MangaDexClient":
        return cls(HttpClient.api_dev_client(session=session), mode)

    @property
    def http_client_ref(self) -> ClientRef:
        return self._http_client_ref

    @property
    def mode(self) -> ConcurrencyMode:
        return self._http_client_ref.mode

    # =========================================================================
    # Auth and captcha
    # =========================================================================

    async def get_auth_tokens(self) -> AuthTokens | None:
        async with self._http_client_ref.borrow() as http_client:
            return http_client.get_tokens()

    async def set_auth_tokens(self, auth_tokens: AuthTokens) -> None:
        async with self._http_client_ref.borrow() as http_client:
            http_client.set_auth_tokens(auth_tokens)

    async def clear_auth_tokens(self) -> None:
        async with self._http_client_ref.borrow() as http_client:
            http_client.clear_auth_tokens()

    async def get_captcha(self) -> str | None:
        async with self._http_client_ref.borrow() as http_client:
            return http_client.get_captcha()

    async def set_captcha(self, captcha: str) -> None:
        async with self._http_client_ref.borrow() as http_client:
            http_client.set_captcha(captcha)

    async def clear_captcha(self) -> None:
        async with self._http_client_ref.borrow() as http_client:
            http_client.clear_captcha()

    # =========================================================================
    # API groups
    # =========================================================================

    def chapter(self) -> ChapterApi:
        return ChapterApi(self._http_client_ref)

    def cover(self) -> CoverApi:
        return CoverApi(self._http_client_ref)

    def custom_list(self) -> CustomListApi:
        return CustomListApi(self._http_client_ref)

    def legacy(self) -> LegacyApi:
        return LegacyApi(self._http_client_ref)

    def manga(self) -> MangaApi:
        return MangaApi(self._http_client_ref)

    def user(self) -> UserApi:
        return UserApi(self._http_client_ref)
