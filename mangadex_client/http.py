from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Callable, Mapping
from urllib.parse import urljoin

import requests

from mangadex_client.classifier import classify_response
from mangadex_client.config import API_DEV_URL, API_URL, AppSettings, parse_base_url
from mangadex_client.errors import MissingTokensError, TransportError
from mangadex_client.models import AuthTokens

if TYPE_CHECKING:
    from mangadex_client.endpoint import Endpoint

logger = logging.getLogger(__name__)

CAPTCHA_HEADER = "X-Captcha-Result"


def encode_query(payload: Mapping[str, Any], prefix: str | None = None) -> list[tuple[str, str]]:
    """Flatten a JSON-ready mapping into query pairs, ``ids[]=a&ids[]=b`` style."""
    pairs: list[tuple[str, str]] = []
    for key, value in payload.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            pairs.extend(encode_query(value, name))
        elif isinstance(value, (list, tuple)):
            pairs.extend((f"{name}[]", _query_scalar(item)) for item in value if item is not None)
        else:
            pairs.append((name, _query_scalar(value)))
    return pairs


def _query_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class HttpClient:
    def __init__(
        self,
        base_url: str = API_URL,
        session: requests.Session | None = None,
        auth_tokens: AuthTokens | None = None,
        captcha: str | None = None,
        timeout_seconds: float | None = None,
    ):
        self.base_url = parse_base_url(base_url)
        self._session = session or requests.Session()
        self._auth_tokens = auth_tokens
        self._captcha = captcha
        self._timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(cls, settings: AppSettings, session: requests.Session | None = None) -> "HttpClient":
        return cls(
            base_url=settings.base_url,
            session=session,
            timeout_seconds=settings.timeout_seconds,
        )

    @classmethod
    def api_dev_client(cls, session: requests.Session | None = None) -> "HttpClient":
        return cls(base_url=API_DEV_URL, session=session)

    # =========================================================================
    # Auth and captcha state
    # =========================================================================

    def get_tokens(self) -> AuthTokens | None:
        return self._auth_tokens

    def set_auth_tokens(self, auth_tokens: AuthTokens) -> None:
        self._auth_tokens = auth_tokens

    def clear_auth_tokens(self) -> None:
        # Local only; the server-side session stays alive until logout.
        self._auth_tokens = None

    def get_captcha(self) -> str | None:
        return self._captcha

    def set_captcha(self, captcha: str) -> None:
        """
        Store a captcha solution to send with every following request.

        The site key needed to solve it comes from the ``X-Captcha-Sitekey``
        response header, or the ``siteKey`` context of a 403
        ``captcha_required_exception`` error.
        """
        self._captcha = str(captcha)

    def clear_captcha(self) -> None:
        self._captcha = None

    # =========================================================================
    # Dispatch
    # =========================================================================

    def build_url(self, path: str) -> str:
        return urljoin(f"{self.base_url}/", path)

    def build_request(self, endpoint: Endpoint) -> dict[str, Any]:
        method = endpoint.method()
        path = endpoint.path()
        request_kwargs: dict[str, Any] = {
            "method": method,
            "url": self.build_url(path),
            "headers": {},
            "timeout": self._timeout_seconds,
        }

        query = endpoint.query()
        if query is not None:
            request_kwargs["params"] = encode_query(query)

        body = endpoint.body()
        if body is not None:
            request_kwargs["json"] = body

        multipart = endpoint.multipart()
        if multipart is not None:
            request_kwargs.pop("json", None)
            request_kwargs.update(multipart.as_request_kwargs())

        tokens = self.get_tokens()
        if tokens is not None:
            request_kwargs["headers"]["Authorization"] = f"Bearer {tokens.session}"
        elif endpoint.require_auth():
            raise MissingTokensError(path)

        captcha = self.get_captcha()
        if captcha is not None:
            request_kwargs["headers"][CAPTCHA_HEADER] = captcha

        return request_kwargs

    async def send_request_raw(self, endpoint: Endpoint) -> requests.Response:
        """
        Send the request for ``endpoint`` without interpreting the response.

        Useful when the caller needs the status code or headers directly.
        Raises ``MissingTokensError`` before any network call when the endpoint
        requires authentication and no tokens are set.
        """
        request_kwargs = self.build_request(endpoint)
        method = request_kwargs["method"]
        url = request_kwargs["url"]

        logger.debug("%s %s", method, url)
        try:
            response = await self._run_in_thread(self._session.request, **request_kwargs)
        except requests.RequestException as error:
            raise TransportError(f"{method} {url} failed: {error}") from error

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    @staticmethod
    async def _run_in_thread(func: Callable[..., requests.Response], **kwargs: Any) -> requests.Response:
        # The worker thread cannot be interrupted. On cancellation, wait for it to
        # return so the caller's borrow outlives the session call.
        call = asyncio.ensure_future(asyncio.to_thread(func, **kwargs))
        try:
            return await asyncio.shield(call)
        except asyncio.CancelledError:
            await asyncio.wait({call})
            if not call.cancelled() and call.exception() is not None:
                logger.debug("Cancelled request finished with %r", call.exception())
            raise

    async def send_request(self, endpoint: Endpoint) -> Any:
        response = await self.send_request_raw(endpoint)
        return classify_response(response.status_code, response.text, endpoint.response_shape())

    def close(self) -> None:
        self._session.close()
