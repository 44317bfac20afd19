"""Pytest configuration - an in-memory transport in place of the network."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import pytest
import requests

from mangadex_client import AuthTokens, HttpClient, MangaDexClient

BASE_URL = "http://mangadex.test"


def make_response(status_code: int, payload: Any = None, text: str | None = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    if text is None:
        text = json.dumps(payload) if payload is not None else ""
        response.headers["Content-Type"] = "application/json"
    response._content = text.encode("utf-8")
    response.encoding = "utf-8"
    return response


@dataclass
class FakeSession:
    """Stands in for ``requests.Session``: records calls, replays queued responses."""

    responses: list[Any] = field(default_factory=list)
    calls: list[dict[str, Any]] = field(default_factory=list)
    closed: bool = False

    def queue(self, status_code: int, payload: Any = None, text: str | None = None) -> None:
        self.responses.append(make_response(status_code, payload, text))

    def queue_error(self, error: Exception) -> None:
        self.responses.append(error)

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"method": method, "url": url, **kwargs})
        outcome = self.responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True

    @property
    def last_call(self) -> dict[str, Any]:
        return self.calls[-1]


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def tokens() -> AuthTokens:
    return AuthTokens(session="sessiontoken", refresh="refreshtoken")


@pytest.fixture
def client(session: FakeSession) -> MangaDexClient:
    return MangaDexClient(HttpClient(base_url=BASE_URL, session=session))


@pytest.fixture
def shared_client(session: FakeSession) -> MangaDexClient:
    return MangaDexClient(HttpClient(base_url=BASE_URL, session=session), mode="shared")


@pytest.fixture
def authed_client(session: FakeSession, tokens: AuthTokens) -> MangaDexClient:
    return MangaDexClient(HttpClient(base_url=BASE_URL, session=session, auth_tokens=tokens))
