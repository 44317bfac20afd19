"""Unit tests for the exclusive and shared client references."""

from __future__ import annotations

import asyncio
import threading
import time
from uuid import uuid4

import pytest

from mangadex_client import (
    AuthTokens,
    BorrowConflictError,
    ConcurrencyMode,
    HttpClient,
    MangaDexClient,
    MissingTokensError,
)
from mangadex_client.state import ExclusiveClientRef, SharedClientRef, new_client_ref

from tests.conftest import BASE_URL, FakeSession, make_response


def test_mode_selects_implementation() -> None:
    http_client = HttpClient(base_url=BASE_URL)

    assert isinstance(new_client_ref(http_client, "exclusive"), ExclusiveClientRef)
    assert isinstance(new_client_ref(http_client, ConcurrencyMode.SHARED), SharedClientRef)
    with pytest.raises(ValueError):
        new_client_ref(http_client, "threads")


@pytest.mark.asyncio
async def test_exclusive_reentrant_borrow_conflicts() -> None:
    ref = ExclusiveClientRef(HttpClient(base_url=BASE_URL))

    async with ref.borrow():
        with pytest.raises(BorrowConflictError):
            async with ref.borrow():
                pass

    assert not ref.is_borrowed


@pytest.mark.asyncio
async def test_exclusive_borrow_released_after_error() -> None:
    ref = ExclusiveClientRef(HttpClient(base_url=BASE_URL))

    with pytest.raises(RuntimeError):
        async with ref.borrow():
            raise RuntimeError("boom")

    async with ref.borrow() as http_client:
        assert http_client.base_url == BASE_URL


@pytest.mark.asyncio
async def test_exclusive_concurrent_sends_conflict(client: MangaDexClient, session: FakeSession) -> None:
    session.queue(200, {"result": "ok", "response": "collection", "data": [], "limit": 0, "offset": 0, "total": 0})
    first = client.chapter().list().build()
    second = client.chapter().list().build()

    results = await asyncio.gather(first.send(), second.send(), return_exceptions=True)

    assert results[0].total == 0
    assert isinstance(results[1], BorrowConflictError)
    assert len(session.calls) == 1


@pytest.mark.asyncio
async def test_shared_lock_released_after_error(shared_client: MangaDexClient, session: FakeSession) -> None:
    with pytest.raises(MissingTokensError):
        await shared_client.user().is_following_group().group_id(uuid4()).build().send()

    assert not shared_client.http_client_ref.is_borrowed
    assert await shared_client.get_auth_tokens() is None


@pytest.mark.asyncio
async def test_shared_borrow_waits_instead_of_failing() -> None:
    ref = SharedClientRef(HttpClient(base_url=BASE_URL))
    order: list[str] = []

    async def hold() -> None:
        async with ref.borrow():
            order.append("first-in")
            await asyncio.sleep(0.01)
            order.append("first-out")

    async def wait() -> None:
        await asyncio.sleep(0)
        async with ref.borrow():
            order.append("second-in")

    await asyncio.gather(hold(), wait())

    assert order == ["first-in", "first-out", "second-in"]


@pytest.mark.asyncio
async def test_shared_concurrent_dispatches_are_isolated() -> None:
    def chapters_for(limit: int) -> dict:
        return {
            "result": "ok",
            "response": "collection",
            "data": [],
            "limit": limit,
            "offset": 0,
            "total": limit * 10,
        }

    class RoutingSession(FakeSession):
        def request(self, method, url, **kwargs):
            self.calls.append({"method": method, "url": url, **kwargs})
            limit = int(dict(kwargs["params"])["limit"])
            return make_response(200, chapters_for(limit))

    routing = RoutingSession()
    client = MangaDexClient(HttpClient(base_url=BASE_URL, session=routing), mode="shared")

    results = await asyncio.gather(
        *(client.chapter().list().limit(limit).build().send() for limit in (1, 2, 3, 4))
    )

    assert [result.limit for result in results] == [1, 2, 3, 4]
    assert [result.total for result in results] == [10, 20, 30, 40]
    assert sorted(dict(call["params"])["limit"] for call in routing.calls) == ["1", "2", "3", "4"]


class SlowSession(FakeSession):
    """Blocks inside ``request`` and records how many calls overlap."""

    def __init__(self, delay: float):
        super().__init__()
        self.delay = delay
        self.active = 0
        self.max_active = 0
        self._counter = threading.Lock()

    def request(self, method, url, **kwargs):
        with self._counter:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            time.sleep(self.delay)
            self.calls.append({"method": method, "url": url, **kwargs})
            return make_response(200, {"result": "ok", "statuses": {}})
        finally:
            with self._counter:
                self.active -= 1


@pytest.mark.asyncio
async def test_shared_cancelled_send_holds_lock_until_call_returns() -> None:
    slow = SlowSession(delay=0.3)
    client = MangaDexClient(HttpClient(base_url=BASE_URL, session=slow), mode="shared")
    await client.set_auth_tokens(AuthTokens(session="s", refresh="r"))

    first = asyncio.create_task(client.manga().reading_statuses().build().send())
    await asyncio.sleep(0.05)
    first.cancel()
    second = asyncio.create_task(client.manga().reading_statuses().build().send())

    with pytest.raises(asyncio.CancelledError):
        await first
    result = await second

    assert result.statuses == {}
    assert slow.max_active == 1
    # The cancelled request was not aborted; it ran to completion.
    assert len(slow.calls) == 2


@pytest.mark.asyncio
async def test_exclusive_cancelled_send_keeps_borrow_until_call_returns() -> None:
    slow = SlowSession(delay=0.2)
    client = MangaDexClient(HttpClient(base_url=BASE_URL, session=slow))
    ref = client.http_client_ref

    task = asyncio.create_task(client.chapter().list().build().send())
    await asyncio.sleep(0.05)
    task.cancel()
    await asyncio.sleep(0.01)

    assert ref.is_borrowed
    with pytest.raises(BorrowConflictError):
        await client.get_captcha()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert not ref.is_borrowed
    assert slow.max_active == 1
