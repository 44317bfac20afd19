"""
Ownership of the shared ``HttpClient``.

Every request builder holds the same client reference, so auth and captcha
changes are seen by all requests built afterwards. Two disciplines exist,
chosen once through configuration:

- exclusive: one logical owner; borrowing while a borrow is active fails
  immediately with ``BorrowConflictError``.
- shared: many tasks; borrowing waits on an ``asyncio.Lock`` held for one
  dispatch.
"""

from __future__ import annotations

import asyncio
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from enum import Enum
from typing import AsyncIterator, Protocol

from mangadex_client.errors import BorrowConflictError
from mangadex_client.http import HttpClient


class ConcurrencyMode(str, Enum):
    EXCLUSIVE = "exclusive"
    SHARED = "shared"


class ClientRef(Protocol):
    mode: ConcurrencyMode

    @property
    def is_borrowed(self) -> bool: ...

    def borrow(self) -> AbstractAsyncContextManager[HttpClient]: ...


class ExclusiveClientRef:
    mode = ConcurrencyMode.EXCLUSIVE

    def __init__(self, http_client: HttpClient):
        self._http_client = http_client
        self._borrowed = False

    @property
    def is_borrowed(self) -> bool:
        return self._borrowed

    @asynccontextmanager
    async def borrow(self) -> AsyncIterator[HttpClient]:
        if self._borrowed:
            raise BorrowConflictError("HTTP client is already borrowed")
        self._borrowed = True
        try:
            yield self._http_client
        finally:
            self._borrowed = False


class SharedClientRef:
    mode = ConcurrencyMode.SHARED

    def __init__(self, http_client: HttpClient):
        self._http_client = http_client
        self._lock = asyncio.Lock()

    @property
    def is_borrowed(self) -> bool:
        return self._lock.locked()

    @asynccontextmanager
    async def borrow(self) -> AsyncIterator[HttpClient]:
        async with self._lock:
            yield self._http_client


def new_client_ref(http_client: HttpClient, mode: ConcurrencyMode | str = ConcurrencyMode.EXCLUSIVE) -> ClientRef:
    if ConcurrencyMode(mode) is ConcurrencyMode.SHARED:
        return SharedClientRef(http_client)
    return ExclusiveClientRef(http_client)
