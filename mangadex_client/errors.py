from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mangadex_client.schema import ApiErrorItem


class MangaDexError(RuntimeError):
    pass


class MissingTokensError(MangaDexError):
    def __init__(self, path: str):
        super().__init__(f"Authentication tokens are required for {path}")
        self.path = path


class BorrowConflictError(MangaDexError):
    pass


class TransportError(MangaDexError):
    pass


class ServerError(MangaDexError):
    def __init__(self, status_code: int, body: str):
        super().__init__(f"HTTP {status_code}: {body[:500]}")
        self.status_code = status_code
        self.body = body


class ApiError(MangaDexError):
    def __init__(self, errors: list[ApiErrorItem], status_code: int = 0):
        titles = "; ".join(error.title or error.detail or str(error.id) for error in errors)
        super().__init__(f"API error ({len(errors)}): {titles}")
        self.errors = errors
        self.status_code = status_code


class DecodeError(MangaDexError):
    pass


class BuilderError(MangaDexError):
    def __init__(self, endpoint: str, message: str):
        super().__init__(f"{endpoint}: {message}")
        self.endpoint = endpoint
