from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AuthTokens:
    session: str
    refresh: str

    def __repr__(self) -> str:
        return "AuthTokens(session=<redacted>, refresh=<redacted>)"


@dataclass(frozen=True)
class MultipartForm:
    """File parts and plain form fields for a multipart/form-data upload."""

    files: dict[str, tuple[str, bytes, str]] = field(default_factory=dict)
    fields: dict[str, str] = field(default_factory=dict)

    def as_request_kwargs(self) -> dict[str, Any]:
        return {"files": dict(self.files), "data": dict(self.fields)}
