"""
Async client for the MangaDex JSON API.

- client: ``MangaDexClient``, the shared handle and API groups
- endpoint: request descriptors and their builders
- http: the dispatcher on top of ``requests``
- classifier / schema: envelope decoding and error classification
"""

from mangadex_client.client import MangaDexClient
from mangadex_client.config import API_DEV_URL, API_URL, AppSettings, ConfigurationError
from mangadex_client.errors import (
    ApiError,
    BorrowConflictError,
    BuilderError,
    DecodeError,
    MangaDexError,
    MissingTokensError,
    ServerError,
    TransportError,
)
from mangadex_client.http import HttpClient
from mangadex_client.logging_utils import configure_logging
from mangadex_client.models import AuthTokens
from mangadex_client.state import ConcurrencyMode

__version__ = "0.1.0"
__all__ = [
    "API_DEV_URL",
    "API_URL",
    "ApiError",
    "AppSettings",
    "AuthTokens",
    "BorrowConflictError",
    "BuilderError",
    "ConcurrencyMode",
    "ConfigurationError",
    "DecodeError",
    "HttpClient",
    "MangaDexClient",
    "MangaDexError",
    "MissingTokensError",
    "ServerError",
    "TransportError",
    "configure_logging",
]
