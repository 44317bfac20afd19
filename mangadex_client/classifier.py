"""
Response classification.

Turns a status code and a body into exactly one of: a decoded success payload,
an ``ApiError`` carrying the structured error list, or a ``ServerError``
carrying the raw body text.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from mangadex_client.errors import ApiError, DecodeError, ServerError
from mangadex_client.schema import ApiErrorItem, ErrorResponse

M = TypeVar("M", bound=BaseModel)


def is_server_error(status_code: int) -> bool:
    return 500 <= status_code < 600


def load_envelope(text: str) -> dict[str, Any]:
    try:
        envelope = json.loads(text)
    except json.JSONDecodeError as error:
        raise DecodeError(f"Response body is not valid JSON: {error}") from error

    if not isinstance(envelope, dict):
        raise DecodeError(f"Expected a JSON object envelope, got {type(envelope).__name__}")
    return envelope


def decode_envelope(envelope: dict[str, Any], shape: type[M], status_code: int = 0) -> M:
    """
    Decode an envelope into ``shape`` or raise the error it carries.

    The ``result`` discriminator alone picks the branch. An error envelope must
    hold at least one error; an ok envelope must match ``shape`` exactly.
    """
    result = envelope.get("result")

    if result == "error":
        errors = _validate_errors(envelope)
        if not errors:
            raise DecodeError("Error envelope carries no errors")
        raise ApiError(errors, status_code=status_code)

    if result == "ok":
        try:
            return shape.model_validate(envelope)
        except ValidationError as error:
            raise DecodeError(f"Response does not match {shape.__name__}: {error}") from error

    if result is None:
        raise DecodeError("Response envelope has no 'result' discriminator")
    raise DecodeError(f"Unknown response result: {result!r}")


def classify_response(status_code: int, text: str, shape: type[M]) -> M:
    if is_server_error(status_code):
        raise ServerError(status_code, text)
    return decode_envelope(load_envelope(text), shape, status_code)


def decode_error_list(text: str) -> list[ApiErrorItem]:
    """
    Read whatever structured errors a body carries, tolerating their absence.

    An empty body, an ok envelope, or an error envelope with an empty list all
    yield ``[]``. Text that is not a JSON envelope is still a ``DecodeError``.
    """
    if not text.strip():
        return []

    envelope = load_envelope(text)
    if envelope.get("result") != "error":
        return []
    return _validate_errors(envelope)


def _validate_errors(envelope: dict[str, Any]) -> list[ApiErrorItem]:
    try:
        return ErrorResponse.model_validate(envelope).errors
    except ValidationError as error:
        raise DecodeError(f"Malformed error envelope: {error}") from error
