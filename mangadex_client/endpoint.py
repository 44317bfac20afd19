"""
Declarative request descriptors and their builders.

Each request type subclasses ``Endpoint`` and declares, at class level, its
HTTP method, path template, payload kind, auth requirement and response model.
Instances are created through a ``RequestBuilder`` that collects field values,
validates them once in ``build()``, and binds the shared client reference.
"""

from __future__ import annotations

from enum import Enum
from functools import partial
from typing import Any, ClassVar, Generic, TypeVar

import requests
from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError
from pydantic.alias_generators import to_camel

from mangadex_client.errors import BuilderError
from mangadex_client.models import MultipartForm
from mangadex_client.schema import NoData
from mangadex_client.state import ClientRef

E = TypeVar("E", bound="Endpoint")


class PayloadKind(str, Enum):
    NONE = "none"
    QUERY = "query"
    BODY = "body"


class Endpoint(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        loc_by_alias=False,
    )

    METHOD: ClassVar[str] = "GET"
    # str.format template over the instance's fields, e.g. "/list/{list_id}".
    PATH: ClassVar[str] = "/"
    PAYLOAD: ClassVar[PayloadKind] = PayloadKind.NONE
    REQUIRE_AUTH: ClassVar[bool] = False
    RESPONSE: ClassVar[type[BaseModel]] = NoData
    # Builder method name -> list field it appends to.
    APPEND_SETTERS: ClassVar[dict[str, str]] = {}

    _http_client: ClientRef | None = PrivateAttr(default=None)

    @classmethod
    def builder(cls: type[E], http_client: ClientRef) -> RequestBuilder[E]:
        return RequestBuilder(cls, http_client)

    def bind(self: E, http_client: ClientRef) -> E:
        self._http_client = http_client
        return self

    def client_ref(self) -> ClientRef:
        if self._http_client is None:
            raise BuilderError(type(self).__name__, "request is not bound to a client")
        return self._http_client

    # =========================================================================
    # Descriptor
    # =========================================================================

    def method(self) -> str:
        return self.METHOD

    def path(self) -> str:
        values = {name: getattr(self, name) for name in type(self).model_fields}
        return self.PATH.format(**values)

    def query(self) -> dict[str, Any] | None:
        if self.PAYLOAD is PayloadKind.QUERY:
            return self.payload()
        return None

    def body(self) -> dict[str, Any] | None:
        if self.PAYLOAD is PayloadKind.BODY:
            return self.payload()
        return None

    def multipart(self) -> MultipartForm | None:
        return None

    def require_auth(self) -> bool:
        return self.REQUIRE_AUTH

    def response_shape(self) -> type[BaseModel]:
        return self.RESPONSE

    def payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    # =========================================================================
    # Dispatch
    # =========================================================================

    async def send(self) -> Any:
        async with self.client_ref().borrow() as http_client:
            return await http_client.send_request(self)

    async def send_raw(self) -> requests.Response:
        async with self.client_ref().borrow() as http_client:
            return await http_client.send_request_raw(self)


class RequestBuilder(Generic[E]):
    """
    Fluent construction of an ``Endpoint``.

    Setters are named after the endpoint's fields (``builder.limit(10)``), plus
    the append setters the endpoint declares (``builder.add_group(group_id)``).
    Nothing is validated until ``build()``.
    """

    def __init__(self, endpoint_cls: type[E], http_client: ClientRef):
        self._endpoint_cls = endpoint_cls
        self._http_client = http_client
        self._fields: dict[str, Any] = {}

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)

        target = self._endpoint_cls.APPEND_SETTERS.get(name)
        if target is not None:
            return partial(self.append, target)
        if name in self._endpoint_cls.model_fields:
            return partial(self.set, name)
        raise AttributeError(f"{self._endpoint_cls.__name__} has no field or setter {name!r}")

    def set(self, name: str, value: Any) -> RequestBuilder[E]:
        if name not in self._endpoint_cls.model_fields:
            raise BuilderError(self._endpoint_cls.__name__, f"unknown field {name!r}")
        if isinstance(value, (list, tuple, set)):
            value = list(value)
        self._fields[name] = value
        return self

    def set_many(self, **fields: Any) -> RequestBuilder[E]:
        for name, value in fields.items():
            self.set(name, value)
        return self

    def append(self, name: str, value: Any) -> RequestBuilder[E]:
        if name not in self._endpoint_cls.model_fields:
            raise BuilderError(self._endpoint_cls.__name__, f"unknown field {name!r}")
        self._fields.setdefault(name, []).append(value)
        return self

    def build(self) -> E:
        try:
            endpoint = self._endpoint_cls.model_validate(self._fields)
        except ValidationError as error:
            raise BuilderError(self._endpoint_cls.__name__, _describe_validation_error(error)) from error
        return endpoint.bind(self._http_client)


def _describe_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<request>"
        problems.append(f"{location}: {item['msg']}")
    return "; ".join(problems)
