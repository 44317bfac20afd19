"""
Wire shapes for MangaDex responses.

Every response body is an envelope whose ``result`` field is either ``"ok"``
or ``"error"``. Successful envelopes wrap a single entity, a paginated
collection, or nothing at all; error envelopes carry an ordered list of
structured errors.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Generic, Literal, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from mangadex_client.static_data import (
    CustomListVisibility,
    LegacyMappingType,
    ReadingStatus,
    TagGroup,
)

A = TypeVar("A")
T = TypeVar("T")

LocalizedString = dict[str, str]


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# Envelopes
# =============================================================================


class ApiErrorItem(WireModel):
    id: UUID
    status: int
    title: str | None = None
    detail: str | None = None
    context: dict[str, Any] | None = None


class ErrorResponse(WireModel):
    result: Literal["error"]
    errors: list[ApiErrorItem] = Field(default_factory=list)


class NoData(WireModel):
    result: Literal["ok"]


class Relationship(WireModel):
    id: UUID
    type: str
    related: str | None = None
    attributes: dict[str, Any] | None = None


class ApiObject(WireModel, Generic[A]):
    id: UUID
    type: str
    attributes: A
    relationships: list[Relationship] = Field(default_factory=list)


class EntityResponse(WireModel, Generic[T]):
    result: Literal["ok"]
    response: Literal["entity"]
    data: T


class CollectionResponse(WireModel, Generic[T]):
    result: Literal["ok"]
    response: Literal["collection"]
    data: list[T]
    limit: int = Field(ge=0)
    offset: int = Field(ge=0)
    total: int = Field(ge=0)

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.data) < self.total


# =============================================================================
# Attributes
# =============================================================================


def _localized_string_or_empty_list(value: Any) -> Any:
    # Empty localized strings arrive as [] instead of {}.
    if isinstance(value, list) and not value:
        return {}
    return value


class ChapterAttributes(WireModel):
    # Documented as a non-null string but the API sometimes sends null.
    title: str
    volume: str | None = None
    chapter: str | None = None
    pages: int = Field(ge=0)
    translated_language: str
    uploader: UUID | None = None
    external_url: str | None = None
    version: int = Field(ge=0)
    created_at: datetime
    updated_at: datetime | None = None
    publish_at: datetime
    readable_at: datetime

    @field_validator("title", mode="before")
    @classmethod
    def null_title_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class CustomListAttributes(WireModel):
    name: str
    visibility: CustomListVisibility
    version: int = Field(ge=0)


class LegacyMappingIdAttributes(WireModel):
    type_: LegacyMappingType = Field(alias="type")
    legacy_id: int = Field(ge=0)
    new_id: UUID


class CoverAttributes(WireModel):
    description: str
    volume: str | None = None
    file_name: str
    locale: str | None = None
    version: int = Field(ge=0)
    created_at: datetime
    updated_at: datetime | None = None


class TagAttributes(WireModel):
    name: LocalizedString
    description: LocalizedString
    group: TagGroup
    version: int = Field(ge=0)

    @field_validator("description", mode="before")
    @classmethod
    def empty_description_as_map(cls, value: Any) -> Any:
        return _localized_string_or_empty_list(value)


# =============================================================================
# Response shapes
# =============================================================================


ChapterObject = ApiObject[ChapterAttributes]
ChapterCollection = CollectionResponse[ChapterObject]

CustomListObject = ApiObject[CustomListAttributes]
CustomListResponse = EntityResponse[CustomListObject]

LegacyMappingIdObject = ApiObject[LegacyMappingIdAttributes]
LegacyMappingCollection = CollectionResponse[LegacyMappingIdObject]

CoverObject = ApiObject[CoverAttributes]
CoverResponse = EntityResponse[CoverObject]

TagObject = ApiObject[TagAttributes]


class MangaReadingStatusesResponse(WireModel):
    result: Literal["ok"]
    statuses: dict[UUID, ReadingStatus]


class IsFollowingResponse(WireModel):
    is_following: bool
