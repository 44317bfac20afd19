from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from mangadex_client.endpoint import Endpoint, PayloadKind, RequestBuilder
from mangadex_client.schema import ChapterCollection
from mangadex_client.state import ClientRef
from mangadex_client.static_data import (
    ContentRating,
    IncludeFlag,
    OrderDirection,
    ReferenceExpansionResource,
)

# Query timestamps carry no offset; aware values are sent as UTC.
QUERY_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


class ChapterSortOrder(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    created_at: OrderDirection | None = None
    updated_at: OrderDirection | None = None
    publish_at: OrderDirection | None = None
    readable_at: OrderDirection | None = None
    volume: OrderDirection | None = None
    chapter: OrderDirection | None = None


class ListChapter(Endpoint):
    """Search chapters: ``GET /chapter``."""

    METHOD = "GET"
    PATH = "/chapter"
    PAYLOAD = PayloadKind.QUERY
    RESPONSE = ChapterCollection
    APPEND_SETTERS = {
        "add_chapter_id": "chapter_ids",
        "add_group": "groups",
        "uploader": "uploaders",
        "add_volume": "volumes",
        "add_chapter": "chapters",
        "add_translated_language": "translated_languages",
        "add_original_language": "original_languages",
        "exclude_original_language": "excluded_original_languages",
        "add_content_rating": "content_rating",
        "excluded_group": "excluded_groups",
        "excluded_uploader": "excluded_uploaders",
        "include": "includes",
    }

    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)
    chapter_ids: list[UUID] = Field(default_factory=list, alias="ids")
    title: str | None = None
    groups: list[UUID] = Field(default_factory=list)
    uploaders: list[UUID] = Field(default_factory=list, alias="uploader")
    manga_id: UUID | None = Field(default=None, alias="manga")
    volumes: list[str] = Field(default_factory=list, alias="volume")
    # Chapter number in the series or volume.
    chapters: list[str] = Field(default_factory=list, alias="chapter")
    translated_languages: list[str] = Field(default_factory=list, alias="translatedLanguage")
    original_languages: list[str] = Field(default_factory=list, alias="originalLanguage")
    excluded_original_languages: list[str] = Field(default_factory=list, alias="excludedOriginalLanguage")
    content_rating: list[ContentRating] = Field(default_factory=list)
    excluded_groups: list[UUID] = Field(default_factory=list)
    excluded_uploaders: list[UUID] = Field(default_factory=list)
    include_future_updates: IncludeFlag | None = None
    created_at_since: datetime | None = None
    updated_at_since: datetime | None = None
    publish_at_since: datetime | None = None
    include_empty_pages: IncludeFlag | None = None
    include_external_url: IncludeFlag | None = None
    include_future_publish_at: IncludeFlag | None = None
    order: ChapterSortOrder | None = None
    includes: list[ReferenceExpansionResource] = Field(default_factory=list)

    @field_serializer("created_at_since", "updated_at_since", "publish_at_since")
    def serialize_since(self, value: datetime | None) -> str | None:
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime(QUERY_DATETIME_FORMAT)


class ChapterApi:
    def __init__(self, http_client: ClientRef):
        self._http_client = http_client

    def list(self) -> RequestBuilder[ListChapter]:
        return ListChapter.builder(self._http_client)

    def search(self) -> RequestBuilder[ListChapter]:
        return self.list()
