"""Static enumerations shared by request filters and response attributes."""

from __future__ import annotations

from enum import Enum, IntEnum


class ReadingStatus(str, Enum):
    READING = "reading"
    ON_HOLD = "on_hold"
    PLAN_TO_READ = "plan_to_read"
    DROPPED = "dropped"
    RE_READING = "re_reading"
    COMPLETED = "completed"


class ContentRating(str, Enum):
    SAFE = "safe"
    SUGGESTIVE = "suggestive"
    EROTICA = "erotica"
    PORNOGRAPHIC = "pornographic"


class CustomListVisibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"

    @classmethod
    def _missing_(cls, value: object) -> "CustomListVisibility":
        return cls.PUBLIC


class TagGroup(str, Enum):
    CONTENT = "content"
    FORMAT = "format"
    GENRE = "genre"
    THEME = "theme"


class OrderDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class ReferenceExpansionResource(str, Enum):
    ARTIST = "artist"
    AUTHOR = "author"
    COVER_ART = "cover_art"
    CREATOR = "creator"
    LEADER = "leader"
    MANGA = "manga"
    MEMBER = "member"
    SCANLATION_GROUP = "scanlation_group"
    TAG = "tag"
    USER = "user"


class LegacyMappingType(str, Enum):
    CHAPTER = "chapter"
    GROUP = "group"
    MANGA = "manga"
    TAG = "tag"


class IncludeFlag(IntEnum):
    """Sent as 0 or 1 for the `include*` chapter filters."""

    EXCLUDE = 0
    INCLUDE = 1
