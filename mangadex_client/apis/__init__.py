from .chapter_api import ChapterApi, ChapterSortOrder, ListChapter
from .cover_api import CoverApi, UploadCover
from .custom_list_api import CreateCustomList, CustomListApi, DeleteCustomList
from .legacy_api import LegacyApi, LegacyIdMapping
from .manga_api import MangaApi, MangaReadingStatuses
from .user_api import IsFollowingGroup, UserApi

__all__ = [
    "ChapterApi",
    "ChapterSortOrder",
    "CoverApi",
    "CreateCustomList",
    "CustomListApi",
    "DeleteCustomList",
    "IsFollowingGroup",
    "LegacyApi",
    "LegacyIdMapping",
    "ListChapter",
    "MangaApi",
    "MangaReadingStatuses",
    "UploadCover",
    "UserApi",
]
