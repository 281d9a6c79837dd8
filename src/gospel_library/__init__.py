"""
Gospel library: scripture reference resolution and conference-talk lookup.
"""
from .config import GospelLibraryConfig
from .exceptions import ConfigurationError, GospelLibraryError, StoreNotInitializedError
from .library_store import LibraryStore, SQLiteLibraryStore, TalkFilter
from .service import GospelLibraryService

__all__ = [
    "GospelLibraryConfig",
    "GospelLibraryError",
    "ConfigurationError",
    "StoreNotInitializedError",
    "LibraryStore",
    "SQLiteLibraryStore",
    "TalkFilter",
    "GospelLibraryService",
]
