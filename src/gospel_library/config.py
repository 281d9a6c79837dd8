from dataclasses import dataclass


@dataclass
class GospelLibraryConfig:
    # Core Paths
    db_path: str = "gospel-library.db"

    # Logging
    debug: bool = False

    # Tool limits
    max_verse_range: int = 50
    default_limit: int = 10
    max_limit: int = 20
    max_query_length: int = 100
    talk_truncate_chars: int = 1500
