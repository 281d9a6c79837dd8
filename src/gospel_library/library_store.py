"""
Read-only access to the library database.

The resolution layer never touches storage; the service fetches candidate
lists and rows through a LibraryStore and hands plain values to the resolvers.
"""
import logging
import sqlite3
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional, Protocol

from .exceptions import StoreNotInitializedError
from .models import ConferenceTalk, ScriptureVerse

logger = logging.getLogger(__name__)

# Columns callers may enumerate or filter on. Column names are interpolated
# into SQL, so anything else is rejected.
CATEGORICAL_COLUMNS = frozenset({"speaker", "conference"})
FILTER_COLUMNS = frozenset({"speaker", "conference", "full_text"})

EXCERPT_CHARS = 200


class TalkFilter(NamedTuple):
    """One WHERE clause: exact equality, or case-insensitive substring match."""
    column: str
    value: str
    exact: bool


class LibraryStore(Protocol):
    """Protocol for the storage collaborator used by the service."""

    def fetch_verses(
        self, book: str, chapter: int, verse_start: int, verse_end: int
    ) -> List[ScriptureVerse]:
        ...

    def search_verses(self, query: str, limit: int) -> List[ScriptureVerse]:
        ...

    def random_verse(self) -> Optional[ScriptureVerse]:
        ...

    def distinct_values(self, column: str) -> List[str]:
        ...

    def get_talk(self, talk_id: int) -> Optional[ConferenceTalk]:
        ...

    def search_talks(self, filters: Iterable[TalkFilter], limit: int) -> List[ConferenceTalk]:
        ...


class SQLiteLibraryStore:
    """
    LibraryStore over a SQLite file with `scriptures` and `conference_talks` tables.

    The file is opened read-only on first use.
    """

    def __init__(self, db_path: str):
        """
        :param db_path: Path to the SQLite database (relative paths resolve
            against the working directory)
        """
        self.db_path = db_path
        self._connection: Optional[sqlite3.Connection] = None

    def _connect(self) -> sqlite3.Connection:
        if self._connection is not None:
            return self._connection

        path = Path(self.db_path).resolve()
        if not path.exists():
            raise StoreNotInitializedError(
                f"SQLite file not found at {path} "
                f"(set GOSPEL_DB_PATH or place gospel-library.db in the working directory)."
            )

        # Read-only, so one connection can serve tool calls from worker threads
        connection = sqlite3.connect(f"{path.as_uri()}?mode=ro", uri=True, check_same_thread=False)
        connection.row_factory = sqlite3.Row
        self._connection = connection
        logger.info(f"Opened library database at {path}")
        return connection

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def _all(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        return self._connect().execute(sql, params).fetchall()

    def _first(self, sql: str, params: tuple = ()) -> Optional[sqlite3.Row]:
        return self._connect().execute(sql, params).fetchone()

    # ----------------------------
    # Scriptures
    # ----------------------------
    def fetch_verses(
        self, book: str, chapter: int, verse_start: int, verse_end: int
    ) -> List[ScriptureVerse]:
        rows = self._all(
            "SELECT book, chapter, verse, text FROM scriptures "
            "WHERE book=? AND chapter=? AND verse BETWEEN ? AND ? ORDER BY verse;",
            (book, chapter, verse_start, verse_end),
        )
        return [self._to_verse(row) for row in rows]

    def search_verses(self, query: str, limit: int) -> List[ScriptureVerse]:
        rows = self._all(
            "SELECT book, chapter, verse, text FROM scriptures WHERE lower(text) LIKE ? LIMIT ?;",
            (f"%{query.lower()}%", limit),
        )
        return [self._to_verse(row) for row in rows]

    def random_verse(self) -> Optional[ScriptureVerse]:
        row = self._first(
            "SELECT book, chapter, verse, text FROM scriptures ORDER BY RANDOM() LIMIT 1;"
        )
        return self._to_verse(row) if row else None

    # ----------------------------
    # Conference talks
    # ----------------------------
    def distinct_values(self, column: str) -> List[str]:
        if column not in CATEGORICAL_COLUMNS:
            raise ValueError(f"Cannot enumerate column '{column}'")
        rows = self._all(f"SELECT DISTINCT {column} FROM conference_talks;")
        return [row[0] for row in rows if row[0]]

    def get_talk(self, talk_id: int) -> Optional[ConferenceTalk]:
        row = self._first(
            "SELECT id, speaker, title, conference, date, full_text "
            "FROM conference_talks WHERE id=?;",
            (talk_id,),
        )
        if not row:
            return None
        return ConferenceTalk(
            id=row["id"],
            speaker=row["speaker"],
            title=row["title"],
            conference=row["conference"],
            date=row["date"],
            full_text=row["full_text"],
        )

    def search_talks(self, filters: Iterable[TalkFilter], limit: int) -> List[ConferenceTalk]:
        sql = (
            "SELECT id, speaker, title, conference, date, "
            f"substr(full_text, 1, {EXCERPT_CHARS}) AS excerpt "
            "FROM conference_talks WHERE 1=1"
        )
        params: list = []

        for talk_filter in filters:
            if talk_filter.column not in FILTER_COLUMNS:
                raise ValueError(f"Cannot filter on column '{talk_filter.column}'")
            if talk_filter.exact:
                sql += f" AND {talk_filter.column} = ?"
                params.append(talk_filter.value)
            else:
                sql += f" AND lower({talk_filter.column}) LIKE ?"
                params.append(f"%{talk_filter.value.lower()}%")

        sql += " ORDER BY date DESC LIMIT ?"
        params.append(limit)

        rows = self._all(sql, tuple(params))
        return [
            ConferenceTalk(
                id=row["id"],
                speaker=row["speaker"],
                title=row["title"],
                conference=row["conference"],
                date=row["date"],
                excerpt=row["excerpt"],
            )
            for row in rows
        ]

    @staticmethod
    def _to_verse(row: sqlite3.Row) -> ScriptureVerse:
        return ScriptureVerse(
            book=row["book"],
            chapter=row["chapter"],
            verse=row["verse"],
            text=row["text"],
        )
