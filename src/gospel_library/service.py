import logging
from typing import List, Optional

from .config import GospelLibraryConfig
from .library_store import LibraryStore, TalkFilter
from .resolution import (
    CONFERENCE_POLICY,
    PERSON_NAME_POLICY,
    MatchPolicy,
    match_best_candidate,
    parse_reference,
)

logger = logging.getLogger(__name__)

SEARCH_PREVIEW_CHARS = 150

INVALID_REFERENCE_MESSAGE = (
    'Invalid scripture reference. Examples: "John 3:16", "1 Nephi 3:7", "Alma 32:27-28"'
)


class GospelLibraryService:
    """
    Facade over scripture and conference-talk lookups.
    The ONLY entry point for the tool layer.

    Every operation returns a list of text blocks. Bad input is reported as a
    text block, never raised; storage errors propagate to the caller.
    """

    def __init__(self, store: LibraryStore, config: Optional[GospelLibraryConfig] = None):
        self.store = store
        self.config = config or GospelLibraryConfig()

    # ----------------------------
    # Scriptures
    # ----------------------------
    def get_exact_scripture(self, reference: str) -> List[str]:
        """Fetch a verse or short contiguous range, e.g. "Alma 32:27-28"."""
        if not reference or not reference.strip():
            return ["Missing required parameter: reference"]

        parsed = parse_reference(reference)
        if parsed is None:
            return [INVALID_REFERENCE_MESSAGE]

        if parsed.verse_end - parsed.verse_start > self.config.max_verse_range:
            return [f"Verse range too large (max {self.config.max_verse_range} verses)"]

        verses = self.store.fetch_verses(
            parsed.book, parsed.chapter, parsed.verse_start, parsed.verse_end
        )
        if not verses:
            return [f"No verses found for {parsed.citation}"]

        return [
            parsed.citation,
            "\n".join(f"{verse.verse} {verse.text}" for verse in verses),
        ]

    def search_scriptures_by_keyword(self, query: str, limit: Optional[int] = None) -> List[str]:
        """Case-insensitive substring search over verse text."""
        if not query or not query.strip():
            return ["Missing required parameter: query"]
        if len(query) > self.config.max_query_length:
            return [self._query_too_long()]

        verses = self.store.search_verses(query, self._clamp_limit(limit))
        if not verses:
            return ["No results found."]

        blocks = []
        for verse in verses:
            preview = verse.text[:SEARCH_PREVIEW_CHARS]
            if len(verse.text) > SEARCH_PREVIEW_CHARS:
                preview += "..."
            blocks.append(f"{verse.citation} - {preview}")
        return blocks

    def get_random_scripture(self) -> List[str]:
        verse = self.store.random_verse()
        if verse is None:
            return ["No scriptures available."]
        return [verse.citation, verse.text]

    # ----------------------------
    # Conference talks
    # ----------------------------
    def search_conference_talks(
        self,
        talk_id: Optional[int] = None,
        query: Optional[str] = None,
        speaker: Optional[str] = None,
        conference: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[str]:
        """
        Look up a talk by id, or filter talks by speaker, conference and text.

        Speaker and conference are fuzzy-matched against the distinct values in
        the library; when no candidate is close enough the raw text is used as
        a substring filter instead.
        """
        if talk_id:
            return self._get_talk(talk_id)

        if query and len(query) > self.config.max_query_length:
            return [self._query_too_long()]

        filters: List[TalkFilter] = []
        if speaker:
            filters.append(self._resolve_filter("speaker", speaker, PERSON_NAME_POLICY))
        if conference:
            filters.append(self._resolve_filter("conference", conference, CONFERENCE_POLICY))
        if query:
            filters.append(TalkFilter("full_text", query, exact=False))

        talks = self.store.search_talks(filters, self._clamp_limit(limit))
        if not talks:
            return ["No talks found matching those criteria."]

        # A single hit is returned in full
        if len(talks) == 1:
            full_talk = self.store.get_talk(talks[0].id)
            if full_talk and full_talk.full_text:
                return [full_talk.header, full_talk.full_text]

        return [
            f"[ID: {talk.id}] {talk.speaker} - {talk.title} ({talk.conference})\n{talk.excerpt or ''}..."
            for talk in talks
        ]

    def _get_talk(self, talk_id: int) -> List[str]:
        talk = self.store.get_talk(talk_id)
        if talk is None:
            return ["Talk not found."]

        text = talk.full_text or ""
        if len(text) > self.config.talk_truncate_chars:
            text = (
                text[:self.config.talk_truncate_chars]
                + "...\n[Text truncated - use ID to get full talk]"
            )
        return [talk.header, text]

    def _resolve_filter(self, column: str, value: str, policy: MatchPolicy) -> TalkFilter:
        candidates = self.store.distinct_values(column)
        match = match_best_candidate(value, candidates, policy)
        if match is not None:
            logger.debug(f"{column} '{value}' matched '{match.raw}' (score={match.score:.2f})")
            return TalkFilter(column, match.raw, exact=True)

        logger.warning(f"No {column} match for '{value}', falling back to partial match")
        return TalkFilter(column, value, exact=False)

    def _clamp_limit(self, limit: Optional[int]) -> int:
        if not limit:
            return min(self.config.default_limit, self.config.max_limit)
        return max(1, min(limit, self.config.max_limit))

    def _query_too_long(self) -> str:
        return f"Search query too long (max {self.config.max_query_length} characters)"
