"""
Scripture reference parsing.

Turns citations such as "John 3:16", "Alma 32:27-28", "Omni 7" or "D&C 76"
into a validated ParsedReference.
"""
import logging
import re
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional, Tuple

from .book_registry import DOCTRINE_AND_COVENANTS, resolve_book

logger = logging.getLogger(__name__)

# Figure dash, en dash, em dash, horizontal bar and minus sign
_DASHES = re.compile(r"[\u2012-\u2015\u2212]")
_WHITESPACE = re.compile(r"\s+")

# Section-style citations belong to the section grammar even when they would
# also fit the generic book grammars.
_SECTION_PREFIX = r"(?:D&C|DC|Doctrine and Covenants|Section)"
_NOT_SECTION = r"(?!(?i:" + _SECTION_PREFIX + r")\s+\d)"
_BOOK = r"([1-4]?\s?[A-Za-z&.'\s-]+?)"


@dataclass(frozen=True)
class ParsedReference:
    """
    A fully validated scripture reference.

    Attributes:
        book: Canonical book name
        chapter: Chapter (or D&C section) number, > 0
        verse_start: First verse, > 0
        verse_end: Last verse, >= verse_start
    """
    book: str
    chapter: int
    verse_start: int
    verse_end: int

    def __post_init__(self):
        """Validate field invariants."""
        if self.chapter <= 0 or self.verse_start <= 0 or self.verse_end < self.verse_start:
            raise ValueError(
                f"Invalid reference {self.book} {self.chapter}:{self.verse_start}-{self.verse_end}"
            )

    @property
    def verse_count(self) -> int:
        return self.verse_end - self.verse_start + 1

    @property
    def citation(self) -> str:
        """Human readable citation, e.g. "Alma 32:27-28"."""
        text = f"{self.book} {self.chapter}:{self.verse_start}"
        if self.verse_end != self.verse_start:
            text += f"-{self.verse_end}"
        return text

    def __str__(self) -> str:
        return self.citation


class _Fields(NamedTuple):
    book_text: str
    chapter: int
    verse_start: int
    verse_end: int


class _Grammar(NamedTuple):
    name: str
    pattern: re.Pattern
    extract: Callable[[re.Match], _Fields]


def _clean_book_text(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _extract_standard(match: re.Match) -> _Fields:
    verse_start = int(match.group(3))
    verse_end = int(match.group(4)) if match.group(4) else verse_start
    return _Fields(_clean_book_text(match.group(1)), int(match.group(2)), verse_start, verse_end)


def _extract_shortened(match: re.Match) -> _Fields:
    # "Omni 7" is Omni 1:7
    verse = int(match.group(2))
    return _Fields(_clean_book_text(match.group(1)), 1, verse, verse)


def _extract_section(match: re.Match) -> _Fields:
    verse_start = int(match.group(2)) if match.group(2) else 1
    verse_end = int(match.group(3)) if match.group(3) else verse_start
    return _Fields(DOCTRINE_AND_COVENANTS, int(match.group(1)), verse_start, verse_end)


# Tried in order; the first grammar that matches structurally decides the result.
GRAMMARS: Tuple[_Grammar, ...] = (
    _Grammar(
        "standard",
        re.compile(r"^\s*" + _NOT_SECTION + _BOOK + r"\s+(\d+):(\d+)(?:-(\d+))?\s*$"),
        _extract_standard,
    ),
    _Grammar(
        "shortened",
        re.compile(r"^\s*" + _NOT_SECTION + _BOOK + r"\s+(\d+)\s*$"),
        _extract_shortened,
    ),
    _Grammar(
        "section",
        re.compile(
            r"^\s*" + _SECTION_PREFIX + r"\s+(\d+)(?::(\d+)(?:-(\d+))?)?\s*$",
            re.IGNORECASE,
        ),
        _extract_section,
    ),
)


def parse_reference(text: Optional[str]) -> Optional[ParsedReference]:
    """
    Parse a scripture citation.

    :param text: Citation as typed by the user
    :return: ParsedReference, or None if the text is blank, matches no grammar,
        names an unknown book or violates a chapter/verse invariant
    """
    if not text or not text.strip():
        return None

    cleaned = _DASHES.sub("-", text).strip()

    for grammar in GRAMMARS:
        match = grammar.pattern.match(cleaned)
        if not match:
            continue

        fields = grammar.extract(match)
        book = resolve_book(fields.book_text)
        if (
            book is None
            or fields.chapter <= 0
            or fields.verse_start <= 0
            or fields.verse_end < fields.verse_start
        ):
            logger.debug(f"Reference '{text}' matched {grammar.name} grammar but failed validation")
            return None

        return ParsedReference(
            book=book,
            chapter=fields.chapter,
            verse_start=fields.verse_start,
            verse_end=fields.verse_end,
        )

    logger.debug(f"Reference '{text}' matched no grammar")
    return None
