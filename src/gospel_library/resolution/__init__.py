"""
Reference resolution and fuzzy entity matching.

Converts free-form user text into canonical, queryable keys:
- Scripture citations ("Alma 32:27-28", "Omni 7", "D&C 76") -> ParsedReference
- Book names and abbreviations ("1 Ne", "Psalm") -> canonical book names
- Speaker names and conference labels -> one of a supplied candidate list

Key components:
- normalize / normalize_name / canonicalize_conference: string normalization
- edit_distance / similarity / fuzzy_match: edit-distance scoring
- resolve_book: canonical book registry lookup
- parse_reference: multi-grammar citation parser
- match_best_candidate + MatchPolicy: best-candidate selection

Everything here is pure and synchronous; no function raises on bad input.
"""
from .normalizer import normalize, normalize_name, canonicalize_conference
from .similarity import edit_distance, similarity, fuzzy_match
from .book_registry import CANONICAL_BOOKS, BOOK_ALIASES, resolve_book
from .reference_parser import ParsedReference, parse_reference
from .match_candidate import MatchCandidate
from .resolution_policy import (
    MatchPolicy,
    BOOK_POLICY,
    PERSON_NAME_POLICY,
    CONFERENCE_POLICY,
)
from .candidate_matcher import match_best_candidate

__all__ = [
    "normalize",
    "normalize_name",
    "canonicalize_conference",
    "edit_distance",
    "similarity",
    "fuzzy_match",
    "CANONICAL_BOOKS",
    "BOOK_ALIASES",
    "resolve_book",
    "ParsedReference",
    "parse_reference",
    "MatchCandidate",
    "MatchPolicy",
    "BOOK_POLICY",
    "PERSON_NAME_POLICY",
    "CONFERENCE_POLICY",
    "match_best_candidate",
]
