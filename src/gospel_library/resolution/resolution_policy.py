"""
Matching policies for entity resolution.

A policy bundles the knobs one kind of entity is matched with: how strings are
normalized, the fuzzy threshold a candidate must pass to be scored, and the
score the best candidate must strictly exceed to be returned.
"""
from dataclasses import dataclass
from typing import Callable

from .normalizer import canonicalize_conference, normalize, normalize_name


@dataclass(frozen=True)
class MatchPolicy:
    """
    Immutable matcher configuration.

    Attributes:
        name: Policy name, used in log messages
        normalize_fn: Normalization applied to the query and every candidate
        accept_threshold: fuzzy_match threshold a candidate must pass to be scored
        commit_threshold: Score the best candidate must strictly exceed
        containment_short_circuit: Accept the first candidate that contains
            (or is contained by) the query with score 1.0
    """
    name: str
    normalize_fn: Callable[[str], str]
    accept_threshold: float
    commit_threshold: float
    containment_short_circuit: bool = True

    def __post_init__(self):
        """Validate thresholds."""
        for label, value in (
            ("accept_threshold", self.accept_threshold),
            ("commit_threshold", self.commit_threshold),
        ):
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{label} must be between 0.0 and 1.0, got {value}")


BOOK_POLICY = MatchPolicy(
    name="book",
    normalize_fn=normalize,
    accept_threshold=0.6,
    commit_threshold=0.6,
)

PERSON_NAME_POLICY = MatchPolicy(
    name="person_name",
    normalize_fn=normalize_name,
    accept_threshold=0.5,
    commit_threshold=0.4,
)

CONFERENCE_POLICY = MatchPolicy(
    name="conference",
    normalize_fn=canonicalize_conference,
    accept_threshold=0.6,
    commit_threshold=0.6,
)
