"""
Result types for entity resolution.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class MatchCandidate:
    """
    Immutable result of candidate matching.

    Attributes:
        raw: The candidate exactly as the caller supplied it (e.g., "Russell M. Nelson")
        normalized: The candidate after policy normalization
        score: Similarity score between 0.0 and 1.0 (1.0 for containment hits)
    """
    raw: str
    normalized: str
    score: float

    def __post_init__(self):
        """Validate score."""
        if not 0.0 <= self.score <= 1.0:
            raise ValueError(f"Score must be between 0.0 and 1.0, got {self.score}")
