"""
Edit-distance similarity scoring using rapidfuzz.

Callers normalize before calling edit_distance/similarity; fuzzy_match
normalizes its own inputs.
"""
from rapidfuzz.distance import Levenshtein

from .normalizer import normalize


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit insert, delete and substitute costs."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """
    Similarity in [0, 1] derived from edit distance.

    :return: 1 - distance / max(len(a), len(b)); 1.0 for two empty strings
    """
    max_length = max(len(a), len(b))
    if max_length == 0:
        return 1.0
    return 1.0 - edit_distance(a, b) / max_length


def contains_either(a: str, b: str) -> bool:
    """True when either string is a substring of the other."""
    return a in b or b in a


def fuzzy_match(input_text: str, target: str, threshold: float = 0.7) -> bool:
    """
    Check whether input_text is close enough to target.

    Containment in either direction always matches, so abbreviation-style
    queries ("ps" for "psalms") pass regardless of distance.

    :param input_text: User supplied text
    :param target: Candidate text
    :param threshold: Minimum similarity when neither contains the other
    :return: True if matched
    """
    normalized_input = normalize(input_text)
    normalized_target = normalize(target)

    if contains_either(normalized_input, normalized_target):
        return True

    return similarity(normalized_input, normalized_target) >= threshold
