"""
String normalization for reference and entity resolution.

Every comparison in the resolution layer happens between normalized strings,
so two spellings that differ only in case, punctuation or spacing compare equal.
"""
import re

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")
_TITLES = re.compile(r"\b(elder|president)\b", re.IGNORECASE)

# Whole-word rewrites applied to conference labels ("Oct 2022" -> "october 2022")
_CONFERENCE_TOKENS = {
    "oct": "october",
    "apr": "april",
    "gen": "general",
    "conf": "conference",
}
_CONFERENCE_TOKEN_PATTERN = re.compile(
    r"\b(" + "|".join(_CONFERENCE_TOKENS) + r")\b"
)


def normalize(text: str) -> str:
    """
    Lowercase, drop punctuation and collapse whitespace.

    :param text: Raw user or database text
    :return: Normalized string (may be empty)
    """
    if not text:
        return ""
    text = _NON_WORD.sub("", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def normalize_name(text: str) -> str:
    """Normalize a person name, removing the "Elder"/"President" titles first."""
    if not text:
        return ""
    name = normalize(_TITLES.sub("", text))
    # Punctuation removal can form a title ("El-der"), so strip once more
    return normalize(_TITLES.sub("", name))


def canonicalize_conference(text: str) -> str:
    """
    Normalize a conference label and expand common abbreviations.

    "Oct Gen Conf 2022" -> "october general conference 2022"
    """
    normalized = normalize(text)
    return _CONFERENCE_TOKEN_PATTERN.sub(
        lambda match: _CONFERENCE_TOKENS[match.group(1)],
        normalized,
    )
