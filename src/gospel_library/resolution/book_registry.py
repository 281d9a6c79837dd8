"""
Canonical scripture book registry.

Holds the fixed, ordered catalogue of standard-work book names and the alias
table, and resolves arbitrary user text to one canonical name.
"""
import logging
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .normalizer import normalize
from .resolution_policy import BOOK_POLICY
from .similarity import contains_either, similarity

logger = logging.getLogger(__name__)

# Declaration order is significant: the containment pass returns the first hit.
CANONICAL_BOOKS: Tuple[str, ...] = (
    # Bible - Old Testament
    "Genesis", "Exodus", "Leviticus", "Numbers", "Deuteronomy", "Joshua", "Judges", "Ruth",
    "1 Samuel", "2 Samuel", "1 Kings", "2 Kings", "1 Chronicles", "2 Chronicles", "Ezra",
    "Nehemiah", "Esther", "Job", "Psalms", "Proverbs", "Ecclesiastes", "Song of Solomon",
    "Isaiah", "Jeremiah", "Lamentations", "Ezekiel", "Daniel", "Hosea", "Joel", "Amos",
    "Obadiah", "Jonah", "Micah", "Nahum", "Habakkuk", "Zephaniah", "Haggai", "Zechariah",
    "Malachi",
    # Bible - New Testament
    "Matthew", "Mark", "Luke", "John", "Acts", "Romans", "1 Corinthians", "2 Corinthians",
    "Galatians", "Ephesians", "Philippians", "Colossians", "1 Thessalonians",
    "2 Thessalonians", "1 Timothy", "2 Timothy", "Titus", "Philemon", "Hebrews", "James",
    "1 Peter", "2 Peter", "1 John", "2 John", "3 John", "Jude", "Revelation",
    # Book of Mormon
    "1 Nephi", "2 Nephi", "Jacob", "Enos", "Jarom", "Omni", "Words of Mormon", "Mosiah",
    "Alma", "Helaman", "3 Nephi", "4 Nephi", "Mormon", "Ether", "Moroni",
    # Doctrine and Covenants
    "Doctrine and Covenants",
    # Pearl of Great Price
    "Moses", "Abraham", "Joseph Smith—Matthew", "Joseph Smith—History", "Articles of Faith",
)

DOCTRINE_AND_COVENANTS = "Doctrine and Covenants"

# Keys are normalized when the table is built ("js-h" is stored as "jsh")
_ABBREVIATIONS: Dict[str, str] = {
    # Bible
    "gen": "Genesis", "ex": "Exodus", "lev": "Leviticus", "num": "Numbers",
    "deut": "Deuteronomy", "josh": "Joshua", "judg": "Judges",
    "1 sam": "1 Samuel", "2 sam": "2 Samuel", "1 kgs": "1 Kings", "2 kgs": "2 Kings",
    "1 chr": "1 Chronicles", "2 chr": "2 Chronicles", "neh": "Nehemiah",
    "ps": "Psalms", "psalm": "Psalms", "prov": "Proverbs", "eccl": "Ecclesiastes",
    "song": "Song of Solomon", "isa": "Isaiah", "jer": "Jeremiah", "lam": "Lamentations",
    "ezek": "Ezekiel", "dan": "Daniel", "matt": "Matthew",
    "1 cor": "1 Corinthians", "2 cor": "2 Corinthians", "gal": "Galatians",
    "eph": "Ephesians", "phil": "Philippians", "col": "Colossians",
    "1 thes": "1 Thessalonians", "2 thes": "2 Thessalonians",
    "1 tim": "1 Timothy", "2 tim": "2 Timothy", "philem": "Philemon", "heb": "Hebrews",
    "1 pet": "1 Peter", "2 pet": "2 Peter", "rev": "Revelation",
    # Book of Mormon
    "1 ne": "1 Nephi", "2 ne": "2 Nephi", "3 ne": "3 Nephi", "4 ne": "4 Nephi",
    "wom": "Words of Mormon", "w of m": "Words of Mormon", "hel": "Helaman",
    "morm": "Mormon", "moro": "Moroni",
    # Doctrine and Covenants
    "d&c": DOCTRINE_AND_COVENANTS, "dc": DOCTRINE_AND_COVENANTS,
    "doc": DOCTRINE_AND_COVENANTS, "covenants": DOCTRINE_AND_COVENANTS,
    # Pearl of Great Price
    "js-m": "Joseph Smith—Matthew", "js-matthew": "Joseph Smith—Matthew",
    "js-h": "Joseph Smith—History", "js-history": "Joseph Smith—History",
    "abr": "Abraham", "aof": "Articles of Faith", "a of f": "Articles of Faith",
}


def _build_alias_table() -> Mapping[str, str]:
    """
    Build the read-only alias table.

    Every canonical name is entered under its own normalized spelling, so
    "1 John" and "Mormon" resolve to themselves rather than to the first
    book that happens to contain them.
    """
    table: Dict[str, str] = {}
    for key, book in [(b, b) for b in CANONICAL_BOOKS] + list(_ABBREVIATIONS.items()):
        if book not in CANONICAL_BOOKS:
            raise ValueError(f"Alias '{key}' maps to unknown book '{book}'")
        normalized_key = normalize(key)
        existing = table.get(normalized_key)
        if existing is not None and existing != book:
            raise ValueError(
                f"Alias '{normalized_key}' maps to both '{existing}' and '{book}'"
            )
        table[normalized_key] = book
    return MappingProxyType(table)


BOOK_ALIASES: Mapping[str, str] = _build_alias_table()

_NORMALIZED_BOOKS: Tuple[Tuple[str, str], ...] = tuple(
    (book, normalize(book)) for book in CANONICAL_BOOKS
)


def resolve_book(text: str) -> Optional[str]:
    """
    Resolve user text to a canonical book name.

    Resolution order, first hit wins:
    1. Exact lookup of the normalized text in BOOK_ALIASES
    2. First canonical book (declaration order) containing or contained by the text
    3. Highest similarity over all books, kept only if above BOOK_POLICY.commit_threshold

    :param text: Book text as typed (e.g., "Alma", "1 Ne", "Psalm", "Genesiss")
    :return: Canonical book name or None
    """
    normalized = normalize(text)
    if not normalized:
        return None

    alias = BOOK_ALIASES.get(normalized)
    if alias is not None:
        logger.debug(f"Book '{text}' resolved by alias -> '{alias}'")
        return alias

    for book, normalized_book in _NORMALIZED_BOOKS:
        if contains_either(normalized, normalized_book):
            logger.debug(f"Book '{text}' resolved by containment -> '{book}'")
            return book

    best_book: Optional[str] = None
    best_score = 0.0
    for book, normalized_book in _NORMALIZED_BOOKS:
        score = similarity(normalized, normalized_book)
        if score > best_score:
            best_score = score
            best_book = book

    if best_book is not None and best_score > BOOK_POLICY.commit_threshold:
        logger.debug(f"Book '{text}' resolved by similarity -> '{best_book}' ({best_score:.2f})")
        return best_book

    return None
