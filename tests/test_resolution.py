"""
Tests for the resolution layer: book registry, reference parser and
candidate matcher.
"""
import pytest
from gospel_library.resolution import (
    CANONICAL_BOOKS,
    BOOK_ALIASES,
    resolve_book,
    ParsedReference,
    parse_reference,
    MatchCandidate,
    MatchPolicy,
    PERSON_NAME_POLICY,
    CONFERENCE_POLICY,
    match_best_candidate,
    normalize,
)


class TestBookRegistry:
    """Tests for resolve_book and the fixed tables."""

    def test_every_alias_resolves_to_its_book(self):
        """Test that each alias key maps through resolve_book."""
        for alias, book in BOOK_ALIASES.items():
            assert resolve_book(alias) == book, alias

    def test_every_canonical_book_resolves_to_itself(self):
        """Test that canonical names are fixed points."""
        for book in CANONICAL_BOOKS:
            assert resolve_book(book) == book, book

    def test_alias_table_is_read_only(self):
        """Test that the alias table cannot be mutated."""
        with pytest.raises(TypeError):
            BOOK_ALIASES["new"] = "Genesis"

    def test_alias_keys_are_normalized(self):
        """Test that every key is stored in normalized form."""
        for alias in BOOK_ALIASES:
            assert normalize(alias) == alias

    def test_abbreviations(self):
        """Test common abbreviations."""
        assert resolve_book("Ps") == "Psalms"
        assert resolve_book("psalm") == "Psalms"
        assert resolve_book("1 Ne") == "1 Nephi"
        assert resolve_book("D&C") == "Doctrine and Covenants"
        assert resolve_book("JS-H") == "Joseph Smith—History"
        assert resolve_book("Rev.") == "Revelation"

    def test_canonical_names_beat_containment(self):
        """Test that names contained in earlier books still resolve to themselves."""
        assert resolve_book("1 John") == "1 John"
        assert resolve_book("Mormon") == "Mormon"
        assert resolve_book("Joseph Smith-Matthew") == "Joseph Smith—Matthew"

    def test_containment_uses_declaration_order(self):
        """Test that the first declared book containing the input wins."""
        assert resolve_book("Nephi") == "1 Nephi"
        assert resolve_book("Thessalonians") == "1 Thessalonians"

    def test_similarity_resolves_typos(self):
        """Test that misspellings resolve by edit distance."""
        assert resolve_book("Levitikus") == "Leviticus"
        assert resolve_book("Deuteronomi") == "Deuteronomy"

    def test_unknown_book(self):
        """Test that dissimilar text resolves to None."""
        assert resolve_book("xyzzy") is None

    def test_blank_input(self):
        """Test that blank input resolves to None."""
        assert resolve_book("") is None
        assert resolve_book("   ") is None
        assert resolve_book("...") is None


class TestReferenceParser:
    """Tests for parse_reference."""

    def test_standard_single_verse(self):
        """Test Book Chapter:Verse."""
        assert parse_reference("John 3:16") == ParsedReference(
            book="John", chapter=3, verse_start=16, verse_end=16
        )

    def test_standard_range(self):
        """Test Book Chapter:Verse-Verse."""
        assert parse_reference("Alma 32:27-28") == ParsedReference(
            book="Alma", chapter=32, verse_start=27, verse_end=28
        )

    def test_numbered_book(self):
        """Test books with a leading number."""
        parsed = parse_reference("1 Nephi 3:7")
        assert parsed.book == "1 Nephi"
        assert parsed.chapter == 3
        assert parsed.verse_start == 7

    def test_alias_in_reference(self):
        """Test that book text goes through alias resolution."""
        parsed = parse_reference("Psalm 23:1")
        assert parsed.book == "Psalms"

    def test_shortened_defaults_chapter_to_one(self):
        """Test Book Verse for single-chapter books."""
        assert parse_reference("Omni 7") == ParsedReference(
            book="Omni", chapter=1, verse_start=7, verse_end=7
        )

    def test_section_without_verse(self):
        """Test D&C section references."""
        assert parse_reference("D&C 76") == ParsedReference(
            book="Doctrine and Covenants", chapter=76, verse_start=1, verse_end=1
        )

    def test_section_variants(self):
        """Test Section and spelled-out prefixes with verses."""
        assert parse_reference("Section 121:7-8") == ParsedReference(
            book="Doctrine and Covenants", chapter=121, verse_start=7, verse_end=8
        )
        assert parse_reference("doctrine and covenants 88") == ParsedReference(
            book="Doctrine and Covenants", chapter=88, verse_start=1, verse_end=1
        )
        assert parse_reference("d&c 4:2").chapter == 4

    def test_dc_prefix_is_a_section(self):
        """Test that "DC 76" reads as a section like "D&C 76"."""
        assert parse_reference("DC 76") == ParsedReference(
            book="Doctrine and Covenants", chapter=76, verse_start=1, verse_end=1
        )
        assert parse_reference("dc 76:22") == ParsedReference(
            book="Doctrine and Covenants", chapter=76, verse_start=22, verse_end=22
        )

    @pytest.mark.parametrize("text", ["4 Nephi 1:3", "4 Ne 1:3"])
    def test_fourth_numbered_book(self, text):
        """Test that a leading 4 is accepted in the book text."""
        assert parse_reference(text) == ParsedReference(
            book="4 Nephi", chapter=1, verse_start=3, verse_end=3
        )

    def test_unicode_dashes(self):
        """Test en dash, em dash and minus sign ranges."""
        for dash in ("–", "—", "−"):
            parsed = parse_reference(f"Alma 32:27{dash}28")
            assert parsed is not None
            assert parsed.verse_end == 28

    def test_pearl_of_great_price(self):
        """Test hyphenated book abbreviations."""
        parsed = parse_reference("JS-H 1:17")
        assert parsed.book == "Joseph Smith—History"
        assert parsed.chapter == 1
        assert parsed.verse_start == 17

    def test_extra_whitespace(self):
        """Test that book text whitespace is collapsed."""
        parsed = parse_reference("  1   Nephi   3:7  ")
        assert parsed.book == "1 Nephi"

    @pytest.mark.parametrize("text", [
        None,
        "",
        "   ",
        "not a reference",
        "John 3:0",
        "John 0:1",
        "John 3:17-16",
        "Xyzzy 3:16",
        "3:16",
    ])
    def test_invalid_references(self, text):
        """Test that malformed or invalid references return None."""
        assert parse_reference(text) is None

    def test_citation(self):
        """Test citation rendering."""
        assert parse_reference("Alma 32:27-28").citation == "Alma 32:27-28"
        assert str(parse_reference("John 3:16")) == "John 3:16"
        assert parse_reference("Alma 32:27-28").verse_count == 2

    def test_parsed_reference_validates(self):
        """Test that invalid references cannot be constructed."""
        with pytest.raises(ValueError):
            ParsedReference(book="John", chapter=3, verse_start=5, verse_end=4)
        with pytest.raises(ValueError):
            ParsedReference(book="John", chapter=0, verse_start=1, verse_end=1)


class TestCandidateMatcher:
    """Tests for match_best_candidate."""

    def test_person_containment(self):
        """Test that a surname selects the full name by containment."""
        result = match_best_candidate(
            "Nelson", ["Russell M. Nelson", "Dallin H. Oaks"], PERSON_NAME_POLICY
        )

        assert result.raw == "Russell M. Nelson"
        assert result.normalized == "russell m nelson"
        assert result.score == 1.0

    def test_person_title_stripped(self):
        """Test that titles on either side do not block a match."""
        result = match_best_candidate(
            "Elder Oaks", ["Russell M. Nelson", "President Dallin H. Oaks"], PERSON_NAME_POLICY
        )

        assert result.raw == "President Dallin H. Oaks"

    def test_conference_abbreviation(self):
        """Test that Oct expands before matching."""
        result = match_best_candidate(
            "Oct 2022", ["October 2022", "April 2022"], CONFERENCE_POLICY
        )

        assert result.raw == "October 2022"
        assert result.score == 1.0

    def test_first_containment_wins(self):
        """Test that candidate order decides among containment hits."""
        result = match_best_candidate(
            "Holland", ["Jeffrey R. Holland", "Holland Smith"], PERSON_NAME_POLICY
        )

        assert result.raw == "Jeffrey R. Holland"

    def test_fuzzy_typo(self):
        """Test that a misspelled name resolves by similarity."""
        result = match_best_candidate(
            "Russel Nelsen", ["Russell M. Nelson", "Dallin H. Oaks"], PERSON_NAME_POLICY
        )

        assert result.raw == "Russell M. Nelson"
        assert 0.4 < result.score < 1.0

    def test_fuzzy_conference(self):
        """Test that a misspelled month resolves by similarity."""
        result = match_best_candidate(
            "Octber 2022", ["April 2022", "October 2022"], CONFERENCE_POLICY
        )

        assert result.raw == "October 2022"

    def test_no_match(self):
        """Test that dissimilar input returns None."""
        assert match_best_candidate("Zzzzz", ["Russell M. Nelson"], PERSON_NAME_POLICY) is None

    def test_empty_inputs(self):
        """Test empty candidate list and blank query."""
        assert match_best_candidate("Nelson", [], PERSON_NAME_POLICY) is None
        assert match_best_candidate("", ["Russell M. Nelson"], PERSON_NAME_POLICY) is None
        assert match_best_candidate("President", ["Russell M. Nelson"], PERSON_NAME_POLICY) is None

    def test_empty_candidates_skipped(self):
        """Test that candidates normalizing to nothing cannot contain-match."""
        result = match_best_candidate(
            "Nelson", ["", "President", "Russell M. Nelson"], PERSON_NAME_POLICY
        )

        assert result.raw == "Russell M. Nelson"

    def test_commit_threshold_is_strict(self):
        """Test that the best score must exceed the commit threshold."""
        strict = MatchPolicy(name="test", normalize_fn=normalize,
                             accept_threshold=0.0, commit_threshold=0.5)
        loose = MatchPolicy(name="test", normalize_fn=normalize,
                            accept_threshold=0.0, commit_threshold=0.49)

        assert match_best_candidate("abcd", ["abxy"], strict) is None
        assert match_best_candidate("abcd", ["abxy"], loose).raw == "abxy"

    def test_first_best_score_wins_ties(self):
        """Test that ties keep the earlier candidate."""
        policy = MatchPolicy(name="test", normalize_fn=normalize,
                             accept_threshold=0.5, commit_threshold=0.5)

        result = match_best_candidate("abcd", ["abce", "abcf"], policy)

        assert result.raw == "abce"
        assert result.score == pytest.approx(0.75)

    def test_containment_short_circuit_disabled(self):
        """Test that containment can be turned off per policy."""
        policy = MatchPolicy(name="test", normalize_fn=normalize, accept_threshold=0.5,
                             commit_threshold=0.5, containment_short_circuit=False)

        result = match_best_candidate("nelson", ["russell m nelson", "nelsen"], policy)

        assert result.raw == "nelsen"

    def test_policy_validates_thresholds(self):
        """Test that thresholds outside [0, 1] are rejected."""
        with pytest.raises(ValueError):
            MatchPolicy(name="bad", normalize_fn=normalize,
                        accept_threshold=1.5, commit_threshold=0.5)

    def test_match_candidate_validates_score(self):
        """Test that scores outside [0, 1] are rejected."""
        with pytest.raises(ValueError):
            MatchCandidate(raw="x", normalized="x", score=1.5)
