"""Tests for pattern tokenization and structural matching."""

import pytest

from openiban.exceptions import PatternFormatError
from openiban.registry.patterns import CharacterClass, CompiledPattern, PatternTokenizer, Segment
from openiban.registry.swift import SWIFT_TOKENIZER

pytestmark = pytest.mark.unit


class TestCharacterClass:
    @pytest.mark.parametrize(
        "character_class,accepted,rejected",
        [
            (CharacterClass.DIGIT, "0123456789", "aA ٣"),
            (CharacterClass.UPPER_LETTER, "AMZ", "a0 Ä"),
            (CharacterClass.ALPHANUMERIC, "09AZ", "a -"),
            (CharacterClass.SPACE, " ", "\t0A"),
        ],
    )
    def test_contains(self, character_class, accepted, rejected):
        assert all(character_class.contains(c) for c in accepted)
        assert not any(character_class.contains(c) for c in rejected)

    def test_other_accepts_nothing(self):
        assert not CharacterClass.OTHER.contains("A")


class TestSwiftTokenizer:
    """Tokenizing SWIFT registry descriptors."""

    def test_fixed_length_segments(self):
        segments = SWIFT_TOKENIZER.tokenize("4!a10!n")

        assert segments == (
            Segment(CharacterClass.UPPER_LETTER, 4, True),
            Segment(CharacterClass.DIGIT, 10, True),
        )

    def test_all_markers(self):
        segments = SWIFT_TOKENIZER.tokenize("1!n2!a3!c4!e")

        assert [s.character_class for s in segments] == [
            CharacterClass.DIGIT,
            CharacterClass.UPPER_LETTER,
            CharacterClass.ALPHANUMERIC,
            CharacterClass.SPACE,
        ]
        assert [s.length for s in segments] == [1, 2, 3, 4]

    def test_variable_length_segment(self):
        segments = SWIFT_TOKENIZER.tokenize("12c")

        assert segments == (Segment(CharacterClass.ALPHANUMERIC, 12, False),)

    @pytest.mark.parametrize(
        "pattern",
        [
            "",  # empty
            "n",  # marker without length
            "!n",  # fixed marker without length
            "4!x",  # unknown character
            "4!n3",  # trailing length without marker
            "4!!n",  # doubled fixed marker
            "4!a!2n",  # fixed marker before length
            "4 n",  # whitespace
        ],
    )
    def test_malformed_patterns_rejected(self, pattern):
        with pytest.raises(PatternFormatError):
            SWIFT_TOKENIZER.tokenize(pattern)

    def test_error_reports_position(self):
        with pytest.raises(PatternFormatError) as exc_info:
            SWIFT_TOKENIZER.tokenize("4!a1?n")

        assert exc_info.value.context["position"] == 4
        assert exc_info.value.context["pattern"] == "4!a1?n"

    def test_compile_keeps_source(self):
        compiled = SWIFT_TOKENIZER.compile("4!a10!n")

        assert str(compiled) == "4!a10!n"
        assert compiled.max_length == 14


class TestCustomTokenizer:
    """The tokenizer is configured, not subclassed."""

    def test_alternative_alphabet(self):
        tokenizer = PatternTokenizer(
            "DL", {"D": CharacterClass.DIGIT, "L": CharacterClass.UPPER_LETTER}.get
        )

        compiled = tokenizer.compile("2!L3!D")

        assert compiled.matches("AB123")
        assert not compiled.matches("12ABC")

    def test_swift_markers_unknown_to_alternative_alphabet(self):
        tokenizer = PatternTokenizer("D", {"D": CharacterClass.DIGIT}.get)

        with pytest.raises(PatternFormatError):
            tokenizer.tokenize("4!n")

    def test_marker_mapped_to_other_rejected(self):
        tokenizer = PatternTokenizer("DX", lambda marker: CharacterClass.OTHER)

        with pytest.raises(PatternFormatError, match="no character class"):
            tokenizer.tokenize("2!X")


class TestSegment:
    def test_negative_length_rejected(self):
        with pytest.raises(ValueError):
            Segment(CharacterClass.DIGIT, -1)

    def test_other_class_rejected(self):
        with pytest.raises(ValueError):
            Segment(CharacterClass.OTHER, 2)

    def test_fixed_segment_consumes_exactly(self):
        segment = Segment(CharacterClass.DIGIT, 3, True)

        assert segment.consume("12345", 0) == 3
        assert segment.consume("12345", 3) is None  # only two left
        assert segment.consume("12A45", 0) is None

    def test_variable_segment_is_greedy(self):
        segment = Segment(CharacterClass.UPPER_LETTER, 3, False)

        assert segment.consume("AB12", 0) == 2
        assert segment.consume("ABCDE", 0) == 3  # never more than declared
        assert segment.consume("1ABC", 0) is None  # at least one


class TestCompiledPattern:
    def test_empty_pattern_rejected(self):
        with pytest.raises(PatternFormatError):
            CompiledPattern(())

    def test_lengths(self):
        compiled = SWIFT_TOKENIZER.compile("3a4!n")

        assert compiled.min_length == 5
        assert compiled.max_length == 7
        assert not compiled.is_fixed_length
        assert SWIFT_TOKENIZER.compile("4!a10!n").is_fixed_length

    @pytest.mark.parametrize(
        "body,expected",
        [
            ("ABNA0417164300", True),
            ("ABNA041716430", False),  # too short
            ("ABNA04171643000", False),  # leftover character
            ("ABN00417164300", False),  # digit in letter run
            ("abna0417164300", False),  # lower case
        ],
    )
    def test_fixed_pattern_matches(self, body, expected):
        assert SWIFT_TOKENIZER.compile("4!a10!n").matches(body) is expected

    @pytest.mark.parametrize(
        "body,expected",
        [
            ("A1234", True),
            ("ABC1234", True),
            ("ABCD1234", False),  # letter run longer than its bound
            ("1234", False),  # letter run missing
            ("AB123", False),  # digit run shorter than fixed length
            ("AB12345", False),  # leftover digit
        ],
    )
    def test_variable_pattern_matches(self, body, expected):
        assert SWIFT_TOKENIZER.compile("3a4!n").matches(body) is expected

    def test_space_class(self):
        compiled = SWIFT_TOKENIZER.compile("2!n1!e2!n")

        assert compiled.matches("12 34")
        assert not compiled.matches("12_34")
