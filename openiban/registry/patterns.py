"""Pattern descriptors and structural matching.

A pattern descriptor is a compact description of a BBAN, written as a
sequence of runs ``<length>[!]<marker>``:

    4!a10!n      4 upper case letters followed by 10 digits (Netherlands)
    3!n13!c      3 digits followed by 13 alphanumerics (Luxembourg)
    2a           1 to 2 upper case letters

``!`` marks a fixed-length run; without it the run accepts 1 up to
``length`` characters. Which characters act as markers, and which character
class each marker stands for, is configuration of ``PatternTokenizer`` so
other registries can reuse it with a different alphabet.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum

from ..exceptions import PatternFormatError

FIXED_LENGTH_MARKER = "!"


class CharacterClass(str, Enum):
    """Character classes a pattern segment can accept."""

    DIGIT = "digit"
    UPPER_LETTER = "upper_letter"
    ALPHANUMERIC = "alphanumeric"
    SPACE = "space"
    OTHER = "other"

    def contains(self, char: str) -> bool:
        """Check whether a single character belongs to this class (ASCII only)."""
        if self is CharacterClass.DIGIT:
            return "0" <= char <= "9"
        if self is CharacterClass.UPPER_LETTER:
            return "A" <= char <= "Z"
        if self is CharacterClass.ALPHANUMERIC:
            return "0" <= char <= "9" or "A" <= char <= "Z"
        if self is CharacterClass.SPACE:
            return char == " "
        return False


@dataclass(frozen=True)
class Segment:
    """One run of a compiled pattern.

    Attributes:
        character_class: Class every character of the run must belong to
        length: Exact length (fixed) or maximum length (variable)
        is_fixed_length: Whether the run must be exactly ``length`` long
    """

    character_class: CharacterClass
    length: int
    is_fixed_length: bool = True

    def __post_init__(self) -> None:
        if self.length < 0:
            raise ValueError(f"Segment length must be non-negative, got {self.length}")
        if self.character_class is CharacterClass.OTHER:
            raise ValueError("Segment character class must not be OTHER")

    @property
    def min_length(self) -> int:
        return self.length if self.is_fixed_length else min(1, self.length)

    def consume(self, value: str, start: int) -> int | None:
        """Match this segment at ``start``.

        Fixed runs take exactly ``length`` characters. Variable runs take the
        longest prefix (at most ``length``) of characters in the class, and at
        least one. There is no backtracking.

        Returns:
            Position after the consumed characters, or None if the run does not match
        """
        if self.is_fixed_length:
            end = start + self.length
            if end > len(value):
                return None
            for pos in range(start, end):
                if not self.character_class.contains(value[pos]):
                    return None
            return end

        limit = min(start + self.length, len(value))
        pos = start
        while pos < limit and self.character_class.contains(value[pos]):
            pos += 1
        if pos - start < self.min_length:
            return None
        return pos


@dataclass(frozen=True)
class CompiledPattern:
    """Ordered, non-empty sequence of segments built from a pattern descriptor."""

    segments: tuple[Segment, ...]
    source: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if not self.segments:
            raise PatternFormatError("A pattern needs at least one segment", pattern=self.source)

    @property
    def min_length(self) -> int:
        """Shortest string the pattern can match."""
        return sum(segment.min_length for segment in self.segments)

    @property
    def max_length(self) -> int:
        """Longest string the pattern can match."""
        return sum(segment.length for segment in self.segments)

    @property
    def is_fixed_length(self) -> bool:
        return all(segment.is_fixed_length for segment in self.segments)

    def matches(self, value: str) -> bool:
        """Walk the segments over ``value``; every character must be consumed."""
        pos = 0
        for segment in self.segments:
            next_pos = segment.consume(value, pos)
            if next_pos is None:
                return False
            pos = next_pos
        return pos == len(value)

    def __str__(self) -> str:
        return self.source


class PatternTokenizer:
    """Compile pattern descriptors into ``CompiledPattern`` objects.

    The tokenizer knows nothing about any particular standard: it is given
    the characters that terminate a run and a function mapping such a
    marker to a ``CharacterClass``.

    Args:
        markers: Characters that end a run (e.g. ``"nace"`` for SWIFT)
        categorize: Maps a marker to its character class; ``OTHER`` is rejected

    Example:
        >>> tokenizer = PatternTokenizer("nd", {"n": CharacterClass.DIGIT}.get)
        >>> tokenizer.tokenize("2!n")
        (Segment(character_class=<CharacterClass.DIGIT: 'digit'>, length=2, is_fixed_length=True),)
    """

    def __init__(
        self,
        markers: Iterable[str],
        categorize: Callable[[str], CharacterClass | None],
    ) -> None:
        self.markers = frozenset(markers)
        self._categorize = categorize

    def tokenize(self, pattern: str) -> tuple[Segment, ...]:
        """Split ``pattern`` into segments.

        Raises:
            PatternFormatError: Unknown character, missing length or marker,
                or a marker that maps to no usable character class
        """
        if not pattern:
            raise PatternFormatError("Pattern is empty", pattern=pattern)

        segments: list[Segment] = []
        token_start = 0
        for pos, char in enumerate(pattern):
            if char in self.markers:
                segments.append(self._parse_token(pattern, token_start, pos))
                token_start = pos + 1
            elif not (char.isascii() and char.isdigit()) and char != FIXED_LENGTH_MARKER:
                raise PatternFormatError(
                    f"Unexpected character {char!r} in pattern", pattern=pattern, position=pos
                )

        if token_start != len(pattern):
            raise PatternFormatError(
                "Pattern ends without a character class marker",
                pattern=pattern,
                position=token_start,
            )

        return tuple(segments)

    def compile(self, pattern: str) -> CompiledPattern:
        """Tokenize ``pattern`` into a ``CompiledPattern``."""
        return CompiledPattern(self.tokenize(pattern), source=pattern)

    def _parse_token(self, pattern: str, start: int, marker_pos: int) -> Segment:
        token = pattern[start : marker_pos + 1]
        if len(token) < 2:
            raise PatternFormatError(
                f"Token {token!r} has no length", pattern=pattern, position=start
            )

        descriptor = token[:-1]
        is_fixed_length = descriptor.endswith(FIXED_LENGTH_MARKER)
        if is_fixed_length:
            descriptor = descriptor[:-1]

        if not descriptor.isdigit():
            raise PatternFormatError(
                f"Token {token!r} has an invalid length", pattern=pattern, position=start
            )

        character_class = self._categorize(token[-1])
        if character_class is None or character_class is CharacterClass.OTHER:
            raise PatternFormatError(
                f"Marker {token[-1]!r} has no character class",
                pattern=pattern,
                position=marker_pos,
            )

        return Segment(character_class, int(descriptor), is_fixed_length)
