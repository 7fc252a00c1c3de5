"""Country registry: country code → compiled pattern and IBAN length.

A registry is built once from country definitions and is read-only
afterwards, so it can be shared between threads without locking. To change
the pattern set, build a new registry and swap the reference (see
``openiban.defaults.reload_defaults``).

Usage:
    >>> registry = IbanRegistry.from_definitions(SWIFT_COUNTRIES)
    >>> registry.lookup("NL").total_length
    18
    >>> registry.lookup("XX") is None
    True
"""

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ..exceptions import DuplicateCountryError, LengthMismatchError, PatternFormatError
from ..utils.logging import LogPerformance, get_logger
from .countries import SWIFT_COUNTRIES, CountryDefinition
from .patterns import CompiledPattern, PatternTokenizer
from .swift import SWIFT_TOKENIZER

logger = get_logger(__name__)

# Country code (2) + check digits (2)
PREFIX_LENGTH = 4
# The checksum needs at least one BBAN character
MIN_IBAN_LENGTH = PREFIX_LENGTH + 1

_COUNTRY_CODE_RE = re.compile(r"[A-Z]{2}")


@dataclass(frozen=True)
class CountryEntry:
    """Compiled IBAN format of one country.

    Attributes:
        country_code: ISO 3166-1 alpha-2 code
        pattern: Compiled BBAN pattern
        total_length: Total IBAN length including country code and check digits
        name: Country name (informational)
        example: Example IBAN (informational)
    """

    country_code: str
    pattern: CompiledPattern
    total_length: int
    name: str | None = field(default=None, compare=False)
    example: str | None = field(default=None, compare=False)

    @property
    def bban_length(self) -> int:
        return self.total_length - PREFIX_LENGTH

    def matches(self, bban: str) -> bool:
        """Check the BBAN (IBAN without its first four characters) against the pattern."""
        return self.pattern.matches(bban)


def compile_country(
    country_code: str,
    pattern: str,
    total_length: int,
    tokenizer: PatternTokenizer = SWIFT_TOKENIZER,
    *,
    name: str | None = None,
    example: str | None = None,
) -> CountryEntry:
    """Compile one country's pattern descriptor into a ``CountryEntry``.

    Args:
        country_code: Two upper case ASCII letters
        pattern: BBAN pattern descriptor
        total_length: Declared IBAN length, country code and check digits included
        tokenizer: Tokenizer for the descriptor alphabet (SWIFT by default)

    Raises:
        PatternFormatError: Malformed country code or pattern descriptor
        LengthMismatchError: ``total_length`` is below ``MIN_IBAN_LENGTH``, or pattern
            length plus prefix differs from it
    """
    if not _COUNTRY_CODE_RE.fullmatch(country_code):
        raise PatternFormatError(
            f"Invalid country code {country_code!r}: expected two upper case letters",
            pattern=pattern,
        )

    if total_length < MIN_IBAN_LENGTH:
        raise LengthMismatchError(
            f"Declared length {total_length} is too short, an IBAN has at least "
            f"{MIN_IBAN_LENGTH} characters",
            country_code=country_code,
            expected=MIN_IBAN_LENGTH,
            actual=total_length,
        )

    compiled = tokenizer.compile(pattern)
    actual = compiled.max_length + PREFIX_LENGTH
    if actual != total_length:
        raise LengthMismatchError(
            f"Pattern {pattern!r} describes {actual} characters, "
            f"declared length is {total_length}",
            country_code=country_code,
            expected=total_length,
            actual=actual,
        )

    return CountryEntry(country_code, compiled, total_length, name=name, example=example)


class IbanRegistry:
    """Immutable mapping of country codes to compiled IBAN formats.

    Lookups are exact and case-sensitive. Iteration yields entries in the
    order they were registered.
    """

    def __init__(self, entries: Iterable[CountryEntry]) -> None:
        by_code: dict[str, CountryEntry] = {}
        for entry in entries:
            if entry.country_code in by_code:
                raise DuplicateCountryError(
                    f"Country {entry.country_code} is registered twice",
                    country_code=entry.country_code,
                )
            by_code[entry.country_code] = entry
        self._entries: Mapping[str, CountryEntry] = MappingProxyType(by_code)

    @classmethod
    def from_definitions(
        cls,
        definitions: Iterable[CountryDefinition],
        tokenizer: PatternTokenizer = SWIFT_TOKENIZER,
    ) -> "IbanRegistry":
        """Compile every definition; the first broken definition aborts the build."""
        with LogPerformance("iban_registry_build", logger):
            registry = cls(
                compile_country(
                    definition.code,
                    definition.pattern,
                    definition.length,
                    tokenizer,
                    name=definition.name,
                    example=definition.example,
                )
                for definition in definitions
            )
        logger.info("iban_registry_built", country_count=len(registry))
        return registry

    @classmethod
    def swift(cls) -> "IbanRegistry":
        """Registry of the built-in SWIFT country table."""
        return cls.from_definitions(SWIFT_COUNTRIES)

    def lookup(self, country_code: str) -> CountryEntry | None:
        """Get the entry for ``country_code``, or None if it is not registered."""
        return self._entries.get(country_code)

    @property
    def country_codes(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, country_code: object) -> bool:
        return country_code in self._entries

    def __iter__(self) -> Iterator[CountryEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<IbanRegistry(countries={len(self)})>"
