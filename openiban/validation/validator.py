"""IBAN validator pipeline.

Checks run cheapest first and stop at the first failure:

1. Raw input length cap
2. Normalization: whitespace removed, only ASCII letters and digits, upper case
3. Country lookup
4. Total length for the country
5. Check digits and BBAN structure
6. MOD 97-10 checksum

The validator holds no mutable state; one instance can serve any number of
threads as long as its registry is not replaced underneath it.
"""

import re
from typing import Protocol, runtime_checkable

from ..registry.registry import PREFIX_LENGTH, IbanRegistry
from ..utils.logging import get_logger
from .checksum import is_valid_checksum
from .results import ErrorKind, Invalid, Valid, ValidationResult

logger = get_logger(__name__)

DEFAULT_MAX_INPUT_LENGTH = 64

_ALPHANUMERIC_RE = re.compile(r"[0-9A-Za-z]+")


def normalize(value: str) -> str:
    """Remove all whitespace and upper-case ``value``.

    Example:
        >>> normalize(" nl91 abna 0417 1643 00 ")
        'NL91ABNA0417164300'
    """
    return "".join(value.split()).upper()


@runtime_checkable
class SupportsValidation(Protocol):
    """Anything that can validate an IBAN candidate (real validator, stub, ...)."""

    def validate(self, value: str | None) -> ValidationResult: ...


class IbanValidator:
    """Validate IBAN candidates against a country registry.

    Args:
        registry: Country registry (default: built-in SWIFT table)
        max_input_length: Raw inputs longer than this are rejected up front

    Example:
        >>> validator = IbanValidator()
        >>> validator.validate("NL91 ABNA 0417 1643 00")
        Valid(value='NL91ABNA0417164300', country_code='NL')
        >>> validator.validate("XX91ABNA0417164300").kind
        <ErrorKind.COUNTRY_NOT_FOUND: 'country_not_found'>
    """

    def __init__(
        self,
        registry: IbanRegistry | None = None,
        *,
        max_input_length: int | None = None,
    ) -> None:
        self.registry = registry if registry is not None else IbanRegistry.swift()
        self.max_input_length = (
            DEFAULT_MAX_INPUT_LENGTH if max_input_length is None else max_input_length
        )

    def validate(self, value: str | None) -> ValidationResult:
        """Validate ``value``. Never raises; failures come back as ``Invalid``."""
        result = self._validate(value)
        if isinstance(result, Invalid):
            logger.debug("iban_validation_failed", kind=result.kind.value)
        return result

    def _validate(self, value: str | None) -> ValidationResult:
        if not isinstance(value, str):
            return Invalid(ErrorKind.ILLEGAL_CHARACTERS, "A value is required")

        if len(value) > self.max_input_length:
            return Invalid(
                ErrorKind.INVALID_LENGTH,
                f"The value exceeds the maximum input length of {self.max_input_length}",
            )

        iban = "".join(value.split())
        if not _ALPHANUMERIC_RE.fullmatch(iban):
            return Invalid(
                ErrorKind.ILLEGAL_CHARACTERS,
                "The value is empty or contains characters other than letters and digits",
            )
        iban = iban.upper()

        country_code = iban[:2]
        entry = self.registry.lookup(country_code)
        if entry is None:
            return Invalid(ErrorKind.COUNTRY_NOT_FOUND, f"Unknown country code: {country_code}")

        if len(iban) != entry.total_length:
            return Invalid(
                ErrorKind.INVALID_LENGTH,
                f"Wrong IBAN length for {country_code}: "
                f"expected {entry.total_length}, got {len(iban)}",
            )

        check_digits = iban[2:PREFIX_LENGTH]
        if not (check_digits.isascii() and check_digits.isdigit()):
            return Invalid(ErrorKind.INVALID_STRUCTURE, "Check digits must be two digits")

        if not entry.matches(iban[PREFIX_LENGTH:]):
            return Invalid(
                ErrorKind.INVALID_STRUCTURE,
                f"Account number does not match the {country_code} format {entry.pattern}",
            )

        if not is_valid_checksum(iban):
            return Invalid(ErrorKind.INVALID_CHECKSUM, "IBAN checksum (MOD-97) is invalid")

        return Valid(iban, country_code)

    def __repr__(self) -> str:
        return (
            f"<IbanValidator("
            f"countries={len(self.registry)}, "
            f"max_input_length={self.max_input_length})>"
        )
