"""openiban - IBAN validation and formatting.

Validates International Bank Account Numbers against the per-country
structure of the SWIFT IBAN registry and the ISO 7064 MOD 97-10 checksum.

Usage:
    >>> from openiban import IbanParser, IbanValidator
    >>> validator = IbanValidator()
    >>> validator.validate("NL91 ABNA 0417 1643 00").is_valid
    True
    >>> iban = IbanParser(validator).parse("NL91ABNA0417164300")
    >>> iban.format("S")
    'NL91 ABNA 0417 1643 00'
"""

__version__ = "1.0.0"

__all__ = [
    "ErrorKind",
    "Iban",
    "IbanFormat",
    "IbanFormatError",
    "IbanParser",
    "IbanRegistry",
    "IbanValidator",
    "Invalid",
    "ParsedBy",
    "Valid",
    "ValidationResult",
    "parse",
    "validate",
]

from .adapters import ParsedBy
from .defaults import get_default_parser, get_default_validator
from .exceptions import IbanFormatError
from .formatting import IbanFormat
from .iban import Iban
from .parser import IbanParser
from .registry import IbanRegistry
from .validation import ErrorKind, IbanValidator, Invalid, Valid, ValidationResult


def validate(value: str | None) -> ValidationResult:
    """Validate ``value`` with the default validator."""
    return get_default_validator().validate(value)


def parse(value: str | None) -> Iban:
    """Parse ``value`` with the default parser, raising ``IbanFormatError`` on failure."""
    return get_default_parser().parse(value)
