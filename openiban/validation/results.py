"""Validation result types.

A validation returns exactly one of ``Valid`` or ``Invalid``; failures are
data, not exceptions, so callers can branch on ``kind``:

    match validator.validate(value):
        case Valid(value=iban):
            ...
        case Invalid(kind=ErrorKind.INVALID_CHECKSUM):
            ...
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, TypeAlias


class ErrorKind(str, Enum):
    """Why a candidate was rejected, in pipeline order."""

    ILLEGAL_CHARACTERS = "illegal_characters"
    COUNTRY_NOT_FOUND = "country_not_found"
    INVALID_LENGTH = "invalid_length"
    INVALID_STRUCTURE = "invalid_structure"
    INVALID_CHECKSUM = "invalid_checksum"


@dataclass(frozen=True)
class Valid:
    """Successful validation.

    Attributes:
        value: Normalized IBAN (upper case, no whitespace)
        country_code: Country the IBAN was validated against
    """

    value: str
    country_code: str

    @property
    def is_valid(self) -> Literal[True]:
        return True


@dataclass(frozen=True)
class Invalid:
    """Failed validation.

    Attributes:
        kind: First check that failed
        message: Human-readable explanation
    """

    kind: ErrorKind
    message: str = ""

    @property
    def is_valid(self) -> Literal[False]:
        return False


ValidationResult: TypeAlias = Valid | Invalid
