"""IBAN validation: normalization, structure and MOD 97-10 checksum."""

__all__ = [
    "ErrorKind",
    "IbanValidator",
    "Invalid",
    "SupportsValidation",
    "Valid",
    "ValidationResult",
    "compute_check_digits",
    "is_valid_checksum",
    "mod97",
    "normalize",
]

from .checksum import compute_check_digits, is_valid_checksum, mod97
from .results import ErrorKind, Invalid, Valid, ValidationResult
from .validator import IbanValidator, SupportsValidation, normalize
