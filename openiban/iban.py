"""Validated IBAN value object.

Value Objects:
- Immutable (frozen dataclass)
- No identity (equality and hash over the normalized string)
- Only built from a successful validation, see ``Iban.from_result`` and
  ``IbanParser``
"""

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .formatting import IbanFormat, render
from .validation.checksum import is_valid_checksum
from .validation.results import Valid

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler
    from pydantic_core import CoreSchema

_NORMALIZED_RE = re.compile(r"[A-Z]{2}[0-9]{2}[0-9A-Z]+")


@dataclass(frozen=True)
class Iban:
    """A validated International Bank Account Number.

    Example:
        >>> iban = IbanParser().parse("nl91 abna 0417 1643 00")
        >>> str(iban)
        'NL91ABNA0417164300'
        >>> f"{iban:S}"
        'NL91 ABNA 0417 1643 00'
    """

    value: str

    def __post_init__(self) -> None:
        if not _NORMALIZED_RE.fullmatch(self.value):
            raise ValueError(f"Not a normalized IBAN: {self.value!r}")
        if not is_valid_checksum(self.value):
            raise ValueError(f"IBAN checksum (MOD-97) is invalid: {self.value!r}")

    @classmethod
    def from_result(cls, result: Valid) -> "Iban":
        """Wrap the normalized value of a successful validation."""
        if not isinstance(result, Valid):
            raise TypeError(f"An Iban can only be built from a Valid result, got {result!r}")
        return cls(result.value)

    @property
    def country_code(self) -> str:
        return self.value[:2]

    @property
    def check_digits(self) -> str:
        return self.value[2:4]

    @property
    def bban(self) -> str:
        """Basic Bank Account Number: everything after the check digits."""
        return self.value[4:]

    def format(self, fmt: IbanFormat | str = IbanFormat.FLAT) -> str:
        """Render as "F" (flat, ``NL91ABNA0417164300``) or "S" (``NL91 ABNA 0417 1643 00``)."""
        return render(self.value, fmt)

    def __format__(self, format_spec: str) -> str:
        return self.format(format_spec or IbanFormat.FLAT)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: "GetCoreSchemaHandler"
    ) -> "CoreSchema":
        from .adapters import iban_core_schema

        return iban_core_schema()
