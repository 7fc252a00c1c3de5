"""Pydantic integration for ``Iban``.

``Iban`` can be used directly as a model field type; strings are parsed with
the default parser and the field dumps to the flat string (python and JSON mode):

    >>> class Payment(BaseModel):
    ...     account: Iban
    ...     amount: Decimal
    >>> Payment(account="NL91 ABNA 0417 1643 00", amount=100).model_dump_json()
    '{"account":"NL91ABNA0417164300","amount":"100"}'

Use ``ParsedBy`` to validate a field with a specific parser:

    account: Annotated[Iban, ParsedBy(IbanParser(IbanValidator(my_registry)))]
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from .iban import Iban
from .parser import IbanParser


def _default_parser() -> IbanParser:
    from .defaults import get_default_parser

    return get_default_parser()


def iban_core_schema(get_parser: Callable[[], IbanParser] = _default_parser) -> CoreSchema:
    """Core schema accepting ``Iban`` instances or IBAN strings.

    The parser is resolved on every validation so that a swapped default
    registry takes effect. Dumps in both modes produce the flat string, which
    validates back into the same value.
    """

    def validate(value: Any) -> Iban:
        if isinstance(value, Iban):
            return value
        if isinstance(value, str):
            return get_parser().parse(value)
        raise ValueError(f"An IBAN string is required, got {type(value).__name__}")

    return core_schema.no_info_plain_validator_function(
        validate,
        json_schema_input_schema=core_schema.str_schema(),
        serialization=core_schema.plain_serializer_function_ser_schema(
            lambda iban: iban.value,
            return_schema=core_schema.str_schema(),
            when_used="always",
        ),
    )


@dataclass(frozen=True)
class ParsedBy:
    """``Annotated`` marker selecting the parser used for an ``Iban`` field."""

    parser: IbanParser

    def __get_pydantic_core_schema__(
        self, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return iban_core_schema(lambda: self.parser)
