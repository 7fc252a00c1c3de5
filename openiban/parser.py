"""Parse strings into ``Iban`` values.

``IbanParser`` sits between a validator and the ``Iban`` value object. The
validator is injected, so tests and alternative implementations can supply
their own; only the composition root (``openiban.defaults``) picks a default.
"""

from typing import NamedTuple

from .exceptions import IbanFormatError
from .iban import Iban
from .utils.logging import get_logger
from .validation.results import Invalid, ValidationResult
from .validation.validator import SupportsValidation, normalize

logger = get_logger(__name__)


class ParseOutcome(NamedTuple):
    """Everything a parse attempt produced."""

    iban: Iban | None
    result: ValidationResult | None
    error: Exception | None


class IbanParser:
    """Parse IBAN strings with an injected validator.

    Args:
        validator: Validator to use (default: the process-wide default validator)

    Example:
        >>> parser = IbanParser(IbanValidator())
        >>> parser.parse("NL91 ABNA 0417 1643 00")
        Iban(value='NL91ABNA0417164300')
        >>> parser.try_parse("NL92ABNA0417164300") is None
        True
    """

    def __init__(self, validator: SupportsValidation | None = None) -> None:
        if validator is None:
            from .defaults import get_default_validator

            validator = get_default_validator()
        self.validator = validator

    def parse(self, value: str | None) -> Iban:
        """Parse ``value`` or raise.

        Raises:
            IbanFormatError: The value is not a valid IBAN, or the validator failed.
                ``result`` holds the validation result, ``original_error`` the
                validator's exception
        """
        outcome = self.attempt(value)
        if outcome.iban is not None:
            return outcome.iban

        if isinstance(outcome.result, Invalid) and outcome.result.message:
            message = outcome.result.message
        else:
            message = f"The value {value!r} is not a valid IBAN"

        raise IbanFormatError(
            message, result=outcome.result, original_error=outcome.error
        ) from outcome.error

    def try_parse(self, value: str | None) -> Iban | None:
        """Parse ``value``, returning None instead of raising."""
        return self.attempt(value).iban

    def attempt(self, value: str | None) -> ParseOutcome:
        """Parse ``value`` and report the validation result and any validator error.

        The validator sees the raw value, so its input checks (such as the
        length cap) apply before any whitespace is removed.
        """
        try:
            result = self.validator.validate(value)
            if not result.is_valid:
                return ParseOutcome(None, result, None)
            # A pluggable validator may not normalize; the Iban holds the normalized value
            return ParseOutcome(Iban(normalize(value)), result, None)
        except Exception as e:
            logger.warning("iban_validator_error", error=str(e), error_type=type(e).__name__)
            return ParseOutcome(None, None, e)
