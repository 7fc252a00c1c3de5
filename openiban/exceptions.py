"""Exception hierarchy for openiban.

Per-input validation failures are never raised: they are returned as
``Invalid`` results by the validator. Exceptions are reserved for corrupt
configuration (registry build errors) and for the parse-or-raise surface of
``IbanParser``.

Usage:
    from openiban.exceptions import IbanFormatError

    try:
        iban = parser.parse(value)
    except IbanFormatError as e:
        logger.warning("iban_rejected", kind=e.kind, context=e.context)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from openiban.validation.results import ErrorKind, ValidationResult


class OpenIbanError(Exception):
    """Base exception for all openiban errors.

    Attributes:
        message: Human-readable error message
        context: Additional context for debugging (dict)
        original_error: Original exception if wrapped
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        base = self.message
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({ctx_str})"
        if self.original_error:
            base = f"{base} [caused by: {type(self.original_error).__name__}]"
        return base

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


# =============================================================================
# Registry build errors (fatal, raised once at startup)
# =============================================================================


class RegistryError(OpenIbanError):
    """Base class for errors raised while building a country registry."""


class PatternFormatError(RegistryError):
    """Raised when a pattern descriptor cannot be tokenized.

    Example: ``"4!x"`` uses an unknown class marker, ``"!n"`` has no length.
    """

    def __init__(
        self,
        message: str,
        *,
        pattern: str | None = None,
        position: int | None = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        if pattern is not None:
            context["pattern"] = pattern
        if position is not None:
            context["position"] = position
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class LengthMismatchError(RegistryError):
    """Raised when a compiled pattern does not add up to the declared IBAN length."""

    def __init__(
        self,
        message: str,
        *,
        country_code: str | None = None,
        expected: int | None = None,
        actual: int | None = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        if country_code:
            context["country_code"] = country_code
        if expected is not None:
            context["expected"] = expected
        if actual is not None:
            context["actual"] = actual
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class DuplicateCountryError(RegistryError):
    """Raised when the same country code is registered twice."""

    def __init__(self, message: str, *, country_code: str | None = None, **kwargs: Any) -> None:
        context = kwargs.get("context", {})
        if country_code:
            context["country_code"] = country_code
        kwargs["context"] = context
        super().__init__(message, **kwargs)


# =============================================================================
# Configuration errors
# =============================================================================


class ConfigurationError(OpenIbanError):
    """Raised when settings or a country definitions file are invalid."""

    def __init__(
        self,
        message: str,
        *,
        setting: str | None = None,
        expected: str | None = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        if setting:
            context["setting"] = setting
        if expected:
            context["expected"] = expected
        kwargs["context"] = context
        super().__init__(message, **kwargs)


# =============================================================================
# Parse errors
# =============================================================================


class IbanFormatError(OpenIbanError, ValueError):
    """Raised by ``IbanParser.parse`` when a value is not a valid IBAN.

    Carries the validation result when the validator produced one, and the
    exception raised by the validator when it failed unexpectedly.
    """

    def __init__(
        self,
        message: str,
        *,
        result: ValidationResult | None = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        kind = getattr(result, "kind", None)
        if kind is not None:
            context["kind"] = kind.value
        kwargs["context"] = context
        super().__init__(message, **kwargs)
        self.result = result

    @property
    def kind(self) -> ErrorKind | None:
        """Error kind of the failed validation, if the validator produced a result."""
        return getattr(self.result, "kind", None)
