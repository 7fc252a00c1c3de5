"""Composition root: the process-wide default registry, validator and parser.

Library code never reaches for these implicitly except where no validator was
injected. The three objects are swapped together as one immutable bundle, so a
concurrent reader sees either the old set or the new one, never a mix.
"""

from typing import NamedTuple

from .parser import IbanParser
from .registry.loader import load_definitions
from .registry.registry import IbanRegistry
from .utils.config import Settings, get_settings
from .utils.logging import get_logger
from .validation.validator import IbanValidator

logger = get_logger(__name__)


class Defaults(NamedTuple):
    registry: IbanRegistry
    validator: IbanValidator
    parser: IbanParser


_defaults: Defaults | None = None


def build_registry(settings: Settings | None = None) -> IbanRegistry:
    """Build a registry from ``settings.registry_file``, or the built-in SWIFT table."""
    settings = settings or get_settings()
    if settings.registry_file is not None:
        return IbanRegistry.from_definitions(load_definitions(settings.registry_file))
    return IbanRegistry.swift()


def reload_defaults(settings: Settings | None = None) -> Defaults:
    """Build a fresh default bundle and replace the current one in a single assignment."""
    global _defaults

    settings = settings or get_settings()
    registry = build_registry(settings)
    validator = IbanValidator(registry, max_input_length=settings.max_input_length)
    bundle = Defaults(registry, validator, IbanParser(validator))
    _defaults = bundle
    logger.debug("iban_defaults_reloaded", country_count=len(registry))
    return bundle


def get_defaults() -> Defaults:
    bundle = _defaults
    if bundle is None:
        bundle = reload_defaults()
    return bundle


def get_default_registry() -> IbanRegistry:
    return get_defaults().registry


def get_default_validator() -> IbanValidator:
    return get_defaults().validator


def get_default_parser() -> IbanParser:
    return get_defaults().parser
