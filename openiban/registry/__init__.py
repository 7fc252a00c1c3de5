"""Country registry and pattern compilation.

Usage:
    >>> from openiban.registry import IbanRegistry
    >>> registry = IbanRegistry.swift()
    >>> registry.lookup("DE").pattern.max_length
    18
"""

__all__ = [
    "CharacterClass",
    "CompiledPattern",
    "CountryDefinition",
    "CountryEntry",
    "IbanRegistry",
    "PatternTokenizer",
    "SWIFT_COUNTRIES",
    "SWIFT_TOKENIZER",
    "Segment",
    "compile_country",
    "load_definitions",
]

from .countries import SWIFT_COUNTRIES, CountryDefinition
from .loader import load_definitions
from .patterns import CharacterClass, CompiledPattern, PatternTokenizer, Segment
from .registry import CountryEntry, IbanRegistry, compile_country
from .swift import SWIFT_TOKENIZER
