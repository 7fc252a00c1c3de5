"""SWIFT IBAN registry pattern alphabet.

Source: SWIFT IBAN Registry, BBAN structure column.
Reference: https://www.swift.com/standards/data-standards/iban-international-bank-account-number

    n   digits (0-9)
    a   upper case letters (A-Z)
    c   upper case letters and digits
    e   blank space
"""

from .patterns import CharacterClass, PatternTokenizer

SWIFT_MARKERS: dict[str, CharacterClass] = {
    "n": CharacterClass.DIGIT,
    "a": CharacterClass.UPPER_LETTER,
    "c": CharacterClass.ALPHANUMERIC,
    "e": CharacterClass.SPACE,
}


def swift_character_class(marker: str) -> CharacterClass:
    return SWIFT_MARKERS.get(marker, CharacterClass.OTHER)


SWIFT_TOKENIZER = PatternTokenizer(SWIFT_MARKERS, swift_character_class)
