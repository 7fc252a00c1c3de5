"""ISO 7064 MOD 97-10 checksum, as used by IBAN check digits.

The IBAN is rearranged (first four characters moved to the end), every
letter is expanded to two digits (A=10 ... Z=35) and the resulting number is
reduced modulo 97. A valid IBAN leaves a remainder of 1.

The number is never materialized: the remainder is folded digit by digit,
so the cost is linear in the input length.

Note: a single altered check digit is always detected, but not every
arbitrary change to an IBAN is: two values congruent modulo 97 share a
remainder.
"""

MODULUS = 97

_LETTER_OFFSET = ord("A") - 10


def mod97(value: str) -> int:
    """Remainder modulo 97 of ``value`` read as a number with letters expanded.

    Args:
        value: Upper case letters and ASCII digits only

    Raises:
        ValueError: A character is neither an ASCII digit nor an upper case letter
    """
    remainder = 0
    for char in value:
        if "0" <= char <= "9":
            remainder = (remainder * 10 + ord(char) - 48) % MODULUS
        elif "A" <= char <= "Z":
            # Letters expand to two digits
            remainder = (remainder * 100 + ord(char) - _LETTER_OFFSET) % MODULUS
        else:
            raise ValueError(f"Unexpected character {char!r} in checksum input")
    return remainder


def is_valid_checksum(iban: str) -> bool:
    """Check the MOD 97-10 checksum of a normalized IBAN.

    Args:
        iban: Upper case, whitespace-free IBAN (country code, check digits, BBAN)

    Returns:
        True if the rearranged value leaves a remainder of 1 modulo 97

    Example:
        >>> is_valid_checksum("NL91ABNA0417164300")
        True
        >>> is_valid_checksum("NL92ABNA0417164300")
        False
    """
    if len(iban) < 5:
        raise ValueError(f"IBAN too short for a checksum: {len(iban)} characters")
    return mod97(iban[4:] + iban[:4]) == 1


def compute_check_digits(country_code: str, bban: str) -> str:
    """Compute the two check digits for ``country_code`` and ``bban``.

    Example:
        >>> compute_check_digits("NL", "ABNA0417164300")
        '91'
    """
    remainder = mod97(bban + country_code + "00")
    return f"{MODULUS + 1 - remainder:02d}"
