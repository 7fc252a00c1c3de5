"""String renderings of a normalized IBAN.

Both functions are pure transforms over an already normalized value; they
do not validate.
"""

from enum import Enum

GROUP_SIZE = 4


class IbanFormat(str, Enum):
    """Supported output formats."""

    FLAT = "F"  # NL91ABNA0417164300
    PARTITIONED = "S"  # NL91 ABNA 0417 1643 00


def to_flat(value: str) -> str:
    """Render without separators."""
    return "".join(value.split())


def to_partitioned(value: str) -> str:
    """Render as space-separated groups of four, the last group possibly shorter.

    Example:
        >>> to_partitioned("NL91ABNA0417164300")
        'NL91 ABNA 0417 1643 00'
    """
    flat = to_flat(value)
    return " ".join(flat[i : i + GROUP_SIZE] for i in range(0, len(flat), GROUP_SIZE))


def render(value: str, fmt: IbanFormat | str = IbanFormat.FLAT) -> str:
    """Render ``value`` in ``fmt`` ("F" flat, "S" partitioned).

    Raises:
        ValueError: Unknown format
    """
    try:
        fmt = IbanFormat(fmt)
    except ValueError:
        supported = ", ".join(f.value for f in IbanFormat)
        raise ValueError(f"The format {fmt!r} is invalid, supported formats: {supported}") from None

    if fmt is IbanFormat.PARTITIONED:
        return to_partitioned(value)
    return to_flat(value)
