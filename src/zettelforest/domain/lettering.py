from __future__ import annotations

"""
Letter Sequence Generators.

Spreadsheet-column style enumeration over the lowercase alphabet
(a..z, aa..az, ba..zz, aaa, ...). Used to relabel sibling letter segments
during compaction and to derive the next sibling of a letter segment.
"""

import string

ALPHABET: str = string.ascii_lowercase
_RADIX: int = len(ALPHABET)


def letters_for_index(index: int) -> str:
    """
    Encode a 0-based position as a minimal bijective base-26 letter string.

    Args:
        index: Zero-based sibling position (0 -> "a", 25 -> "z", 26 -> "aa").

    Returns:
        str: The letter label for that position.
    """
    if index < 0:
        raise ValueError(f"Letter index must be non-negative, received {index}.")

    n = index + 1
    parts = []
    while n > 0:
        n, rem = divmod(n - 1, _RADIX)
        parts.append(ALPHABET[rem])
    return "".join(reversed(parts))


def index_for_letters(value: str) -> int:
    """Inverse of letters_for_index."""
    if not value or any(ch not in ALPHABET for ch in value):
        raise ValueError(f"Not a lowercase letter sequence: {value!r}")

    n = 0
    for ch in value:
        n = n * _RADIX + ALPHABET.index(ch) + 1
    return n - 1


def increment_letters(value: str) -> str:
    """
    Return the letter label that follows `value` in generation order.

    Carries like an odometer: "a" -> "b", "az" -> "ba", "zz" -> "aaa".
    """
    return letters_for_index(index_for_letters(value) + 1)
