"""UTF-16 code-unit offsets.

The editor measures text in UTF-16 code units, so a character outside the
Basic Multilingual Plane (most emoji) occupies two units but only one Python
code-point.  Range offsets in the document model are code units; Python
slicing is code-point based.  The helpers here translate between the two
so that neither pipeline ever bisects a character.
"""

from __future__ import annotations

from bisect import bisect_left


def char_units(char: str) -> int:
    """Return how many UTF-16 code units *char* occupies (1 or 2)."""
    return 2 if ord(char) > 0xFFFF else 1


def utf16_length(text: str) -> int:
    """Return the length of *text* in UTF-16 code units.

    >>> utf16_length("ab")
    2
    >>> utf16_length("a\\U0001f600")
    3
    """
    return sum(char_units(c) for c in text)


def utf16_boundaries(text: str) -> list[int]:
    """Return the code-unit offset of every code-point boundary in *text*.

    The result has ``len(text) + 1`` entries; entry ``i`` is the number of
    code units before code-point ``i``.
    """
    boundaries = [0]
    total = 0
    for char in text:
        total += char_units(char)
        boundaries.append(total)
    return boundaries


def to_char_index(boundaries: list[int], offset: int) -> int:
    """Map a code-unit *offset* to a code-point index.

    An offset that falls inside a surrogate pair snaps forward to the next
    code-point boundary.  Offsets past the end clamp to the text length.
    """
    if offset <= 0:
        return 0
    return min(bisect_left(boundaries, offset), len(boundaries) - 1)
