from .utf16 import char_units, to_char_index, utf16_boundaries, utf16_length

__all__ = [
    "char_units",
    "to_char_index",
    "utf16_boundaries",
    "utf16_length",
]
