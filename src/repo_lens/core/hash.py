"""Deterministic hashing for Barton numbers and report fingerprints.

- ``path_hash``: the 32-bit signed rolling hash used to derive file numbers
  from paths. It is spelled out explicitly because Python's ``hash()`` is
  salted per process and previously assigned numbers must stay stable.
- ``hash_fields``: xxhash64 hex digest used to fingerprint compliance reports.
"""

from typing import Iterator

import xxhash

_INT32_MOD = 1 << 32
_INT32_SIGN = 1 << 31


def to_int32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range."""
    value %= _INT32_MOD
    return value - _INT32_MOD if value >= _INT32_SIGN else value


def utf16_code_units(text: str) -> Iterator[int]:
    """Yield the UTF-16 code units of text (astral chars become surrogate pairs)."""
    for char in text:
        point = ord(char)
        if point > 0xFFFF:
            point -= 0x10000
            yield 0xD800 + (point >> 10)
            yield 0xDC00 + (point & 0x3FF)
        else:
            yield point


def path_hash(text: str) -> int:
    """
    Polynomial rolling hash with 32-bit signed overflow.

    Each step computes ``h * 32 - h + unit`` and wraps the result to int32,
    so the output matches hashes already assigned by the dashboard.

    Args:
        text: String to hash (typically a file path)

    Returns:
        Signed 32-bit integer

    Examples:
        >>> path_hash("ab")
        3105
    """
    value = 0
    for unit in utf16_code_units(text):
        value = to_int32((value << 5) - value + unit)
    return value


def bucket(text: str, buckets: int = 99) -> int:
    """Map text onto ``[1, buckets]`` via ``path_hash``."""
    return abs(path_hash(text)) % buckets + 1


def hash_fields(*fields: str) -> str:
    """
    Hash multiple fields together (deterministic, order-sensitive).

    Args:
        *fields: Fields to combine and hash

    Returns:
        xxhash64 hex digest of the combined fields
    """
    combined = "\x00".join(fields)  # Null byte separator
    return xxhash.xxh64(combined.encode("utf-8")).hexdigest()


__all__ = [
    "to_int32",
    "utf16_code_units",
    "path_hash",
    "bucket",
    "hash_fields",
]
