"""Helpers shared by the leaf adapters."""

from __future__ import annotations

from .exceptions import FilterAdaptationError

# Matches any byte, including ones that are not valid UTF-8
ANY_BYTES = rb"\C*"

_INT64_MAX = 2**63 - 1
_INT64_MIN = -(2**63)

_PLAIN_BYTES = frozenset(
    b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"
)


def quote_regex(literal: bytes) -> bytes:
    """
    Escape *literal* so that an RE2 regex matches it exactly.

    Bytes outside ``[A-Za-z0-9_]`` are backslash-escaped, NUL becomes
    ``\\x00`` and bytes >= 0x80 are kept as-is (UTF-8 sequences).

    >>> quote_regex(b"a.b*")
    b'a\\\\.b\\\\*'
    """
    out = bytearray()
    for byte in literal:
        if byte in _PLAIN_BYTES or byte >= 0x80:
            out.append(byte)
        elif byte == 0:
            out.extend(rb"\x00")
        else:
            out.append(ord("\\"))
            out.append(byte)
    return bytes(out)


def prefix_regex(prefix: bytes) -> bytes:
    """Regex matching every value that starts with *prefix*."""
    return quote_regex(prefix) + ANY_BYTES


def millis_in_range(millis: int) -> bool:
    """Whether *millis* converts to microseconds that fit a signed 64-bit int."""
    return _INT64_MIN <= millis * 1000 <= _INT64_MAX


def millis_to_micros(millis: int) -> int:
    """
    Convert a millisecond timestamp to the wire's microseconds.

    Raises:
        FilterAdaptationError: If the result does not fit a signed 64-bit int.
    """
    if not millis_in_range(millis):
        raise FilterAdaptationError(
            f"Timestamp {millis}ms is out of range for the wire format",
            predicate="TimestampsPredicate",
        )
    return millis * 1000
