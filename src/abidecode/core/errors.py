from __future__ import annotations


class DecodeFailure(Exception):
    """Raised when ABI data cannot be decoded against the supplied types.

    Covers short buffers, out-of-range offsets, invalid booleans, invalid
    UTF-8, count mismatches and event topic mismatches. Decoding is
    deterministic, so retrying with the same input never helps.
    """


class InvalidABIType(ValueError):
    """Raised for malformed ABI type strings or ABI JSON entries."""
