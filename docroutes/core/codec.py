"""JSON-safe encoding of 64-bit integers.

JSON consumers commonly parse numbers as IEEE doubles, which cannot hold
integers beyond 2**53 - 1 exactly. Error-set node ids are unsigned 64-bit,
so anything outside the safe range is written as a tagged decimal string.
"""

from __future__ import annotations

from typing import Any

from docroutes.core.exceptions import CacheError

BIGINT_PREFIX = "__bigint__:"
MAX_SAFE_INTEGER = 2**53 - 1


def encode_value(value: Any) -> Any:
    """Recursively convert a structure into JSON-safe primitives.

    Dicts drop keys whose value is None. Booleans are left alone.
    """
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, int):
        if -MAX_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER:
            return value
        return f"{BIGINT_PREFIX}{value}"
    if isinstance(value, (list, tuple)):
        return [encode_value(item) for item in value]
    if isinstance(value, dict):
        return {key: encode_value(item) for key, item in value.items() if item is not None}
    return value


def decode_int(value: Any) -> int:
    """Decode an int written by encode_value. Raises CacheError on anything else."""
    if isinstance(value, bool):
        raise CacheError(f"Expected integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.startswith(BIGINT_PREFIX):
        digits = value[len(BIGINT_PREFIX) :]
        try:
            return int(digits)
        except ValueError as e:
            raise CacheError(f"Malformed tagged integer: {value!r}") from e
    raise CacheError(f"Expected integer, got {value!r}")


def decode_int_list(value: Any) -> list[int]:
    """Decode a list of ints written by encode_value."""
    if not isinstance(value, list):
        raise CacheError(f"Expected list, got {type(value).__name__}")
    return [decode_int(item) for item in value]
