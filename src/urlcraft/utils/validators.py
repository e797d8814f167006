"""utils/validators.py

Validation utilities for Urlcraft.
"""

from typing import Any

from urlcraft.exceptions import InvalidInputError

__all__ = ["check_string", "is_scalar", "is_empty", "unwrap_scalar"]

SCALAR_TYPES = (str, bool, int, float)


def check_string(value: Any, name: str = "url") -> str:
    """
    Ensure a value is a string-like scalar.

    Args:
        value: Candidate value.
        name: Argument name used in the error message.

    Returns:
        The value as str; bytes are decoded as UTF-8.

    Raises:
        InvalidInputError: If the value is neither str nor UTF-8 bytes.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidInputError(f"`{name}` must be valid UTF-8") from exc
    raise InvalidInputError(
        f"`{name}` must be a single string, not {type(value).__name__}"
    )


def is_scalar(value: Any) -> bool:
    """Check whether a value is a single atomic scalar."""
    return isinstance(value, SCALAR_TYPES)


def is_empty(value: Any) -> bool:
    """None and empty lists/tuples count as absent."""
    if value is None:
        return True
    return isinstance(value, (list, tuple)) and len(value) == 0


def unwrap_scalar(value: Any) -> Any:
    """
    Unwrap a one-element list or tuple into its only item.

    Anything else is returned unchanged so the caller can reject it.
    """
    if isinstance(value, (list, tuple)) and len(value) == 1:
        return value[0]
    return value
