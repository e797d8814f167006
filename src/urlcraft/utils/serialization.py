"""utils/serialization.py

Serialization utilities for Urlcraft (percent-encoding, scalar formatting).
"""

import math
import urllib.parse
from decimal import Decimal
from typing import Union

__all__ = ["escape", "unescape", "format_scalar"]


def escape(text: str, safe: str = "") -> str:
    """
    Percent-encode a string.

    Only RFC 3986 unreserved characters (``A-Z a-z 0-9 - . _ ~``) and the
    characters in ``safe`` are left as-is. Everything else is encoded as
    UTF-8 bytes with upper-case hex digits.
    """
    return urllib.parse.quote(text, safe=safe)


def unescape(text: str) -> str:
    """
    Decode ``%XX`` sequences.

    ``+`` is left alone. Byte sequences that are not valid UTF-8 are
    replaced with U+FFFD.
    """
    return urllib.parse.unquote(text, errors="replace")


def format_scalar(value: Union[str, bool, int, float]) -> str:
    """
    Format a scalar as query text.

    Booleans become ``true``/``false``. Floats are written in plain decimal
    notation, never scientific, and integral floats lose their ``.0``.

    Raises:
        ValueError: If a float is NaN or infinite.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)

    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite number {value!r}")
    if value.is_integer():
        return str(int(value))
    # repr() gives the shortest round-tripping digits
    return format(Decimal(repr(value)), "f")
