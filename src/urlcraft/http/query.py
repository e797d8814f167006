"""src/urlcraft/http/query.py

Query string codec for Urlcraft.
"""

import logging
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Union,
)

from urlcraft.exceptions import QueryValidationError, ValidationError
from urlcraft.utils.serialization import escape, format_scalar, unescape
from urlcraft.utils.validators import check_string, is_empty, is_scalar, unwrap_scalar

__all__ = ["Encoded", "Query", "decode", "encode"]

logger = logging.getLogger("urlcraft.query")


class Encoded(str):
    """
    A query value that is already percent-encoded.

    ``encode()`` emits instances verbatim instead of escaping them, so the
    caller is responsible for the value being valid in a query string.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Encoded({str.__repr__(self)})"


class Query(Mapping[str, str]):
    """
    Immutable ordered query parameters.

    Keeps every ``(name, value)`` pair in arrival order, duplicates included.
    Mapping access returns the first value for a name; use ``get_all()`` or
    ``multi_items()`` to see repeated names.
    """

    __slots__ = ("_items", "_values")

    def __init__(
        self,
        items: Optional[Union[Mapping[str, str], Iterable[Tuple[str, str]]]] = None,
    ):
        if items is None:
            pairs: List[Tuple[str, str]] = []
        elif isinstance(items, Query):
            pairs = items.multi_items()
        elif isinstance(items, Mapping):
            pairs = list(items.items())
        else:
            pairs = [(name, value) for name, value in items]

        self._items: List[Tuple[str, str]] = pairs
        self._values: Dict[str, List[str]] = {}
        for name, value in pairs:
            self._values.setdefault(name, []).append(value)

    def __getitem__(self, key: str) -> str:
        """Get the first value for a name."""
        return self._values[key][0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Query):
            return self._items == other._items
        return super().__eq__(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        pairs = ", ".join(f"({k!r}, {v!r})" for k, v in self._items)
        return f"Query([{pairs}])"

    def get_all(self, key: str) -> List[str]:
        """
        Get all values for a name.

        Args:
            key: Parameter name.

        Returns:
            Values in arrival order, empty list if the name is missing.
        """
        return list(self._values.get(key, []))

    def multi_items(self) -> List[Tuple[str, str]]:
        """Return every pair in arrival order, duplicates included."""
        return list(self._items)


def decode(text: str) -> Optional[Query]:
    """
    Decode a raw query component.

    The string is split on ``&`` and each pair on its first ``=``. Names
    and values are stripped and percent-decoded separately; ``+`` is not
    treated as a space. A pair without ``=`` gets an empty value.

    Args:
        text: Query component, with or without the leading ``?``.

    Returns:
        Ordered Query, or None when there are no pairs.
    """
    text = check_string(text, "query")
    if text.startswith("?"):
        text = text[1:]

    pairs = []
    for segment in text.split("&"):
        if not segment.strip():
            continue
        name, _, value = segment.partition("=")
        pairs.append((unescape(name.strip()), unescape(value.strip())))

    if not pairs:
        return None
    return Query(pairs)


def encode(query: Any, *, safe: str = "") -> Optional[str]:
    """
    Encode a mapping into a query component.

    Values that are None or an empty list/tuple are dropped. A one-element
    list/tuple stands for its only item. ``Encoded`` values are written
    verbatim; every other name and value is percent-encoded.

    Args:
        query: Mapping of parameter name to scalar value.
        safe: Extra characters to leave unescaped.

    Returns:
        The query string without a leading ``?``, or None if nothing is left.

    Raises:
        ValidationError: If query is not a mapping or has non-string names.
        QueryValidationError: If any value is not a single finite scalar.
    """
    if isinstance(query, (list, tuple)) and not query:
        return None
    if not isinstance(query, Mapping):
        raise ValidationError(
            f"Query must be a mapping, not {type(query).__name__}"
        )

    items = query.multi_items() if isinstance(query, Query) else list(query.items())

    unnamed = [repr(name) for name, _ in items if not isinstance(name, str)]
    if unnamed:
        raise ValidationError(f"Query names must be strings: {', '.join(unnamed)}")

    kept = []
    for name, value in items:
        if is_empty(value):
            logger.debug("Dropping empty query parameter %r", name)
            continue
        kept.append((name, unwrap_scalar(value)))

    if not kept:
        return None

    bad = [name for name, value in kept if not is_scalar(value)]
    if bad:
        raise QueryValidationError(bad)

    parts = []
    for name, value in kept:
        if isinstance(value, Encoded):
            text = str(value)
        else:
            try:
                text = escape(format_scalar(value), safe)
            except ValueError as exc:
                raise QueryValidationError(
                    [name], "Query parameters must be finite numbers."
                ) from exc
        parts.append(f"{escape(name, safe)}={text}")

    return "&".join(parts)
