"""src/urlcraft/http/url.py

URL builder and parser for Urlcraft.

Parsing follows the generic syntax of RFC 3986: an outer split into
scheme, authority, path, query and fragment (appendix B), then an inner
split of the authority into userinfo, hostname and port (section 3.2).
Parsing never rejects a string; pieces that do not fit the grammar end
up wherever the captures put them.
"""

import logging
from typing import Any, Mapping, Optional, Tuple, Union

from urlcraft.exceptions import ValidationError
from urlcraft.http.query import Query, decode, encode
from urlcraft.utils.validators import check_string

__all__ = ["URL", "split_url", "split_authority", "parse", "build", "modify"]

logger = logging.getLogger("urlcraft.url")

_FIELDS = (
    "scheme",
    "hostname",
    "username",
    "password",
    "port",
    "path",
    "query",
    "fragment",
)


def _find_any(text: str, chars: str, start: int = 0) -> int:
    """Index of the first character in ``chars`` at or after start, else len."""
    for i in range(start, len(text)):
        if text[i] in chars:
            return i
    return len(text)


def split_url(
    text: str,
) -> Tuple[Optional[str], Optional[str], str, Optional[str], Optional[str]]:
    """
    Split a URL into scheme, authority, path, query and fragment.

    Equivalent to ``^(([^:/?#]+):)?(//([^/?#]*))?([^?#]*)(\\?([^#]*))?(#(.*))?``.
    Optional pieces whose delimiter is missing are None; a delimiter
    followed by nothing gives an empty string. The path is always a string.
    """
    pos = 0
    scheme = None
    end = _find_any(text, ":/?#")
    if 0 < end < len(text) and text[end] == ":":
        scheme = text[:end]
        pos = end + 1

    authority = None
    if text.startswith("//", pos):
        end = _find_any(text, "/?#", pos + 2)
        authority = text[pos + 2 : end]
        pos = end

    end = _find_any(text, "?#", pos)
    path = text[pos:end]
    pos = end

    query = None
    if pos < len(text) and text[pos] == "?":
        end = _find_any(text, "#", pos + 1)
        query = text[pos + 1 : end]
        pos = end

    fragment = None
    if pos < len(text) and text[pos] == "#":
        fragment = text[pos + 1 :]

    return scheme, authority, path, query, fragment


def split_authority(
    authority: str,
) -> Tuple[Optional[str], Optional[str], Optional[str]]:
    """
    Split an authority into userinfo, hostname and port.

    Equivalent to ``^(([^@]+)@)?([^:]+)?(:([^#]+))?``. Each piece needs at
    least one character, so ``host:`` has no port. Text after the last
    piece that matched is ignored.
    """
    pos = 0
    userinfo = None
    end = _find_any(authority, "@")
    if 0 < end < len(authority):
        userinfo = authority[:end]
        pos = end + 1

    hostname = None
    end = _find_any(authority, ":", pos)
    if end > pos:
        hostname = authority[pos:end]
        pos = end

    port = None
    if authority.startswith(":", pos):
        end = _find_any(authority, "#", pos + 1)
        if end > pos + 1:
            port = authority[pos + 1 : end]

    return userinfo, hostname, port


class URL:
    """
    Immutable URL split into its components.

    Every field except ``path`` may be None, which means the component is
    absent; an empty string means it is present but empty. Use
    ``replace()`` to get a copy with some fields changed.

    Attributes:
        scheme: Scheme without the trailing ``:``.
        hostname: Host part of the authority.
        username: User part of the userinfo.
        password: Password part of the userinfo. Requires a username.
        port: Port digits as text.
        path: Path, possibly empty.
        query: Ordered query parameters.
        fragment: Fragment without the leading ``#``.
    """

    __slots__ = _FIELDS

    scheme: Optional[str]
    hostname: Optional[str]
    username: Optional[str]
    password: Optional[str]
    port: Optional[str]
    path: str
    query: Optional[Mapping[str, Any]]
    fragment: Optional[str]

    # pylint: disable=too-many-arguments
    def __init__(
        self,
        scheme: Optional[str] = None,
        hostname: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        port: Optional[Union[str, int]] = None,
        path: Optional[str] = "",
        query: Optional[Mapping[str, Any]] = None,
        fragment: Optional[str] = None,
    ):
        if port is not None and not isinstance(port, str):
            port = str(port)
        # Snapshot plain mappings so later changes by the caller don't leak in
        if isinstance(query, Mapping) and not isinstance(query, Query):
            query = Query(query)

        object.__setattr__(self, "scheme", scheme)
        object.__setattr__(self, "hostname", hostname)
        object.__setattr__(self, "username", username)
        object.__setattr__(self, "password", password)
        object.__setattr__(self, "port", port)
        object.__setattr__(self, "path", path or "")
        object.__setattr__(self, "query", query)
        object.__setattr__(self, "fragment", fragment)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"URL is immutable; use replace({name}=...)")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"URL is immutable; use replace({name}=None)")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, URL):
            return NotImplemented
        return all(getattr(self, f) == getattr(other, f) for f in _FIELDS)

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return build(self)

    def __repr__(self) -> str:
        try:
            return f"URL({build(self)!r})"
        except ValidationError:
            fields = ", ".join(
                f"{f}={getattr(self, f)!r}"
                for f in _FIELDS
                if getattr(self, f) is not None
            )
            return f"URL({fields})"

    def replace(self, **fields: Any) -> "URL":
        """
        Return a copy with some fields replaced.

        Args:
            **fields: Field names mapped to new values; None clears a field.

        Raises:
            TypeError: If a name is not a URL field.
        """
        for name in fields:
            if name not in _FIELDS:
                raise TypeError(
                    f"replace() got an unexpected keyword argument {name!r}"
                )
        values = {f: getattr(self, f) for f in _FIELDS}
        values.update(fields)
        return URL(**values)

    def build(self) -> str:
        """Build the URL string. See ``build()``."""
        return build(self)

    def describe(self) -> str:
        """
        Render the URL and its present fields as text for diagnostics.

        Returns:
            A header line followed by one bullet per present field.
        """
        lines = [f"<URL> {build(self)}"]
        for name in _FIELDS:
            value = getattr(self, name)
            if value is None:
                continue
            if name == "query":
                lines.append("- query:")
                pairs = (
                    value.multi_items()
                    if isinstance(value, Query)
                    else list(value.items())
                )
                lines.extend(f"  - {key}: {val}" for key, val in pairs)
            else:
                lines.append(f"- {name}: {value}")
        return "\n".join(lines)


def parse(url: Union[str, bytes]) -> URL:
    """
    Parse a string into a URL.

    Malformed URLs are not rejected; they are split as far as the grammar
    allows.

    Args:
        url: URL text, or UTF-8 encoded bytes.

    Returns:
        The parsed URL.

    Raises:
        InvalidInputError: If url is not a string.

    Example::

        >>> url = parse("http://username@google.com:80/path;test?a=1&b=2#40")
        >>> url.username, url.password, url.port, url.fragment
        ('username', None, '80', '40')
    """
    text = check_string(url, "url")

    scheme, authority, path, query, fragment = split_url(text)
    userinfo, hostname, port = split_authority(authority or "")

    username = password = None
    if userinfo is not None:
        username, sep, rest = userinfo.partition(":")
        if sep:
            password = rest

    result = URL(
        scheme=scheme,
        hostname=hostname,
        username=username,
        password=password,
        port=port,
        path=path,
        query=decode(query) if query is not None else None,
        fragment=fragment,
    )
    logger.debug(
        "Parsed URL: scheme=%r hostname=%r port=%r path=%r",
        scheme,
        hostname,
        port,
        path,
    )
    return result


def build(url: URL) -> str:
    """
    Build a string from a URL.

    ``//`` is written whenever there is a scheme or an authority, so a
    scheme without a host still produces ``scheme://``.

    Raises:
        ValidationError: If a password is set without a username, or the
            query cannot be encoded.
    """
    query = encode(url.query) if url.query is not None else None

    if url.username is None and url.password is not None:
        raise ValidationError("Cannot set url password without username")

    user_pass = None
    if url.username is not None:
        user_pass = url.username
        if url.password is not None:
            user_pass += ":" + url.password
        user_pass += "@"

    authority = None
    if user_pass is not None or url.hostname is not None or url.port is not None:
        authority = (user_pass or "") + (url.hostname or "")
        if url.port is not None:
            authority += ":" + url.port

    parts = []
    if url.scheme is not None:
        parts.append(url.scheme + ":")
    if url.scheme is not None or authority is not None:
        parts.append("//")
    if authority is not None:
        parts.append(authority)
    parts.append(url.path)
    if query is not None:
        parts.append("?" + query)
    if url.fragment is not None:
        parts.append("#" + url.fragment)

    logger.debug("Built URL: scheme=%r hostname=%r", url.scheme, url.hostname)
    return "".join(parts)


def modify(url: Union[str, bytes], **overrides: Any) -> str:
    """
    Parse a URL, replace some fields and build it again.

    Args:
        url: URL text.
        **overrides: Field names mapped to new values; None clears a field.

    Returns:
        The rebuilt URL string.

    Example::

        >>> modify("http://google.com/", hostname="example.com", port=80)
        'http://example.com:80/'
    """
    return parse(url).replace(**overrides).build()
