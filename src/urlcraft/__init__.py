"""src/urlcraft/__init__.py

Urlcraft - RFC 3986 URL parsing and building for Python.

Urlcraft splits URL strings into their components, lets you replace any of
them, and puts them back together. Query strings are decoded into ordered
parameters and encoded with strict percent-escaping.

Key Features:
    - Lenient parsing: any string yields a URL
    - Absent and empty components are kept apart
    - Immutable URL and query values
    - Pre-encoded query values via ``Encoded``
    - Full type hints (PEP 561)

Example:
    Parse and rebuild::

        from urlcraft import parse

        url = parse('http://google.com/')
        url = url.replace(port=80, hostname='example.com', query={'a': 1})
        print(url.build())  # http://example.com:80/?a=1

    One-shot changes::

        from urlcraft import modify

        modify('https://example.com/search?q=old', query={'q': 'new'})

    Query strings::

        from urlcraft import Encoded, decode, encode

        encode({'a': 1, 'b': Encoded('x%2Fy')})  # 'a=1&b=x%2Fy'
        decode('a=1&b=2')['b']  # '2'
"""

import logging

from urlcraft.exceptions import (
    InvalidInputError,
    QueryValidationError,
    UrlcraftError,
    ValidationError,
)
from urlcraft.http.query import Encoded, Query, decode, encode
from urlcraft.http.url import URL, build, modify, parse
from urlcraft.version import __version__

logging.getLogger("urlcraft").addHandler(logging.NullHandler())

__all__ = [
    "URL",
    "parse",
    "build",
    "modify",
    "Query",
    "Encoded",
    "decode",
    "encode",
    "UrlcraftError",
    "InvalidInputError",
    "ValidationError",
    "QueryValidationError",
    "__version__",
]
