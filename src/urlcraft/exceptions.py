"""src/urlcraft/exceptions.py

Urlcraft Exceptions hierarchy.
"""

from typing import Sequence


class UrlcraftError(Exception):
    """Base exception for all Urlcraft errors."""


class InvalidInputError(UrlcraftError, TypeError):
    """
    Input could not be treated as a URL string.
    Raised by the parser for anything other than str or UTF-8 bytes.
    """


class ValidationError(UrlcraftError, ValueError):
    """
    A URL or query could not be built from its components.
    """


class QueryValidationError(ValidationError):
    """
    One or more query parameters hold values that cannot be encoded.
    """

    def __init__(self, keys: Sequence[str], message: str = ""):
        self.keys = tuple(keys)
        if not message:
            message = "Query parameters must be single atomic values."
        super().__init__(f"{message} Problems: {', '.join(self.keys)}")
