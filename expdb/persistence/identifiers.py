"""
Identifier Sanitizer

Table names cannot be bound as query parameters, so they are interpolated
into SQL text. This module is the only gate they pass through: a strict
allow-list of ASCII letters, digits, underscore and hyphen.
"""

import re
from typing import Any

from .errors import InvalidIdentifierError

_IDENTIFIER_RE = re.compile(r"[A-Za-z0-9_-]+")


def is_valid_identifier(name: Any) -> bool:
    """Check whether ``name`` may be interpolated as a table name.

    Examples:
        >>> is_valid_identifier("results-1-5")
        True
        >>> is_valid_identifier("drop;table")
        False
    """
    return isinstance(name, str) and _IDENTIFIER_RE.fullmatch(name) is not None


def validate_identifier(name: Any) -> str:
    """Validate a table name before it is placed in SQL text.

    Args:
        name: Candidate table name

    Returns:
        The name, unchanged

    Raises:
        InvalidIdentifierError: If the name is empty, not a string, or has
            characters outside ``[A-Za-z0-9_-]``

    Examples:
        >>> validate_identifier("results-1-5")
        'results-1-5'
        >>> validate_identifier("bad name!")
        Traceback (most recent call last):
            ...
        expdb.persistence.errors.InvalidIdentifierError: Invalid table name: 'bad name!'
    """
    if not is_valid_identifier(name):
        raise InvalidIdentifierError(name)
    return name


def quote_identifier(name: Any) -> str:
    """Validate a table name and wrap it in double quotes.

    Hyphenated result-table names need quoting to parse as identifiers.

    Examples:
        >>> quote_identifier("results-1-5")
        '"results-1-5"'
    """
    return f'"{validate_identifier(name)}"'
