"""
MockingBird Common Utilities

Typed readers for parsed JSON documents.

The manifest is parsed with the standard ``json`` module into plain Python
values. These helpers read a single field with an expected shape and return
either a value of that shape or ``None`` when the field is absent or has a
different type.
"""

from numbers import Real
from typing import Any, Dict, Optional


def get_object(document: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
    """
    Read a JSON object field.

    Args:
        document: Parsed JSON object
        key: Field name

    Returns:
        The nested dict, or None if absent or not an object
    """
    value = document.get(key)
    return value if isinstance(value, dict) else None


def get_string(document: Dict[str, Any], key: str) -> Optional[str]:
    """Read a JSON string field, or None if absent or not a string."""
    value = document.get(key)
    return value if isinstance(value, str) else None


def get_number(document: Dict[str, Any], key: str) -> Optional[float]:
    """
    Read a JSON number field.

    ``true``/``false`` are not numbers even though Python treats ``bool``
    as a subclass of ``int``.

    Args:
        document: Parsed JSON object
        key: Field name

    Returns:
        The number, or None if absent or not a number
    """
    value = document.get(key)
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    return value


def is_null(document: Dict[str, Any], key: str) -> bool:
    """True if the field is present with an explicit JSON ``null``."""
    return key in document and document[key] is None


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    """
    Parse a boolean flag from a string such as an environment variable.

    Args:
        value: Raw string (``1``, ``true``, ``yes``, ``on`` are truthy)
        default: Returned when value is None or empty

    Returns:
        Parsed boolean
    """
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')
