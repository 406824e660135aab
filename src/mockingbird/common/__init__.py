"""
MockingBird Common Utilities

Shared utilities and helpers used across MockingBird modules.
"""

from .utils import get_object, get_string, get_number, is_null, parse_bool
from .url_utils import URLMatcher, QueryItems

__all__ = [
    'get_object',
    'get_string',
    'get_number',
    'is_null',
    'parse_bool',
    'URLMatcher',
    'QueryItems'
]
