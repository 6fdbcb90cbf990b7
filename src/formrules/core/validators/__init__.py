"""
Field validation rules.

Provides the chaining Validator and the patterns its rules match against.
"""

from .patterns import DEFAULT_DATETIME_FORMAT, is_numeric, parse_datetime
from .validator import Validator

__all__ = [
    "DEFAULT_DATETIME_FORMAT",
    "Validator",
    "is_numeric",
    "parse_datetime",
]
