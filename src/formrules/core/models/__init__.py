"""
Core data models for field validation.

All models use Pydantic for runtime validation and immutability.
"""

from .validation_error import MESSAGE_TEMPLATES, RuleName, ValidationError, ValidationFailure
from .validation_rule import RuleType, ValidationRule

__all__ = [
    "MESSAGE_TEMPLATES",
    "RuleName",
    "RuleType",
    "ValidationError",
    "ValidationFailure",
    "ValidationRule",
]
