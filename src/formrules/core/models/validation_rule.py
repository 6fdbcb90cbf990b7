"""
ValidationRule model representing one configured rule applied to a field.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

RuleType = Literal[
    "required",
    "not_empty",
    "length",
    "date_time",
    "slug",
    "phone",
    "email",
    "number",
    "enum",
    "between",
    "match",
]


class ValidationRule(BaseModel):
    """
    A configurable rule applied to incoming field data.

    Attributes:
        rule_name: Human-readable name ("username_length_1")
        rule_type: Name of the Validator method to call
        field_name: Which field this rule applies to
        parameters: Keyword arguments for the rule (e.g., {"min": 3, "max": 20})
        enabled: Whether rule is active
    """

    rule_name: str = Field(..., min_length=1)
    rule_type: RuleType
    field_name: str = Field(..., min_length=1)
    parameters: dict[str, Any] | None = None
    enabled: bool = True

    model_config = {
        "json_schema_extra": {
            "example": {
                "rule_name": "username_length_1",
                "rule_type": "length",
                "field_name": "username",
                "parameters": {"min": 3, "max": 20},
                "enabled": True,
            }
        }
    }
