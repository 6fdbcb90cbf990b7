"""
ValidationError model representing one failed rule for one field.

Errors are immutable values rendered through a fixed rule-name to
message-template table.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

RuleName = Literal[
    "required",
    "notEmpty",
    "slug",
    "minLength",
    "maxLength",
    "betweenLength",
    "min",
    "max",
    "between",
    "datetime",
    "phone",
    "email",
    "number",
    "enum",
    "match",
]

# First placeholder is the field name, the rest follow the error params.
MESSAGE_TEMPLATES: Mapping[str, str] = MappingProxyType({
    "required": "The field %s is required",
    "notEmpty": "The field %s cannot be empty",
    "slug": "The field %s is not a valid slug",
    "minLength": "The field %s must contain more than %d characters",
    "maxLength": "The field %s must contain fewer than %d characters",
    "betweenLength": "The field %s must contain between %d and %d characters",
    "min": "The field %s must be greater than %d",
    "max": "The field %s must be less than %d",
    "between": "The field %s must be between %d and %d",
    "datetime": "The field %s must be a valid date in the format (%s)",
    "phone": "The field %s is not a valid phone number",
    "email": "The field %s is not a valid email",
    "number": "The field %s is not a valid number",
    "enum": "The field %s must be one of %s",
    "match": "The field %s is not valid",
})


class ValidationError(BaseModel):
    """
    A rule that failed for one field.

    Attributes:
        field: Name of the field that failed
        rule: Rule identifier, a key of MESSAGE_TEMPLATES
        params: Rule parameters in template placeholder order
    """

    model_config = ConfigDict(frozen=True)

    field: str
    rule: RuleName
    params: tuple[int | float | str, ...] = Field(default_factory=tuple)

    def render(self, templates: Mapping[str, str] | None = None) -> str:
        """
        Render the human-readable message for this error.

        Args:
            templates: Optional template table overriding MESSAGE_TEMPLATES

        Returns:
            The formatted message
        """
        table = MESSAGE_TEMPLATES if templates is None else templates
        template = table.get(self.rule)
        if template is None:
            return f"{self.field}: {self.rule}"
        return template % (self.field, *self.params)

    def to_dict(self, templates: Mapping[str, str] | None = None) -> dict[str, Any]:
        """Serialize to a JSON-friendly dict including the rendered message."""
        return {
            "field": self.field,
            "rule": self.rule,
            "params": list(self.params),
            "message": self.render(templates),
        }

    def __str__(self) -> str:
        return self.render()


class ValidationFailure(ValueError):
    """Raised by the terminal check when at least one rule failed."""

    def __init__(
        self,
        error: ValidationError,
        errors: tuple[ValidationError, ...] = (),
        templates: Mapping[str, str] | None = None,
    ):
        self.error = error
        self.errors = errors or (error,)
        self.templates = templates
        super().__init__(error.render(templates))
