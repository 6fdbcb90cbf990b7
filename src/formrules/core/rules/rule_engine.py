"""
Rule engine for applying configured validation rules to field mappings.

The rule engine turns rule configurations into calls on a Validator,
one fresh Validator per record.
"""

import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from formrules.core.models import ValidationRule
from formrules.core.validators import Validator
from formrules.observability.logger import get_logger, log_operation

logger = get_logger(__name__)

# Parameters each rule accepts, passed to the Validator method by keyword
RULE_PARAMETERS: dict[str, frozenset[str]] = {
    "required": frozenset(),
    "not_empty": frozenset(),
    "length": frozenset({"min", "max"}),
    "date_time": frozenset({"format"}),
    "slug": frozenset(),
    "phone": frozenset(),
    "email": frozenset(),
    "number": frozenset(),
    "enum": frozenset({"values"}),
    "between": frozenset({"min", "max"}),
    "match": frozenset({"pattern"}),
}

REQUIRED_PARAMETERS: dict[str, frozenset[str]] = {
    "enum": frozenset({"values"}),
    "match": frozenset({"pattern"}),
}


def _check_parameter(name: str, value: Any) -> str | None:
    """Return a description of the expected type when a parameter value is invalid."""
    if name in ("min", "max"):
        if value is not None and (isinstance(value, bool) or not isinstance(value, int | float)):
            return "a number"
    elif name == "values":
        if not isinstance(value, list | tuple):
            return "a list"
    elif name == "format":
        if not isinstance(value, str):
            return "a string"
    elif name == "pattern":
        if not isinstance(value, str | re.Pattern):
            return "a string"
    return None


class RuleEngine:
    """
    Applies validation rules to field mappings.

    Rules are applied in configuration order, so the resulting error
    order matches the order rules were declared.
    """

    def __init__(self, rules: list[dict[str, Any]], templates: Mapping[str, str] | None = None):
        """
        Initialize the rule engine with validation rules.

        Args:
            rules: List of rule configurations, each containing:
                   - rule_name: str
                   - rule_type: str (a Validator rule method name)
                   - field_name: str
                   - parameters: Dict[str, Any] (optional)
                   - enabled: bool (default True)
            templates: Optional message templates for created validators

        Raises:
            ValueError: If a rule is unknown or its parameters are invalid
        """
        self.rules = rules
        self.templates = templates
        self.validation_rules: list[ValidationRule] = []
        self._build_rules()

    def _build_rules(self) -> None:
        """Build rule models from rule configurations."""
        for rule in self.rules:
            if not rule.get("enabled", True):
                continue

            rule_name = rule.get("rule_name", "<unnamed>")
            rule_type = rule.get("rule_type")
            if rule_type not in RULE_PARAMETERS:
                raise ValueError(f"Unknown rule type: {rule_type}")

            try:
                validation_rule = ValidationRule(**rule)
            except PydanticValidationError as e:
                raise ValueError(f"Invalid configuration for rule '{rule_name}': {e}") from e

            parameters = validation_rule.parameters or {}
            unknown = set(parameters) - RULE_PARAMETERS[rule_type]
            if unknown:
                raise ValueError(
                    f"Rule '{rule_name}' got unexpected parameters: {', '.join(sorted(unknown))}"
                )
            missing = REQUIRED_PARAMETERS.get(rule_type, frozenset()) - set(parameters)
            if missing:
                raise ValueError(
                    f"Rule '{rule_name}' is missing parameters: {', '.join(sorted(missing))}"
                )
            for name, value in parameters.items():
                expected = _check_parameter(name, value)
                if expected:
                    raise ValueError(
                        f"Parameter '{name}' of rule '{rule_name}' must be {expected}, got {value!r}"
                    )

            self.validation_rules.append(validation_rule)

        logger.debug(
            f"Loaded {len(self.validation_rules)} validation rules",
            extra={"total_rules": len(self.validation_rules)},
        )

    def validate(self, data: Mapping[str, Any]) -> Validator:
        """
        Validate one field mapping against all rules.

        Args:
            data: Field names mapped to raw values

        Returns:
            The Validator holding the accumulated errors
        """
        validator = Validator(data, templates=self.templates)
        for rule in self.validation_rules:
            method = getattr(validator, rule.rule_type)
            method(rule.field_name, **(rule.parameters or {}))
        return validator

    def validate_batch(self, records: list[Mapping[str, Any]]) -> list[Validator]:
        """
        Validate a batch of field mappings.

        Args:
            records: List of field mappings

        Returns:
            List of Validators, one per record
        """
        with log_operation("Validating batch", logger=logger, record_count=len(records)):
            return [self.validate(record) for record in records]

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of loaded rules.

        Returns:
            Dictionary with rule counts and types
        """
        counts: dict[str, int] = {}
        for rule in self.validation_rules:
            counts[rule.rule_type] = counts.get(rule.rule_type, 0) + 1
        return {
            "total_rules": len(self.validation_rules),
            "rules_by_type": counts,
        }
