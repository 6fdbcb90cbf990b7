"""
Rule configuration management.

Loads validation rules and message templates from YAML files and provides
a builder for programmatic rule configurations.
"""

from pathlib import Path
from typing import Any

import yaml

from formrules.core.models import MESSAGE_TEMPLATES, ValidationError

# Params shaped like the ones each rule records, used to check templates
SAMPLE_PARAMS: dict[str, tuple[int | str, ...]] = {
    "minLength": (3,),
    "maxLength": (20,),
    "betweenLength": (3, 20),
    "min": (1,),
    "max": (10,),
    "between": (1, 10),
    "datetime": ("Y-m-d H:i:s",),
    "enum": ('["a","b"]',),
}


def _read_yaml(path: Path) -> Any:
    """
    Read a YAML file.

    Raises:
        ValueError: If the file is not valid YAML
    """
    with open(path, encoding="utf-8") as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e


def _check_template(rule: str, template: str) -> None:
    """
    Render a template with sample params for its rule.

    Raises:
        ValueError: If the placeholders do not fit the rule's params
    """
    error = ValidationError(field="field", rule=rule, params=SAMPLE_PARAMS.get(rule, ()))
    try:
        error.render({rule: template})
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"Template for rule '{rule}' does not fit its parameters: {e}"
        ) from e


class RuleConfigLoader:
    """
    Loads validation rules from YAML configuration files.

    Expected YAML format:
    ```yaml
    rules:
      username:
        - type: required
        - type: length
          params:
            min: 3
            max: 20

      role:
        - type: enum
          params:
            values: [admin, editor]
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")

    def load_rules(self) -> list[dict[str, Any]]:
        """
        Load and parse validation rules from YAML file.

        Returns:
            List of rule dictionaries suitable for RuleEngine

        Raises:
            ValueError: If YAML is invalid or missing required fields
        """
        config = _read_yaml(self.config_path)

        if not isinstance(config, dict) or "rules" not in config:
            raise ValueError("Configuration file must contain 'rules' section")

        field_rules = config["rules"]
        if not isinstance(field_rules, dict):
            raise ValueError("'rules' section must map field names to rule lists")

        rules = []
        for field_name, field_rule_list in field_rules.items():
            if not isinstance(field_rule_list, list):
                raise ValueError(f"Rules for field '{field_name}' must be a list")

            for idx, rule_def in enumerate(field_rule_list):
                rules.append(self._parse_rule(str(field_name), rule_def, idx))

        return rules

    def _parse_rule(self, field_name: str, rule_def: Any, idx: int) -> dict[str, Any]:
        """
        Parse a single rule definition.

        Args:
            field_name: The field this rule applies to
            rule_def: The rule definition from YAML
            idx: Index of this rule for the field (for naming)

        Returns:
            Parsed rule dictionary

        Raises:
            ValueError: If rule definition is invalid
        """
        # Bare strings are shorthand for a rule without parameters
        if isinstance(rule_def, str):
            rule_def = {"type": rule_def}

        if not isinstance(rule_def, dict) or "type" not in rule_def:
            raise ValueError(f"Rule for field '{field_name}' is missing 'type'")

        rule_type = rule_def["type"]
        rule_name = rule_def.get("name", f"{field_name}_{rule_type}_{idx}")
        parameters = rule_def.get("params", rule_def.get("parameters")) or {}
        if not isinstance(parameters, dict):
            raise ValueError(f"Parameters for rule '{rule_name}' must be a mapping")

        return {
            "rule_name": rule_name,
            "rule_type": rule_type,
            "field_name": field_name,
            "parameters": parameters,
            "enabled": rule_def.get("enabled", True),
        }


def load_message_templates(config_path: str | Path) -> dict[str, str]:
    """
    Load message template overrides from a YAML file.

    Expected YAML format:
    ```yaml
    messages:
      required: "Le champs %s est requis"
    ```

    Rules not listed keep their default template.

    Args:
        config_path: Path to the YAML file

    Returns:
        Complete template table with overrides applied

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is malformed or names an unknown rule
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Message configuration file not found: {config_path}")

    config = _read_yaml(path)

    if not isinstance(config, dict) or not isinstance(config.get("messages"), dict):
        raise ValueError("Message file must contain a 'messages' mapping")

    templates = dict(MESSAGE_TEMPLATES)
    for rule, template in config["messages"].items():
        if rule not in MESSAGE_TEMPLATES:
            raise ValueError(f"Unknown rule '{rule}' in message file")
        if not isinstance(template, str):
            raise ValueError(f"Template for rule '{rule}' must be a string")
        _check_template(rule, template)
        templates[rule] = template

    return templates


class RuleConfigBuilder:
    """
    Programmatically build rule configurations (for testing or dynamic rules).
    """

    def __init__(self):
        """Initialize empty rule configuration."""
        self.rules: list[dict[str, Any]] = []

    def _add(self, field_name: str, rule_type: str, **parameters: Any) -> "RuleConfigBuilder":
        self.rules.append({
            "rule_name": f"{field_name}_{rule_type}",
            "rule_type": rule_type,
            "field_name": field_name,
            "parameters": parameters,
            "enabled": True,
        })
        return self

    def add_required(self, *field_names: str) -> "RuleConfigBuilder":
        """Add a required rule for each field."""
        for field_name in field_names:
            self._add(field_name, "required")
        return self

    def add_not_empty(self, *field_names: str) -> "RuleConfigBuilder":
        """Add a not-empty rule for each field."""
        for field_name in field_names:
            self._add(field_name, "not_empty")
        return self

    def add_length(
        self,
        field_name: str,
        min_length: int | None = None,
        max_length: int | None = None,
    ) -> "RuleConfigBuilder":
        """Add a length rule."""
        return self._add(field_name, "length", min=min_length, max=max_length)

    def add_date_time(self, field_name: str, fmt: str | None = None) -> "RuleConfigBuilder":
        """Add a date-time format rule."""
        if fmt is None:
            return self._add(field_name, "date_time")
        return self._add(field_name, "date_time", format=fmt)

    def add_slug(self, field_name: str) -> "RuleConfigBuilder":
        """Add a slug rule."""
        return self._add(field_name, "slug")

    def add_phone(self, field_name: str) -> "RuleConfigBuilder":
        """Add a phone number rule."""
        return self._add(field_name, "phone")

    def add_email(self, field_name: str) -> "RuleConfigBuilder":
        """Add an email rule."""
        return self._add(field_name, "email")

    def add_number(self, *field_names: str) -> "RuleConfigBuilder":
        """Add a numeric rule for each field."""
        for field_name in field_names:
            self._add(field_name, "number")
        return self

    def add_enum(self, field_name: str, values: list[Any]) -> "RuleConfigBuilder":
        """Add an enumerated-set rule."""
        return self._add(field_name, "enum", values=list(values))

    def add_between(
        self,
        field_name: str,
        min_value: int | None = None,
        max_value: int | None = None,
    ) -> "RuleConfigBuilder":
        """Add a numeric range rule."""
        return self._add(field_name, "between", min=min_value, max=max_value)

    def add_match(self, field_name: str, pattern: str) -> "RuleConfigBuilder":
        """Add a regex rule."""
        return self._add(field_name, "match", pattern=pattern)

    def build(self) -> list[dict[str, Any]]:
        """Build and return the rule configuration."""
        return self.rules
