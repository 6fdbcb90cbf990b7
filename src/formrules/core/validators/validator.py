"""
Validator - applies chained field rules and accumulates errors.

Usage:
    validator = Validator(form)
    validator.required("name", "email").length("name", 3, 50).email("email")
    validator.is_valid()  # raises ValidationFailure with the first error
"""

import json
import re
from collections.abc import Mapping, Sequence
from re import Pattern
from types import MappingProxyType
from typing import Any

from formrules.core.models import ValidationError, ValidationFailure
from formrules.observability.logger import get_logger

from .patterns import (
    DEFAULT_DATETIME_FORMAT,
    EMAIL_PATTERN,
    PHONE_PATTERN,
    SLUG_PATTERN,
    is_numeric,
    parse_datetime,
    to_number,
    to_text,
)

logger = get_logger(__name__)


class Validator:
    """
    Validates a mapping of field names to raw values.

    Each rule method evaluates immediately, appends zero or more
    ValidationError entries and returns the validator for chaining.
    Rule methods never raise. Absent keys and None values both count
    as "no value".
    """

    def __init__(self, data: Mapping[str, Any], templates: Mapping[str, str] | None = None):
        """
        Initialize validator.

        Args:
            data: Field names mapped to raw values
            templates: Optional message templates overriding the defaults
        """
        self.data: Mapping[str, Any] = MappingProxyType(dict(data))
        self.templates = templates
        self._errors: list[ValidationError] = []

    def required(self, *keys: str) -> "Validator":
        """Flag each key whose value is absent or None."""
        for key in keys:
            if self._get_value(key) is None:
                self._add_error(key, "required")
        return self

    def not_empty(self, *keys: str) -> "Validator":
        """
        Flag each key whose value is absent, None or empty.

        Empty follows Python truthiness: "", 0, 0.0, False and empty
        collections. The string "0" is not empty.
        """
        for key in keys:
            value = self._get_value(key)
            if value is None or not value:
                self._add_error(key, "notEmpty")
        return self

    def length(self, key: str, min: int | None = None, max: int | None = None) -> "Validator":
        """
        Check the character length of a value.

        A missing value has length 0. Both bounds failing the combined
        range adds a betweenLength error on top of minLength/maxLength.
        """
        length = len(to_text(self._get_value(key)))
        if max is not None and length > max:
            self._add_error(key, "maxLength", max)

        if min is not None and length < min:
            self._add_error(key, "minLength", min)

        if min is not None and max is not None and (length < min or length > max):
            self._add_error(key, "betweenLength", min, max)
        return self

    def date_time(self, key: str, format: str = DEFAULT_DATETIME_FORMAT) -> "Validator":
        """Check that a value parses strictly against a "Y-m-d H:i:s" style format."""
        value = to_text(self._get_value(key))
        try:
            parse_datetime(value, format)
        except ValueError:
            self._add_error(key, "datetime", format)
        return self

    def slug(self, key: str) -> "Validator":
        """Check that a present value is a lowercase hyphenated slug."""
        value = self._get_value(key)
        if value is not None and not SLUG_PATTERN.fullmatch(to_text(value)):
            self._add_error(key, "slug")
        return self

    def phone(self, key: str) -> "Validator":
        """Check that a present value is four 2-digit groups with optional separators."""
        value = self._get_value(key)
        if value is not None and not PHONE_PATTERN.fullmatch(to_text(value)):
            self._add_error(key, "phone")
        return self

    def email(self, key: str) -> "Validator":
        """Check that a present value starts with an email address."""
        value = self._get_value(key)
        if value is not None and not EMAIL_PATTERN.match(to_text(value)):
            self._add_error(key, "email")
        return self

    def number(self, *keys: str) -> "Validator":
        """Flag each key whose value is not numeric, absent values included."""
        for key in keys:
            if not is_numeric(self._get_value(key)):
                self._add_error(key, "number")
        return self

    def enum(self, key: str, values: Sequence[Any]) -> "Validator":
        """
        Check that a value is one of the candidates.

        An empty candidate list disables the rule.
        Candidates that are not JSON-serializable are shown with str().
        """
        if values:
            if self._get_value(key) not in values:
                self._add_error(
                    key, "enum", json.dumps(list(values), separators=(",", ":"), default=str)
                )
        return self

    def between(self, key: str, min: int | None = None, max: int | None = None) -> "Validator":
        """
        Check that a numeric value lies within bounds.

        Always runs number() first. Range checks only apply to numeric
        values. The combined between error is skipped when max < min.
        """
        self.number(key)
        value = self._get_value(key)
        if not is_numeric(value):
            return self

        value = to_number(value)
        if max is not None and value > max:
            self._add_error(key, "max", max)

        if min is not None and value < min:
            self._add_error(key, "min", min)

        if (
            min is not None
            and max is not None
            and max >= min
            and (value < min or value > max)
        ):
            self._add_error(key, "between", min, max)
        return self

    def match(self, key: str, pattern: str | Pattern) -> "Validator":
        """
        Check that a present value contains a match for a regex pattern.

        An invalid pattern counts as a failed match.
        """
        value = self._get_value(key)
        if value is None:
            return self

        try:
            matched = re.search(pattern, to_text(value))
        except re.error as e:
            logger.warning(
                f"Invalid pattern for field '{key}': {e}",
                extra={"field": key, "rule": "match"},
            )
            matched = None

        if not matched:
            self._add_error(key, "match")
        return self

    @property
    def errors(self) -> list[ValidationError]:
        """Recorded errors in the order they were added."""
        return list(self._errors)

    def get_errors(self) -> list[ValidationError]:
        """
        Get all recorded errors.

        Returns:
            Ordered list of ValidationError, empty when every rule passed
        """
        return list(self._errors)

    def messages(self) -> list[str]:
        """Render every recorded error with this validator's templates."""
        return [error.render(self.templates) for error in self._errors]

    def is_valid(self) -> bool:
        """
        Terminal check.

        Only the first recorded error is reported; the full list travels
        on the raised exception and stays available through get_errors().

        Returns:
            True when no rule failed

        Raises:
            ValidationFailure: Carrying the first recorded error
        """
        if self._errors:
            logger.info(
                f"Validation failed with {len(self._errors)} error(s)",
                extra={"error_count": len(self._errors), "first_rule": self._errors[0].rule},
            )
            raise ValidationFailure(self._errors[0], tuple(self._errors), self.templates)
        return True

    def _add_error(self, key: str, rule: str, *params: int | float | str) -> None:
        error = ValidationError(field=key, rule=rule, params=params)
        logger.debug(
            f"Rule '{rule}' failed for field '{key}'",
            extra={"field": key, "rule": rule, "params": list(params)},
        )
        self._errors.append(error)

    def _get_value(self, key: str) -> Any:
        return self.data.get(key)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(fields={list(self.data)}, errors={len(self._errors)})"
