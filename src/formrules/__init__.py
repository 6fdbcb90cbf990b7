"""
formrules - chained field validation with accumulated, renderable errors.

Usage:
    from formrules import Validator

    Validator(form).required("email").email("email").is_valid()
"""

from formrules.core.models import MESSAGE_TEMPLATES, ValidationError, ValidationFailure
from formrules.core.rules import RuleConfigBuilder, RuleConfigLoader, RuleEngine, load_message_templates
from formrules.core.validators import Validator

__version__ = "0.1.0"

__all__ = [
    "MESSAGE_TEMPLATES",
    "RuleConfigBuilder",
    "RuleConfigLoader",
    "RuleEngine",
    "ValidationError",
    "ValidationFailure",
    "Validator",
    "load_message_templates",
]
