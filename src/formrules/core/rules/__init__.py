"""
Rule configuration and the engine that applies it.
"""

from .rule_config import RuleConfigBuilder, RuleConfigLoader, load_message_templates
from .rule_engine import RuleEngine

__all__ = [
    "RuleConfigBuilder",
    "RuleConfigLoader",
    "RuleEngine",
    "load_message_templates",
]
