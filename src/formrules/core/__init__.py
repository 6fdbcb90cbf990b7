"""Core validation: models, validators and rule configuration."""
