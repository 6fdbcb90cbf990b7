"""
Pytest configuration and fixtures for formrules tests

This module provides shared fixtures for unit tests.
"""
from pathlib import Path

import pytest


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )


# =======================
# DATA FIXTURES
# =======================

@pytest.fixture
def signup_form() -> dict:
    """A sign-up form that passes every rule in rules_yaml"""
    return {
        "username": "jdoe",
        "email": "jdoe@example.com",
        "age": "34",
        "role": "editor",
        "slug": "john-doe",
        "phone": "06 12 34 56",
        "birthday": "1990-04-12 08:30:00",
    }


RULES_YAML = """
rules:
  username:
    - type: required
    - type: length
      params:
        min: 3
        max: 20
  email:
    - required
    - type: email
  age:
    - type: between
      params:
        min: 18
        max: 120
  role:
    - type: enum
      params:
        values: [admin, editor]
  slug:
    - type: slug
  phone:
    - type: phone
  birthday:
    - type: date_time
"""


@pytest.fixture
def rules_yaml(tmp_path: Path) -> Path:
    """Path to a YAML rule file covering the sign-up form"""
    path = tmp_path / "rules.yaml"
    path.write_text(RULES_YAML)
    return path
