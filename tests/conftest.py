"""
Pytest configuration and fixtures for datavalidation tests

This module provides shared fixtures for unit and integration tests.
"""
from pathlib import Path
from typing import Callable

import pytest
from hypothesis import HealthCheck, settings

from datavalidation.core.engine import RuleSetRegistry, ValidationEngine
from datavalidation.core.rules import RuleSetCache, RuleSetLoader


# =======================
# PYTEST CONFIGURATION
# =======================

# Cold-start imports and rule loading make the first examples slow
settings.register_profile("default", suppress_health_check=[HealthCheck.too_slow], deadline=None)
settings.load_profile("default")

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that only touch tmp_path"
    )
    config.addinivalue_line(
        "markers", "integration: Tests against bundled rule documents and the CLI"
    )


# =======================
# RULE DOCUMENT FIXTURES
# =======================

USER_RULES_YAML = """\
rules:
  - field: "username"
    type: "notBlank"
    message: "bad user"
  - field: "username"
    type: "pattern"
    pattern: "^[a-zA-Z0-9_]+$"
    message: "bad format"
  - field: "password"
    type: "size"
    min: 8
    max: 100
    message: "too short"
  - field: "password"
    type: "pattern"
    pattern: ".*[A-Z].*"
    message: "needs upper"
  - field: "password"
    type: "pattern"
    pattern: ".*[0-9].*"
    message: "needs digit"
"""

ADDRESS_RULES_JSON = """\
{
  "rules": [
    {"field": "address.zipCode", "type": "pattern", "pattern": "\\\\d{5}", "message": "bad zip"},
    {"field": "address.zipCode", "type": "notNull", "message": "required"}
  ]
}
"""


@pytest.fixture
def rules_dir(tmp_path) -> Path:
    """
    Directory holding a YAML and a JSON rule document

    Returns:
        Path to the directory
    """
    directory = tmp_path / "rules"
    directory.mkdir()
    (directory / "user.yml").write_text(USER_RULES_YAML, encoding="utf-8")
    (directory / "address.json").write_text(ADDRESS_RULES_JSON, encoding="utf-8")
    return directory


@pytest.fixture
def write_rules(rules_dir) -> Callable[[str, str], Path]:
    """
    Write a rule document into rules_dir

    Returns:
        Function taking (name, content) and returning the written path
    """
    def _write(name: str, content: str) -> Path:
        path = rules_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def loader(rules_dir) -> RuleSetLoader:
    """Loader reading rules_dir first, without a cache"""
    return RuleSetLoader(rules_location=f"file:{rules_dir}")


@pytest.fixture
def cached_loader(rules_dir) -> RuleSetLoader:
    """Loader reading rules_dir first, with a cache"""
    return RuleSetLoader(rules_location=f"file:{rules_dir}", cache=RuleSetCache())


@pytest.fixture
def registry() -> RuleSetRegistry:
    return RuleSetRegistry()


@pytest.fixture
def engine(loader, registry) -> ValidationEngine:
    """Engine over rules_dir"""
    return ValidationEngine(loader=loader, registry=registry)


@pytest.fixture
def bundled_engine() -> ValidationEngine:
    """Engine over the bundled rule documents only"""
    return ValidationEngine(loader=RuleSetLoader(cache=RuleSetCache()))
