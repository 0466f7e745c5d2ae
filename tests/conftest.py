"""Pytest configuration and shared fixtures for the blackprint test suite.

This module provides shared fixtures, test configuration, and the test
dictionaries used across the markup tests.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from blackprint.markup import TagDictConfig, TagDictionary, default_tag_dictionary

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")
    config.addinivalue_line("markers", "security: Tests for sanitization and escaping of untrusted input")


@pytest.fixture
def dictionary() -> TagDictionary:
    """Provide the default dictionary with a few extra global classes and attributes."""
    return default_tag_dictionary.extend(
        [],
        TagDictConfig(
            global_allowed_classes=("class1", "class2", "class3"),
            global_allowed_attributes=("w", "h", "focus"),
        ),
    )


@pytest.fixture
def wildcard_dictionary() -> TagDictionary:
    """Provide a dictionary accepting every tag without sanitization."""
    return TagDictionary(
        [],
        TagDictConfig(unsafely_allow_any_tags=True, unsafely_skip_sanitization=True, regularize_target="p"),
    )


@pytest.fixture
def template_data() -> dict:
    """Provide the data set used by the expression tests."""
    return {
        "a": {"b": 3},
        "c": 5,
        "d": "hello",
        "e": [1, 2, 3, 0],
        "tr": True,
        "fa": False,
        "x": {"y": {"z": {"a": {"b": 10}}}},
    }
