"""Pytest configuration and shared fixtures for the mdcanon test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from mdcanon.ast import Document, TreeBuilder
from mdcanon.renderers.markdown import Canonicalizer

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
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def canonicalizer() -> Canonicalizer:
    """Provide a canonicalizer with default options."""
    return Canonicalizer()


@pytest.fixture
def render(canonicalizer):
    """Provide a helper that canonicalizes a tree and returns the output as str.

    Examples
    --------
        >>> def test_x(render):
        ...     b = TreeBuilder("a")
        ...     assert render(b, b.document(b.paragraph(b.text("a")))) == "a\\n"

    """

    def _render(builder: TreeBuilder, doc: Document) -> str:
        return canonicalizer.render_to_string(doc, builder.source)

    return _render
