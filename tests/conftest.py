"""Pytest configuration and shared fixtures for the mathedit test suite.

This module provides shared fixtures and test configuration used across the
entire test suite.
"""

import logging
import os

import pytest
from hypothesis import Phase, Verbosity, settings

from mathedit.ast import ArgumentSlot, ExpressionTree, Function, Leaf
from mathedit.controller import MathFieldEditingController

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


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by ``configure_logging`` during a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run a test from an empty directory with no config in scope.

    The home directory and ``MATHEDIT_CONFIG`` are redirected as well, so a
    developer's own configuration never leaks into the results.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    monkeypatch.delenv("MATHEDIT_CONFIG", raising=False)
    return tmp_path


@pytest.fixture
def frac() -> Function:
    r"""Provide an empty ``\frac`` with two brace slots."""
    return Function(r"\frac", [ArgumentSlot.BRACES, ArgumentSlot.BRACES])


@pytest.fixture
def settled_tree() -> ExpressionTree:
    """Provide ``x+2`` with the cursor set at the end."""
    tree = ExpressionTree([Leaf("x"), Leaf("+"), Leaf("2")])
    tree.set_cursor()
    return tree


@pytest.fixture
def controller() -> MathFieldEditingController:
    """Provide a controller with default options."""
    return MathFieldEditingController()
