#!/usr/bin/env python3
"""
Pytest configuration and shared fixtures for the ninja-compdb test suite.

This module provides pytest fixtures that can be used across all test modules.
"""

import os
import shutil
import tempfile
from pathlib import Path
import pytest

# Add the project root to the path
import sys
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from ninja_compdb import diagnostics

from tests.utils.test_helpers import (
    SAMPLE_NINJA_LOG,
    write_ninja_log,
    write_compile_commands,
)


# ============================================================================
# Function-scoped Fixtures (Created for each test function)
# ============================================================================

@pytest.fixture
def temp_dir():
    """
    Create a temporary directory for a single test.

    Yields:
        Path: Path to temporary directory

    Cleanup: Automatically removed after test completes
    """
    temp_path = tempfile.mkdtemp(prefix="test_")
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def ninja_log(temp_dir):
    """
    Write the sample ninja log (two clang lines, three other lines).

    Yields:
        Path: Path to build.ninja inside temp_dir
    """
    yield write_ninja_log(temp_dir / "build.ninja", SAMPLE_NINJA_LOG)


@pytest.fixture
def compile_commands_file(temp_dir):
    """
    Write a two-entry compile_commands.json (files a/b.c and x/y.c).

    Yields:
        Path: Path to the database file
    """
    entries = [
        {"directory": "/src", "arguments": ["clang", "-c", "a/b.c"], "file": "a/b.c"},
        {"directory": "/src", "arguments": ["clang", "-c", "x/y.c"], "file": "x/y.c"},
    ]
    yield write_compile_commands(temp_dir / "compile_commands.json", entries)


@pytest.fixture(autouse=True)
def fresh_diagnostics(monkeypatch):
    """Give every test a logger built from a clean environment."""
    monkeypatch.delenv("NINJA_COMPDB_DIAGNOSTIC_LEVEL", raising=False)
    diagnostics.reset_logger()
    yield
    diagnostics.reset_logger()


# ============================================================================
# Pytest Hooks and Configuration
# ============================================================================

def pytest_configure(config):
    """
    Pytest configuration hook.

    Registers custom markers.
    """
    config.addinivalue_line(
        "markers", "base_functionality: Tests for core extraction and filtering features"
    )
    config.addinivalue_line(
        "markers", "error_handling: Tests for fatal error reporting"
    )
    config.addinivalue_line(
        "markers", "edge_case: Boundary conditions and edge case tests"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take significant time to run"
    )
    config.addinivalue_line(
        "markers", "critical: P0 critical tests that must pass"
    )


def pytest_collection_modifyitems(config, items):
    """
    Pytest hook to modify test collection.

    Automatically marks tests based on their file path.
    """
    for item in items:
        test_file = str(item.fspath)

        if "/error_handling/" in test_file:
            item.add_marker(pytest.mark.error_handling)
        elif "/edge_cases/" in test_file:
            item.add_marker(pytest.mark.edge_case)
