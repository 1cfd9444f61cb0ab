"""
Pytest configuration for the ifacemaker test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Isolation from the user's ifacemaker config files
- Temp directory and Go source fixtures
"""

import os
import shutil
import tempfile
from pathlib import Path

import pytest

from ifacemaker.cli.config import CLIConfig
from ifacemaker.logging_config import setup_logging
from ifacemaker.user_config import reset_user_config

TEST_FILES = Path(__file__).parent / "test_files"


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Configure pytest for quiet, deterministic runs."""
    os.environ.setdefault("IFACEMAKER_MACHINE_MODE", "1")
    os.environ.pop("IFACEMAKER_HUMAN_MODE", None)


# ============================================================================
# LOGGING AND CONFIG FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True)


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path_factory, monkeypatch):
    """Points the global config at an empty home directory."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    reset_user_config()
    CLIConfig.reset()
    yield home
    reset_user_config()
    CLIConfig.reset()


# ============================================================================
# TEMPORARY DIRECTORY FIXTURES
# ============================================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory that's cleaned up after the test."""
    tmp = Path(tempfile.mkdtemp(prefix="ifacemaker_test_"))
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def go_file(temp_dir):
    """
    Writes Go source to a file in the temp directory.

    Usage:
        def test_something(go_file):
            path = go_file("package main\\ntype A struct{}", name="a.go")
    """
    counter = {"n": 0}

    def _write(source: str, name: str = None) -> str:
        counter["n"] += 1
        path = temp_dir / (name or f"src_{counter['n']}.go")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def test_files():
    """Directory holding the Go source fixtures."""
    return TEST_FILES


@pytest.fixture
def turing_src():
    """Person/Turing source with aliased import, docs and unexported methods."""
    return (TEST_FILES / "turing.go").read_bytes()
