"""
Pytest configuration for Scout test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Common fixtures for temp directories and Go sources
- A fresh service manager per test
"""

import os
import shutil
import tempfile
from pathlib import Path

import pytest

from scout.logging_config import setup_logging


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Configure pytest for AI-friendly operation."""
    os.environ.setdefault("SCOUT_MACHINE_MODE", "1")


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True)


@pytest.fixture(autouse=True)
def reset_services():
    """Drop the cached ServiceManager so each test sees its own cwd."""
    from scout.mcp.service_manager import reset_service_manager

    reset_service_manager()
    yield
    reset_service_manager()


# ============================================================================
# GO SOURCES
# ============================================================================

SAMPLE_GO = '''// Package sample provides fixtures for scout tests.
package sample

import (
    "fmt"
    "strings"
)

// MaxItems limits the list size.
const MaxItems = 10

// Defaults for the server.
const (
    Host = "localhost" // listen host
    Port = 8080        // listen port
)

var (
    debug   bool
    verbose bool // extra output
)

// Config holds settings.
type Config struct {
    Name string
}

// NewConfig builds a Config.
func NewConfig(name string) *Config {
    return &Config{Name: strings.TrimSpace(name)}
}

// Validate checks the config.
func (c *Config) Validate() error {
    if c.Name == "" {
        return fmt.Errorf("empty name")
    }
    return nil
}

// String renders the config.
func (c Config) String() string {
    return c.Name
}

func Validate() bool {
    return true
}
'''


@pytest.fixture
def sample_source() -> bytes:
    return SAMPLE_GO.encode("utf-8")


# ============================================================================
# TEMPORARY DIRECTORY FIXTURES
# ============================================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory that's cleaned up after the test."""
    tmp = Path(tempfile.mkdtemp(prefix="scout_test_"))
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def go_project(temp_dir, monkeypatch):
    """
    Temporary Go project, used as the working directory.

    Layout:
        sample.go          documented except one func and one var group
        pkg/util.go        no README in pkg/
        docs/README.md     README only, no Go files
    """
    (temp_dir / "sample.go").write_text(SAMPLE_GO)

    (temp_dir / "pkg").mkdir()
    (temp_dir / "pkg" / "util.go").write_text(
        "// Package pkg holds helpers.\n"
        "package pkg\n"
        "\n"
        "// Double returns twice n.\n"
        "func Double(n int) int {\n"
        "    return n * 2\n"
        "}\n"
    )

    (temp_dir / "docs").mkdir()
    (temp_dir / "docs" / "README.md").write_text("# Docs\n")

    monkeypatch.chdir(temp_dir)
    yield temp_dir
