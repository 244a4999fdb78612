"""
Shared pytest fixtures and configuration for fallback tests.

This module provides:
- Cache cleanup fixtures for test isolation (settings, companions, structlog)
- Sample record types in each supported flavour (dataclass, NamedTuple, pydantic)

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Generator, NamedTuple

import pytest
import structlog
from pydantic import BaseModel

# Ensure fallback package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fallback.derive import clear_companion_cache
from fallback.settings import clear_settings_cache


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark every test without an explicit marker as a unit test."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if "unit" not in markers:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_environment_fixture(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove FALLBACK_* variables so the host environment cannot leak in."""
    for key in list(os.environ):
        if key.startswith("FALLBACK_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def clean_caches_fixture() -> Generator[None, None, None]:
    """
    Clear settings and companion caches before and after each test.

    Companion names depend on settings, so both caches go together.
    """
    clear_settings_cache()
    clear_companion_cache()
    yield
    clear_settings_cache()
    clear_companion_cache()


@pytest.fixture(autouse=True)
def reset_structlog_fixture() -> Generator[None, None, None]:
    """Restore structlog defaults after tests that configure logging."""
    yield
    structlog.reset_defaults()


# =============================================================================
# Sample Records
# =============================================================================


@dataclass(frozen=True)
class Profile:
    name: str
    age: int
    tags: list


class Point(NamedTuple):
    x: int
    y: int


class ServerConfig(BaseModel):
    host: str = "localhost"
    port: int = 8000
    motd: str = ""


@pytest.fixture
def profile_type() -> type[Profile]:
    return Profile


@pytest.fixture
def point_type() -> type[Point]:
    return Point


@pytest.fixture
def server_config_type() -> type[ServerConfig]:
    return ServerConfig
