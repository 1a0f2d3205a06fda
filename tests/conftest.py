"""Shared pytest configuration and fixtures for all tests."""

import json
import os
import uuid
from pathlib import Path

import pytest

from docrepo.api.config.RepositoryConfig import RepositoryConfig
from docrepo.api.database.DatabaseConfig import DatabaseConfig


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests against the in-memory backend")
    config.addinivalue_line("markers", "integration: tests against a real MongoDB (DOCREPO_TEST_MONGO_URI)")


def pytest_collection_modifyitems(config, items):
    """Automatically apply markers based on test file location."""
    for item in items:
        path_str = str(item.fspath)
        if "/unit/" in path_str:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in path_str:
            item.add_marker(pytest.mark.integration)


# =============================================================================
# Configuration Helpers
# =============================================================================


def unique_prefix() -> str:
    """A database name of its own, so tests never share mongomock state."""
    return f"docrepo_test_{uuid.uuid4().hex[:12]}"


def minimal_config_dict(prefix: str | None = None) -> dict:
    """Minimal valid configuration dict using the mongomock backend and instant retries."""
    return {
        "database": {
            "type": "mongomock",
            "prefix": prefix or unique_prefix(),
            "data": {},
        },
        "retry": {
            "max_attempts": 3,
            "delay_secs": 0.0,
            "backoff_multiplier": 1.0,
        },
    }


def minimal_repository_config(**sections) -> RepositoryConfig:
    """Build a RepositoryConfig from the minimal dict, replacing whole sections."""
    return RepositoryConfig(**{**minimal_config_dict(), **sections})


def run_cmd(cmd_func, *args, **kwargs):
    """Execute a cmd function and return the result with progress_callback executed."""
    result = cmd_func(*args, **kwargs)
    list(result.progress_callback(result))
    return result


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(name="run_cmd")
def run_cmd_fixture():
    return run_cmd


@pytest.fixture
def make_repository_config():
    """Factory building a RepositoryConfig with some sections replaced."""
    return minimal_repository_config


@pytest.fixture
def database_config() -> DatabaseConfig:
    return DatabaseConfig(type="mongomock", prefix=unique_prefix(), data={})


@pytest.fixture
def repository_config() -> RepositoryConfig:
    return minimal_repository_config()


@pytest.fixture
def docrepo_home(tmp_path: Path, monkeypatch, repository_config: RepositoryConfig) -> Path:
    """Set up DOCREPO_HOME with a config file written from ``repository_config``.

    Returns:
        Path to the docrepo home directory (tmp_path)
    """
    monkeypatch.setenv("DOCREPO_HOME", str(tmp_path))
    (tmp_path / "config.json").write_text(json.dumps(repository_config.to_dict()))
    return tmp_path


@pytest.fixture
def mongo_uri() -> str:
    """URI of a real MongoDB; integration tests are skipped without one."""
    uri = os.environ.get("DOCREPO_TEST_MONGO_URI")
    if not uri:
        pytest.skip("DOCREPO_TEST_MONGO_URI is not set")
    return uri
