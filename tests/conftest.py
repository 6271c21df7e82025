"""
Shared pytest fixtures for hash-joiner tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import copy as _copy
import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

# =============================================================================
# Isolation
# =============================================================================


@_pytest.fixture(autouse=True)
def isolated_config(
    tmp_path: _pathlib.Path,
    monkeypatch: _pytest.MonkeyPatch,
) -> _pathlib.Path:
    """
    Isolate every test from the user's config, env vars and .env files.

    Runs each test from an empty working directory (no project config or
    .env) with HASH_JOINER_CONFIG_DIR pointing at an empty directory.

    Returns:
        The isolated user config directory (not created).
    """
    for key in list(_os.environ):
        if key.startswith("HASH_JOINER_"):
            monkeypatch.delenv(key)

    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    config_dir = tmp_path / "user-config"
    monkeypatch.setenv("HASH_JOINER_CONFIG_DIR", str(config_dir))
    return config_dir


@_pytest.fixture(autouse=True)
def restore_root_logger() -> _typing.Iterator[None]:
    """Undo any logging configuration done by CLI invocations."""
    root = _logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# =============================================================================
# Sample data
# =============================================================================

TEAM_DATA: dict[str, _typing.Any] = {
    "name": "mbland",
    "full_name": "Mike Bland",
    "private": {
        "email": "michael.bland@gsa.gov",
        "location": "DCA",
    },
}


@_pytest.fixture
def team_data() -> dict[str, _typing.Any]:
    """A single team member record with nested private data."""
    return _copy.deepcopy(TEAM_DATA)


@_pytest.fixture
def team_collection() -> dict[str, _typing.Any]:
    """A collection mixing public and private members and fields."""
    return {
        "team": [
            {
                "name": "mbland",
                "full_name": "Mike Bland",
                "private": {"email": "mbland@example.com"},
            },
            {
                "private": [
                    {"name": "secret-agent", "full_name": "Secret Agent"},
                ],
            },
        ],
        "projects": {
            "hub": {"status": "active", "private": {"budget": 100}},
        },
    }


@_pytest.fixture
def write_file(tmp_path: _pathlib.Path) -> _typing.Callable[[str, str], _pathlib.Path]:
    """Return a helper that writes content to a file under tmp_path."""

    def _write(name: str, content: str) -> _pathlib.Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
