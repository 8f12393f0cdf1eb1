"""Shared fixtures for memorybridge tests."""

from pathlib import Path
from typing import Iterable

import pytest

from memorybridge.utils import config as cfg

_ENV_VARS = (
    "MEMORYBRIDGE_BRIDGE_SOURCE",
    "MEMORYBRIDGE_BRIDGE_MAP",
    "MEMORYBRIDGE_BRIDGE_ENCODED_REMOTE",
    "MEMORYBRIDGE_PATHS_PROJECTS_DIR",
    "MEMORYBRIDGE_NO_RICH",
    "MEMORYBRIDGE_DEBUG",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config file and home directory into the test's tmp dir."""
    config_dir = tmp_path / "config" / "memorybridge"
    monkeypatch.setattr(cfg, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(cfg, "CONFIG_FILE", config_dir / "config.toml")
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    # Wide console so rich never wraps long tmp paths in CLI output.
    monkeypatch.setenv("COLUMNS", "1000")
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return config_dir


def make_projects(root: Path, names: Iterable[str]) -> Path:
    """Create *root* with one project directory per name."""
    root.mkdir(parents=True, exist_ok=True)
    for name in names:
        (root / name).mkdir()
        (root / name / "memory.jsonl").write_text(name)
    return root


@pytest.fixture()
def remote_projects(tmp_path: Path) -> Path:
    """Remote projects directory with two projects under /home/user."""
    return make_projects(
        tmp_path / "mnt" / "x" / "home" / "user" / ".claude" / "projects",
        ["-home-user-app", "-home-user-lib"],
    )


@pytest.fixture()
def projects_dir(tmp_path: Path) -> Path:
    """Local projects directory (not created)."""
    return tmp_path / "home" / ".claude" / "projects"
