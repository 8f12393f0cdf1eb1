"""Tests for memorybridge.core.discover."""

import os
from pathlib import Path

import pytest

from memorybridge.core.discover import classify_local_state, discover_mappings
from memorybridge.exceptions import SourceNotFoundError
from memorybridge.models.core import LinkState, PrefixMap

PREFIX_MAP = PrefixMap.from_paths("/home/user", "/mnt/x/home/user")


def _by_name(mappings):
    return {m.source_name: m for m in mappings}


def test_missing_source_dir_raises(tmp_path: Path, projects_dir: Path) -> None:
    with pytest.raises(SourceNotFoundError) as exc:
        discover_mappings(tmp_path / "nope", PREFIX_MAP, projects_dir)
    assert isinstance(exc.value, FileNotFoundError)
    assert "does not exist" in str(exc.value)


def test_source_that_is_a_file_raises(tmp_path: Path, projects_dir: Path) -> None:
    source = tmp_path / "file"
    source.write_text("x")
    with pytest.raises(SourceNotFoundError):
        discover_mappings(source, PREFIX_MAP, projects_dir)


def test_discovers_and_rewrites_names(remote_projects: Path, projects_dir: Path) -> None:
    mappings = sorted(
        discover_mappings(remote_projects, PREFIX_MAP, projects_dir),
        key=lambda m: m.source_name,
    )

    assert [m.source_name for m in mappings] == ["-home-user-app", "-home-user-lib"]
    assert [m.local_name for m in mappings] == [
        "-mnt-x-home-user-app",
        "-mnt-x-home-user-lib",
    ]
    app = mappings[0]
    assert app.source_path == remote_projects / "-home-user-app"
    assert app.local_path == projects_dir / "-mnt-x-home-user-app"
    assert all(m.state == LinkState.MISSING for m in mappings)


def test_filters_non_matching_and_plain_files(
    remote_projects: Path, projects_dir: Path, tmp_path: Path
) -> None:
    (remote_projects / "-home-other-app").mkdir()
    (remote_projects / "-home-user-notes.txt").write_text("file, not a project")
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    (remote_projects / "-home-user-linked").symlink_to(elsewhere)

    names = set(_by_name(discover_mappings(remote_projects, PREFIX_MAP, projects_dir)))

    assert names == {"-home-user-app", "-home-user-lib", "-home-user-linked"}


def test_classifies_every_local_state(
    remote_projects: Path, projects_dir: Path, tmp_path: Path
) -> None:
    for name in ("-home-user-a", "-home-user-b", "-home-user-c", "-home-user-d"):
        (remote_projects / name).mkdir()
    projects_dir.mkdir(parents=True)
    other = tmp_path / "other"
    other.mkdir()

    (projects_dir / "-mnt-x-home-user-a").symlink_to(remote_projects / "-home-user-a")
    (projects_dir / "-mnt-x-home-user-b").symlink_to(other)
    (projects_dir / "-mnt-x-home-user-c").mkdir()
    (projects_dir / "-mnt-x-home-user-d").symlink_to(tmp_path / "gone")

    mappings = _by_name(discover_mappings(remote_projects, PREFIX_MAP, projects_dir))

    assert mappings["-home-user-a"].state == LinkState.LINK_CORRECT
    assert mappings["-home-user-b"].state == LinkState.LINK_WRONG
    assert mappings["-home-user-c"].state == LinkState.DIRECTORY_EXISTS
    assert mappings["-home-user-d"].state == LinkState.LINK_WRONG
    assert mappings["-home-user-app"].state == LinkState.MISSING


def test_relative_link_to_source_is_correct(
    remote_projects: Path, projects_dir: Path
) -> None:
    projects_dir.mkdir(parents=True)
    source = remote_projects / "-home-user-app"
    link = projects_dir / "-mnt-x-home-user-app"
    link.symlink_to(os.path.relpath(source, projects_dir))

    assert classify_local_state(link, source) == LinkState.LINK_CORRECT


def test_plain_file_counts_as_local_data(tmp_path: Path) -> None:
    local = tmp_path / "local"
    local.write_text("data")
    assert classify_local_state(local, tmp_path / "src") == LinkState.DIRECTORY_EXISTS


def test_inspection_error_falls_back_to_missing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    local = tmp_path / "local"
    local.symlink_to(tmp_path)

    def deny(self: Path) -> bool:
        raise PermissionError("denied")

    monkeypatch.setattr(Path, "is_symlink", deny)

    assert classify_local_state(local, tmp_path) == LinkState.MISSING


def test_rediscovery_reflects_filesystem_changes(
    remote_projects: Path, projects_dir: Path
) -> None:
    first = _by_name(discover_mappings(remote_projects, PREFIX_MAP, projects_dir))
    assert first["-home-user-app"].state == LinkState.MISSING

    projects_dir.mkdir(parents=True)
    (projects_dir / "-mnt-x-home-user-app").symlink_to(remote_projects / "-home-user-app")

    second = _by_name(discover_mappings(remote_projects, PREFIX_MAP, projects_dir))
    assert second["-home-user-app"].state == LinkState.LINK_CORRECT
    assert first["-home-user-app"].state == LinkState.MISSING


def test_encoded_remote_prefix_with_hyphenated_segment(
    tmp_path: Path, projects_dir: Path
) -> None:
    remote = tmp_path / "remote"
    (remote / "-home-jane-doe-app").mkdir(parents=True)
    prefix_map = PrefixMap.from_encoded_remote("-home-jane-doe", "/mnt/x/home/jane-doe")

    (mapping,) = discover_mappings(remote, prefix_map, projects_dir)

    assert mapping.local_name == "-mnt-x-home-jane-doe-app"
