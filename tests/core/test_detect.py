"""Tests for mount discovery in memorybridge.core.detect."""

from pathlib import Path

from memorybridge.core.detect import check_candidate, scan_for_sources


def _claude_home(base: Path, names: list[str]) -> Path:
    projects = base / ".claude" / "projects"
    projects.mkdir(parents=True)
    for name in names:
        (projects / name).mkdir()
    return base


def test_check_candidate_finds_encoded_projects(tmp_path: Path) -> None:
    home = _claude_home(tmp_path / "wsl" / "home" / "user", ["-home-user-a", "-home-user-b"])
    (home / ".claude" / "projects" / "settings.json").write_text("{}")

    found = check_candidate(home)

    assert found is not None
    assert found.projects_path == home / ".claude" / "projects"
    assert found.local_home == home.resolve()
    assert found.project_count == 2


def test_check_candidate_rejects_empty_and_missing(tmp_path: Path) -> None:
    assert check_candidate(tmp_path / "nothing") is None
    empty = _claude_home(tmp_path / "empty", ["not-encoded"])
    assert check_candidate(empty) is None


def test_check_candidate_excludes_local_projects(tmp_path: Path) -> None:
    home = _claude_home(tmp_path / "home", ["-home-me-a"])
    assert check_candidate(home, exclude=home / ".claude" / "projects") is None


def test_scan_finds_sources_at_several_depths(tmp_path: Path) -> None:
    mnt = tmp_path / "mnt"
    _claude_home(mnt / "wsl2", ["-home-user-a"])
    _claude_home(mnt / "disk" / "home" / "user", ["-home-user-b", "-home-user-c"])
    _claude_home(mnt / "a" / "b" / "c" / "too-deep", ["-home-user-d"])

    sources = scan_for_sources([str(mnt)])

    assert [s.projects_path for s in sources] == [
        mnt / "disk" / "home" / "user" / ".claude" / "projects",
        mnt / "wsl2" / ".claude" / "projects",
    ]
    assert [s.project_count for s in sources] == [2, 1]


def test_scan_respects_max_depth(tmp_path: Path) -> None:
    mnt = tmp_path / "mnt"
    _claude_home(mnt / "disk" / "home" / "user", ["-home-user-b"])

    assert scan_for_sources([str(mnt)], max_depth=2) == []
    assert len(scan_for_sources([str(mnt)], max_depth=3)) == 1


def test_scan_skips_missing_roots_and_excluded(tmp_path: Path) -> None:
    mnt = tmp_path / "mnt"
    home = _claude_home(mnt / "me", ["-home-me-a"])

    sources = scan_for_sources(
        [str(tmp_path / "absent"), str(mnt)],
        exclude=home / ".claude" / "projects",
    )

    assert sources == []


def test_scan_does_not_follow_symlinked_dirs(tmp_path: Path) -> None:
    real = _claude_home(tmp_path / "real", ["-home-user-a"])
    mnt = tmp_path / "mnt"
    mnt.mkdir()
    (mnt / "alias").symlink_to(real)

    assert scan_for_sources([str(mnt)]) == []
