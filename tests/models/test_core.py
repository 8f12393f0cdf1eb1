"""Tests for memorybridge.models.core."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from memorybridge.exceptions import BridgeError, InvalidInputError
from memorybridge.models.core import (
    EntryKind,
    LinkState,
    Mapping,
    PrefixMap,
    StatusEntry,
    StatusReport,
)


def _mapping(state: LinkState = LinkState.MISSING, **overrides: object) -> Mapping:
    values: dict[str, object] = {
        "source_name": "-home-user-projects-myapp",
        "source_path": Path("/mnt/x/.claude/projects/-home-user-projects-myapp"),
        "local_name": "-mnt-x-home-user-projects-myapp",
        "local_path": Path("/home/me/.claude/projects/-mnt-x-home-user-projects-myapp"),
        "state": state,
    }
    values.update(overrides)
    return Mapping(**values)


def test_parse_mapping() -> None:
    prefix_map = PrefixMap.parse("/home/user=/mnt/wsl2/home/user")

    assert prefix_map.remote == "/home/user"
    assert prefix_map.local == "/mnt/wsl2/home/user"
    assert prefix_map.remote_encoded == "-home-user"
    assert prefix_map.local_encoded == "-mnt-wsl2-home-user"
    assert not prefix_map.remote_is_encoded
    assert prefix_map.spec == "/home/user=/mnt/wsl2/home/user"


def test_parse_splits_at_first_equals() -> None:
    prefix_map = PrefixMap.parse("/a=/b=c")
    assert prefix_map.remote == "/a"
    assert prefix_map.local == "/b=c"


@pytest.mark.parametrize("spec", ["/home/user", "=/mnt/x", "/home/user=", "="])
def test_parse_rejects_malformed(spec: str) -> None:
    with pytest.raises(InvalidInputError) as exc:
        PrefixMap.parse(spec)
    assert isinstance(exc.value, ValueError)
    assert isinstance(exc.value, BridgeError)


def test_parse_encoded_remote_keeps_hyphens() -> None:
    prefix_map = PrefixMap.parse("-home-jane-doe=/mnt/x/home/jane-doe", encoded_remote=True)

    assert prefix_map.remote_encoded == "-home-jane-doe"
    assert prefix_map.local_encoded == "-mnt-x-home-jane-doe"
    assert prefix_map.remote_is_encoded
    assert PrefixMap.parse(prefix_map.spec, encoded_remote=True) == prefix_map


def test_rewrite_matches_by_plain_prefix() -> None:
    prefix_map = PrefixMap.from_paths("/home/user", "/data")
    assert prefix_map.rewrite("-home-user-app") == "-data-app"
    # No segment boundary check: "-home-username" also starts with "-home-user".
    assert prefix_map.rewrite("-home-username") == "-dataname"


def test_mapping_properties() -> None:
    mapping = _mapping()
    assert mapping.label == "myapp"
    assert mapping.linkable
    assert not mapping.is_link

    assert _mapping(LinkState.LINK_WRONG).linkable
    assert _mapping(LinkState.LINK_WRONG).is_link
    assert not _mapping(LinkState.LINK_CORRECT).linkable
    assert _mapping(LinkState.LINK_CORRECT).is_link
    assert not _mapping(LinkState.DIRECTORY_EXISTS).linkable
    assert not _mapping(LinkState.DIRECTORY_EXISTS).is_link


def test_mapping_label_falls_back_to_name() -> None:
    assert _mapping(source_name="-home-user-").label == "-home-user-"


def test_mapping_requires_absolute_paths() -> None:
    with pytest.raises(ValidationError):
        _mapping(source_path=Path("relative/src"))
    with pytest.raises(ValidationError):
        _mapping(local_path=Path("relative/local"))


def test_state_values_are_stable() -> None:
    assert [s.value for s in LinkState] == [
        "missing",
        "symlink-correct",
        "symlink-wrong",
        "directory-exists",
    ]
    assert _mapping().model_dump(mode="json")["state"] == "missing"


def test_status_report_counts_broken() -> None:
    report = StatusReport(
        root=Path("/home/me/.claude/projects"),
        entries=[
            StatusEntry(name="-a", kind=EntryKind.SYMLINK, target="/x", healthy=True),
            StatusEntry(name="-b", kind=EntryKind.SYMLINK, target="/y", healthy=False),
            StatusEntry(name="-c", kind=EntryKind.DIRECTORY),
        ],
        symlinks=2,
        local_dirs=1,
    )
    assert report.broken == 1
    assert report.exists
