import json
from pathlib import Path

import pytest

from memorybridge.models.core import LinkResult, LinkState, Mapping
from memorybridge.utils.json import PathEncoder, dumps


def test_path_encoder_handles_paths_and_enums():
    encoded = json.dumps(
        {"path": Path("/a/b"), "state": LinkState.LINK_WRONG}, cls=PathEncoder
    )
    assert json.loads(encoded) == {"path": "/a/b", "state": "symlink-wrong"}


def test_path_encoder_rejects_unknown_types():
    with pytest.raises(TypeError):
        json.dumps({"x": object()}, cls=PathEncoder)


def test_dumps_model_output():
    mapping = Mapping(
        source_name="-home-user-app",
        source_path=Path("/mnt/x/projects/-home-user-app"),
        local_name="-mnt-x-home-user-app",
        local_path=Path("/home/me/.claude/projects/-mnt-x-home-user-app"),
    )

    data = json.loads(dumps([mapping.model_dump(), LinkResult(created=1).model_dump()]))

    assert data[0]["source_path"] == "/mnt/x/projects/-home-user-app"
    assert data[0]["state"] == "missing"
    assert data[1]["created"] == 1
