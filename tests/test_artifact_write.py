from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

import orjson
import pytest

from artifacts.models import DependencyRecord
from artifacts.utils import ArtifactWriteError, _write_json
from artifacts.write import generate_all_artifacts
from graph.models import ArtifactIdentity
from graph.supplier import GraphBuildError
from rules.config import DepFlatConfig

FIXTURE_BUILD = Path(__file__).parent / "fixtures" / "mini_build"


def _copy_fixture(root: Path) -> Path:
    shutil.copytree(FIXTURE_BUILD, root)
    return root


def test_record_serializes_exact_fields_in_order() -> None:
    record = DependencyRecord.from_identity(ArtifactIdentity("com.acme", "core", "1.0"))

    assert list(record.model_dump(by_alias=True)) == ["groupId", "artifactId", "version"]


def test_write_json_pretty_prints_array(tmp_path: Path) -> None:
    path = tmp_path / "out" / "dependencies.json"
    records = [
        DependencyRecord.from_identity(ArtifactIdentity("com.acme", "core", "1.0")),
    ]

    _write_json(path, records)

    assert path.read_text(encoding="utf-8") == (
        "[\n"
        "  {\n"
        '    "groupId": "com.acme",\n'
        '    "artifactId": "core",\n'
        '    "version": "1.0"\n'
        "  }\n"
        "]"
    )
    assert [p.name for p in path.parent.iterdir()] == ["dependencies.json"]


def test_write_json_failure_leaves_previous_file_untouched(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "dependencies.json"
    path.write_text("previous", encoding="utf-8")

    def _fail_replace(src: object, dst: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", _fail_replace)

    with pytest.raises(ArtifactWriteError, match="disk full"):
        _write_json(path, [])

    assert path.read_text(encoding="utf-8") == "previous"
    assert [p.name for p in tmp_path.iterdir()] == ["dependencies.json"]


def test_write_json_unwritable_directory_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(ArtifactWriteError, match="Failed to create output directory"):
        _write_json(blocker / "out" / "dependencies.json", [])


def test_generate_fixture_build(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    root = _copy_fixture(tmp_path / "build")

    with caplog.at_level(logging.INFO):
        result = generate_all_artifacts(root=root)

    output = root / "target" / "dependencies.json"
    assert result == {
        "dependency_count": 5,
        "module_count": 2,
        "artifacts": [str(output)],
    }
    listing = orjson.loads(output.read_bytes())
    assert [
        f"{item['groupId']}:{item['artifactId']}:{item['version']}" for item in listing
    ] == [
        "com.acme:core:1.0",
        "com.acme:util:2.0",
        "com.other:lib:3.0",
        "com.shared:x:1.0",
        "com.acme:core:1.1",
    ]
    assert f"Wrote 5 dependencies to {output}" in caplog.text


def test_generate_overrides_take_precedence(tmp_path: Path) -> None:
    root = _copy_fixture(tmp_path / "build")
    out_dir = tmp_path / "out"

    result = generate_all_artifacts(root=root, out_dir=out_dir, include="", exclude="")

    assert result["dependency_count"] == 10
    assert (out_dir / "dependencies.json").is_file()


def test_generate_graph_failure_writes_nothing(tmp_path: Path) -> None:
    root = tmp_path / "build"
    root.mkdir()
    (root / "graph.json").write_bytes(
        orjson.dumps(
            {
                "root": "parent",
                "modules": [
                    {
                        "name": "parent",
                        "tree": {"groupId": "g", "artifactId": "p", "version": "1"},
                    },
                    {"name": "app", "tree": None},
                ],
            }
        )
    )
    config = DepFlatConfig(graph_file="graph.json")

    with pytest.raises(GraphBuildError):
        generate_all_artifacts(root=root, config=config)

    assert not (root / "target").exists()
