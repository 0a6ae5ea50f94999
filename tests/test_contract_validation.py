from __future__ import annotations

from pathlib import Path

import orjson

from contract.artifacts import DEPENDENCIES_JSON
from contract.validation import validate_artifacts


def _write_listing(artifacts_dir: Path, payload: object) -> Path:
    artifacts_dir.mkdir(parents=True, exist_ok=True)
    path = artifacts_dir / DEPENDENCIES_JSON
    path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
    return path


def _record(group_id: str, artifact_id: str, version: str) -> dict[str, str]:
    return {"groupId": group_id, "artifactId": artifact_id, "version": version}


def test_validate_missing_dir_reports_error(tmp_path: Path) -> None:
    result = validate_artifacts(tmp_path / "missing")

    assert not result.ok
    assert result.errors[0].message == "Artifacts directory does not exist."


def test_validate_path_is_file_reports_error(tmp_path: Path) -> None:
    path = tmp_path / "artifacts"
    path.write_text("", encoding="utf-8")

    result = validate_artifacts(path)

    assert [error.message for error in result.errors] == [
        "Artifacts path is not a directory."
    ]


def test_validate_missing_listing_reports_error(tmp_path: Path) -> None:
    result = validate_artifacts(tmp_path)

    assert len(result.errors) == 1
    assert result.errors[0].artifact == "dependencies"
    assert result.errors[0].message == "Required artifact file is missing."


def test_validate_accepts_well_formed_listing(tmp_path: Path) -> None:
    _write_listing(
        tmp_path,
        [_record("com.acme", "core", "1.0"), _record("com.acme", "core", "1.1")],
    )

    result = validate_artifacts(tmp_path)

    assert result.ok
    assert result.warnings == []


def test_validate_empty_listing_is_ok(tmp_path: Path) -> None:
    _write_listing(tmp_path, [])

    assert validate_artifacts(tmp_path).ok


def test_validate_invalid_json(tmp_path: Path) -> None:
    (tmp_path / DEPENDENCIES_JSON).write_text("[{", encoding="utf-8")

    result = validate_artifacts(tmp_path)

    assert result.errors[0].message.startswith("Invalid JSON")


def test_validate_rejects_non_array(tmp_path: Path) -> None:
    _write_listing(tmp_path, {"dependencies": []})

    result = validate_artifacts(tmp_path)

    assert [error.message for error in result.errors] == [
        "Expected JSON array of dependency records."
    ]


def test_validate_flags_duplicate_identity(tmp_path: Path) -> None:
    path = _write_listing(
        tmp_path,
        [
            _record("com.acme", "core", "1.0"),
            _record("com.acme", "util", "2.0"),
            _record("com.acme", "core", "1.0"),
        ],
    )

    result = validate_artifacts(tmp_path)

    assert len(result.errors) == 1
    error = result.errors[0]
    assert error.index == 2
    assert error.location() == f"{path}[2]"
    assert error.message == "Duplicate dependency (first listed at index 0)."


def test_validate_rejects_extra_and_missing_fields(tmp_path: Path) -> None:
    _write_listing(
        tmp_path,
        [
            {**_record("com.acme", "core", "1.0"), "scope": "compile"},
            {"groupId": "com.acme", "artifactId": "util"},
            _record("com.acme", "", "1.0"),
        ],
    )

    result = validate_artifacts(tmp_path)

    assert [error.index for error in result.errors] == [0, 1, 2]
    assert all(
        error.message.startswith("Schema validation failed") for error in result.errors
    )


def test_validate_warns_on_field_order(tmp_path: Path) -> None:
    _write_listing(
        tmp_path,
        [{"version": "1.0", "groupId": "com.acme", "artifactId": "core"}],
    )

    result = validate_artifacts(tmp_path)

    assert result.ok
    assert len(result.warnings) == 1
    assert result.warnings[0].message.startswith("Unexpected field order")


def test_contract_exports_resolve_lazily() -> None:
    import contract
    from contract.models import DependencyRecord

    assert contract.validate_artifacts is validate_artifacts
    assert contract.DependencyRecord is DependencyRecord
    assert contract.DEPENDENCIES_JSON == DEPENDENCIES_JSON
