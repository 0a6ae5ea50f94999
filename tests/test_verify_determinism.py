from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from artifacts.write import generate_all_artifacts
from verify.verify import DeterminismResult, verify_determinism

FIXTURE_BUILD = Path(__file__).parent / "fixtures" / "mini_build"


def test_verify_determinism_requires_artifacts_dir(tmp_path: Path) -> None:
    missing_dir = tmp_path / "missing"
    with pytest.raises(FileNotFoundError, match="Artifacts directory does not exist"):
        verify_determinism(root=tmp_path, artifacts_dir=missing_dir)


def test_verify_determinism_rejects_file_as_artifacts_dir(tmp_path: Path) -> None:
    path = tmp_path / "artifacts"
    path.write_text("", encoding="utf-8")

    with pytest.raises(NotADirectoryError):
        verify_determinism(root=tmp_path, artifacts_dir=path)


def test_verify_determinism_fixture_round_trip(tmp_path: Path) -> None:
    root = tmp_path / "build"
    shutil.copytree(FIXTURE_BUILD, root)
    generate_all_artifacts(root=root)

    result = verify_determinism(root=root, artifacts_dir=root / "target")

    assert result == DeterminismResult(ok=True)


def test_verify_determinism_relative_paths_and_sorted_mismatches(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    artifacts_dir = tmp_path / "artifacts"
    artifacts_dir.mkdir()

    for rel_path, content in (
        ("b.json", "b-original"),
        ("a.json", "a-original"),
        ("stale.json", "stale"),
    ):
        (artifacts_dir / rel_path).write_text(content, encoding="utf-8")

    def _fake_generate_all_artifacts(*, root: Path, out_dir: Path) -> dict[str, object]:
        (out_dir / "a.json").write_text("a-original", encoding="utf-8")
        (out_dir / "b.json").write_text("b-regenerated", encoding="utf-8")
        (out_dir / "new.json").write_text("new", encoding="utf-8")
        return {"artifacts": [str(out_dir / "a.json"), str(out_dir / "b.json")]}

    monkeypatch.setattr(
        "verify.verify.generate_all_artifacts",
        _fake_generate_all_artifacts,
    )

    result = verify_determinism(root=tmp_path, artifacts_dir=artifacts_dir)

    assert result == DeterminismResult(
        ok=False,
        mismatches=("b.json",),
        missing=("stale.json",),
        extra=("new.json",),
    )


def test_verify_is_a_regular_package() -> None:
    import verify

    assert verify.__file__ is not None
    assert Path(verify.__file__).name == "__init__.py"
