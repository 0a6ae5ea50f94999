"""Utility functions for artifact generation."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import orjson


class ArtifactWriteError(Exception):
    """Raised when an artifact cannot be written to its output location."""


def _to_dict(obj: object) -> object:
    """Convert object to dict for JSON serialization."""
    from dataclasses import asdict, is_dataclass

    if hasattr(obj, "model_dump"):
        return obj.model_dump(by_alias=True)
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, (list, tuple)):
        return [_to_dict(item) for item in obj]
    return obj


def _write_atomic(path: Path, payload: bytes) -> None:
    """Write ``payload`` to ``path`` so the target is either complete or absent.

    Content goes to a temporary sibling that replaces ``path`` in one step.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Failed to create output directory {path.parent}: {exc}"
        raise ArtifactWriteError(msg) from exc

    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
    except OSError as exc:
        msg = f"Failed to write {path}: {exc}"
        raise ArtifactWriteError(msg) from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
        os.replace(tmp_path, path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        msg = f"Failed to write {path}: {exc}"
        raise ArtifactWriteError(msg) from exc


def _write_json(path: Path, obj: object) -> None:
    # Field order is part of the output contract; keys are not sorted.
    payload = orjson.dumps(_to_dict(obj), option=orjson.OPT_INDENT_2)
    _write_atomic(path, payload)

