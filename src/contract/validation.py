"""Validation helpers for contract artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import orjson
from pydantic import ValidationError

from contract.artifacts import ARTIFACT_SPECS, DEPENDENCY_FIELDS
from contract.models import DependencyRecord

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class ValidationMessage:
    artifact: str
    path: Path
    message: str
    index: int | None = None

    def location(self) -> str:
        if self.index is None:
            return str(self.path)
        return f"{self.path}[{self.index}]"

    def to_dict(self) -> dict[str, object]:
        return {
            "artifact": self.artifact,
            "path": str(self.path),
            "index": self.index,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_artifacts(artifacts_dir: Path) -> ValidationResult:
    result = ValidationResult()

    if not artifacts_dir.exists():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts directory does not exist.",
            )
        )
        return result

    if not artifacts_dir.is_dir():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts path is not a directory.",
            )
        )
        return result

    for artifact_name, spec in ARTIFACT_SPECS.items():
        path = artifacts_dir / spec.filename
        if not path.exists():
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    message="Required artifact file is missing.",
                )
            )
            continue

        if spec.format == "json-array":
            _validate_dependency_listing(artifact_name, path, result)
        else:
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    message=f"Unsupported artifact format: {spec.format}.",
                )
            )

    return result


def _validate_dependency_listing(
    artifact_name: str, path: Path, result: ValidationResult
) -> None:
    try:
        raw = orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Invalid JSON: {exc}.",
            )
        )
        return

    if not isinstance(raw, list):
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message="Expected JSON array of dependency records.",
            )
        )
        return

    seen: dict[DependencyRecord, int] = {}
    for index, item in enumerate(raw):
        try:
            record = DependencyRecord.model_validate(item)
        except ValidationError as exc:
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    index=index,
                    message=f"Schema validation failed: {exc}.",
                )
            )
            continue

        if tuple(item) != DEPENDENCY_FIELDS:
            result.warnings.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    index=index,
                    message=(
                        "Unexpected field order: expected "
                        f"{', '.join(DEPENDENCY_FIELDS)}."
                    ),
                )
            )

        if record in seen:
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    index=index,
                    message=f"Duplicate dependency (first listed at index {seen[record]}).",
                )
            )
            continue
        seen[record] = index


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
