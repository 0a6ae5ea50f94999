"""Stable contract surface for depflat-core artifacts.

Treat these exports as the authoritative boundary for consumers of the
dependency listing.
"""

from contract.artifacts import (
    ARTIFACT_SPECS,
    DEPENDENCIES_JSON,
    DEPENDENCY_FIELDS,
    ArtifactSpec,
)


def __getattr__(name: str) -> object:
    if name == "DependencyRecord":
        from contract.models import DependencyRecord

        return DependencyRecord

    if name in {"ValidationMessage", "ValidationResult", "validate_artifacts"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_artifacts,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_artifacts": validate_artifacts,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ARTIFACT_SPECS",
    "DEPENDENCIES_JSON",
    "DEPENDENCY_FIELDS",
    "ArtifactSpec",
    "DependencyRecord",
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
