"""Artifact contract definitions.

Filenames and formats here are the stable boundary for downstream consumers
of the dependency listing.
"""

from __future__ import annotations

from dataclasses import dataclass

# Dependency listing filename (stable contract identifier).
DEPENDENCIES_JSON = "dependencies.json"

# Record fields in serialization order.
DEPENDENCY_FIELDS = ("groupId", "artifactId", "version")


@dataclass(frozen=True)
class ArtifactSpec:
    """Specification for a contract artifact."""

    filename: str
    format: str
    required_fields_note: str


ARTIFACT_SPECS: dict[str, ArtifactSpec] = {
    "dependencies": ArtifactSpec(
        filename=DEPENDENCIES_JSON,
        format="json-array",
        required_fields_note="DependencyRecord fields, unique per identity.",
    ),
}
