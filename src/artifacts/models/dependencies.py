"""Dependency listing records.

One record per selected artifact, serialized with exactly the fields
``groupId``, ``artifactId`` and ``version`` in that order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from graph.models import ArtifactIdentity


class DependencyRecord(BaseModel):
    """A selected artifact in the dependency listing."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    group_id: str = Field(alias="groupId", min_length=1)
    artifact_id: str = Field(alias="artifactId", min_length=1)
    version: str = Field(min_length=1)

    @classmethod
    def from_identity(cls, identity: ArtifactIdentity) -> DependencyRecord:
        return cls(
            group_id=identity.group_id,
            artifact_id=identity.artifact_id,
            version=identity.version,
        )


__all__ = ["DependencyRecord"]
