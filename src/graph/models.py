"""Value types for resolved dependency trees."""

from __future__ import annotations

from dataclasses import dataclass, field

from utils import artifact_key


@dataclass(frozen=True)
class ArtifactIdentity:
    """A single versioned artifact, compared exactly on all three fields."""

    group_id: str
    artifact_id: str
    version: str

    def __post_init__(self) -> None:
        for name in ("group_id", "artifact_id", "version"):
            if not getattr(self, name):
                msg = f"ArtifactIdentity.{name} must be a non-empty string"
                raise ValueError(msg)

    @property
    def key(self) -> str:
        return artifact_key(self.group_id, self.artifact_id)

    @property
    def coordinates(self) -> str:
        return f"{self.key}:{self.version}"

    def __str__(self) -> str:
        return self.coordinates


@dataclass(frozen=True)
class DependencyNode:
    """A node of a module's resolved dependency tree."""

    identity: ArtifactIdentity
    children: tuple[DependencyNode, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ModuleSet:
    """The modules of one build: a designated root plus nested modules."""

    root: str
    modules: tuple[str, ...] = field(default_factory=tuple)

    def in_processing_order(self) -> list[str]:
        """Root first, then every other module in order, root not repeated."""
        ordered = [self.root]
        ordered.extend(name for name in self.modules if name != self.root)
        return ordered


__all__ = ["ArtifactIdentity", "DependencyNode", "ModuleSet"]
