"""Resolved dependency graphs read from a JSON manifest.

The manifest carries one already-resolved tree per module::

    {
      "root": "parent",
      "modules": [
        {"name": "parent", "tree": {"groupId": "...", "artifactId": "...",
                                    "version": "...", "children": [...]}},
        {"name": "app", "tree": {...}}
      ]
    }

Trees are validated lazily, one module at a time, so a broken module
surfaces as a ``GraphBuildError`` at the point the flattener asks for it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from graph.models import ArtifactIdentity, DependencyNode, ModuleSet

if TYPE_CHECKING:
    from pathlib import Path


class GraphBuildError(Exception):
    """Raised when a module's dependency tree cannot be built."""


class GraphSupplier(Protocol):
    @property
    def modules(self) -> ModuleSet: ...

    def build_tree(self, module: str) -> DependencyNode: ...


class NodeSpec(BaseModel):
    """Wire shape of a single dependency tree node.

    ``children`` is left raw; each child is validated on its own when the
    tree is built, so nesting depth is not bounded by model recursion.
    """

    model_config = ConfigDict(populate_by_name=True)

    group_id: str = Field(alias="groupId", min_length=1)
    artifact_id: str = Field(alias="artifactId", min_length=1)
    version: str = Field(min_length=1)
    children: list[Any] = Field(default_factory=list)

    def identity(self) -> ArtifactIdentity:
        return ArtifactIdentity(self.group_id, self.artifact_id, self.version)


def build_dependency_tree(raw_tree: object) -> DependencyNode:
    """Validate and convert a raw tree, deepest nodes first, without recursion.

    Raises:
        ValidationError: If any node lacks a non-empty coordinate.
    """
    stack: list[tuple[NodeSpec, list[DependencyNode]]] = [
        (NodeSpec.model_validate(raw_tree), [])
    ]
    while True:
        spec, built = stack[-1]
        if len(built) < len(spec.children):
            child = NodeSpec.model_validate(spec.children[len(built)])
            stack.append((child, []))
            continue

        stack.pop()
        node = DependencyNode(identity=spec.identity(), children=tuple(built))
        if not stack:
            return node
        stack[-1][1].append(node)


class ModuleSpec(BaseModel):
    name: str = Field(min_length=1)
    tree: dict[str, Any] | None = None


class GraphManifest(BaseModel):
    root: str = Field(min_length=1)
    modules: list[ModuleSpec] = Field(default_factory=list)


class JsonGraphSupplier:
    """Graph supplier backed by a parsed manifest."""

    def __init__(self, manifest: GraphManifest, source: str = "<memory>") -> None:
        self.source = source
        self._trees: dict[str, dict[str, Any] | None] = {}
        for module in manifest.modules:
            if module.name in self._trees:
                msg = f"{source}: duplicate module '{module.name}'"
                raise GraphBuildError(msg)
            self._trees[module.name] = module.tree

        if manifest.root not in self._trees:
            msg = f"{source}: root module '{manifest.root}' is not listed in modules"
            raise GraphBuildError(msg)

        self._modules = ModuleSet(
            root=manifest.root,
            modules=tuple(module.name for module in manifest.modules),
        )

    @property
    def modules(self) -> ModuleSet:
        return self._modules

    def build_tree(self, module: str) -> DependencyNode:
        if module not in self._trees:
            msg = f"{self.source}: unknown module '{module}'"
            raise GraphBuildError(msg)

        raw_tree = self._trees[module]
        if raw_tree is None:
            msg = f"{self.source}: module '{module}' has no resolved dependency tree"
            raise GraphBuildError(msg)

        try:
            return build_dependency_tree(raw_tree)
        except ValidationError as exc:
            msg = f"{self.source}: invalid dependency tree for module '{module}': {exc}"
            raise GraphBuildError(msg) from exc


def load_graph_manifest(path: Path) -> JsonGraphSupplier:
    """Read a graph manifest file and return a supplier for its modules."""
    try:
        raw = orjson.loads(path.read_bytes())
    except OSError as exc:
        msg = f"Failed to read dependency graph {path}: {exc}"
        raise GraphBuildError(msg) from exc
    except orjson.JSONDecodeError as exc:
        msg = f"Invalid JSON in dependency graph {path}: {exc}"
        raise GraphBuildError(msg) from exc

    try:
        manifest = GraphManifest.model_validate(raw)
    except ValidationError as exc:
        msg = f"Invalid dependency graph {path}: {exc}"
        raise GraphBuildError(msg) from exc

    return JsonGraphSupplier(manifest, source=str(path))


__all__ = [
    "GraphBuildError",
    "GraphManifest",
    "GraphSupplier",
    "JsonGraphSupplier",
    "NodeSpec",
    "build_dependency_tree",
    "load_graph_manifest",
]
