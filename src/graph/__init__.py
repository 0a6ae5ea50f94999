"""Dependency graph selection and flattening for depflat-core."""

from graph.flatten import flatten
from graph.match import Match, MatchDecision, MatchEngine
from graph.models import ArtifactIdentity, DependencyNode, ModuleSet
from graph.supplier import (
    GraphBuildError,
    GraphSupplier,
    JsonGraphSupplier,
    load_graph_manifest,
)

__all__ = [
    "ArtifactIdentity",
    "DependencyNode",
    "GraphBuildError",
    "GraphSupplier",
    "JsonGraphSupplier",
    "Match",
    "MatchDecision",
    "MatchEngine",
    "ModuleSet",
    "flatten",
    "load_graph_manifest",
]
