"""Dependency listing generator for depflat-core artifacts."""

from __future__ import annotations

import logging
from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING, Any

from artifacts.models.dependencies import DependencyRecord
from artifacts.utils import _write_json
from contract.artifacts import DEPENDENCIES_JSON
from graph.flatten import flatten
from graph.supplier import load_graph_manifest

if TYPE_CHECKING:
    from graph.supplier import GraphSupplier
    from rules.rule_sets import DependencyRules

logger = logging.getLogger(__name__)


class DependenciesGenerator:
    """Generator for the flattened dependency listing."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "dependencies"

    def generate(
        self,
        root: Path,
        out_dir: Path,
        **kwargs: Any,
    ) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        """Flatten every module's tree and write dependencies.json.

        Nothing is written unless every module's tree was built.
        """
        rules: DependencyRules = kwargs["rules"]
        supplier: GraphSupplier | None = kwargs.get("supplier")
        graph_file: str = kwargs.get("graph_file", "dependency-graph.json")

        if supplier is None:
            supplier = load_graph_manifest(root / graph_file)

        modules = supplier.modules
        identities = flatten(modules, supplier, rules)
        records = [DependencyRecord.from_identity(identity) for identity in identities]

        output_path = out_dir / DEPENDENCIES_JSON
        _write_json(output_path, records)
        logger.info("Wrote %d dependencies to %s", len(records), output_path)

        summary = {
            "dependency_count": len(records),
            "module_count": len(modules.in_processing_order()),
        }
        return [record.model_dump(by_alias=True) for record in records], summary


__all__ = ["DEPENDENCIES_JSON", "DependenciesGenerator"]
