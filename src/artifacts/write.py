from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.generators import DependenciesGenerator
from contract.artifacts import DEPENDENCIES_JSON
from rules.config import load_config, resolve_output_dir
from rules.rule_sets import build_rules

if TYPE_CHECKING:
    from pathlib import Path

    from graph.supplier import GraphSupplier
    from rules.config import DepFlatConfig
    from rules.rule_sets import FilterPolicy


def generate_all_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: DepFlatConfig | None = None,
    supplier: GraphSupplier | None = None,
    graph_file: str | None = None,
    include: str | None = None,
    exclude: str | None = None,
    policy: FilterPolicy | str | None = None,
) -> dict[str, object]:
    """Generate the dependency listing for a multi-module build.

    Args:
        root: Root directory of the build
        out_dir: Optional output directory for generated artifacts
        config: Optional configuration; loaded from depflat.toml when omitted
        supplier: Optional graph supplier; defaults to the config's manifest
        graph_file: Overrides the config's graph manifest path
        include: Overrides the config's include rules (comma-separated)
        exclude: Overrides the config's exclude rules (comma-separated)
        policy: Overrides the config's filtering policy

    Returns:
        Dictionary with counts and list of generated artifact paths.

    Raises:
        ConfigError: If the configuration or output directory is invalid.
        GraphBuildError: If a module's dependency tree cannot be built.
        ArtifactWriteError: If the listing cannot be written.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    rules = build_rules(
        config.include_dependencies if include is None else include,
        config.exclude_dependencies if exclude is None else exclude,
        config.policy if policy is None else policy,
    )

    dependencies_gen = DependenciesGenerator()
    _, summary = dependencies_gen.generate(
        root=root,
        out_dir=out_dir,
        rules=rules,
        supplier=supplier,
        graph_file=graph_file or config.graph_file,
    )

    return {
        "dependency_count": summary["dependency_count"],
        "module_count": summary["module_count"],
        "artifacts": [str(out_dir / DEPENDENCIES_JSON)],
    }
