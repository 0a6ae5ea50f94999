"""Flatten per-module dependency trees into one deduplicated list."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graph.match import MatchDecision, MatchEngine

if TYPE_CHECKING:
    from graph.models import ArtifactIdentity, DependencyNode, ModuleSet
    from graph.supplier import GraphSupplier
    from rules.rule_sets import DependencyRules

logger = logging.getLogger(__name__)


class _TraversalState:
    """Mutable state shared by every module of a single flatten run."""

    def __init__(self, rules: DependencyRules) -> None:
        self.matched_parents: set[str] = set()
        self.processed: set[ArtifactIdentity] = set()
        self.result: list[ArtifactIdentity] = []
        self.engine = MatchEngine(rules, self.matched_parents)

    def emit(self, identity: ArtifactIdentity) -> None:
        self.result.append(identity)
        self.processed.add(identity)


def _register_direct_children(root: DependencyNode, state: _TraversalState) -> None:
    """Record depth-1 children that satisfy the include rule as matched parents."""
    for child in root.children:
        key = child.identity.key
        if state.engine.is_requested(key):
            state.matched_parents.add(key)


def _push_children(
    stack: list[tuple[DependencyNode, bool]],
    node: DependencyNode,
    transitive: bool,
    state: _TraversalState,
) -> None:
    # Reversed so children pop in declared order. Processed matched parents
    # are still pushed: their subtree may differ from module to module.
    for child in reversed(node.children):
        if child.identity not in state.processed or state.engine.is_matched_parent(
            child.identity.key
        ):
            stack.append((child, transitive))


def _collect(root: DependencyNode, state: _TraversalState) -> None:
    """Depth-first walk of a module tree below its root node."""
    stack: list[tuple[DependencyNode, bool]] = []
    _push_children(stack, root, False, state)

    while stack:
        node, transitive = stack.pop()
        identity = node.identity
        match = state.engine.classify(identity, transitive)

        if match.decision is MatchDecision.EXCLUDED:
            logger.debug("Excluded dependency: %s", identity.key)
            continue

        if match.decision is MatchDecision.INCLUDED:
            if identity in state.processed:
                if state.engine.is_matched_parent(identity.key):
                    _push_children(stack, node, True, state)
                continue
            state.emit(identity)
            logger.debug(
                "Added dependency: %s%s",
                identity.coordinates,
                " (transitive)" if match.transitive else "",
            )
            _push_children(stack, node, True, state)
            continue

        if state.engine.is_matched_parent(identity.key):
            _push_children(stack, node, transitive, state)


def _flatten_module(root: DependencyNode, state: _TraversalState) -> int:
    """Run both passes over one module tree; return how many artifacts it added."""
    before = len(state.result)
    _register_direct_children(root, state)
    _collect(root, state)
    return len(state.result) - before


def flatten(
    modules: ModuleSet,
    supplier: GraphSupplier,
    rules: DependencyRules,
) -> list[ArtifactIdentity]:
    """Select and flatten the dependencies of every module of a build.

    Modules are processed root first, then in enumeration order. Matched
    parents and already emitted artifacts carry over from one module to the
    next, so a dependency is listed once and a direct dependency of any
    module authorizes that key wherever else it turns up.

    Args:
        modules: The build's modules.
        supplier: Builds each module's resolved dependency tree.
        rules: Include/exclude rules and filtering policy.

    Returns:
        Selected artifacts in discovery order.

    Raises:
        GraphBuildError: If the supplier cannot build a module's tree. No
            partial result is returned.
    """
    state = _TraversalState(rules)

    for module in modules.in_processing_order():
        root = supplier.build_tree(module)
        added = _flatten_module(root, state)
        logger.info("Module %s: %d dependencies selected", module, added)

    return state.result


__all__ = ["flatten"]
