"""Membership decisions for individual dependency tree nodes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Set

    from graph.models import ArtifactIdentity
    from rules.rule_sets import DependencyRules


class MatchDecision(Enum):
    EXCLUDED = "excluded"
    INCLUDED = "included"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Match:
    decision: MatchDecision
    transitive: bool = False

    @property
    def included(self) -> bool:
        return self.decision is MatchDecision.INCLUDED


_EXCLUDED = Match(MatchDecision.EXCLUDED)
_REJECTED = Match(MatchDecision.REJECTED)


class MatchEngine:
    """Classify artifacts against include/exclude rules.

    ``matched_parents`` is read, never written: the flattener registers keys
    into the same set before classifying a module's tree, which is what lets
    a direct dependency of one module authorize the same key elsewhere.
    """

    def __init__(self, rules: DependencyRules, matched_parents: Set[str]) -> None:
        self.rules = rules
        self.matched_parents = matched_parents

    def is_requested(self, key: str) -> bool:
        """Return True if a direct dependency with ``key`` satisfies the include rule."""
        return not self.rules.include or key in self.rules.include

    def is_matched_parent(self, key: str) -> bool:
        return key in self.matched_parents

    def classify(self, identity: ArtifactIdentity, transitive: bool) -> Match:
        """Decide membership for ``identity``; first matching rule wins.

        Args:
            identity: Artifact being evaluated.
            transitive: True when reached below an already included ancestor.

        Returns:
            The decision, plus whether an inclusion rode along a transitive
            chain. A matched parent restarts the chain and is reported as a
            direct inclusion under the include-exclude policy.
        """
        key = identity.key
        policy = self.rules.policy

        if policy.honours_excludes and key in self.rules.exclude:
            return _EXCLUDED

        if not self.rules.include:
            return Match(MatchDecision.INCLUDED, transitive=transitive)

        if key in self.matched_parents:
            return Match(
                MatchDecision.INCLUDED,
                transitive=False if policy.resets_on_rematch else transitive,
            )

        if transitive:
            return Match(MatchDecision.INCLUDED, transitive=True)

        return _REJECTED


__all__ = ["Match", "MatchDecision", "MatchEngine"]
