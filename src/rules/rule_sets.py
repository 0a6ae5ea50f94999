"""Include/exclude rule sets for dependency selection."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum

from utils import is_artifact_key

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")

RuleSet = frozenset[str]


class FilterPolicy(str, Enum):
    """How include and exclude rules are applied during flattening."""

    INCLUDE_EXCLUDE = "include-exclude"
    INCLUDE_ONLY = "include-only"

    @property
    def honours_excludes(self) -> bool:
        return self is FilterPolicy.INCLUDE_EXCLUDE

    @property
    def resets_on_rematch(self) -> bool:
        return self is FilterPolicy.INCLUDE_EXCLUDE


@dataclass(frozen=True)
class DependencyRules:
    """Rule sets and policy for a single run."""

    include: RuleSet = field(default_factory=frozenset)
    exclude: RuleSet = field(default_factory=frozenset)
    policy: FilterPolicy = FilterPolicy.INCLUDE_EXCLUDE


def parse_rule_set(raw: str | None) -> RuleSet:
    """Parse a comma-separated list of ``groupId:artifactId`` keys.

    All whitespace, embedded newlines included, is removed before splitting.
    Empty and malformed tokens are dropped rather than rejected.
    """
    if raw is None or not raw.strip():
        return frozenset()

    keys: set[str] = set()
    for token in _WHITESPACE.sub("", raw).split(","):
        if not token:
            continue
        if not is_artifact_key(token):
            logger.debug("Ignoring malformed dependency rule: %s", token)
            continue
        keys.add(token)
    return frozenset(keys)


def build_rules(
    include: str | None,
    exclude: str | None,
    policy: FilterPolicy | str = FilterPolicy.INCLUDE_EXCLUDE,
) -> DependencyRules:
    policy = FilterPolicy(policy)
    rules = DependencyRules(
        include=parse_rule_set(include),
        exclude=parse_rule_set(exclude),
        policy=policy,
    )
    if rules.exclude and not policy.honours_excludes:
        logger.warning(
            "Ignoring %d exclude rule(s): policy %s does not evaluate excludes",
            len(rules.exclude),
            policy.value,
        )
    return rules


__all__ = [
    "DependencyRules",
    "FilterPolicy",
    "RuleSet",
    "build_rules",
    "parse_rule_set",
]
