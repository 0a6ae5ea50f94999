"""Rule definitions for depflat-core."""

from rules.config import (
    ConfigError,
    DepFlatConfig,
    load_config,
    resolve_output_dir,
)
from rules.rule_sets import (
    DependencyRules,
    FilterPolicy,
    RuleSet,
    build_rules,
    parse_rule_set,
)

__all__ = [
    "ConfigError",
    "DepFlatConfig",
    "DependencyRules",
    "FilterPolicy",
    "RuleSet",
    "build_rules",
    "load_config",
    "parse_rule_set",
    "resolve_output_dir",
]
