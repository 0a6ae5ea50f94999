from __future__ import annotations

from pathlib import Path
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from rules.rule_sets import DependencyRules, FilterPolicy, build_rules

CONFIG_FILENAME = "depflat.toml"


class DepFlatConfig(BaseModel):
    """Configuration for depflat-core dependency listing."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default="target",
        description="Output directory for the generated dependency listing",
    )
    graph_file: str = Field(
        default="dependency-graph.json",
        description="Resolved dependency graph manifest, relative to the root",
    )
    include_dependencies: str = Field(
        default="",
        description="Comma-separated groupId:artifactId keys (empty = all)",
    )
    exclude_dependencies: str = Field(
        default="",
        description="Comma-separated groupId:artifactId keys to drop with their subtrees",
    )
    policy: FilterPolicy = Field(
        default=FilterPolicy.INCLUDE_EXCLUDE,
        description="Filtering policy (include-exclude or include-only)",
    )

    @field_validator("include_dependencies", "exclude_dependencies", mode="before")
    @classmethod
    def join_rule_lists(cls, v: Any) -> Any:
        """Accept a TOML array of keys as well as the comma-separated form."""

        if v is None:
            return ""

        if isinstance(v, list):
            if not all(isinstance(item, str) for item in v):
                msg = "dependency rules must be a string or a list of strings"
                raise TypeError(msg)
            return ",".join(v)

        return v

    def rules(self) -> DependencyRules:
        return build_rules(
            self.include_dependencies,
            self.exclude_dependencies,
            self.policy,
        )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the project root.

    The config output_dir must be a non-empty relative path that remains
    within the project root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the project root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> DepFlatConfig:
    """Load configuration from depflat.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return DepFlatConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return DepFlatConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
