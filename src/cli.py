"""Command-line interface for depflat-core."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from artifacts.utils import ArtifactWriteError
from artifacts.write import generate_all_artifacts
from contract.validation import validate_artifacts
from graph.supplier import GraphBuildError
from rules.config import ConfigError, load_config, resolve_output_dir
from rules.rule_sets import FilterPolicy
from verify.verify import verify_determinism

EXIT_CONFIG_ERROR = 2
EXIT_GRAPH_ERROR = 3
EXIT_WRITE_ERROR = 4


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Build root (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="depflat")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every included and excluded dependency",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate", help="Generate the flattened dependency listing"
    )
    _add_common_paths(generate_parser)
    generate_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for dependencies.json (default: config output dir)",
    )
    generate_parser.add_argument(
        "--graph",
        default=None,
        help="Dependency graph manifest (default: config graph_file)",
    )
    generate_parser.add_argument(
        "--include",
        default=None,
        help="Comma-separated groupId:artifactId keys to include",
    )
    generate_parser.add_argument(
        "--exclude",
        default=None,
        help="Comma-separated groupId:artifactId keys to exclude",
    )
    generate_parser.add_argument(
        "--policy",
        choices=[policy.value for policy in FilterPolicy],
        default=None,
        help="Filtering policy (default: config policy)",
    )

    validate_parser = subparsers.add_parser(
        "validate", help="Validate the dependency listing"
    )
    _add_common_paths(validate_parser)
    validate_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify determinism of the dependency listing"
    )
    _add_common_paths(verify_parser)
    verify_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _resolve_output_dir(out_dir: str | None) -> Path | None:
    if out_dir is None:
        return None
    return Path(out_dir).expanduser().resolve()


def _resolve_artifacts_dir(root: Path, artifacts_dir: str | None) -> Path:
    if artifacts_dir is None:
        return resolve_output_dir(root, load_config(root).output_dir)
    return Path(artifacts_dir).expanduser().resolve()


def _handle_generate(root: Path, args: argparse.Namespace) -> int:
    try:
        result = generate_all_artifacts(
            root=root,
            out_dir=_resolve_output_dir(args.out_dir),
            graph_file=args.graph,
            include=args.include,
            exclude=args.exclude,
            policy=args.policy,
        )
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_CONFIG_ERROR
    except GraphBuildError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_GRAPH_ERROR
    except ArtifactWriteError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_WRITE_ERROR

    sys.stdout.write(
        f"{result['dependency_count']} dependencies from "
        f"{result['module_count']} modules\n"
    )
    return 0


def _handle_validate(root: Path, artifacts_dir: str | None) -> int:
    try:
        resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_CONFIG_ERROR
    result = validate_artifacts(resolved_artifacts_dir)
    for warning in result.warnings:
        sys.stderr.write(f"{warning.location()}: warning: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_verify(root: Path, artifacts_dir: str | None) -> int:
    try:
        resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_CONFIG_ERROR
    try:
        result = verify_determinism(root=root, artifacts_dir=resolved_artifacts_dir)
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"artifacts-dir: {resolved_artifacts_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    except (ConfigError, GraphBuildError, ArtifactWriteError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    root = Path(args.root).expanduser().resolve()

    if args.command == "generate":
        return _handle_generate(root, args)

    if args.command == "validate":
        return _handle_validate(root, args.artifacts_dir)

    if args.command == "verify":
        return _handle_verify(root, args.artifacts_dir)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
