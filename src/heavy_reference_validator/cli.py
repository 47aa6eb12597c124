"""Command-line interface for the heavy reference validator.

This module provides the CLI entry point for validating the cumulative
reference size of assets in an exported asset registry.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import ValidatorSettings, load_settings
from .core.budget import VerdictStatus
from .core.errors import HeavyReferenceError
from .core.types import AssetKey
from .registry import SourceRegistry
from .reporting import build_diagnostic, verdict_to_dict


def _int_at_least(minimum: int):
    def parse(text: str) -> int:
        try:
            value = int(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
        if value < minimum:
            raise argparse.ArgumentTypeError(f"must be at least {minimum}, got {value}")
        return value

    return parse


def build_settings(args: argparse.Namespace) -> ValidatorSettings:
    """Load settings and apply command-line overrides.

    Args:
        args: Parsed command-line arguments

    Returns:
        Settings with overrides applied

    Raises:
        ConfigurationError: If the settings file is invalid
    """
    settings = load_settings(Path(args.settings)) if args.settings else ValidatorSettings()

    if args.max_kb is not None:
        settings.max_size_kilobytes = args.max_kb
    if args.error:
        settings.error_on_overflow = True
    if args.max_nodes is not None:
        settings.max_visited_nodes = args.max_nodes

    return settings


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the validator.

    Returns:
        Process exit code: 1 on FAIL or input errors, 0 otherwise
    """
    parser = argparse.ArgumentParser(
        description="Check the cumulative on-disk size of everything an asset references",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Warn if BP_Hero references more than the default budget
  heavy-reference-validator --registry registry.json --root /Game/Characters/BP_Hero

  # Fail above 4 MB
  heavy-reference-validator --registry registry.json --root /Game/Characters/BP_Hero \\
      --max-kb 4096 --error

  # Use a settings file and write the verdict to a file
  heavy-reference-validator --registry registry.json --root Map:Arena \\
      --settings validator.json > verdict.json
        """,
    )

    parser.add_argument("--registry", required=True, help="Asset registry export (JSON)")

    parser.add_argument(
        "--root",
        required=True,
        help="Asset to validate: package name (/Game/...) or primary id (Type:Name)",
    )

    parser.add_argument("--settings", help="Validator settings file (JSON)")

    parser.add_argument("--max-kb", type=_int_at_least(0), help="Override the budget in kilobytes")

    parser.add_argument(
        "--error",
        action="store_true",
        help="Treat an exceeded budget as an error instead of a warning",
    )

    parser.add_argument(
        "--max-nodes",
        type=_int_at_least(1),
        help="Stop traversal after visiting this many nodes",
    )

    parser.add_argument(
        "--registry-only",
        action="store_true",
        help="Ignore edges to assets that are not in the export",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        root = AssetKey.parse(args.root)
        settings = build_settings(args)
        pipeline = SourceRegistry.create_pipeline(
            'registry_export',
            settings.to_config(),
            path=Path(args.registry),
            include_unknown=not args.registry_only,
        )
    except (HeavyReferenceError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Validating references of {root}...", file=sys.stderr)
    verdict = pipeline.validate(root)

    diagnostic = build_diagnostic(verdict)
    if diagnostic is None:
        print(f"{root} is not validated by this validator", file=sys.stderr)
    else:
        print(diagnostic.format(), file=sys.stderr)

    json.dump(verdict_to_dict(verdict), sys.stdout, indent=2)
    print()

    return 1 if verdict.status is VerdictStatus.FAIL else 0


if __name__ == "__main__":
    sys.exit(main())
