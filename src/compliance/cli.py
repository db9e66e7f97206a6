"""
Device Compliance Command Line Interface.

Provides commands for evaluating policy compliance:
- check: Evaluate an operations file against a device snapshot
- evaluate: Evaluate a single policy
- kinds: List supported policy kinds
- config: Validate configuration
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml

from compliance import __version__
from compliance.config import ComplianceConfig, load_config, setup_logging, validate_config
from compliance.exceptions import ComplianceError
from compliance.policy.engine import ComplianceEngine
from compliance.policy.models import ComplianceResult, EvaluationRequest
from compliance.policy.parser import load_requests
from compliance.state.snapshot import SnapshotStateProvider


logger = logging.getLogger(__name__)

EXIT_COMPLIANT = 0
EXIT_NON_COMPLIANT = 1
EXIT_ERROR = 2


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="device-compliance",
        description="Policy compliance evaluation for managed devices",
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-c", "--config",
        metavar="FILE",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # check command
    check_parser = subparsers.add_parser(
        "check", help="Evaluate an operations file against the device state"
    )
    check_parser.add_argument(
        "-p", "--operations",
        required=True,
        metavar="FILE",
        help="Operations file (YAML or JSON)",
    )
    check_parser.add_argument(
        "-s", "--state",
        metavar="FILE",
        help="Device state snapshot (YAML)",
    )
    check_parser.set_defaults(func=cmd_check)

    # evaluate command
    evaluate_parser = subparsers.add_parser("evaluate", help="Evaluate a single policy")
    evaluate_parser.add_argument("kind", help="Policy kind (operation code)")
    evaluate_parser.add_argument(
        "-s", "--state",
        metavar="FILE",
        help="Device state snapshot (YAML)",
    )
    evaluate_parser.add_argument(
        "--enabled",
        action="store_true",
        help="Desired state is enabled",
    )
    evaluate_parser.add_argument(
        "--payload",
        metavar="JSON",
        help="Policy payload as JSON text",
    )
    evaluate_parser.set_defaults(func=cmd_evaluate)

    # kinds command
    kinds_parser = subparsers.add_parser("kinds", help="List supported policy kinds")
    kinds_parser.set_defaults(func=cmd_kinds)

    # config command
    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_sub = config_parser.add_subparsers(dest="config_cmd")
    config_sub.add_parser("validate", help="Validate configuration file")
    config_sub.add_parser("show", help="Show effective configuration")
    config_parser.set_defaults(func=cmd_config)

    # Parse arguments
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = load_config(args.config)
    except (FileNotFoundError, yaml.YAMLError, TypeError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.verbose:
        config.logging.level = "debug"
    setup_logging(config)

    # Execute command
    return args.func(args, config)


def output(data: Any, args: argparse.Namespace) -> None:
    """Output data in requested format."""
    if getattr(args, "json", False):
        print(json.dumps(data, indent=2, default=str))
    elif isinstance(data, dict):
        for key, value in data.items():
            print(f"{key}: {value}")
    elif isinstance(data, list):
        for item in data:
            print(f"  {item}")
    else:
        print(data)


def format_result(result: ComplianceResult) -> str:
    """Render a result as a single line."""
    status = "COMPLIANT" if result.compliant else "NON-COMPLIANT"
    line = f"{result.feature_code:<24} {status}"
    if result.message:
        line += f"  {result.message}"
    return line


def build_engine(args: argparse.Namespace, config: ComplianceConfig) -> ComplianceEngine:
    """Create an engine backed by the requested state snapshot."""
    state_path = Path(args.state or config.state.snapshot_file)
    provider = SnapshotStateProvider.from_file(state_path)
    return ComplianceEngine.from_config(config, provider)


def report(results: list[ComplianceResult], args: argparse.Namespace) -> int:
    """Print results and return the matching exit code."""
    if getattr(args, "json", False):
        output([result.to_dict() for result in results], args)
    else:
        for result in results:
            print(format_result(result))

    if all(result.compliant for result in results):
        return EXIT_COMPLIANT
    return EXIT_NON_COMPLIANT


def cmd_check(args: argparse.Namespace, config: ComplianceConfig) -> int:
    """Evaluate every operation in a file."""
    try:
        engine = build_engine(args, config)
        requests = load_requests(args.operations)
        results = engine.evaluate_all(requests)
    except (FileNotFoundError, ValueError, yaml.YAMLError, ComplianceError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    logger.info("Evaluated %d operations", len(results))
    return report(results, args)


def cmd_evaluate(args: argparse.Namespace, config: ComplianceConfig) -> int:
    """Evaluate a single policy."""
    request = EvaluationRequest(
        kind=args.kind,
        desired_enabled=args.enabled,
        payload=args.payload,
    )

    try:
        engine = build_engine(args, config)
        result = engine.evaluate(request)
    except (FileNotFoundError, ValueError, yaml.YAMLError, ComplianceError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return report([result], args)


def cmd_kinds(args: argparse.Namespace, config: ComplianceConfig) -> int:
    """List supported policy kinds."""
    engine = ComplianceEngine.from_config(config, SnapshotStateProvider())
    output(engine.supported_kinds(), args)
    return 0


def cmd_config(args: argparse.Namespace, config: ComplianceConfig) -> int:
    """Validate or show configuration."""
    if args.config_cmd == "show":
        output(
            {
                "log_level": config.logging.level,
                "log_file": config.logging.file,
                "disabled_kinds": config.engine.disabled_kinds,
                "snapshot_file": config.state.snapshot_file,
            },
            args,
        )
        return 0

    errors = validate_config(config)
    if errors:
        for error in errors:
            print(f"  {error}")
        return 1

    print("Configuration is valid")
    return 0


if __name__ == "__main__":
    sys.exit(main())
