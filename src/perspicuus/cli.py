"""
Perspicuus CLI

Command-line front end for scoring requests and inspecting exported files.

Usage:
    perspicuus evaluate --request request.json --out result.json
    perspicuus evaluate --request request.json --format compact
    perspicuus import --file export.json
    perspicuus registry-info --registry my_registry.yaml

Exit Codes:
    0   OK              - Command succeeded
    10  INPUT_INVALID   - Input file rejected (size, syntax, schema, format),
                          or no command given
    11  REGISTRY_ERROR  - Registry pack failed to load or validate
    20  INTERNAL_ERROR  - Unexpected internal error
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .config import Settings
from .engine import RiskEngine
from .exceptions import PayloadImportError, RegistryError
from .export import dumps, export_compact, export_full_envelope
from .ingest import FullResult, ImportReconciler, ReconstructedResult, RequestOnly
from .ingest.secure_parser import validate_file_metadata
from .models import AssessmentResult
from .registry import RiskRegistry, load_default_registry, load_registry

logger = logging.getLogger(__name__)


# ============================================================================
# EXIT CODES
# ============================================================================

class ExitCode:
    """Deterministic exit codes for pipeline integration."""
    OK = 0
    INPUT_INVALID = 10
    REGISTRY_ERROR = 11
    INTERNAL_ERROR = 20


# ============================================================================
# OUTPUT HELPERS
# ============================================================================

def print_result(result: AssessmentResult) -> None:
    print("=" * 70)
    print("LCBFT RISK ASSESSMENT")
    print("=" * 70)
    print(f"  Risk level:   {result.risk_level.label_fr} ({result.risk_level.value})")
    print(f"  Total score:  {result.total}")
    print()
    print(f"{'Category':<20} {'Score':>8}")
    print("-" * 70)
    for label, score in (
        ("Geographic", result.geographic),
        ("Product/service", result.product),
        ("Client", result.client),
    ):
        print(f"{label:<20} {score.score:>8}")
        for justification in score.justifications:
            print(f"    - {justification}")
    print("-" * 70)
    if result.recommendations:
        print()
        print("RECOMMENDATIONS")
        print("-" * 70)
        for recommendation in result.recommendations:
            print(f"  * {recommendation}")
    print("=" * 70)


def print_error(message: str) -> None:
    print(f"ERROR: {message}", file=sys.stderr)


def _resolve_registry(path: Optional[str]) -> RiskRegistry:
    if path:
        return load_registry(path)
    return load_default_registry()


def _import_file(path: Path, settings: Settings):
    validate_file_metadata(path.name, size=path.stat().st_size, max_size=settings.max_import_bytes)
    payload = path.read_bytes()
    reconciler = ImportReconciler(max_size=settings.max_import_bytes)
    return reconciler.import_payload(payload, filename=path.name)


# ============================================================================
# COMMANDS
# ============================================================================

def cmd_evaluate(args: argparse.Namespace) -> int:
    """Score a request file (a bare request or a full export carrying one)."""
    settings = Settings.from_env()
    registry = _resolve_registry(args.registry or settings.registry_path)

    outcome = _import_file(Path(args.request), settings)
    if isinstance(outcome, RequestOnly):
        request = outcome.request
    elif isinstance(outcome, FullResult) and outcome.request is not None:
        request = outcome.request
    else:
        print_error("File contains no assessment request to evaluate")
        return ExitCode.INPUT_INVALID

    result = RiskEngine(registry=registry).assess(request)
    print_result(result)

    if args.format == "compact":
        document = export_compact(result)
    else:
        document = export_full_envelope(result, request, registry=registry)

    if args.out:
        Path(args.out).write_text(dumps(document), encoding="utf-8")
        print(f"Export written to {args.out}")
    return ExitCode.OK


def cmd_import(args: argparse.Namespace) -> int:
    """Recognize an exported file and show what it contains."""
    outcome = _import_file(Path(args.file), Settings.from_env())

    print(f"Recognized format: {outcome.kind}")
    if isinstance(outcome, RequestOnly):
        client = outcome.request.client
        geo = outcome.request.geographic
        print(f"  Client type:  {client.client_type.value}")
        print(f"  Residence:    {geo.residence_country}")
        print(f"  Account:      {geo.account_country}")
        return ExitCode.OK

    if isinstance(outcome, ReconstructedResult):
        print(f"WARNING: {outcome.warning}")
    elif outcome.metadata:
        print(f"  Generated at: {outcome.metadata.get('generated_at')}")
    print_result(outcome.result)
    return ExitCode.OK


def cmd_registry_info(args: argparse.Namespace) -> int:
    """Validate and describe a registry pack."""
    registry = _resolve_registry(args.registry or Settings.from_env().registry_path)

    print("=" * 60)
    print(f"REGISTRY {registry.id} v{registry.version}")
    print("=" * 60)
    print(f"  Name:               {registry.name}")
    print(f"  Jurisdiction:       {registry.jurisdiction}")
    print(f"  Home jurisdiction:  {registry.home_jurisdiction}")
    print(f"  Hash:               {registry.content_hash}")
    print()
    print(f"  Very-high countries:  {len(registry.very_high_countries):>4}")
    print(f"  High countries:       {len(registry.high_countries):>4}")
    print(f"  Aggravated countries: {len(registry.aggravated_countries):>4}")
    print(f"  Sanctioned countries: {len(registry.sanctioned_countries):>4}")
    print(f"  Sector codes:         {registry.sector_count:>4}")
    return ExitCode.OK


# ============================================================================
# MAIN
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="perspicuus",
        description="Perspicuus LCBFT risk assessment",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0   OK              Command succeeded
  10  INPUT_INVALID   Input file rejected, or no command given
  11  REGISTRY_ERROR  Registry pack failed to load
  20  INTERNAL_ERROR  Unexpected error
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", help="Override PERSPICUUS_LOG_LEVEL")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    eval_parser = subparsers.add_parser("evaluate", help="Score a request file")
    eval_parser.add_argument("--request", "-r", required=True, help="Request or full export JSON file")
    eval_parser.add_argument("--format", "-f", choices=["full", "compact"], default="full",
                             help="Export format (default: full)")
    eval_parser.add_argument("--out", "-o", help="Write the export to this file")
    eval_parser.add_argument("--registry", help="Registry pack YAML/JSON file")
    eval_parser.set_defaults(func=cmd_evaluate)

    import_parser = subparsers.add_parser("import", help="Inspect an exported file")
    import_parser.add_argument("--file", "-i", required=True, help="Exported JSON file")
    import_parser.set_defaults(func=cmd_import)

    registry_parser = subparsers.add_parser("registry-info", help="Validate and describe a registry pack")
    registry_parser.add_argument("--registry", help="Registry pack YAML/JSON file")
    registry_parser.set_defaults(func=cmd_registry_info)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = args.log_level or Settings.from_env().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return ExitCode.INPUT_INVALID

    try:
        return args.func(args)
    except PayloadImportError as e:
        print_error(str(e))
        return ExitCode.INPUT_INVALID
    except RegistryError as e:
        print_error(str(e))
        return ExitCode.REGISTRY_ERROR
    except OSError as e:
        print_error(f"I/O error: {e}")
        return ExitCode.INPUT_INVALID
    except Exception:
        logger.exception("Unexpected error")
        return ExitCode.INTERNAL_ERROR


if __name__ == "__main__":
    sys.exit(main())
