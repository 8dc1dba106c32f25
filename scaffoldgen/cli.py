# File: scaffoldgen/cli.py
"""
scaffoldgen - Command-Line Interface
=====================================

Usage examples::

    # Scaffold every model found in the configured models namespace
    python -m scaffoldgen generate -c scaffold.yaml

    # Replace files that already exist
    python -m scaffoldgen generate -c scaffold.yaml --overwrite

    # Scaffold a single model class
    python -m scaffoldgen generate-one -c scaffold.yaml -m shop.models:Product

    # Resolve output directories against an explicit root
    python -m scaffoldgen generate -c scaffold.yaml --project-root ./src

When ``--project-root`` is absent and the configuration has no
``project_root``, the root is derived from the running interpreter's
location (``<root>/.venv/bin/python`` → ``<root>``).

Exit codes:
    0 — success
    1 — configuration error
    2 — model discovery error
    3 — one or more files could not be written
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

if TYPE_CHECKING:
    from scaffoldgen.models import GeneratorSettings

# ---------------------------------------------------------------------------
# Logger (configured in _setup_logging)
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("scaffoldgen")


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_CONFIG_ERROR: int = 1
EXIT_DISCOVERY_ERROR: int = 2
EXIT_WRITE_ERROR: int = 3


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(verbosity: int) -> None:
    """
    Configure the scaffoldgen logger based on verbosity level.

    Args:
        verbosity: -1 = ERROR, 0 = WARNING, 1 = INFO, 2+ = DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    elif verbosity < 0:
        level = logging.ERROR
    else:
        level = logging.WARNING

    handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    fmt: str = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
    datefmt: str = "%H:%M:%S"
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root_logger: logging.Logger = logging.getLogger("scaffoldgen")
    root_logger.setLevel(level)

    # Remove existing handlers to prevent duplication
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    from scaffoldgen import __version__

    common: argparse.ArgumentParser = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-c", "--config",
        type=str,
        required=True,
        metavar="PATH",
        help="Generator settings file (YAML or JSON).",
    )
    common.add_argument(
        "--overwrite",
        action="store_true",
        default=False,
        help="Replace files that already exist (default: keep them).",
    )

    overrides = common.add_argument_group("configuration overrides")
    overrides.add_argument(
        "--project-root",
        type=str,
        default=None,
        metavar="DIR",
        help="Directory the namespace hints are resolved against.",
    )
    overrides.add_argument(
        "--template-dir",
        type=str,
        default=None,
        metavar="DIR",
        help="Directory searched for templates before the packaged set.",
    )
    overrides.add_argument(
        "--extension",
        type=str,
        default=None,
        metavar="EXT",
        help="Extension of generated files (default '.py').",
    )

    verbosity = common.add_argument_group("verbosity")
    verbosity.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG).",
    )
    verbosity.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Suppress all output except errors.",
    )

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="scaffoldgen",
        description=(
            "Generate repository contracts, repositories and controllers "
            "for domain models from text templates."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  %(prog)s generate -c scaffold.yaml\n"
            "  %(prog)s generate -c scaffold.yaml --overwrite -v\n"
            "  %(prog)s generate-one -c scaffold.yaml -m shop.models:Product\n"
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"scaffoldgen v{__version__}",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")
    commands.required = True

    commands.add_parser(
        "generate",
        parents=[common],
        help="Scaffold every model in the configured models namespace.",
    )

    one = commands.add_parser(
        "generate-one",
        parents=[common],
        help="Scaffold a single model class.",
    )
    one.add_argument(
        "-m", "--model",
        type=str,
        required=True,
        metavar="MODULE:CLASS",
        help="Model class reference, e.g. 'shop.models:Product'.",
    )

    return parser


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def _build_config_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Build a settings override dictionary from CLI arguments."""
    overrides: Dict[str, Any] = {}

    if args.project_root is not None:
        overrides["project_root"] = Path(args.project_root).resolve()

    if args.template_dir is not None:
        overrides["template_dir"] = Path(args.template_dir).resolve()

    if args.extension is not None:
        overrides["file_extension"] = args.extension

    return overrides


def _load_settings(args: argparse.Namespace) -> "GeneratorSettings":
    """
    Load settings once for the whole run.

    The project root comes from ``--project-root``, then from the file,
    then from the interpreter location.

    Raises:
        ConfigurationError: Including ``PathDerivationError``.
    """
    from scaffoldgen.generator import (
        load_settings_file,
        parse_raw_settings,
        settings_section,
    )
    from scaffoldgen.paths import derive_project_root

    raw: Dict[str, Any] = load_settings_file(Path(args.config).resolve())
    overrides: Dict[str, Any] = _build_config_overrides(args)

    if "project_root" not in overrides and not settings_section(raw).get("project_root"):
        overrides["project_root"] = derive_project_root(sys.executable)

    return parse_raw_settings(raw, overrides)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def cli_main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns the exit code so tests can call it directly; ``main`` wraps it
    in ``sys.exit``.
    """
    parser: argparse.ArgumentParser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    if args.quiet:
        verbosity: int = -1
    else:
        verbosity = args.verbose
    _setup_logging(verbosity)

    from scaffoldgen.discovery import resolve_model_reference
    from scaffoldgen.exceptions import ConfigurationError, ModelDiscoveryError
    from scaffoldgen.generator import GenerationReport, ScaffoldGenerator

    try:
        settings = _load_settings(args)
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return EXIT_CONFIG_ERROR

    logger.info("Models:  %s", settings.models_namespace)
    logger.info("Root:    %s", settings.project_root)
    logger.info("Overwrite: %s", args.overwrite)

    generator: ScaffoldGenerator = ScaffoldGenerator(settings)

    try:
        if args.command == "generate-one":
            model = resolve_model_reference(args.model)
            report: GenerationReport = generator.generate_single(
                model, overwrite=args.overwrite
            )
        else:
            report = generator.generate_all(overwrite=args.overwrite)
    except ModelDiscoveryError as exc:
        logger.error("Model discovery failed: %s", exc)
        return EXIT_DISCOVERY_ERROR

    if not args.quiet:
        print(report.summary())

    return EXIT_SUCCESS if report.success else EXIT_WRITE_ERROR


def main() -> None:
    """Console-script entry point."""
    sys.exit(cli_main())


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "cli_main",
    "main",
    "EXIT_SUCCESS",
    "EXIT_CONFIG_ERROR",
    "EXIT_DISCOVERY_ERROR",
    "EXIT_WRITE_ERROR",
]

logger.debug("scaffoldgen.cli loaded.")
