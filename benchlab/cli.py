from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from .app import BenchmarkLab
from .catalog import PRESET_PROFILES, load_catalog
from .config import DEFAULT_LOG_FILENAME, Settings
from .errors import CatalogError
from .logging_setup import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Benchmark Lab: fire catalogued API requests from the terminal.")
    parser.add_argument(
        "--debug",
        action="store_true",
        help=f"Enable debug logging to {DEFAULT_LOG_FILENAME} in the current directory.",
    )
    parser.add_argument("--log-file", type=Path, help="Write the debug log here instead (implies --debug).")
    parser.add_argument("--catalog", type=Path, help="JSON file with an array of API profiles to load.")
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Skip TLS certificate verification for every request.",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    args = build_parser().parse_args(argv)
    return Settings(
        verify_tls=not args.insecure,
        catalog_path=args.catalog,
        debug=args.debug or args.log_file is not None,
        log_path=args.log_file,
    )


def main(argv: Sequence[str] | None = None) -> None:
    settings = parse_args(argv)
    log_path = configure_logging(settings)
    if settings.debug and log_path is None:
        logger.warning("Debug logging requested but log file could not be created.")

    profiles = PRESET_PROFILES
    if settings.catalog_path is not None:
        try:
            profiles = load_catalog(settings.catalog_path)
        except CatalogError as exc:
            build_parser().error(str(exc))
    BenchmarkLab(profiles, settings).run()
