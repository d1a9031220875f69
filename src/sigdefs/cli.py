from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, Union

from .config import Settings
from .samples import Bar, BarVariant
from .scan import scan_path, scan_sample

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(
    level: Union[int, str] = logging.INFO, log_file: Optional[Path] = None
) -> None:
    """Route the `sigdefs` loggers to stderr and, optionally, a file.

    Calling it again replaces the handlers of an earlier call.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    package_logger = logging.getLogger("sigdefs")
    package_logger.setLevel(level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sigdefs",
        description="List the definitions and comments of Python modules",
    )
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=sorted(logging.getLevelNamesMapping()),
        help="Python logging level (overrides the config file)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    scan_parser = subparsers.add_parser(
        "scan", help="Print definitions and comments (default: the bundled sample)"
    )
    scan_parser.add_argument("paths", nargs="*", type=Path, help="Source files to scan")
    scan_parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Do not list comments",
    )
    scan_parser.add_argument(
        "--public-only",
        action="store_true",
        help="Skip _private definitions",
    )
    subparsers.add_parser("demo", help="Exercise the bundled Bar sample")
    return parser


def _run_scan(args: argparse.Namespace, settings: Settings) -> None:
    include_comments = settings.scan.include_comments and not args.no_comments
    include_private = settings.scan.include_private and not args.public_only
    if args.paths:
        reports = [
            scan_path(
                path,
                include_private=include_private,
                include_comments=include_comments,
            )
            for path in args.paths
        ]
    else:
        reports = [
            scan_sample(
                settings.scan.sample,
                include_private=include_private,
                include_comments=include_comments,
            )
        ]
    for report in reports:
        for line in report.lines():
            print(line)


def _run_demo() -> None:
    Bar.do_the_thing()
    print(f"Bar.X = {Bar.X}")
    print(f"add_one(1) = {Bar().add_one(1)}")
    print(f"ten() = {BarVariant().ten()}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.load(args.config) if args.config else Settings()
    except ValueError as exc:
        setup_logging(args.log_level or logging.INFO)
        logger.error("%s", exc)
        return 1

    level = args.log_level or settings.logging.level
    try:
        setup_logging(level, settings.logging.file)
    except OSError as exc:
        setup_logging(level)
        logger.error("Cannot open log file %s: %s", settings.logging.file, exc)
        return 1

    try:
        if args.command == "scan":
            _run_scan(args, settings)
        elif args.command == "demo":
            _run_demo()
    except (FileNotFoundError, ValueError, NotImplementedError) as exc:
        logger.error("%s", exc)
        return 1
    return 0
