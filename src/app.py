"""Application entry point for the chatsieve command-line tool."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from art import tprint

import settings
from adapters.config_loader import load_pattern_config
from adapters.discovery import build_jobs, expand_inputs
from adapters.file_store import FileDocumentStore
from core.errors import ChatSieveError
from core.models import FilterOutcome
from core.patterns import PatternConfig
from core.processor import ChatLogProcessor

NAME = "CHATSIEVE"
FONT = "tarty-1"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _log_level(name: str, verbosity: int) -> int:
    """Resolve the configured level, lowered by each -v flag."""

    level = getattr(logging, str(name).upper(), logging.WARNING)
    if verbosity > 1:
        return logging.DEBUG
    if verbosity == 1:
        return min(level, logging.INFO)
    return level


def _rotating_file_handler(file_cfg: dict) -> logging.Handler:
    path = file_cfg.get("path", "logs/chatsieve.log")
    if not os.path.isabs(path):
        path = os.path.join(settings.PROJECT_ROOT, path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
        backupCount=int(file_cfg.get("backup_count", 5)),
        encoding="utf-8",
    )


def _configure_logging(verbosity: int = 0) -> None:
    """Route log records to stderr and/or a rotating file per settings.LOGGING."""

    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    handlers: list[logging.Handler] = []
    if config.get("console", True):
        handlers.append(logging.StreamHandler())
    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        handlers.append(_rotating_file_handler(file_cfg))
    if not handlers:
        return

    level = _log_level(config.get("level", "WARNING"), verbosity)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chatsieve",
        description="Simple CLI utility to filter the Space Station 13 saved chat logs.",
    )
    parser.add_argument(
        "-p",
        "--path",
        dest="paths",
        action="extend",
        nargs="+",
        required=True,
        metavar="FILE",
        help="Chat file(s), directories, or glob patterns to filter",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help=(
            'Output file, or output directory when filtering several files. Defaults to '
            '"./filtered_{INPUT FILE NAME}". Missing directories are created recursively.'
        ),
    )
    parser.add_argument("--overwrite", action="store_true", help="Allow overwrite of the output file")
    parser.add_argument("--match-case", action="store_true", help="Match case")
    parser.add_argument("--regex", action="store_true", help="Treat include & exclude input as regexes")
    parser.add_argument("-i", "--include", help="Pattern that has to be included in the output")
    parser.add_argument("-e", "--exclude", help="Pattern that has to be excluded from the output")
    parser.add_argument("-c", "--config", type=Path, metavar="FILE", help="Path to config file")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Stop at the first chat log that fails instead of moving on",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress (-v) or debug details (-vv)",
    )
    parser.add_argument("--no-banner", action="store_true", help="Do not print the banner")
    return parser


def _uses_pattern_flags(args: argparse.Namespace) -> bool:
    return any([args.include is not None, args.exclude is not None, args.regex, args.match_case])


def _build_config(args: argparse.Namespace) -> PatternConfig:
    """Build the pattern config from --config, the environment, or flags."""

    config_path = args.config
    if config_path is None and not _uses_pattern_flags(args) and settings.DEFAULT_CONFIG_PATH:
        config_path = Path(settings.DEFAULT_CONFIG_PATH)

    if config_path is not None:
        try:
            config = load_pattern_config(config_path)
            config.ensure_patterns()
        except (ChatSieveError, OSError) as err:
            raise ChatSieveError(f"Failed to load config from {config_path}: {err}") from err
        return config

    try:
        config = PatternConfig.from_args(args.regex, args.include, args.exclude, args.match_case)
        config.ensure_patterns()
    except ChatSieveError as err:
        raise ChatSieveError(f"Failed to parse arguments: {err}") from err
    return config


def _report(outcome: FilterOutcome) -> None:
    job = outcome.job
    if outcome.ok:
        print(
            f"Filtered chat log from {job.input_path} to {job.output_path} "
            f"in {outcome.elapsed_ms:.0f}ms"
        )
    else:
        print(f"Failed to filter the chat log from {job.input_path}: {outcome.error}", file=sys.stderr)


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.config is not None and _uses_pattern_flags(args):
        parser.error("--config cannot be combined with --include/--exclude/--regex/--match-case")

    if not args.no_banner:
        _print_banner()
    _configure_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = _build_config(args)
    except ChatSieveError as err:
        print(err, file=sys.stderr)
        return 1
    logger.info("Pattern config: %s", config.describe())

    try:
        inputs = expand_inputs(args.paths)
        jobs = build_jobs(inputs, args.output)
    except (OSError, ValueError) as err:
        print(f"Failed to find the input files: {err}", file=sys.stderr)
        return 1
    logger.info("%s chat logs queued", len(jobs))

    processor = ChatLogProcessor(config, FileDocumentStore(overwrite=args.overwrite))
    summary = processor.run(jobs, strict=args.strict, on_outcome=_report)

    if summary.halted:
        print("Stopped after the first failure (--strict)", file=sys.stderr)
    return 0 if summary.failed == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
