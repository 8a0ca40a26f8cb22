from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from zipfile import BadZipFile

from dotenv import load_dotenv

from src.config.loader import ConfigError, load_config
from src.excel.document import open_document
from src.logging.init import log_summary, set_debug, setup_logging
from src.services.resolution import resolve_bindings
from src.services.summary import render_summary_line

"""CLI entrypoint.

Resolves every binding of a config file against one workbook (load mode) and
reports the matched sheets:

    python -m src.cli [--config PATH] [--debug] [WORKBOOK]

Config path precedence: --config, SHEET_BINDER_CONFIG (environment or .env),
config/bindings.yml. Workbook precedence: positional argument, config
``workbook`` key.
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

DEFAULT_CONFIG_PATH = Path("config/bindings.yml")
CONFIG_ENV_VAR = "SHEET_BINDER_CONFIG"


def _load_env_file(path: Path) -> None:
    """Load .env without overriding variables already set in the process."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Resolve configured sheet bindings against a workbook")
    p.add_argument("workbook", nargs="?", help="Workbook path (defaults to config 'workbook')")
    p.add_argument("--config", help=f"Binding config path (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (空リストはそのまま使う)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    if args.debug:
        set_debug()

    _load_env_file(Path(".env"))
    config_path = Path(args.config or os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    workbook = args.workbook or cfg.workbook
    if not workbook:
        logger.error("workbook not specified (argument or config 'workbook')")
        return EXIT_FATAL
    workbook_path = Path(workbook)
    try:
        document = open_document(workbook_path)
    except FileNotFoundError as e:
        logger.error(str(e))
        return EXIT_FATAL
    except (OSError, ValueError, BadZipFile) as e:
        logger.error(f"workbook: cannot open {workbook_path}: {e}")
        return EXIT_FATAL

    logger.info(f"Resolving {len(cfg.bindings)} bindings against: {workbook_path}")
    with document:
        report = resolve_bindings(document, cfg.bindings)

    for outcome in report.outcomes:
        if outcome.ok:
            logger.info(f"MATCH {outcome.target} -> {','.join(outcome.sheets)}")
        else:
            logger.error(f"{outcome.target}: {outcome.error}")

    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(report)[len("SUMMARY "):])

    if report.failed > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
