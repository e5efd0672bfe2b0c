from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import time
from typing import TextIO

from .block import GitHubBlock
from .config import BlockConfig, load_config
from .errors import ConfigError


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="gnc", description="GitHub notification counter (status bar block)")
    p.add_argument("--config", default=None, help="Path to JSON config file. Defaults to built-in defaults")
    p.add_argument(
        "--log-level",
        default=None,
        help="Log level (DEBUG/INFO/WARNING/ERROR). Defaults to env GNC_LOG_LEVEL or INFO",
    )

    mode = p.add_mutually_exclusive_group(required=False)
    mode.add_argument("--once", action="store_true", help="Poll once, print the block and exit")
    mode.add_argument("--daemon", action="store_true", help="Poll forever, one line per poll")
    return p


def _resolve_log_level(value: str | None) -> int:
    v = (value or "").strip().upper()
    if not v:
        return logging.INFO
    level = logging.getLevelNamesMapping().get(v)
    if isinstance(level, int):
        return level
    return logging.INFO


def _emit(block: GitHubBlock, out: TextIO) -> None:
    for widget in block.view():
        out.write(json.dumps(widget.to_json_dict(), ensure_ascii=False) + "\n")
    out.flush()


def main(argv: list[str] | None = None, *, out: TextIO | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    log_level = _resolve_log_level(args.log_level or os.environ.get("GNC_LOG_LEVEL"))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger = logging.getLogger("gnc")
    out = out if out is not None else sys.stdout

    try:
        config = load_config(args.config) if args.config else BlockConfig()
        block = GitHubBlock(config)
    except ConfigError as e:
        logger.error("config error: %s", e)
        return 2

    mode = "daemon" if args.daemon else "once"
    logger.info(
        "gnc start: mode=%s api_server=%s interval_seconds=%s format=%r",
        mode,
        config.api_server,
        config.interval_seconds,
        config.format,
    )

    if not args.daemon:
        report = block.poll_once()
        _emit(block, out)
        logger.info(
            "once done: ok=%s total=%s pages=%d duration_ms=%d",
            report.ok,
            report.total,
            report.pages_fetched,
            report.duration_ms,
        )
        return 0

    cycle_id = 0
    while True:
        cycle_id += 1
        report = block.poll_once()
        _emit(block, out)
        logger.debug(
            "cycle summary: id=%d ok=%s total=%s pages=%d duration_ms=%d",
            cycle_id,
            report.ok,
            report.total,
            report.pages_fetched,
            report.duration_ms,
        )
        time.sleep(max(1.0, block.update_interval))


if __name__ == "__main__":
    raise SystemExit(main())
