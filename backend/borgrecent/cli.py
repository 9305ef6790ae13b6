"""Command line entry point: ``borg-recent ROOT [--port N]``."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

import uvicorn

from borgrecent import __version__
from borgrecent.core.config import Settings, build_settings
from borgrecent.core.errors import StartupError
from borgrecent.core.logging import setup_logging
from borgrecent.main import app

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="borg-recent",
        description="Serve the most recent borg archive per repository as JSON on /recent.",
    )
    parser.add_argument("root", help="directory holding the borg repositories (~/ is expanded)")
    parser.add_argument("--port", type=int, default=None, help="port to listen on (default 2674)")
    parser.add_argument("--host", default=None, help="address to bind (default 0.0.0.0)")
    parser.add_argument(
        "--glob",
        dest="globs",
        action="append",
        metavar="PATTERN",
        help="artifact path pattern inside archives; repeatable (default: mysql daily dumps)",
    )
    parser.add_argument(
        "--no-artifacts",
        dest="artifact_lookup",
        action="store_false",
        default=None,
        help="skip artifact lookup and omit mysql_date",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="borg processes run concurrently per request (default 1)",
    )
    parser.add_argument("--borg", dest="borg_binary", default=None, help="path to the borg binary")
    parser.add_argument("--log-level", default=None, help="logging level (default INFO)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_settings(argv: Optional[Sequence[str]] = None) -> Settings:
    args = build_parser().parse_args(argv)
    return build_settings(
        args.root,
        host=args.host,
        port=args.port,
        globs=args.globs,
        artifact_lookup=args.artifact_lookup,
        concurrency=args.concurrency,
        borg_binary=args.borg_binary,
        log_level=args.log_level,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    setup_logging()
    try:
        settings = load_settings(argv)
    except StartupError as exc:
        logger.error("startup_failed | error=%s", exc)
        raise SystemExit(1)

    setup_logging(settings.log_level)
    app.state.settings = settings
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main(sys.argv[1:])
