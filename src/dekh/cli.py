"""CLI entry point for dekh, a simple modern alternative to ``watch``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from dekh.app import WatchApp
from dekh.config import DEFAULT_INTERVAL, WatchConfig, command_from_args
from dekh.keybindings import parse_bindings
from dekh.terminal import ProcessTerminal


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dekh",
        description="Run a command periodically and show its output full-screen.",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command to run; a single argument is split like a shell would",
    )
    parser.add_argument(
        "-n",
        "--interval",
        type=float,
        default=DEFAULT_INTERVAL,
        help=f"Seconds to wait between runs (default: {DEFAULT_INTERVAL:g})",
    )
    parser.add_argument(
        "-t", "--no-title", action="store_true", help="Hide the header line"
    )
    parser.add_argument(
        "--no-mouse", action="store_true", help="Disable mouse wheel scrolling"
    )
    parser.add_argument(
        "--scroll-step",
        type=int,
        default=1,
        help="Lines or columns moved per scroll key press (default: 1)",
    )
    parser.add_argument(
        "--wheel-step",
        type=int,
        default=1,
        help="Lines or columns moved per mouse wheel notch (default: 1)",
    )
    parser.add_argument(
        "--bind",
        action="append",
        default=[],
        metavar="ACTION=KEY[,KEY...]",
        help="Rebind an action, e.g. --bind quit=x,ctrl+c (repeatable)",
    )
    parser.add_argument("--log-file", default=None, help="Write logs to this file")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
    )
    return parser


def setup_logging(log_file: str | None, level: str) -> None:
    """Log to *log_file*; without one, logging stays silent."""
    if not log_file:
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    words = args.command
    # REMAINDER keeps the "--" that ends option parsing.
    if words[:1] == ["--"]:
        words = words[1:]

    try:
        command = command_from_args(words)
    except ValueError as exc:
        parser.error(f"cannot parse command: {exc}")
    if not command:
        return 0

    try:
        config = WatchConfig(
            command=command,
            interval=args.interval,
            scroll_step=args.scroll_step,
            wheel_step=args.wheel_step,
            show_header=not args.no_title,
            keybindings=parse_bindings(args.bind),
        )
    except ValueError as exc:
        parser.error(str(exc))

    setup_logging(args.log_file, args.log_level)

    if not sys.stdin.isatty():
        print("dekh: stdin is not a terminal", file=sys.stderr)
        return 1

    app = WatchApp(config, ProcessTerminal(mouse=not args.no_mouse))
    try:
        asyncio.run(app.run())
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
