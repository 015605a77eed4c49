#!/usr/bin/env python3
"""gamelog — read, filter, and follow a game log for the UI layer."""

import sys
import signal
import logging
import threading
from argparse import ArgumentParser, ArgumentTypeError

from gamelog.config import load_config, load_yaml_config
from gamelog.follower import LogFollower, follow
from gamelog.formatter import format_json, format_line, get_formatter
from gamelog.reader import (
    LogReadError,
    get_line_count,
    get_log_metadata,
    read_log_lines_from,
    read_log_update,
)

logger = logging.getLogger("gamelog")


def _line_index(value: str) -> int:
    try:
        index = int(value)
    except ValueError:
        raise ArgumentTypeError(f"invalid line index: {value!r}")
    if index < 0:
        raise ArgumentTypeError(f"line index must be non-negative, got {index}")
    return index


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="gamelog",
        description="Read, filter, and follow a game log file.",
    )
    parser.add_argument("--config", default=None, help="Path to YAML config file")
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("metadata", help="Print line count and player name")
    p.add_argument("log_file", nargs="?", default=None)

    p = sub.add_parser("count", help="Print the total line count")
    p.add_argument("log_file", nargs="?", default=None)

    p = sub.add_parser("suffix", help="Print non-blank lines from a line index on")
    p.add_argument("log_file", nargs="?", default=None)
    p.add_argument("--from-line", type=_line_index, default=0)

    p = sub.add_parser("update", help="Print marker lines and patterns from a line index on")
    p.add_argument("log_file", nargs="?", default=None)
    p.add_argument("--from-line", type=_line_index, default=0)
    p.add_argument("--no-player-name", action="store_true", help="Skip player name extraction")
    p.add_argument("--no-patterns", action="store_true", help="Skip pattern extraction")
    p.add_argument("--output", choices=["json", "text"], default="json")
    p.add_argument("--color", action="store_true", help="Colorize text output by category (ANSI)")

    p = sub.add_parser("follow", help="Follow the log and print new event lines")
    p.add_argument("log_file", nargs="?", default=None)
    p.add_argument("--poll-interval", type=float, default=None)
    p.add_argument("--color", action="store_true")

    p = sub.add_parser("serve", help="Serve the reader operations over HTTP")
    p.add_argument("--host", default=None)
    p.add_argument("--port", type=int, default=None)

    return parser


def _require_log_file(parser: ArgumentParser, config) -> str:
    if not config.log_file:
        parser.error("a log file is required (argument, GAMELOG_FILE, or log_file in config)")
    return config.log_file


def run_command(parser: ArgumentParser, args) -> int:
    config = load_config(args, load_yaml_config(args.config))
    logging.getLogger().setLevel(config.log_level)

    if args.command == "serve":
        from gamelog.api import create_app
        app = create_app(config)
        logger.info("Serving on %s:%d", config.host, config.port)
        app.run(host=config.host, port=config.port)
        return 0

    path = _require_log_file(parser, config)

    if args.command == "metadata":
        print(format_json(get_log_metadata(path)))
    elif args.command == "count":
        print(format_json(get_line_count(path)))
    elif args.command == "suffix":
        print(format_json(read_log_lines_from(path, args.from_line)))
    elif args.command == "update":
        update = read_log_update(
            path,
            args.from_line,
            extract_player_name=not args.no_player_name,
            extract_patterns=config.extract_patterns and not args.no_patterns,
        )
        formatter = get_formatter(args.output, args.color)
        print(formatter(update))
    elif args.command == "follow":
        _follow(path, config, args.color)
    return 0


def _follow(path: str, config, color: bool) -> None:
    stop = threading.Event()

    def _shutdown(signum, frame):
        logger.info("Shutdown signal received, stopping...")
        stop.set()

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    def _print_update(update):
        for line in update.new_lines:
            print(format_line(line, color), flush=True)
        if update.patterns:
            logger.info("%d pattern(s) seen in this poll", len(update.patterns))

    follower = LogFollower(
        path,
        on_update=_print_update,
        on_player_change=lambda name: logger.info("Player: %s", name),
        extract_patterns=config.extract_patterns,
    )
    follow(follower, config.poll_interval, stop)


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [GAMELOG] %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    parser = build_parser()
    args = parser.parse_args()
    try:
        return run_command(parser, args)
    except LogReadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
