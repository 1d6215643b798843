import argparse
import sys
from typing import Callable, Dict

from . import __version__
from .errors import HandlerOpenError
from .handlers import FileHandler, StdIOHandler
from .levels import Severity
from .logger import NO_LINE, UNKNOWN_FILE, Logger
from .registry import get_logger

EMIT_LEVELS = ("debug", "info", "warn", "warn-once", "error")


def _dispatch(logger: Logger) -> Dict[str, Callable[[str, str, int], None]]:
    return {
        "debug": logger.debug,
        "info": logger.info,
        "warn": logger.warn,
        "warn-once": logger.warn_once,
        "error": logger.error,
    }


def cmd_emit(args: argparse.Namespace) -> int:
    try:
        threshold = Severity.parse(args.threshold)
    except ValueError as exc:
        print(f"[sinklog] {exc}", file=sys.stderr)
        return 2
    logger = get_logger(args.name)
    logger.set_level(threshold)
    if not args.quiet:
        logger.add_handler(StdIOHandler(color=args.color))
    if args.log_file:
        try:
            handler = FileHandler(args.log_file)
        except HandlerOpenError as exc:
            print(f"[sinklog] {exc}", file=sys.stderr)
            return 2
        logger.add_handler(handler)
    else:
        handler = None
    try:
        _dispatch(logger)[args.level](args.text, args.file, args.line)
    finally:
        if handler is not None:
            handler.close()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sinklog", description="Emit leveled log records from the shell.")
    # Global --version (argparse will exit 0 before validating subcommands)
    parser.add_argument(
        "--version",
        action="version",
        version=f"sinklog {__version__}",
        help="Show version and exit",
    )
    sub = parser.add_subparsers(dest="cmd")

    emit_parser = sub.add_parser("emit", help="Emit one record to the console and/or a log file")
    emit_parser.add_argument("level", choices=EMIT_LEVELS)
    emit_parser.add_argument("text")
    emit_parser.add_argument("--name", default="cli", help="Logger name (default: cli)")
    emit_parser.add_argument("--file", default=UNKNOWN_FILE, help="Source file hint recorded with the message")
    emit_parser.add_argument("--line", type=int, default=NO_LINE, help="Source line hint recorded with the message")
    emit_parser.add_argument("--log-file", help="Append the record to this file")
    emit_parser.add_argument(
        "--threshold",
        default="debug",
        help="Minimum severity that passes: none, error, warn, info, debug (default: debug)",
    )
    emit_parser.add_argument("--color", action="store_true", help="Colorize console output (requires rich)")
    emit_parser.add_argument("--quiet", action="store_true", help="Do not write to the console")
    emit_parser.set_defaults(func=cmd_emit)

    version_parser = sub.add_parser("version", help="Show version and exit")
    version_parser.set_defaults(func=lambda _: (print(f"sinklog {__version__}"), 0)[1])

    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    if not getattr(args, "cmd", None):  # No subcommand provided
        parser.print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
