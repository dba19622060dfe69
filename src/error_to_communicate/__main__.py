"""Entry point for running a Python script under error-to-communicate.

This module provides the command line interface. It handles:
- Configuration loading
- Logging setup
- Running the script with runpy, as ``python script.py`` would
- Rendering any uncaught exception as an annotated report
"""

import argparse
import runpy
import sys
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING

import structlog

from error_to_communicate._version import __version__
from error_to_communicate.utils.logging import LogEventNames, bind_context

if TYPE_CHECKING:
    from error_to_communicate.core.reporter import Reporter

log = structlog.get_logger()


def setup_logging(debug: bool = False, log_format: str = "console") -> None:
    """Configure structured logging.

    Args:
        debug: Enable debug logging if True
        log_format: Output format ("json" or "console")
    """
    from error_to_communicate.utils.logging import LogFormat, LogLevel, configure_logging

    level = LogLevel.DEBUG if debug else LogLevel.WARNING
    configure_logging(level=level, log_format=LogFormat(log_format.lower()))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        prog="error-to-communicate",
        description="Run a Python script and explain any exception it raises",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: .error_to_communicate.yaml if present)",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Render the report without colours",
    )

    parser.add_argument("script", type=Path, help="Python script to run")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Arguments for the script")

    return parser.parse_args(argv)


def script_traceback(exception: BaseException, script: Path) -> TracebackType | None:
    """Drop the runner's own frames from the front of the traceback.

    Returns:
        The traceback starting at the script's first frame, or the whole
        traceback if the script never ran (e.g. it failed to compile)
    """
    tb = exception.__traceback__
    while tb is not None:
        if Path(tb.tb_frame.f_code.co_filename).resolve() == script:
            return tb
        tb = tb.tb_next
    return exception.__traceback__


def exit_status(exit_code: object) -> int:
    """Translate a SystemExit code the way the interpreter does."""
    if exit_code is None:
        return 0
    if isinstance(exit_code, int):
        return exit_code
    print(exit_code, file=sys.stderr)
    return 1


def run_script(script: Path, args: list[str], reporter: "Reporter") -> int:
    """Run ``script`` as ``__main__`` and report what it raises.

    Args:
        script: Path to the script
        args: Arguments visible to the script as sys.argv[1:]
        reporter: Reporter for uncaught exceptions

    Returns:
        Exit code (1 if an exception was reported)
    """
    script = script.resolve()
    # runpy never registers the script in sys.modules
    reporter.classifier.add_loaded_file(script)
    sys.argv = [str(script), *args]
    sys.path.insert(0, str(script.parent))
    log.debug(LogEventNames.SCRIPT_STARTING, script=str(script))

    try:
        runpy.run_path(str(script), run_name="__main__")
    except SystemExit as e:
        if reporter.report(e, script_traceback(e, script)):
            return 1
        log.debug(LogEventNames.SCRIPT_EXITED, code=e.code)
        return exit_status(e.code)
    except KeyboardInterrupt:
        raise
    except BaseException as e:
        if reporter.report(e, script_traceback(e, script)):
            return 1
        raise

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_format=args.format)

    from error_to_communicate.config.loader import load_config, load_default_config
    from error_to_communicate.core.classifier import Classifier
    from error_to_communicate.core.reporter import Reporter

    try:
        config = load_config(args.config) if args.config else load_default_config()
    except FileNotFoundError as e:
        log.error(LogEventNames.CONFIGURATION_FILE_NOT_FOUND, path=str(args.config), error=str(e))
        return 2
    except ValueError as e:
        log.error(LogEventNames.CONFIGURATION_INVALID, error=str(e))
        return 2

    if not args.debug:
        from error_to_communicate.utils.logging import configure_logging

        configure_logging(
            level=config.logging.level,
            log_format=config.logging.format,
            file_path=config.logging.file.path if config.logging.file.enabled else None,
            file_enabled=config.logging.file.enabled,
        )

    if args.no_color:
        config.theme.color = False

    if not args.script.is_file():
        log.error(LogEventNames.SCRIPT_NOT_FOUND, path=str(args.script))
        return 2

    bind_context(script=str(args.script))
    reporter = Reporter(Classifier.from_config(config))
    try:
        return run_script(args.script, args.args, reporter)
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
