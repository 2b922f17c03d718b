"""Application entry point for the chat log."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace

from devchat import __version__
from devchat.core.config import Config
from devchat.core.exceptions import ConfigError, DevChatError
from devchat.core.logger import get_logger, session_log_path, setup_logging


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="devchat",
        description="Bounded in-memory chat log used as a scratch channel",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  devchat                      # Interactive session
  devchat hello world          # Append messages and print the log
  devchat --clear              # Issue the clear control command
  devchat --debug hello        # Verbose logging
        """,
    )

    parser.add_argument(
        "messages",
        nargs="*",
        help="Messages to append (if omitted, enters interactive mode)",
    )

    parser.add_argument(
        "--clear",
        action="store_true",
        help="Issue the clear control command and exit",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"devchat {__version__}",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Configure the application and dispatch to the selected mode."""
    args = _parse_args(argv)

    try:
        config = Config.load()
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        raise SystemExit(exc.errno) from exc

    if args.debug:
        config = replace(config, log_level="DEBUG")

    setup_logging(config.log_level, log_dir=config.log_dir)
    logger = get_logger(__name__)
    logger.debug("Config: %s, log=%s", dict(config.as_dict()), session_log_path() or "console-only")

    if args.clear:
        from devchat.device import ChatDevice
        from interface.clear import clear_device

        raise SystemExit(clear_device(ChatDevice.load(config)))

    from interface.cli import run, run_single_command

    try:
        if args.messages:
            raise SystemExit(run_single_command(config, args.messages))
        run(config)
    except DevChatError as exc:
        logger.error("Chat device error: %s", exc)
        print(f"Chat device error: {exc}", file=sys.stderr)
        raise SystemExit(exc.errno) from exc


if __name__ == "__main__":
    main()
