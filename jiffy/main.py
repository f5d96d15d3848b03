#!/usr/bin/env python3
import argparse
import logging
import sys
import orjson as json
from pathlib import Path
from jiffy.core.log_setup import setup_logging
from jiffy.errors import JiffyError
from jiffy.menu.cache import MenuCache
from jiffy.menu.launcher import format_menu
from jiffy.shared.config_handler import ConfigHandler


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jiffy",
        description="Print the cached application menu for a fuzzy-finder launcher.",
    )
    parser.add_argument(
        "-r", "--refresh", action="store_true", help="Rebuild the application list"
    )
    parser.add_argument(
        "-t",
        "--terminal",
        default=None,
        help="Terminal used for apps with Terminal=true (default: $TERMINAL or config)",
    )
    parser.add_argument(
        "--format",
        choices=("json", "fzf"),
        default="fzf",
        help="json: the cached structure, fzf: NUL-separated finder entries",
    )
    parser.add_argument(
        "--width", type=int, default=80, help="Columns available for the list"
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        help="Plain fzf entries without ANSI styling",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to config.toml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    config_handler = ConfigHandler(config_file=args.config, logger=logger)
    menu_config = config_handler.menu_config(force_refresh=args.refresh)
    try:
        menu = MenuCache(menu_config, logger=logger).get()
    except JiffyError as e:
        logger.error(str(e))
        return 1

    if args.format == "json":
        sys.stdout.buffer.write(json.dumps(menu.to_dict()) + b"\n")
    else:
        terminal = args.terminal or config_handler.terminal
        sys.stdout.write(
            format_menu(menu.apps, terminal, width=args.width, color=args.color)
        )
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
