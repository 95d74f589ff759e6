import argparse
import logging

import twitchtui

from twitchtui.config import load_settings
from twitchtui.log import setup_logging
from twitchtui.tui import TwitchApp

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="twitchtui")
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("--version", action="store_true")
    parser.add_argument(
        "--home",
        metavar="PAGE",
        help='home page: personal_section, shelves, "game:<name>" or "search:<query>"',
    )
    parser.add_argument(
        "--quality",
        action="append",
        metavar="QUALITY",
        help="preferred quality, repeat for fallbacks",
    )
    parser.add_argument("--date-format", metavar="FORMAT", help="strftime format for absolute dates")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.version:
        print(f"twitchtui {twitchtui.__version__} ({twitchtui.__file__})")
        return 0

    setup_logging(debug=args.debug)

    settings = load_settings()
    if args.home:
        settings.home_page = args.home
    if args.quality:
        settings.quality = args.quality
    if args.date_format:
        settings.date_format = args.date_format
    logger.debug("settings: %s", settings)

    app = TwitchApp(settings, debug=args.debug)
    app.run()
    return 0
