import sys
import argparse

from .config import APP_TITLE, Settings
from .errors import InvalidConfiguration
from .logging_setup import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="blink-twenty", description=f"{APP_TITLE} eye-rest reminder")
    parser.add_argument("--fast", action="store_true", help="Use short intervals for testing")
    parser.add_argument("--allow-skip", action="store_true", help="Offer a Skip button on the rest prompt")
    parser.add_argument("--language", default=None, help="Message language, e.g. en or zh_CN")
    parser.add_argument(
        "--watch",
        default="",
        help="Comma-separated work apps that count as focused, e.g. \"code.exe, pycharm*\"",
    )
    parser.add_argument("--interval-min", type=float, default=None, help="Work interval in minutes")
    parser.add_argument("--rest-sec", type=float, default=None, help="Rest length in seconds")
    parser.add_argument("--reset-min", type=float, default=None, help="Absence that restarts the cycle, minutes")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.from_args(args)
    except InvalidConfiguration as e:
        setup_logger().error(f"Invalid configuration: {e}")
        print(f"{APP_TITLE}: invalid configuration: {e}", file=sys.stderr)
        return 2

    from .app import BlinkTwentyApp

    BlinkTwentyApp(settings, watch_patterns=args.watch).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
