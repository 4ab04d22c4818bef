import argparse
import logging
import sys
import time
from os import getenv
from typing import Optional, Sequence

import colorama
from colorama import Fore, Style

from .clipboard import select_clipboard
from .config import SecretStore, config_path
from .exceptions import ClipboardError, ConfigError, DecodeError, UnknownIdentityError
from .totp import TOTP

log = logging.getLogger(__name__)

EPILOG = """\
Examples:
  %(prog)s user_1              # Print code and copy to clipboard
  %(prog)s user_1 --quiet      # Only copy to clipboard (silent)
  %(prog)s user_1 --no-copy    # Only print, don't copy
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="totp",
        description="Generate a TOTP code for a user and copy it to the clipboard.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("user_id", nargs="?", help="User to generate a code for (case insensitive)")
    parser.add_argument("--no-copy", action="store_true", help="Don't copy to clipboard")
    parser.add_argument("--quiet", action="store_true", help="Only copy to clipboard, don't print to stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Also show how long the code stays valid")
    parser.add_argument("--config", metavar="PATH", help="Secrets file (default: $TOTP_CONFIG or ~/.totp_config.json)")
    parser.add_argument("--list", action="store_true", help="List configured users and exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def setup_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def warn(message: str) -> None:
    print(f"{Fore.YELLOW}Warning:{Style.RESET_ALL} {message}", file=sys.stderr)


def error(message: str) -> None:
    print(f"{Fore.RED}Error:{Style.RESET_ALL} {message}", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    colorama.init(autoreset=True)
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.debug)

    if not args.user_id and not args.list:
        parser.print_usage(sys.stderr)
        error("a user id is required")
        return 1

    path = args.config or config_path()
    try:
        store = SecretStore.from_file(path)
    except ConfigError as e:
        error(e.message)
        return 1

    if args.list:
        for identity in store.identities():
            print(identity)
        return 0

    try:
        secret = store.lookup(args.user_id)
    except UnknownIdentityError as e:
        error(f"User '{e.identifier}' not found in config file at {path}")
        if e.available:
            error(f"Available users: {', '.join(e.available)}")
        return 1

    totp = TOTP(secret)
    now = time.time()
    try:
        code = totp.at(now)
    except DecodeError as e:
        error(f"Error generating TOTP: {e.message}")
        error("Make sure the secret is a valid base32 string")
        return 1

    copied = False
    if not args.no_copy:
        try:
            select_clipboard().write(code)
            copied = True
        except ClipboardError as e:
            log.debug("Clipboard write failed", exc_info=True)
            if not args.quiet:
                warn(f"Could not copy to clipboard: {e.message}")

    if not args.quiet:
        print(f"User      : {args.user_id.lower()}")
        print(f"TOTP Code : {Fore.GREEN}{code}{Style.RESET_ALL}")
        if args.verbose:
            print(f"Expires in: {totp.remaining(now)}s")
        if copied:
            print("Copied to clipboard")
    return 0


if __name__ == "__main__":
    sys.exit(main())
