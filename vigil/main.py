"""Command line entry point for Vigil."""

import argparse
import sys
from pathlib import Path

from vigil.runtime.controller import SessionController

KEYS_HELP = """\
window keys:
  E    extend the session (while a warning is open)
  R    resume after the inactivity warning
  D    dismiss the open warning
  L    sign in again from the expired dialog
  Esc  quit

The session expiry is read from the configured store, so a session saved
by an earlier run continues where it left off. A stored expiry that has
already passed opens the expired dialog on start; use --reset to begin a
new full session instead.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vigil",
        description=(
            "Watch a persisted login session: count down to its expiry, warn "
            "when it is nearly over or the user is idle, renew it on request "
            "and log out when it ends."
        ),
        epilog=KEYS_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config/default.yaml"),
        help="YAML file with session timings, store and refresh backend "
        "(default: config/default.yaml)",
    )
    parser.add_argument(
        "--reset",
        "-r",
        action="store_true",
        help="treat this start as a fresh sign-in: overwrite the stored expiry "
        "(even an expired one) with now plus the full session lifetime",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="store_true",
        help="print the version and exit",
    )
    return parser


def main() -> int:
    """Run the session window.

    Returns:
        Exit code: 0 on a normal quit or logout, 1 on a startup or runtime error.
    """
    args = build_parser().parse_args()

    if args.version:
        from vigil import __version__

        print(f"Vigil v{__version__}")
        return 0

    try:
        controller = SessionController(config_path=args.config)
        if args.reset:
            controller.reset_session()
        controller.start()
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    except Exception as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
