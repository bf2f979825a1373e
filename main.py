import curses
import locale
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version

import config_paths
from app_state import initial_state
from contributions_api import ContributionsClient
from errors import ConfigError
from log_setup import configure_logging

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")
from orchestrator import Orchestrator

try:
    __version__ = version("ghcal")
except PackageNotFoundError:
    __version__ = "0.0.0"


logger = logging.getLogger(__name__)

USAGE = (
    "ghcal - GitHub contribution calendar in the terminal\n\n"
    "Usage:\n  ghcal [username]\n  ghcal -v\n  ghcal -h\n\n"
    "Reads GITHUB_TOKEN from the environment or a .env file.\n"
)


def main():
    args = sys.argv[1:]

    if "-v" in args or "-V" in args:
        print(__version__)
        return

    if "-h" in args or "--help" in args:
        print(USAGE)
        return

    try:
        config_paths.ensure_config_dirs()
        config = config_paths.load_config()
        configure_logging(config["LOG_LEVEL"])
        token = config_paths.load_token()
    except (ConfigError, OSError) as e:
        print(f"ghcal: {e}", file=sys.stderr)
        sys.exit(1)

    client = ContributionsClient(
        token, api_url=config["API_URL"], timeout=config["TIMEOUT_SECONDS"]
    )
    username = args[0].strip() if args else ""
    logger.info("Starting ghcal %s", __version__)

    locale.setlocale(locale.LC_ALL, "")

    def curses_main(stdscr):
        state = initial_state(input_buffer=username)
        Orchestrator(stdscr, state, client).run(submit_on_start=bool(username))

    curses.wrapper(curses_main)


if __name__ == "__main__":
    main()
