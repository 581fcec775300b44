"""
CLI entrypoint for the terminal client.
"""

import argparse
import logging

from client.api import ApiClient
from client.app import TerminalApp
from tictactoe.settings import get_client_settings, normalize_log_level


def main(argv=None):
    settings = get_client_settings()

    parser = argparse.ArgumentParser(
        description="Play tic-tac-toe against the computer or another player"
    )
    parser.add_argument(
        "--base-url",
        type=str,
        default=settings.base_url,
        help=f"Game server URL (default: {settings.base_url})"
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=settings.poll_interval_seconds,
        help=f"Seconds between state polls while waiting (default: {settings.poll_interval_seconds})"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level})"
    )

    args = parser.parse_args(argv)
    if args.poll_interval <= 0:
        parser.error("--poll-interval must be positive")
    try:
        log_level = normalize_log_level(args.log_level)
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(level=log_level)

    with ApiClient(args.base_url.rstrip("/"), timeout=settings.timeout_seconds) as api:
        app = TerminalApp(
            api,
            client_name=settings.client_name,
            poll_interval=args.poll_interval,
            wait_prompt_polls=settings.wait_prompt_polls,
        )
        app.run()


if __name__ == "__main__":
    main()
