from __future__ import annotations

import argparse
import logging
import sqlite3
import sys
from contextlib import closing
from pathlib import Path

from .config import HostConfig
from .config_store import ConfigStore
from .console import build_console_notifier, replay_events
from .structured_logging import configure_notifier_logging, log_event


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Replay Discord message events and report keyword notifications",
    )
    parser.add_argument(
        "--config",
        required=True,
        help="Path to the YAML configuration file",
    )
    parser.add_argument(
        "--events",
        default="-",
        help="JSON lines file with MESSAGE_CREATE contexts ('-' reads stdin)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    log_level = getattr(logging, args.log_level.upper(), logging.INFO)
    logging.basicConfig(level=log_level, format="%(message)s")
    configure_notifier_logging(log_level)

    try:
        config = HostConfig.from_file(Path(args.config))
        with closing(ConfigStore(config.database)) as store:
            notifier = build_console_notifier(config, store)
            if args.events == "-":
                matched = replay_events(notifier, sys.stdin)
            else:
                with Path(args.events).open("r", encoding="utf-8") as events:
                    matched = replay_events(notifier, events)
    except (FileNotFoundError, ValueError, OSError, sqlite3.Error) as exc:
        logging.getLogger(__name__).error("Failed to start notifier: %s", exc)
        log_event(
            "startup_failed",
            level=logging.ERROR,
            guild_id=None,
            channel_id=None,
            message_id=None,
            outcome="failure",
            extra={"reason": str(exc)},
        )
        sys.exit(1)

    logging.getLogger(__name__).info("Replay finished: %d keyword notification(s)", matched)


if __name__ == "__main__":
    main()
