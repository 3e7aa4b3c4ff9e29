#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from pathlib import Path
from time import perf_counter

ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.append(str(SRC_PATH))

from keyword_notifier.discord import message_event_from_context  # noqa: E402
from keyword_notifier.filters import FilterEngine  # noqa: E402
from keyword_notifier.models import (  # noqa: E402
    DesktopNotification,
    ListScope,
    RuleSet,
    ScopedList,
)
from keyword_notifier.plugin import KeywordNotifier  # noqa: E402


def _make_sample_context(index: int) -> dict[str, object]:
    return {
        "channelId": "456",
        "guildId": "999",
        "isPushNotification": False,
        "message": {
            "id": str(1000 + index),
            "content": "Status update for the release train, nothing is on fire yet",
            "author": {"id": "7", "username": "Reporter", "discriminator": "0", "bot": False},
            "mentions": [{"id": "123"}],
        },
    }


_SETTINGS = {
    "keywords": ",".join(f"keyword{n}" for n in range(50)) + ",fire",
    "allowedGuilds": "999,1000",
    "ignoredChannels": "1,2,3",
}


class _MemorySettings:
    __slots__ = ()

    def get_setting(self, key: str, default: str | None = None) -> str | None:
        return _SETTINGS.get(key, default)


class _Null:
    __slots__ = ()

    def current_user_id(self) -> str | None:
        return "123456"

    def current_channel_id(self) -> str | None:
        return None

    def guild_name(self, guild_id: str) -> str | None:
        return None

    def channel_name(self, channel_id: str) -> str | None:
        return None

    def is_bot(self, user_id: str) -> bool:
        return False

    def show_notice(self, text: str, button_text: str, on_click: Callable[[], None]) -> None:
        return None

    def pop_notice(self) -> None:
        return None

    def show_notification(self, notification: DesktopNotification) -> None:
        return None

    def transition_to(self, path: str) -> None:
        return None


def benchmark_filter(iterations: int) -> None:
    engine = FilterEngine()
    event = message_event_from_context(_make_sample_context(0))
    rules = RuleSet(
        keywords=tuple(_SETTINGS["keywords"].split(",")),
        allow=ScopedList(ListScope.GUILDS, guilds=frozenset({"999", "1000"})),
        deny=ScopedList(ListScope.CHANNELS, channels=frozenset({"1", "2", "3"})),
    )
    start = perf_counter()
    for _ in range(iterations):
        engine.evaluate(event, rules, "123456", None)
    elapsed = perf_counter() - start
    throughput = iterations / elapsed if elapsed else float("inf")
    print(f"filter: {iterations} iterations in {elapsed:.3f}s ({throughput:.1f} msg/s)")


def benchmark_handler(iterations: int) -> None:
    null = _Null()
    notifier = KeywordNotifier(
        settings=_MemorySettings(),
        identity=null,
        location=null,
        directory=null,
        notices=null,
        desktop=null,
        navigator=null,
    )
    start = perf_counter()
    for index in range(iterations):
        notifier.on_message_create(_make_sample_context(index))
    elapsed = perf_counter() - start
    throughput = iterations / elapsed if elapsed else float("inf")
    print(f"handler: {iterations} iterations in {elapsed:.3f}s ({throughput:.1f} msg/s)")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Benchmark the filter engine and the message handler",
    )
    parser.add_argument(
        "--filter-count",
        type=int,
        default=10000,
        help="Number of filter evaluations",
    )
    parser.add_argument(
        "--handler-count",
        type=int,
        default=3000,
        help="Number of handled events",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    benchmark_filter(args.filter_count)
    benchmark_handler(args.handler_count)


if __name__ == "__main__":
    main()
