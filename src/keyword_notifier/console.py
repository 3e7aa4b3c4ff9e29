"""Console implementations of the host collaborators."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .config import HostConfig
from .config_store import ConfigStore
from .models import DesktopNotification, KeywordMatch
from .plugin import KeywordNotifier

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class StaticSession:
    """Fixed current user and viewed channel."""

    user_id: str | None = None
    channel_id: str | None = None

    def current_user_id(self) -> str | None:
        return self.user_id

    def current_channel_id(self) -> str | None:
        return self.channel_id


class ConsoleNotices:
    """Keeps a stack of notices and logs each one as it is shown."""

    def __init__(self) -> None:
        self._stack: list[tuple[str, str, Callable[[], None]]] = []

    def show_notice(self, text: str, button_text: str, on_click: Callable[[], None]) -> None:
        self._stack.append((text, button_text, on_click))
        logger.info("[notice] %s (%s)", text, button_text)

    def pop_notice(self) -> None:
        if self._stack:
            self._stack.pop()

    def __len__(self) -> int:
        return len(self._stack)


class ConsoleDesktop:
    def show_notification(self, notification: DesktopNotification) -> None:
        logger.info(
            "[desktop] %s: %s (icon %s)",
            notification.title,
            notification.body,
            notification.icon,
        )


class ConsoleNavigator:
    def __init__(self) -> None:
        self.history: list[str] = []

    def transition_to(self, path: str) -> None:
        self.history.append(path)
        logger.info("[navigate] %s", path)


def build_console_notifier(config: HostConfig, store: ConfigStore) -> KeywordNotifier:
    for key, value in config.settings.items():
        store.set_setting(key, value)

    session = StaticSession(config.current_user_id, config.current_channel_id)
    return KeywordNotifier(
        settings=store,
        identity=session,
        location=session,
        directory=config.directory,
        notices=ConsoleNotices(),
        desktop=ConsoleDesktop(),
        navigator=ConsoleNavigator(),
    )


def replay_events(notifier: KeywordNotifier, lines: Iterable[str]) -> int:
    """Feed JSON encoded ``MESSAGE_CREATE`` contexts to ``notifier``.

    Returns the number of events that matched a keyword. Blank lines are
    skipped; lines that are not JSON objects are logged and skipped.
    """

    matched = 0
    for number, line in enumerate(lines, start=1):
        text = line.strip()
        if not text:
            continue
        try:
            context = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("Skipping line %d: invalid JSON (%s)", number, exc)
            continue
        if not isinstance(context, dict):
            logger.warning("Skipping line %d: expected a JSON object", number)
            continue
        if isinstance(notifier.on_message_create(context), KeywordMatch):
            matched += 1
    return matched
