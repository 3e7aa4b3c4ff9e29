"""Message handler that ties settings, filtering and notifications together."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from .discord import has_bot_flag, message_event_from_context
from .filters import FilterEngine
from .models import KeywordMatch, MatchResult, MessageEvent, Suppressed
from .notifications import (
    DesktopNotifier,
    Directory,
    Navigator,
    NoticeRenderer,
    NotificationDispatcher,
)
from .settings import SettingsReader, load_rule_set
from .structured_logging import log_event
from .types import MessageCreateContext

logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    def current_user_id(self) -> str | None: ...


class LocationProvider(Protocol):
    def current_channel_id(self) -> str | None: ...


class KeywordNotifier:
    """Handle ``MESSAGE_CREATE`` events for the host client.

    Settings are re-read for every event so changes apply immediately.
    Handling an event never raises; failures are logged and the event is
    dropped.
    """

    def __init__(
        self,
        *,
        settings: SettingsReader,
        identity: IdentityProvider,
        location: LocationProvider,
        directory: Directory,
        notices: NoticeRenderer,
        desktop: DesktopNotifier,
        navigator: Navigator,
    ):
        self._settings = settings
        self._identity = identity
        self._location = location
        self._directory = directory
        self._engine = FilterEngine()
        self._dispatcher = NotificationDispatcher(
            notices=notices,
            desktop=desktop,
            navigator=navigator,
            directory=directory,
        )

    def on_message_create(self, context: MessageCreateContext) -> MatchResult:
        try:
            return self._handle(context)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Failed to handle message event")
            log_event(
                "event_failed",
                level=logging.ERROR,
                guild_id=_text(context.get("guildId")),
                channel_id=_text(context.get("channelId")),
                message_id=None,
                outcome="failure",
                extra={"error": str(exc)},
            )
            return Suppressed("error")

    def _handle(self, context: MessageCreateContext) -> MatchResult:
        event = message_event_from_context(context)
        rules = load_rule_set(self._settings)

        result = self._engine.evaluate(
            event,
            rules,
            self._identity.current_user_id(),
            self._location.current_channel_id(),
            is_bot=self._bot_resolver(event, context),
        )

        if not isinstance(result, KeywordMatch):
            log_event(
                "message_suppressed",
                level=logging.DEBUG,
                guild_id=event.guild_id,
                channel_id=event.channel_id,
                message_id=event.message_id,
                outcome="skipped",
                extra={"reason": result.reason},
            )
            return result

        log_event(
            "keyword_matched",
            level=logging.INFO,
            guild_id=result.guild_id,
            channel_id=result.channel_id,
            message_id=result.message_id,
            outcome="matched",
            extra={
                "keyword": result.keyword,
                "mode": rules.notification_mode.value,
            },
        )
        self._dispatcher.dispatch(result, rules)
        return result

    def _bot_resolver(
        self, event: MessageEvent, context: MessageCreateContext
    ) -> Callable[[], bool] | None:
        # Payloads without a bot flag fall back to the user directory.
        if has_bot_flag(context) or not event.author.id:
            return None
        author_id = event.author.id
        return lambda: self._directory.is_bot(author_id)


def _text(value: object) -> str | None:
    return None if value is None else str(value)
