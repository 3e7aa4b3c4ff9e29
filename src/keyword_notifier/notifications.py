"""Render keyword matches as in-app notices and desktop notifications."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from .formatting import (
    NOTICE_BUTTON_TEXT,
    UNKNOWN_CHANNEL,
    UNKNOWN_GUILD,
    avatar_url,
    desktop_title,
    notice_text,
)
from .models import (
    DesktopNotification,
    KeywordMatch,
    NavigationTarget,
    RuleSet,
)
from .structured_logging import log_event

logger = logging.getLogger(__name__)


class Directory(Protocol):
    def guild_name(self, guild_id: str) -> str | None:
        """Return the display name of a guild, ``None`` when unknown."""

    def channel_name(self, channel_id: str) -> str | None:
        """Return the display name of a channel, ``None`` when unknown."""

    def is_bot(self, user_id: str) -> bool:
        """Return whether the user is known to be a bot."""


class NoticeRenderer(Protocol):
    def show_notice(
        self, text: str, button_text: str, on_click: Callable[[], None]
    ) -> None: ...

    def pop_notice(self) -> None: ...


class DesktopNotifier(Protocol):
    def show_notification(self, notification: DesktopNotification) -> None: ...


class Navigator(Protocol):
    def transition_to(self, path: str) -> None: ...


class NotificationDispatcher:
    """Fire the notification surfaces selected by the notification mode.

    Each surface is delivered independently: a failure while rendering one is
    logged and does not stop the other.
    """

    def __init__(
        self,
        *,
        notices: NoticeRenderer,
        desktop: DesktopNotifier,
        navigator: Navigator,
        directory: Directory,
    ):
        self._notices = notices
        self._desktop = desktop
        self._navigator = navigator
        self._directory = directory

    def dispatch(self, match: KeywordMatch, rules: RuleSet) -> None:
        mode = rules.notification_mode
        target = NavigationTarget(match.guild_id, match.channel_id, match.message_id)

        if mode.wants_notice:
            self._deliver("notice_failed", match, lambda: self._show_notice(match, target))
        if mode.wants_desktop:
            self._deliver("desktop_failed", match, lambda: self._show_desktop(match, target))

    def _show_notice(self, match: KeywordMatch, target: NavigationTarget) -> None:
        def on_click() -> None:
            self._navigator.transition_to(target.path)
            self._notices.pop_notice()

        text = notice_text(match, self._guild_name(match.guild_id))
        self._notices.show_notice(text, NOTICE_BUTTON_TEXT, on_click)

    def _show_desktop(self, match: KeywordMatch, target: NavigationTarget) -> None:
        def on_click() -> None:
            self._navigator.transition_to(target.path)

        notification = DesktopNotification(
            title=desktop_title(
                match,
                self._guild_name(match.guild_id),
                self._channel_name(match.channel_id),
            ),
            body=match.content,
            icon=avatar_url(match.author),
            on_click=on_click,
        )
        self._desktop.show_notification(notification)

    def _deliver(self, failure_event: str, match: KeywordMatch, send: Callable[[], None]) -> None:
        try:
            send()
        except Exception as exc:  # noqa: BLE001
            logger.exception("Failed to render keyword notification")
            log_event(
                failure_event,
                level=logging.ERROR,
                guild_id=match.guild_id,
                channel_id=match.channel_id,
                message_id=match.message_id,
                outcome="failure",
                extra={"keyword": match.keyword, "error": str(exc)},
            )

    def _guild_name(self, guild_id: str) -> str:
        return _lookup(self._directory.guild_name, guild_id) or UNKNOWN_GUILD

    def _channel_name(self, channel_id: str) -> str:
        return _lookup(self._directory.channel_name, channel_id) or UNKNOWN_CHANNEL


def _lookup(resolve: Callable[[str], str | None], identifier: str) -> str | None:
    try:
        name = resolve(identifier)
    except LookupError:
        return None
    except Exception:  # noqa: BLE001
        logger.warning("Directory lookup failed for %s", identifier, exc_info=True)
        return None
    if name is None:
        return None
    return str(name).strip() or None

