"""Data models shared by the filter engine and the notification dispatcher."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum


class NotificationMode(str, Enum):
    """Which notification surfaces fire for a match."""

    IN_APP = "inApp"
    DESKTOP = "desktop"
    BOTH = "both"

    @property
    def wants_notice(self) -> bool:
        return self in (NotificationMode.IN_APP, NotificationMode.BOTH)

    @property
    def wants_desktop(self) -> bool:
        return self in (NotificationMode.DESKTOP, NotificationMode.BOTH)


class ListScope(str, Enum):
    """What an allow or deny list is checked against."""

    NONE = "none"
    GUILDS = "guilds"
    CHANNELS = "channels"
    GUILDS_AND_CHANNELS = "guildsAndChannels"
    GUILDS_OR_CHANNELS = "guildsOrChannels"

    @classmethod
    def from_sets(
        cls,
        guilds: frozenset[str],
        channels: frozenset[str],
        *,
        combined: ListScope | None = None,
    ) -> ListScope:
        """Pick the scope covering every non-empty list.

        ``combined`` is the scope used when both lists are set.
        """

        if guilds and channels:
            return combined or cls.GUILDS_AND_CHANNELS
        if guilds:
            return cls.GUILDS
        if channels:
            return cls.CHANNELS
        return cls.NONE


@dataclass(frozen=True, slots=True)
class ScopedList:
    """Guild and channel IDs plus the scope they are checked with."""

    scope: ListScope = ListScope.NONE
    guilds: frozenset[str] = frozenset()
    channels: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True)
class RuleSet:
    """User settings resolved for a single evaluation."""

    keywords: tuple[str, ...] = ()
    notification_mode: NotificationMode = NotificationMode.BOTH
    allow: ScopedList = field(default_factory=ScopedList)
    deny: ScopedList = field(default_factory=ScopedList)
    ignored_users: frozenset[str] = frozenset()
    ignore_bots: bool = False
    ignore_self_mentions: bool = True


@dataclass(frozen=True, slots=True)
class MessageAuthor:
    id: str
    username: str = ""
    discriminator: str = "0"
    avatar: str | None = None
    is_bot: bool = False


@dataclass(frozen=True, slots=True)
class MessageEvent:
    """Subset of a ``MESSAGE_CREATE`` event used for keyword matching."""

    message_id: str
    channel_id: str
    guild_id: str | None
    author: MessageAuthor
    content: str = ""
    mentioned_user_ids: frozenset[str] = frozenset()
    is_push_notification: bool = False


@dataclass(frozen=True, slots=True)
class Suppressed:
    """The event produced no notification; ``reason`` is for logging only."""

    reason: str

    @property
    def matched(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class KeywordMatch:
    """First keyword found in a message plus what the notifiers need."""

    keyword: str
    guild_id: str
    channel_id: str
    message_id: str
    content: str
    author: MessageAuthor

    @property
    def matched(self) -> bool:
        return True


MatchResult = Suppressed | KeywordMatch


@dataclass(frozen=True, slots=True)
class NavigationTarget:
    guild_id: str
    channel_id: str
    message_id: str

    @property
    def path(self) -> str:
        return f"/channels/{self.guild_id}/{self.channel_id}/{self.message_id}"


@dataclass(frozen=True, slots=True)
class DesktopNotification:
    """Payload handed to the desktop notifier."""

    title: str
    body: str
    icon: str
    on_click: Callable[[], None] = field(compare=False, repr=False)
