"""Conversion of Discord ``MESSAGE_CREATE`` payloads into message events."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .models import MessageAuthor, MessageEvent
from .types import MessageCreateContext
from .utils import normalize_id


def message_event_from_context(
    context: MessageCreateContext | Mapping[str, object],
) -> MessageEvent:
    """Build a :class:`MessageEvent` from a ``MESSAGE_CREATE`` context.

    Missing fields are treated as empty. A missing ``bot`` flag on the author
    is reported as ``False``; use :func:`has_bot_flag` to tell the cases apart.
    """

    message = _mapping(context.get("message"))
    author = _mapping(message.get("author"))

    channel_id = normalize_id(context.get("channelId")) or normalize_id(
        message.get("channel_id")
    )
    guild_id = normalize_id(context.get("guildId")) or normalize_id(message.get("guild_id"))

    mentions: set[str] = set()
    for mention in message.get("mentions") or ():
        if not isinstance(mention, Mapping):
            continue
        mention_id = normalize_id(mention.get("id"))
        if mention_id:
            mentions.add(mention_id)

    return MessageEvent(
        message_id=normalize_id(message.get("id")) or "",
        channel_id=channel_id or "",
        guild_id=guild_id,
        author=_author(author),
        content=str(message.get("content") or ""),
        mentioned_user_ids=frozenset(mentions),
        is_push_notification=bool(context.get("isPushNotification")),
    )


def has_bot_flag(
    context: MessageCreateContext | Mapping[str, object],
) -> bool:
    author = _mapping(_mapping(context.get("message")).get("author"))
    return "bot" in author


def _author(raw: Mapping[str, Any]) -> MessageAuthor:
    avatar = raw.get("avatar")
    return MessageAuthor(
        id=normalize_id(raw.get("id")) or "",
        username=str(raw.get("username") or ""),
        discriminator=str(raw.get("discriminator") or "0"),
        avatar=str(avatar) if avatar else None,
        is_bot=bool(raw.get("bot")),
    )


def _mapping(value: object) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    return {}
