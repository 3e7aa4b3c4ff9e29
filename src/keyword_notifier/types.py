from __future__ import annotations

from typing import TypedDict


class DiscordUser(TypedDict, total=False):
    id: str
    username: str
    global_name: str
    discriminator: str
    avatar: str | None
    bot: bool


class DiscordMessage(TypedDict, total=False):
    id: str
    channel_id: str
    guild_id: str
    content: str
    author: DiscordUser
    mentions: list[DiscordUser]


class MessageCreateContext(TypedDict, total=False):
    channelId: str
    guildId: str | None
    isPushNotification: bool
    message: DiscordMessage
    optimistic: bool
    type: str
