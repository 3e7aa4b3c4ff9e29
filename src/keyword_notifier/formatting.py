"""Text and URL helpers for keyword notifications."""

from __future__ import annotations

from typing import Final

from .models import KeywordMatch, MessageAuthor

CDN_BASE_URL: Final = "https://cdn.discordapp.com"
NOTICE_BUTTON_TEXT: Final = "Go To Message"
UNKNOWN_GUILD: Final = "Unknown Server"
UNKNOWN_CHANNEL: Final = "unknown-channel"

_DEFAULT_DISCRIMINATOR: Final = "0"


def user_tag(username: str, discriminator: str | None) -> str:
    """Return ``name#1234`` for legacy accounts and ``name`` otherwise."""

    if discriminator and discriminator != _DEFAULT_DISCRIMINATOR:
        return f"{username}#{discriminator}"
    return username


def avatar_url(author: MessageAuthor) -> str:
    if author.avatar:
        return f"{CDN_BASE_URL}/avatars/{author.id}/{author.avatar}.png"
    return f"{CDN_BASE_URL}/embed/avatars/{_default_avatar_index(author)}.png"


def _default_avatar_index(author: MessageAuthor) -> int:
    discriminator = author.discriminator or _DEFAULT_DISCRIMINATOR
    if discriminator != _DEFAULT_DISCRIMINATOR and discriminator.isdigit():
        return int(discriminator) % 5
    if author.id.isdigit():
        return (int(author.id) >> 22) % 6
    return 0


def notice_text(match: KeywordMatch, guild_name: str) -> str:
    tag = user_tag(match.author.username, match.author.discriminator)
    return f'@{tag} mentioned "{match.keyword}" in {guild_name}'


def desktop_title(match: KeywordMatch, guild_name: str, channel_name: str) -> str:
    return f"{match.author.username} (#{channel_name}, {guild_name})"
