"""Decide whether a message event should raise a keyword notification."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Final

from .models import (
    KeywordMatch,
    ListScope,
    MatchResult,
    MessageEvent,
    RuleSet,
    ScopedList,
    Suppressed,
)

Combinator = Callable[[bool, bool], bool]

# With both lists in scope, allow lists pass when either the guild or the
# channel is listed, while deny lists only suppress when both are listed.
ALLOW_COMBINATORS: Final[Mapping[ListScope, Combinator]] = {
    ListScope.GUILDS: lambda guild, channel: guild,
    ListScope.CHANNELS: lambda guild, channel: channel,
    ListScope.GUILDS_AND_CHANNELS: lambda guild, channel: guild or channel,
    ListScope.GUILDS_OR_CHANNELS: lambda guild, channel: guild or channel,
}
DENY_COMBINATORS: Final[Mapping[ListScope, Combinator]] = {
    ListScope.GUILDS: lambda guild, channel: guild,
    ListScope.CHANNELS: lambda guild, channel: channel,
    ListScope.GUILDS_AND_CHANNELS: lambda guild, channel: guild and channel,
    ListScope.GUILDS_OR_CHANNELS: lambda guild, channel: guild or channel,
}


class FilterEngine:
    """Evaluate message events against a rule set.

    The engine holds no state; the same inputs always give the same result.
    """

    def evaluate(
        self,
        event: MessageEvent,
        rules: RuleSet,
        current_user_id: str | None,
        current_channel_id: str | None,
        *,
        is_bot: Callable[[], bool] | None = None,
    ) -> MatchResult:
        """Return the first matching keyword or the reason the event was dropped.

        ``is_bot`` resolves the author's bot flag on demand; it is only called
        when every earlier check has passed and bots are ignored.
        """

        guild_id = event.guild_id
        if not guild_id:
            return Suppressed("direct_message")

        reason = (
            _check_origin(event, rules, current_user_id, current_channel_id)
            or _check_locations(event, guild_id, rules)
            or _check_author(event, rules, is_bot)
        )
        if reason is not None:
            return Suppressed(reason)

        keyword = find_keyword(event.content, rules.keywords)
        if keyword is None:
            return Suppressed("no_keyword")

        return KeywordMatch(
            keyword=keyword,
            guild_id=guild_id,
            channel_id=event.channel_id,
            message_id=event.message_id,
            content=event.content,
            author=event.author,
        )


def evaluate(
    event: MessageEvent,
    rules: RuleSet,
    current_user_id: str | None,
    current_channel_id: str | None,
) -> MatchResult:
    return _ENGINE.evaluate(event, rules, current_user_id, current_channel_id)


def find_keyword(content: str, keywords: tuple[str, ...]) -> str | None:
    """Return the first keyword, in configured order, contained in ``content``."""

    if not content:
        return None
    lowered = content.lower()
    for keyword in keywords:
        if keyword and keyword in lowered:
            return keyword
    return None


def allow_list_passes(allow: ScopedList, guild_id: str, channel_id: str) -> bool:
    combinator = ALLOW_COMBINATORS.get(allow.scope)
    if combinator is None:
        return True
    return combinator(guild_id in allow.guilds, channel_id in allow.channels)


def deny_list_blocks(deny: ScopedList, guild_id: str, channel_id: str) -> bool:
    combinator = DENY_COMBINATORS.get(deny.scope)
    if combinator is None:
        return False
    return combinator(guild_id in deny.guilds, channel_id in deny.channels)


def _check_origin(
    event: MessageEvent,
    rules: RuleSet,
    current_user_id: str | None,
    current_channel_id: str | None,
) -> str | None:
    if event.is_push_notification:
        return "push_notification"
    if current_user_id:
        if rules.ignore_self_mentions and current_user_id in event.mentioned_user_ids:
            return "self_mention"
        if event.author.id == current_user_id:
            return "own_message"
    if current_channel_id and event.channel_id == current_channel_id:
        return "channel_in_view"
    return None


def _check_locations(event: MessageEvent, guild_id: str, rules: RuleSet) -> str | None:
    if not allow_list_passes(rules.allow, guild_id, event.channel_id):
        return "not_allowed"
    if deny_list_blocks(rules.deny, guild_id, event.channel_id):
        return "denied"
    return None


def _check_author(
    event: MessageEvent, rules: RuleSet, is_bot: Callable[[], bool] | None
) -> str | None:
    if event.author.id in rules.ignored_users:
        return "ignored_user"
    if rules.ignore_bots and (is_bot() if is_bot is not None else event.author.is_bot):
        return "bot_author"
    return None


_ENGINE = FilterEngine()
