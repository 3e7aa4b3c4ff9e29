from __future__ import annotations

import pytest

from keyword_notifier.filters import FilterEngine
from keyword_notifier.models import (
    KeywordMatch,
    ListScope,
    MessageAuthor,
    MessageEvent,
    NotificationMode,
    Suppressed,
)
from keyword_notifier.settings import SETTINGS, load_rule_set


def make_event(guild_id: str, channel_id: str) -> MessageEvent:
    return MessageEvent(
        message_id="M",
        channel_id=channel_id,
        guild_id=guild_id,
        author=MessageAuthor(id="U2", username="alice"),
        content="this is urgent",
    )


class DictSettings:
    def __init__(self, **values: str) -> None:
        self.values = values
        self.reads: list[str] = []

    def get_setting(self, key: str, default: str | None = None) -> str | None:
        self.reads.append(key)
        return self.values.get(key, default)


def test_defaults_match_plugin_definition() -> None:
    rule_set = load_rule_set(DictSettings())

    assert rule_set.keywords == ()
    assert rule_set.notification_mode is NotificationMode.BOTH
    assert rule_set.allow.scope is ListScope.NONE
    assert rule_set.deny.scope is ListScope.NONE
    assert rule_set.ignored_users == frozenset()
    assert rule_set.ignore_bots is False
    assert rule_set.ignore_self_mentions is True


def test_lists_are_trimmed_and_blank_entries_dropped() -> None:
    rule_set = load_rule_set(
        DictSettings(
            keywords=" Urgent, ,Deploy ,urgent,",
            allowedGuilds="1, 2 ,,",
            ignoredUsers=" ,  ",
        )
    )

    assert rule_set.keywords == ("urgent", "deploy")
    assert rule_set.allow.guilds == frozenset({"1", "2"})
    assert "" not in rule_set.allow.guilds
    assert rule_set.ignored_users == frozenset()


@pytest.mark.parametrize(
    ("guilds", "channels", "allow_scope", "deny_scope"),
    [
        ("", "", ListScope.NONE, ListScope.NONE),
        ("1", "", ListScope.GUILDS, ListScope.GUILDS),
        ("", "2", ListScope.CHANNELS, ListScope.CHANNELS),
        ("1", "2", ListScope.GUILDS_AND_CHANNELS, ListScope.GUILDS_OR_CHANNELS),
    ],
)
def test_auto_scope_follows_configured_lists(
    guilds: str, channels: str, allow_scope: ListScope, deny_scope: ListScope
) -> None:
    rule_set = load_rule_set(
        DictSettings(
            allowedGuilds=guilds,
            allowedChannels=channels,
            ignoredGuilds=guilds,
            ignoredChannels=channels,
        )
    )

    assert rule_set.allow.scope is allow_scope
    assert rule_set.deny.scope is deny_scope


def test_explicit_scope_overrides_auto() -> None:
    rule_set = load_rule_set(
        DictSettings(allowedGuilds="1", allowedChannels="2", allowScope="channels")
    )

    assert rule_set.allow.scope is ListScope.CHANNELS


def test_auto_deny_scope_suppresses_on_either_list() -> None:
    rule_set = load_rule_set(
        DictSettings(keywords="urgent", ignoredGuilds="G1", ignoredChannels="C5")
    )
    engine = FilterEngine()

    in_ignored_guild = make_event(guild_id="G1", channel_id="C2")
    in_ignored_channel = make_event(guild_id="G2", channel_id="C5")
    elsewhere = make_event(guild_id="G2", channel_id="C2")

    assert engine.evaluate(in_ignored_guild, rule_set, "U1", None) == Suppressed("denied")
    assert engine.evaluate(in_ignored_channel, rule_set, "U1", None) == Suppressed("denied")
    assert isinstance(engine.evaluate(elsewhere, rule_set, "U1", None), KeywordMatch)


def test_explicit_combined_deny_scope_needs_both_lists() -> None:
    rule_set = load_rule_set(
        DictSettings(
            keywords="urgent",
            ignoredGuilds="G1",
            ignoredChannels="C5",
            denyScope="guildsAndChannels",
        )
    )
    engine = FilterEngine()

    assert rule_set.deny.scope is ListScope.GUILDS_AND_CHANNELS
    assert isinstance(
        engine.evaluate(make_event(guild_id="G1", channel_id="C2"), rule_set, "U1", None),
        KeywordMatch,
    )
    assert engine.evaluate(
        make_event(guild_id="G1", channel_id="C5"), rule_set, "U1", None
    ) == Suppressed("denied")


def test_malformed_values_fall_back_to_defaults() -> None:
    rule_set = load_rule_set(
        DictSettings(
            notifications="popup",
            ignoreBots="maybe",
            ignoreMentions="nope",
            denyScope="everything",
            ignoredGuilds="9",
        )
    )

    assert rule_set.notification_mode is NotificationMode.BOTH
    assert rule_set.ignore_bots is False
    assert rule_set.ignore_self_mentions is True
    assert rule_set.deny.scope is ListScope.GUILDS


def test_booleans_and_mode_are_read() -> None:
    rule_set = load_rule_set(
        DictSettings(notifications="desktop", ignoreBots="true", ignoreMentions="false")
    )

    assert rule_set.notification_mode is NotificationMode.DESKTOP
    assert rule_set.ignore_bots is True
    assert rule_set.ignore_self_mentions is False


def test_every_known_setting_is_read() -> None:
    reader = DictSettings()
    load_rule_set(reader)

    assert set(reader.reads) == set(SETTINGS)


def test_definition_validation() -> None:
    assert SETTINGS["ignoreBots"].validate("Yes") == "true"
    assert SETTINGS["notifications"].validate(" inApp ") == "inApp"
    assert SETTINGS["keywords"].validate("a, b") == "a, b"

    with pytest.raises(ValueError):
        SETTINGS["ignoreBots"].validate("sometimes")
    with pytest.raises(ValueError):
        SETTINGS["notifications"].validate("popup")
