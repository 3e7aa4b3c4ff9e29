"""Plugin settings and their translation into a :class:`RuleSet`."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final, Literal, Protocol

from .models import ListScope, NotificationMode, RuleSet, ScopedList
from .utils import coerce_bool, parse_bool, parse_id_set, parse_keywords

SettingType = Literal["string", "bool", "select"]

AUTO_SCOPE: Final = "auto"


@dataclass(frozen=True, slots=True)
class SettingDefinition:
    key: str
    type: SettingType
    description: str
    default: str
    options: tuple[str, ...] = ()

    def validate(self, value: str) -> str:
        """Return ``value`` normalised for storage or raise ``ValueError``."""

        if self.type == "bool":
            parsed = coerce_bool(value)
            if parsed is None:
                raise ValueError(f"Setting '{self.key}' expects a boolean, got {value!r}")
            return "true" if parsed else "false"
        if self.type == "select":
            text = value.strip()
            if text not in self.options:
                allowed = ", ".join(self.options)
                raise ValueError(f"Setting '{self.key}' must be one of: {allowed}")
            return text
        return value


_SCOPE_OPTIONS: Final = (AUTO_SCOPE,) + tuple(scope.value for scope in ListScope)

SETTINGS: Final[Mapping[str, SettingDefinition]] = {
    definition.key: definition
    for definition in (
        SettingDefinition(
            "keywords", "string", "Comma-separated list of keywords to watch for", ""
        ),
        SettingDefinition(
            "notifications",
            "select",
            "How to notify you when a keyword is found",
            NotificationMode.BOTH.value,
            tuple(mode.value for mode in NotificationMode),
        ),
        SettingDefinition(
            "allowedGuilds",
            "string",
            "Comma-separated list of guild IDs where to watch for the keywords",
            "",
        ),
        SettingDefinition(
            "allowedChannels",
            "string",
            "Comma-separated list of channel IDs where to watch for the keywords",
            "",
        ),
        SettingDefinition(
            "ignoredGuilds",
            "string",
            "Comma-separated list of guild IDs where to not watch for the keywords",
            "",
        ),
        SettingDefinition(
            "ignoredChannels",
            "string",
            "Comma-separated list of channel IDs where to not watch for the keywords",
            "",
        ),
        SettingDefinition(
            "ignoredUsers", "string", "Comma-separated list of user IDs to ignore", ""
        ),
        SettingDefinition("ignoreBots", "bool", "Ignore messages from bots", "false"),
        SettingDefinition(
            "ignoreMentions", "bool", "Ignore messages that mention you", "true"
        ),
        SettingDefinition(
            "allowScope",
            "select",
            "Which allow lists apply (auto uses every non-empty list)",
            AUTO_SCOPE,
            _SCOPE_OPTIONS,
        ),
        SettingDefinition(
            "denyScope",
            "select",
            "Which ignore lists apply (auto uses every non-empty list)",
            AUTO_SCOPE,
            _SCOPE_OPTIONS,
        ),
    )
}


class SettingsReader(Protocol):
    def get_setting(self, key: str, default: str | None = None) -> str | None:
        """Return the raw stored value for ``key``."""


def load_rule_set(reader: SettingsReader) -> RuleSet:
    """Build a rule set from the current settings.

    Never raises on bad stored values: blank lists become empty sets and
    unknown choices fall back to their defaults.
    """

    allowed_guilds = parse_id_set(_raw(reader, "allowedGuilds"))
    allowed_channels = parse_id_set(_raw(reader, "allowedChannels"))
    denied_guilds = parse_id_set(_raw(reader, "ignoredGuilds"))
    denied_channels = parse_id_set(_raw(reader, "ignoredChannels"))

    return RuleSet(
        keywords=parse_keywords(_raw(reader, "keywords")),
        notification_mode=_notification_mode(_raw(reader, "notifications")),
        allow=ScopedList(
            scope=_scope(_raw(reader, "allowScope"), allowed_guilds, allowed_channels),
            guilds=allowed_guilds,
            channels=allowed_channels,
        ),
        deny=ScopedList(
            scope=_scope(
                _raw(reader, "denyScope"),
                denied_guilds,
                denied_channels,
                # each ignore list suppresses on its own unless set explicitly
                combined=ListScope.GUILDS_OR_CHANNELS,
            ),
            guilds=denied_guilds,
            channels=denied_channels,
        ),
        ignored_users=parse_id_set(_raw(reader, "ignoredUsers")),
        ignore_bots=_flag(reader, "ignoreBots"),
        ignore_self_mentions=_flag(reader, "ignoreMentions"),
    )


def _raw(reader: SettingsReader, key: str) -> str | None:
    return reader.get_setting(key, SETTINGS[key].default)


def _flag(reader: SettingsReader, key: str) -> bool:
    default = SETTINGS[key].default == "true"
    return parse_bool(_raw(reader, key), default)


def _notification_mode(value: str | None) -> NotificationMode:
    try:
        return NotificationMode((value or "").strip())
    except ValueError:
        return NotificationMode.BOTH


def _scope(
    value: str | None,
    guilds: frozenset[str],
    channels: frozenset[str],
    *,
    combined: ListScope | None = None,
) -> ListScope:
    text = (value or "").strip()
    if text and text != AUTO_SCOPE:
        try:
            return ListScope(text)
        except ValueError:
            pass
    return ListScope.from_sets(guilds, channels, combined=combined)
