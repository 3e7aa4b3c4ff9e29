from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

from yaml import YAMLError, safe_load

from .settings import SETTINGS
from .utils import join_list_setting, normalize_id

DEFAULT_DATABASE: Final[Path] = Path("keyword_notifier.sqlite")

__all__ = [
    "DEFAULT_DATABASE",
    "DirectoryData",
    "HostConfig",
]


@dataclass(frozen=True, slots=True)
class DirectoryData:
    """Static guild, channel and user details used by the console host."""

    guilds: Mapping[str, str] = field(default_factory=dict)
    channels: Mapping[str, str] = field(default_factory=dict)
    bots: frozenset[str] = frozenset()

    def guild_name(self, guild_id: str) -> str | None:
        return self.guilds.get(guild_id)

    def channel_name(self, channel_id: str) -> str | None:
        return self.channels.get(channel_id)

    def is_bot(self, user_id: str) -> bool:
        return user_id in self.bots


@dataclass(frozen=True, slots=True)
class HostConfig:
    """Configuration of the command line host."""

    database: Path = DEFAULT_DATABASE
    current_user_id: str | None = None
    current_channel_id: str | None = None
    settings: Mapping[str, str] = field(default_factory=dict)
    directory: DirectoryData = field(default_factory=DirectoryData)

    @classmethod
    def from_file(cls, path: Path) -> HostConfig:
        path = path.expanduser()
        data = _load_yaml(path)
        path = path.resolve()

        return cls(
            database=_resolve_database(path, data.get("database")),
            current_user_id=normalize_id(data.get("current_user_id")),
            current_channel_id=normalize_id(data.get("current_channel_id")),
            settings=_parse_settings(data.get("settings")),
            directory=_parse_directory(data.get("directory")),
        )


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open("r", encoding="utf-8") as file:
        try:
            data = safe_load(file) or {}
        except YAMLError as exc:
            raise ValueError(f"Configuration file is not valid YAML: {exc}") from exc

    if not isinstance(data, Mapping):
        raise ValueError("Configuration file must contain a mapping at the top level")
    return dict(data)


def _resolve_database(config_path: Path, raw_value: object) -> Path:
    candidate = Path(str(raw_value)).expanduser() if raw_value else DEFAULT_DATABASE
    if not candidate.is_absolute():
        candidate = (config_path.parent / candidate).resolve()
    return candidate


def _parse_settings(raw: object) -> dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ValueError("Configuration field 'settings' must be a mapping if provided")

    settings: dict[str, str] = {}
    for key, value in raw.items():
        key_text = str(key)
        definition = SETTINGS.get(key_text)
        if definition is None:
            raise ValueError(f"Configuration field 'settings' has unknown key: {key_text}")
        if value is None:
            continue
        if isinstance(value, list):
            text = join_list_setting(value)
        elif isinstance(value, bool):
            text = "true" if value else "false"
        else:
            text = str(value)
        settings[key_text] = definition.validate(text)
    return settings


def _parse_directory(raw: object) -> DirectoryData:
    if raw is None:
        return DirectoryData()
    if not isinstance(raw, Mapping):
        raise ValueError("Configuration field 'directory' must be a mapping if provided")

    users = raw.get("users") or {}
    if not isinstance(users, Mapping):
        raise ValueError("Configuration field 'directory.users' must be a mapping")
    bots = {
        user_id
        for user_id, details in ((normalize_id(key), value) for key, value in users.items())
        if user_id and isinstance(details, Mapping) and details.get("bot")
    }

    return DirectoryData(
        guilds=_name_mapping(raw.get("guilds"), "directory.guilds"),
        channels=_name_mapping(raw.get("channels"), "directory.channels"),
        bots=frozenset(bots),
    )


def _name_mapping(raw: object, field_name: str) -> dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Configuration field '{field_name}' must be a mapping")
    names: dict[str, str] = {}
    for key, value in raw.items():
        identifier = normalize_id(key)
        if identifier is None or value is None:
            continue
        name = str(value).strip()
        if name:
            names[identifier] = name
    return names
