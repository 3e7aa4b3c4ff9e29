from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from keyword_notifier.config import DEFAULT_DATABASE, HostConfig


def write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "notifier.yml"
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


def test_from_file_parses_all_sections(tmp_path: Path) -> None:
    path = write_config(
        tmp_path,
        """
        database: data/settings.sqlite
        current_user_id: 111
        current_channel_id: "999"
        settings:
          keywords: [urgent, " deploy ", ""]
          notifications: inApp
          ignoreBots: true
          ignoredUsers: "5, 6"
        directory:
          guilds:
            10: Ops
          channels:
            "20": alerts
          users:
            "7": {bot: true}
            "8": {bot: false}
        """,
    )

    config = HostConfig.from_file(path)

    assert config.database == (tmp_path / "data" / "settings.sqlite").resolve()
    assert config.current_user_id == "111"
    assert config.current_channel_id == "999"
    assert config.settings == {
        "keywords": "urgent,deploy",
        "notifications": "inApp",
        "ignoreBots": "true",
        "ignoredUsers": "5, 6",
    }
    assert config.directory.guild_name("10") == "Ops"
    assert config.directory.channel_name("20") == "alerts"
    assert config.directory.channel_name("21") is None
    assert config.directory.is_bot("7") is True
    assert config.directory.is_bot("8") is False


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    config = HostConfig.from_file(write_config(tmp_path, ""))

    assert config.database == (tmp_path / DEFAULT_DATABASE).resolve()
    assert config.current_user_id is None
    assert config.settings == {}


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        HostConfig.from_file(tmp_path / "absent.yml")


@pytest.mark.parametrize(
    "body",
    [
        "- just\n- a list\n",
        "settings: [1, 2]\n",
        "settings:\n  volume: 11\n",
        "settings:\n  notifications: popup\n",
        "directory:\n  guilds: [1]\n",
        "key: [unclosed\n",
    ],
)
def test_invalid_files_raise_value_error(tmp_path: Path, body: str) -> None:
    with pytest.raises(ValueError):
        HostConfig.from_file(write_config(tmp_path, body))
