from __future__ import annotations

import json
import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Final

NOTIFIER_LOGGER_NAME: Final = "keyword_notifier.events"
_REDACT_KEYS: Final = {"token", "authorization"}
_MAX_STRING_LENGTH: Final = 512
_LOGGER = logging.getLogger(NOTIFIER_LOGGER_NAME)


def configure_notifier_logging(level: int) -> None:
    logger = _LOGGER
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def log_event(
    event: str,
    *,
    level: int,
    guild_id: str | None,
    channel_id: str | None,
    message_id: str | None,
    outcome: str | None,
    extra: Mapping[str, Any] | None = None,
) -> None:
    payload: MutableMapping[str, Any] = {
        "event": event,
        "guild_id": guild_id,
        "channel_id": channel_id,
        "message_id": message_id,
        "outcome": outcome,
    }

    if extra:
        for key, value in extra.items():
            if key is None:
                continue
            key_text = str(key)
            lower_key = key_text.lower()
            if lower_key in _REDACT_KEYS:
                payload[key_text] = "***"
                continue
            payload[key_text] = _sanitize_value(value)

    _LOGGER.log(level, json.dumps(payload, ensure_ascii=False, separators=(",", ":")))


def _sanitize_value(value: Any) -> Any:
    if isinstance(value, str):
        if len(value) > _MAX_STRING_LENGTH:
            return f"{value[:_MAX_STRING_LENGTH]}…"
        return value
    if isinstance(value, bool | int | float) or value is None:
        return value
    return str(value)
