"""Miscellaneous helpers."""

from __future__ import annotations

from collections.abc import Iterable

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def split_list_setting(value: str | None) -> tuple[str, ...]:
    """Return the trimmed, non-empty entries of a comma-separated setting."""

    if not value:
        return ()
    return tuple(entry for entry in (part.strip() for part in value.split(",")) if entry)


def parse_id_set(value: str | None) -> frozenset[str]:
    return frozenset(split_list_setting(value))


def parse_keywords(value: str | None) -> tuple[str, ...]:
    """Lowercase keywords in configured order, duplicates removed."""

    return tuple(dict.fromkeys(entry.lower() for entry in split_list_setting(value)))


def join_list_setting(values: Iterable[object]) -> str:
    return ",".join(
        text for text in (str(value).strip() for value in values if value is not None) if text
    )


def coerce_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return None


def parse_bool(value: str | None, default: bool) -> bool:
    parsed = coerce_bool(value)
    return default if parsed is None else parsed


def normalize_id(value: object) -> str | None:
    """Return an identifier as a stripped string, or ``None`` when blank."""

    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    return text or None
