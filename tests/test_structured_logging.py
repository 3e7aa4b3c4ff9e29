from __future__ import annotations

import json
import logging

import pytest

from keyword_notifier.structured_logging import NOTIFIER_LOGGER_NAME, log_event


def test_events_use_package_logger(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger=NOTIFIER_LOGGER_NAME):
        log_event(
            "keyword_matched",
            level=logging.INFO,
            guild_id="G",
            channel_id="C",
            message_id="M",
            outcome="matched",
            extra={"keyword": "urgent", "token": "secret"},
        )

    assert NOTIFIER_LOGGER_NAME == "keyword_notifier.events"
    record = caplog.records[-1]
    assert record.name == NOTIFIER_LOGGER_NAME
    payload = json.loads(record.getMessage())
    assert payload["event"] == "keyword_matched"
    assert payload["keyword"] == "urgent"
    assert payload["token"] == "***"


def test_long_values_are_truncated(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger=NOTIFIER_LOGGER_NAME):
        log_event(
            "message_suppressed",
            level=logging.DEBUG,
            guild_id=None,
            channel_id=None,
            message_id=None,
            outcome="skipped",
            extra={"reason": "x" * 600},
        )

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["reason"] == "x" * 512 + "…"
