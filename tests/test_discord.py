from __future__ import annotations

from keyword_notifier.discord import has_bot_flag, message_event_from_context


def test_context_conversion() -> None:
    context = {
        "channelId": "20",
        "guildId": 10,
        "isPushNotification": False,
        "optimistic": False,
        "type": "MESSAGE_CREATE",
        "message": {
            "id": "30",
            "content": "Ship it",
            "author": {
                "id": 2,
                "username": "alice",
                "discriminator": "0",
                "avatar": "abc",
                "bot": True,
            },
            "mentions": [{"id": "1"}, {"id": " "}, "garbage"],
        },
    }

    event = message_event_from_context(context)

    assert event.message_id == "30"
    assert event.channel_id == "20"
    assert event.guild_id == "10"
    assert event.content == "Ship it"
    assert event.author.id == "2"
    assert event.author.avatar == "abc"
    assert event.author.is_bot is True
    assert event.mentioned_user_ids == frozenset({"1"})
    assert event.is_push_notification is False
    assert has_bot_flag(context) is True


def test_missing_fields_are_empty() -> None:
    event = message_event_from_context({"channelId": "20", "guildId": None})

    assert event.guild_id is None
    assert event.message_id == ""
    assert event.content == ""
    assert event.author.id == ""
    assert event.author.discriminator == "0"
    assert event.author.avatar is None
    assert event.mentioned_user_ids == frozenset()
    assert has_bot_flag({"message": {"author": {"id": "2"}}}) is False


def test_ids_fall_back_to_message_payload() -> None:
    event = message_event_from_context(
        {"message": {"id": "1", "channel_id": "5", "guild_id": "6", "author": {"id": "2"}}}
    )

    assert (event.guild_id, event.channel_id) == ("6", "5")
