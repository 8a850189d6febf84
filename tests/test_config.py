"""Tests for configuration loading and validation."""

from datetime import time, timezone

import pytest

from reactors_bot.config import Config
from reactors_bot.utils.leaderboard_exceptions import ConfigurationError

VALID_ENV = {
    "DISCORD_TOKEN": "token",
    "SOURCE_CHANNEL_ID": "111",
    "POST_CHANNEL_ID": "222",
    "OWNER_DISCORD_ID": "333",
}


def test_from_env_parses_values():
    config = Config.from_env({
        **VALID_ENV,
        "DISCORD_GUILD_IDS": "1, 2,",
        "DEBUG": "true",
        "LEADERBOARD_SIZE": "5",
        "LEADERBOARD_POST_WEEKDAY": "6",
        "LEADERBOARD_POST_TIME": "18:30",
    })

    config.validate()
    assert config.source_channel_id == 111
    assert config.post_channel_id == 222
    assert config.debug is True
    assert config.leaderboard_size == 5
    assert config.post_weekday == 6
    assert config.post_time == time(18, 30, tzinfo=timezone.utc)
    assert config.get_guild_ids() == [1, 2]


def test_defaults():
    config = Config.from_env(VALID_ENV)

    assert config.command_prefix == "!"
    assert config.debug is False
    assert config.leaderboard_size == 10
    assert config.post_weekday == 0
    assert config.post_time == time(9, 0, tzinfo=timezone.utc)
    assert config.cooldown_seconds == 60
    assert config.get_guild_ids() == []


def test_single_guild_id_used_when_no_list():
    config = Config.from_env({**VALID_ENV, "DISCORD_GUILD_ID": "77"})

    assert config.get_guild_ids() == [77]


def test_missing_required_keys_are_all_reported():
    config = Config.from_env({"DISCORD_TOKEN": "token"})

    with pytest.raises(ConfigurationError) as exc_info:
        config.validate()

    assert exc_info.value.missing == ["SOURCE_CHANNEL_ID", "POST_CHANNEL_ID", "OWNER_DISCORD_ID"]


def test_malformed_values_are_configuration_errors():
    config = Config.from_env({**VALID_ENV, "SOURCE_CHANNEL_ID": "general", "LEADERBOARD_POST_TIME": "noon"})

    with pytest.raises(ConfigurationError) as exc_info:
        config.validate()

    message = str(exc_info.value)
    assert "SOURCE_CHANNEL_ID (expected integer" in message
    assert "LEADERBOARD_POST_TIME" in message


def test_out_of_range_weekday_rejected():
    with pytest.raises(ConfigurationError):
        Config.from_env({**VALID_ENV, "LEADERBOARD_POST_WEEKDAY": "7"}).validate()


def test_bad_guild_list_rejected():
    with pytest.raises(ConfigurationError):
        Config.from_env({**VALID_ENV, "DISCORD_GUILD_IDS": "1,abc"}).validate()
