import os
from dataclasses import dataclass, field
from datetime import time, timezone
from typing import List, Mapping, Optional

from dotenv import load_dotenv

from reactors_bot.constants import LeaderboardConstants, ScheduleConstants
from reactors_bot.utils.leaderboard_exceptions import ConfigurationError


def _parse_int(env: Mapping[str, str], key: str, default: int, errors: List[str]) -> int:
    raw = env.get(key, '')
    if not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        errors.append(f"{key} (expected integer, got {raw!r})")
        return default


def _parse_post_time(raw: str, errors: List[str]) -> time:
    try:
        hours, minutes = raw.strip().split(':')
        return time(hour=int(hours), minute=int(minutes), tzinfo=timezone.utc)
    except ValueError:
        errors.append(f"LEADERBOARD_POST_TIME (expected HH:MM, got {raw!r})")
        return ScheduleConstants.DEFAULT_POST_TIME


@dataclass(frozen=True)
class Config:
    """Bot configuration, built once at startup and passed down explicitly"""

    # Discord settings
    discord_token: str = ''
    source_channel_id: int = 0
    post_channel_id: int = 0
    owner_discord_id: int = 0
    discord_guild_id: int = 0
    discord_guild_ids: str = ''  # Comma-separated for multi-guild support

    # Bot settings
    command_prefix: str = '!'
    debug: bool = False

    # Leaderboard settings
    leaderboard_size: int = LeaderboardConstants.DEFAULT_SIZE
    post_weekday: int = ScheduleConstants.DEFAULT_POST_WEEKDAY  # 0 = Monday
    post_time: time = ScheduleConstants.DEFAULT_POST_TIME
    cooldown_seconds: int = 60

    # Problems found while parsing, reported by validate()
    parse_errors: tuple = field(default=(), compare=False, repr=False)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'Config':
        """Build configuration from the environment (and .env when env is not given)"""
        if env is None:
            load_dotenv()
            env = os.environ

        errors: List[str] = []
        return cls(
            discord_token=env.get('DISCORD_TOKEN', ''),
            source_channel_id=_parse_int(env, 'SOURCE_CHANNEL_ID', 0, errors),
            post_channel_id=_parse_int(env, 'POST_CHANNEL_ID', 0, errors),
            owner_discord_id=_parse_int(env, 'OWNER_DISCORD_ID', 0, errors),
            discord_guild_id=_parse_int(env, 'DISCORD_GUILD_ID', 0, errors),
            discord_guild_ids=env.get('DISCORD_GUILD_IDS', ''),
            command_prefix=env.get('COMMAND_PREFIX', '!'),
            debug=env.get('DEBUG', 'False').lower() == 'true',
            leaderboard_size=_parse_int(env, 'LEADERBOARD_SIZE', LeaderboardConstants.DEFAULT_SIZE, errors),
            post_weekday=_parse_int(env, 'LEADERBOARD_POST_WEEKDAY', ScheduleConstants.DEFAULT_POST_WEEKDAY, errors),
            post_time=_parse_post_time(env.get('LEADERBOARD_POST_TIME', '09:00'), errors),
            cooldown_seconds=_parse_int(env, 'LEADERBOARD_COOLDOWN_SECONDS', 60, errors),
            parse_errors=tuple(errors),
        )

    def get_guild_ids(self) -> List[int]:
        """Get list of guild IDs for command syncing"""
        if self.discord_guild_ids:
            # Multi-guild support: comma-separated IDs
            try:
                return [int(guild_id.strip()) for guild_id in self.discord_guild_ids.split(',') if guild_id.strip()]
            except ValueError:
                raise ConfigurationError(["DISCORD_GUILD_IDS (must be comma-separated integers)"])
        elif self.discord_guild_id:
            return [self.discord_guild_id]
        else:
            # Global sync
            return []

    def validate(self) -> None:
        """Validate that required configuration is present"""
        problems = list(self.parse_errors)
        if not self.discord_token:
            problems.append("DISCORD_TOKEN")
        if not self.source_channel_id:
            problems.append("SOURCE_CHANNEL_ID")
        if not self.post_channel_id:
            problems.append("POST_CHANNEL_ID")
        if not self.owner_discord_id:
            problems.append("OWNER_DISCORD_ID")
        if not 0 <= self.post_weekday <= 6:
            problems.append("LEADERBOARD_POST_WEEKDAY (must be 0-6)")
        if self.leaderboard_size <= 0:
            problems.append("LEADERBOARD_SIZE (must be positive)")
        if problems:
            raise ConfigurationError(problems)
        self.get_guild_ids()
