"""
Bot-wide constants for the Weekly Reactors Leaderboard bot.

Page sizes and window presets used by the scan engine, plus the colors and
markers used when rendering the leaderboard.
"""

from datetime import time, timedelta, timezone


class ScanConstants:
    """Constants for channel scanning."""

    # Discord caps both message history and reaction user pages at 100
    MESSAGE_PAGE_SIZE = 100
    REACTION_PAGE_SIZE = 100

    # Trailing window for scheduled and slash-triggered scans
    WEEKLY_WINDOW = timedelta(days=7)

    # Admin test scan presets
    TEST_WINDOW = timedelta(minutes=30)
    TEST_MESSAGE_CAP = 500
    MAX_TEST_MESSAGES = 10000

    # Longest window a command may request
    MAX_WINDOW = timedelta(days=365)


class ScheduleConstants:
    """Constants for the weekly post."""

    # Monday 09:00 UTC unless configured otherwise
    DEFAULT_POST_WEEKDAY = 0
    DEFAULT_POST_TIME = time(hour=9, tzinfo=timezone.utc)


class LeaderboardConstants:
    """Constants for the rendered leaderboard."""

    DEFAULT_SIZE = 10

    WEEKLY_TITLE = "🏆 Weekly Reading Leaderboard"
    SLASH_TITLE = "🏆 Weekly Reading Leaderboard (last 7 days)"
    EMPTY_PLACEHOLDER = "No points this week."
    SCORING_FOOTER = "Scoring: 1 point per message you react to"
    SLASH_FOOTER = "Slash-triggered snapshot"


class UIConstants:
    """Constants for Discord UI elements."""

    # Embed colors
    WEEKLY_EMBED_COLOR = 0x00b894  # Green
    SLASH_EMBED_COLOR = 0xf1c40f   # Gold
    ERROR_COLOR = 0xe74c3c         # Red for errors

    # Rank markers, first three places get medals
    RANK_MARKERS = ("🥇", "🥈", "🥉")
    BULLET = "•"
