"""
Embed utilities for the reactors leaderboard.

Turns a ScanResult into ranked text lines and a Discord embed. Both the
scheduled post and the slash-command reply use these builders.
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional

import discord

from reactors_bot.constants import LeaderboardConstants, UIConstants
from reactors_bot.data_models.leaderboard import LeaderboardEntry, ScanResult


def mention(user_id: str) -> str:
    """Render a user as a platform mention, avoiding member lookups."""
    return f"<@{user_id}>"


def rank_marker(rank: int) -> str:
    """Medal for the first three places, a bullet for everyone else."""
    if 0 <= rank < len(UIConstants.RANK_MARKERS):
        return UIConstants.RANK_MARKERS[rank]
    return UIConstants.BULLET


def format_points(points: int) -> str:
    return f"{points} pt{'' if points == 1 else 's'}"


def render_lines(entries: List[LeaderboardEntry], name_resolver: Callable[[str], str] = mention) -> List[str]:
    """
    Ranked leaderboard lines, or the placeholder line when nobody scored.

    Args:
        entries: Ranked entries (zero-based ranks)
        name_resolver: Maps a user id to display text

    Returns:
        One line per entry, e.g. ``🥇 **1. <@42>** — 3 pts``
    """
    if not entries:
        return [LeaderboardConstants.EMPTY_PLACEHOLDER]

    lines = []
    for entry in entries:
        name = name_resolver(entry.user_id) or f"User {entry.user_id}"
        lines.append(f"{rank_marker(entry.rank)} **{entry.rank + 1}. {name}** — {format_points(entry.points)}")
    return lines


def build_leaderboard_embed(
    result: ScanResult,
    title: str = LeaderboardConstants.WEEKLY_TITLE,
    color: int = UIConstants.WEEKLY_EMBED_COLOR,
    footer: Optional[str] = LeaderboardConstants.SCORING_FOOTER,
    reactors_label: str = "Unique reactors (7d)",
    timestamp: Optional[datetime] = None,
) -> discord.Embed:
    """
    Build the leaderboard embed for a scan.

    The unique reactor count is shown as an inline field regardless of how
    many entries made the top slice.
    """
    embed = discord.Embed(
        title=title,
        description="\n".join(render_lines(result.entries, result.name_resolver)),
        color=color,
        timestamp=timestamp or datetime.now(timezone.utc)
    )

    embed.add_field(name=reactors_label, value=str(result.unique_reactors), inline=True)

    if footer:
        embed.set_footer(text=footer)

    return embed


def build_slash_embed(result: ScanResult, timestamp: Optional[datetime] = None) -> discord.Embed:
    """Leaderboard embed for the /leaderboard reply."""
    return build_leaderboard_embed(
        result,
        title=LeaderboardConstants.SLASH_TITLE,
        color=UIConstants.SLASH_EMBED_COLOR,
        footer=LeaderboardConstants.SLASH_FOOTER,
        reactors_label="Unique reactors",
        timestamp=timestamp
    )
