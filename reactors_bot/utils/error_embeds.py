"""
Centralized error embeds for the reactors leaderboard bot.
"""

import discord

from reactors_bot.constants import UIConstants


class ErrorEmbeds:
    """Error embed factory for consistent command replies."""

    @staticmethod
    def scan_failed(details: str = None) -> discord.Embed:
        """Create embed for a scan that could not be completed."""
        description = "Failed to compute leaderboard. Please try again later."
        if details:
            description += f"\n\n**Details:** {details}"
        return discord.Embed(
            title="Leaderboard Unavailable",
            description=description,
            color=UIConstants.ERROR_COLOR
        )

    @staticmethod
    def scan_in_progress() -> discord.Embed:
        """Create embed for when another scan holds the target."""
        return discord.Embed(
            title="Scan In Progress",
            description="A leaderboard scan is already running here. Please wait for it to finish.",
            color=discord.Color.orange()
        )

    @staticmethod
    def invalid_input(message: str) -> discord.Embed:
        """Create embed for invalid user input."""
        return discord.Embed(
            title="Invalid Input",
            description=message,
            color=UIConstants.ERROR_COLOR
        )

    @staticmethod
    def permission_denied() -> discord.Embed:
        """Create embed for permission errors."""
        return discord.Embed(
            title="Administrative Privileges Required",
            description="This command is restricted to the bot owner.",
            color=UIConstants.ERROR_COLOR
        )

    @staticmethod
    def rate_limited(retry_after: float) -> discord.Embed:
        """Create embed for rate limiting errors."""
        return discord.Embed(
            title="Rate Limited",
            description=f"Leaderboard scans are expensive. Please wait {retry_after:.0f} seconds and try again.",
            color=discord.Color.orange()
        )
