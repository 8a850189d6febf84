"""
Leaderboard publishing.

Posts a rendered leaderboard to a channel. ``scan_and_post`` is the path
shared by the weekly task and the admin test scan: it holds the destination's
scan lock for the whole scan and post, and posts nothing if the scan fails.
"""

import logging
from datetime import timedelta
from typing import Optional

import discord

from reactors_bot.config import Config
from reactors_bot.data_models.leaderboard import ScanResult
from reactors_bot.services.scan_lock import ScanLockRegistry
from reactors_bot.services.scan_service import ReactionScanService
from reactors_bot.utils.embeds import build_leaderboard_embed
from reactors_bot.utils.leaderboard_exceptions import TransportError
from reactors_bot.utils.time_parser import format_window

logger = logging.getLogger(__name__)


class LeaderboardPublisher:
    """Delivers leaderboard embeds to Discord channels."""

    def __init__(
        self,
        client: discord.Client,
        scan_service: ReactionScanService,
        scan_locks: ScanLockRegistry,
        config: Config,
    ):
        self.client = client
        self.scan_service = scan_service
        self.scan_locks = scan_locks
        self.config = config

    async def post(self, channel_id: int, embed: discord.Embed) -> discord.Message:
        """Send an embed to a channel, fetching it if it is not cached."""
        try:
            channel = self.client.get_channel(channel_id) or await self.client.fetch_channel(channel_id)
            return await channel.send(embed=embed)
        except discord.HTTPException as e:
            logger.error(f"Post leaderboard failed for channel {channel_id}: {e.status}")
            raise TransportError("Post leaderboard", e.status, e.text) from e

    async def scan_and_post(
        self,
        window: timedelta,
        max_messages: Optional[int] = None,
        channel_id: Optional[int] = None,
    ) -> ScanResult:
        """
        Run a scan and post the result to ``channel_id`` (default: POST_CHANNEL_ID).

        Raises:
            ScanInProgressError: If a scan for the same destination is running
            TransportError: If the scan or the post fails
            ConfigurationError: If the source channel is not configured
        """
        target = channel_id or self.config.post_channel_id

        async with self.scan_locks.acquire(target):
            result = await self.scan_service.run_scan(window, max_messages=max_messages)
            embed = build_leaderboard_embed(
                result,
                reactors_label=f"Unique reactors ({format_window(window)})"
            )
            await self.post(target, embed)

        logger.info(f"Posted leaderboard with {len(result.entries)} entries to channel {target}")
        return result
