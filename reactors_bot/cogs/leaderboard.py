"""
Leaderboard Cog - /leaderboard command & weekly post

Serves on-demand leaderboard snapshots and posts the weekly leaderboard to
the configured channel on the configured weekday.
"""

import logging
from datetime import datetime, timezone

import discord
from discord import app_commands
from discord.ext import commands, tasks

from reactors_bot.constants import ScanConstants, ScheduleConstants
from reactors_bot.services.rate_limiter import rate_limit
from reactors_bot.utils.embeds import build_slash_embed
from reactors_bot.utils.error_embeds import ErrorEmbeds
from reactors_bot.utils.leaderboard_exceptions import LeaderboardException, ScanInProgressError

logger = logging.getLogger(__name__)


class LeaderboardCog(commands.Cog):
    """Weekly reactors leaderboard"""

    def __init__(self, bot):
        self.bot = bot
        self.config = bot.config
        self.scan_service = bot.scan_service
        self.scan_locks = bot.scan_locks
        self.publisher = bot.publisher
        self.weekly_leaderboard.change_interval(time=self.config.post_time)

    async def cog_load(self):
        self.weekly_leaderboard.start()
        logger.info(
            f"LeaderboardCog: weekly post scheduled for weekday {self.config.post_weekday} "
            f"at {self.config.post_time.strftime('%H:%M')} UTC"
        )

    async def cog_unload(self):
        self.weekly_leaderboard.cancel()
        logger.info("LeaderboardCog: weekly post stopped")

    @app_commands.command(name="leaderboard", description="Show the top reactors in the reading channel (last 7 days)")
    @rate_limit("leaderboard")
    async def leaderboard(self, interaction: discord.Interaction):
        """Scan the last 7 days and reply with the leaderboard."""
        # Scanning takes a while, secure the interaction first
        await interaction.response.defer()

        try:
            async with self.scan_locks.acquire(interaction.channel_id):
                result = await self.scan_service.run_scan(ScanConstants.WEEKLY_WINDOW)
            await interaction.followup.send(embed=build_slash_embed(result))

        except ScanInProgressError:
            await interaction.followup.send(embed=ErrorEmbeds.scan_in_progress(), ephemeral=True)

        except LeaderboardException as e:
            logger.error(f"Error generating leaderboard for user {interaction.user.id}: {e}")
            await interaction.followup.send(content="Failed to compute leaderboard.")

        except Exception as e:
            logger.error(f"Unexpected error generating leaderboard for user {interaction.user.id}: {e}", exc_info=True)
            await interaction.followup.send(content="Failed to compute leaderboard.")

    @tasks.loop(time=ScheduleConstants.DEFAULT_POST_TIME)
    async def weekly_leaderboard(self):
        """Post the weekly leaderboard; runs daily and only acts on the configured weekday"""
        if datetime.now(timezone.utc).weekday() != self.config.post_weekday:
            return

        try:
            result = await self.publisher.scan_and_post(ScanConstants.WEEKLY_WINDOW)
            logger.info(f"Weekly leaderboard generated successfully ({result.unique_reactors} unique reactors)")
        except LeaderboardException as e:
            logger.error(f"Failed to generate weekly leaderboard: {e}")
        except Exception as e:
            logger.error(f"Unexpected error in weekly leaderboard task: {e}", exc_info=True)

    @weekly_leaderboard.before_loop
    async def before_weekly_leaderboard(self):
        """Wait for bot to be ready before starting the weekly task"""
        await self.bot.wait_until_ready()


async def setup(bot):
    await bot.add_cog(LeaderboardCog(bot))
