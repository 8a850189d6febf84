"""
Admin Cog - owner-only maintenance commands

Manual test scans, command registration and bot lifecycle commands.
"""

import logging
from datetime import timedelta
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from reactors_bot.constants import ScanConstants
from reactors_bot.data_models.leaderboard import ScanResult
from reactors_bot.utils.error_embeds import ErrorEmbeds
from reactors_bot.utils.leaderboard_exceptions import LeaderboardException
from reactors_bot.utils.time_parser import format_window, parse_window

logger = logging.getLogger(__name__)


def build_test_summary_embed(result: ScanResult, window: timedelta, channel_id: int) -> discord.Embed:
    """Summary of a test scan, shown to the admin who ran it."""
    embed = discord.Embed(
        title="✅ Leaderboard Test Complete",
        description=f"Posted a {format_window(window)} leaderboard to <#{channel_id}>.",
        color=discord.Color.green()
    )
    embed.add_field(name="Messages Scanned", value=str(result.messages_scanned), inline=True)
    embed.add_field(name="With Reactions", value=str(result.messages_with_reactions), inline=True)
    embed.add_field(name="Unique Reactors", value=str(result.unique_reactors), inline=True)
    return embed


class AdminCog(commands.Cog):
    """Admin-only commands for the leaderboard bot"""

    def __init__(self, bot):
        self.bot = bot
        self.config = bot.config
        self.publisher = bot.publisher
        self.logger = logger

    def cog_check(self, ctx):
        """Check if user is the bot owner"""
        return ctx.author.id == self.config.owner_discord_id

    def _is_owner(self, interaction: discord.Interaction) -> bool:
        return interaction.user.id == self.config.owner_discord_id

    async def _run_test_scan(self, window: timedelta, max_messages: Optional[int]) -> ScanResult:
        self.logger.info(f"Running test scan: window={format_window(window)}, max_messages={max_messages}")
        return await self.publisher.scan_and_post(window, max_messages=max_messages)

    @app_commands.command(
        name="admin-leaderboard-test",
        description="Run a short leaderboard scan and post it (Owner only)"
    )
    @app_commands.describe(
        window="How far back to scan, e.g. 30m, 2h, 7d (default 30m)",
        max_messages="Stop after this many messages (default 500)"
    )
    async def admin_leaderboard_test(
        self,
        interaction: discord.Interaction,
        window: Optional[str] = None,
        max_messages: Optional[app_commands.Range[int, 1, ScanConstants.MAX_TEST_MESSAGES]] = None
    ):
        """Slash command to run a test scan"""
        if not self._is_owner(interaction):
            await interaction.response.send_message(embed=ErrorEmbeds.permission_denied(), ephemeral=True)
            return

        try:
            scan_window = parse_window(window) if window else ScanConstants.TEST_WINDOW
        except ValueError as e:
            await interaction.response.send_message(embed=ErrorEmbeds.invalid_input(str(e)), ephemeral=True)
            return

        await interaction.response.defer(ephemeral=True)

        cap = max_messages if max_messages is not None else ScanConstants.TEST_MESSAGE_CAP
        try:
            result = await self._run_test_scan(scan_window, cap)
        except LeaderboardException as e:
            self.logger.error(f"Test scan failed: {e}")
            await interaction.followup.send(embed=ErrorEmbeds.scan_failed(str(e)), ephemeral=True)
            return

        await interaction.followup.send(
            embed=build_test_summary_embed(result, scan_window, self.config.post_channel_id),
            ephemeral=True
        )
        self.logger.info(f"Test scan executed by {interaction.user.id} ({interaction.user.name})")

    @commands.command(name="leaderboard_test")
    async def leaderboard_test(self, ctx, window: str = None, max_messages: int = None):
        """Prefix variant of the test scan (Owner only)"""
        try:
            scan_window = parse_window(window) if window else ScanConstants.TEST_WINDOW
        except ValueError as e:
            await ctx.send(f"❌ {e}")
            return

        if max_messages is not None and not 1 <= max_messages <= ScanConstants.MAX_TEST_MESSAGES:
            await ctx.send(f"❌ max_messages must be between 1 and {ScanConstants.MAX_TEST_MESSAGES}")
            return

        cap = max_messages if max_messages is not None else ScanConstants.TEST_MESSAGE_CAP
        try:
            result = await self._run_test_scan(scan_window, cap)
        except LeaderboardException as e:
            self.logger.error(f"Test scan failed: {e}")
            await ctx.send(f"❌ Failed to generate test leaderboard: {e}")
            return

        await ctx.send(embed=build_test_summary_embed(result, scan_window, self.config.post_channel_id))

    @app_commands.command(
        name="admin-sync-commands",
        description="Re-register the bot's slash commands (Owner only)"
    )
    async def admin_sync_commands(self, interaction: discord.Interaction):
        """Slash command to re-sync the command tree"""
        if not self._is_owner(interaction):
            await interaction.response.send_message(embed=ErrorEmbeds.permission_denied(), ephemeral=True)
            return

        await interaction.response.defer(ephemeral=True)
        synced = await self.bot.sync_commands()
        await interaction.followup.send(f"✅ Synced {synced} command(s).", ephemeral=True)

    @commands.command(name='shutdown')
    async def shutdown_bot(self, ctx):
        """Shutdown the bot (Owner only)"""
        await ctx.send("🔴 Shutting down Reactors Bot...")
        await self.bot.close()

    @commands.command(name='reload')
    async def reload_cog(self, ctx, cog_name: str):
        """Reload a specific cog (Owner only)"""
        try:
            await self.bot.reload_extension(f'reactors_bot.cogs.{cog_name}')
            await ctx.send(f"✅ Reloaded `{cog_name}` cog successfully.")
        except commands.ExtensionError as e:
            await ctx.send(f"❌ Failed to reload `{cog_name}`: {e}")


async def setup(bot):
    await bot.add_cog(AdminCog(bot))
