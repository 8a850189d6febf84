import asyncio
import logging
import sys
import traceback
from typing import Optional

import discord
from discord.ext import commands
from discord import app_commands

from reactors_bot.config import Config
from reactors_bot.services.history_source import DiscordHistorySource
from reactors_bot.services.publisher import LeaderboardPublisher
from reactors_bot.services.rate_limiter import SimpleRateLimiter
from reactors_bot.services.scan_lock import ScanLockRegistry
from reactors_bot.services.scan_service import ReactionScanService
from reactors_bot.utils.leaderboard_exceptions import ConfigurationError
from reactors_bot.utils.logger import setup_logger

logger = logging.getLogger(__name__)


class ReactorsBot(commands.Bot):
    def __init__(self, config: Config):
        # History and reactions are read over REST; no privileged intents needed
        intents = discord.Intents.default()

        super().__init__(
            command_prefix=config.command_prefix,
            intents=intents,
            help_command=None
        )

        # Attach app command error handler
        self.tree.on_error = self.on_app_command_error

        self.config = config
        self.rate_limiter = SimpleRateLimiter()
        self.scan_locks = ScanLockRegistry()
        self.scan_service: Optional[ReactionScanService] = None
        self.publisher: Optional[LeaderboardPublisher] = None

    async def setup_hook(self):
        """Called after login, before connecting to the gateway"""
        logger.info("Setting up Reactors Bot...")

        self.scan_service = ReactionScanService(DiscordHistorySource(self.http), self.config)
        self.publisher = LeaderboardPublisher(self, self.scan_service, self.scan_locks, self.config)

        await self.load_cogs()
        await self.sync_commands()

        logger.info("Reactors Bot setup complete!")

    async def load_cogs(self):
        """Load all cogs"""
        cogs_to_load = [
            'reactors_bot.cogs.leaderboard',
            'reactors_bot.cogs.admin',
        ]

        for cog in cogs_to_load:
            try:
                await self.load_extension(cog)
                logger.info(f"Loaded cog: {cog}")
            except commands.ExtensionError as e:
                logger.error(f"Failed to load cog {cog}: {e}", exc_info=True)

    async def sync_commands(self) -> int:
        """Sync slash commands with Discord, returning the number of commands deployed"""
        if not self.tree.get_commands():
            logger.warning("No application commands found to sync. Check for cog loading errors.")
            return 0

        guild_ids = self.config.get_guild_ids()
        total_synced = 0

        try:
            if guild_ids:
                # Guild-specific sync (instant updates)
                logger.info(f"Attempting to sync commands to {len(guild_ids)} guild(s): {guild_ids}...")
                for guild_id in guild_ids:
                    try:
                        guild = discord.Object(id=guild_id)
                        self.tree.copy_global_to(guild=guild)
                        synced = await self.tree.sync(guild=guild)
                        logger.info(f"Successfully synced {len(synced)} command(s) to guild {guild_id}")
                        total_synced += len(synced)
                    except discord.Forbidden:
                        logger.error(
                            f"Permission error syncing to guild {guild_id}. Ensure the bot has the "
                            f"'applications.commands' scope and is in the guild.",
                            exc_info=True
                        )
                    except discord.HTTPException as e:
                        logger.error(f"HTTP error syncing to guild {guild_id}. Status: {e.status}, Response: {e.text}", exc_info=True)
            else:
                # Global sync (can take up to 1 hour to propagate)
                logger.info("Attempting to sync commands globally...")
                synced = await self.tree.sync()
                total_synced = len(synced)
                logger.info(f"Successfully synced {total_synced} command(s) globally")
        except discord.HTTPException as e:
            # Bot keeps working with prefix commands
            logger.error(f"Failed to sync commands: {e}", exc_info=True)

        return total_synced

    async def on_ready(self):
        """Called when the bot is ready"""
        logger.info(f'{self.user} has connected to Discord!')
        logger.info(f'Bot is in {len(self.guilds)} guilds')

        await self.change_presence(
            activity=discord.Activity(type=discord.ActivityType.watching, name="reactions | /leaderboard")
        )

    async def on_app_command_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        """Global error handler for slash commands"""
        command_name = interaction.command.name if interaction.command else 'Unknown'
        if isinstance(error, app_commands.CheckFailure):
            logger.info(f"Permission denied for command '{command_name}' by user {interaction.user}")
        else:
            logger.error(f"Error in app command '{command_name}': {error}", exc_info=True)

        if isinstance(error, app_commands.CommandOnCooldown):
            error_message = f"❌ Command is on cooldown. Try again in {error.retry_after:.2f} seconds."
        elif isinstance(error, app_commands.CheckFailure):
            error_message = "❌ You don't have permission to use this command."
        else:
            error_message = "❌ An unexpected error occurred while processing your command."

        embed = discord.Embed(title=error_message, color=discord.Color.red())
        try:
            if interaction.response.is_done():
                await interaction.followup.send(embed=embed, ephemeral=True)
            else:
                await interaction.response.send_message(embed=embed, ephemeral=True)
        except discord.HTTPException as e:
            logger.error(f"Failed to send error response: {e}")

    async def on_command_error(self, ctx: commands.Context, error: Exception):
        """Global error handler for prefix commands"""
        if isinstance(error, commands.CommandNotFound):
            return

        if isinstance(error, commands.CheckFailure):
            logger.info(f"Permission denied for command '{ctx.command.name if ctx.command else 'Unknown'}' by user {ctx.author}")
            await ctx.send("❌ This command is restricted to the bot owner.")
            return

        if isinstance(error, (commands.BadArgument, commands.MissingRequiredArgument)):
            await ctx.send(f"❌ {error}")
            return

        logger.error(f"Unexpected error in command {ctx.command}: {error}")
        logger.error(''.join(traceback.format_exception(type(error), error, error.__traceback__)))
        await ctx.send("❌ An unexpected error occurred while processing your command.")

    async def close(self):
        """Cleanup when bot is shutting down"""
        logger.info("Shutting down Reactors Bot...")
        await super().close()


async def main():
    """Main entry point"""
    config = Config.from_env()
    setup_logger('reactors_bot', debug=config.debug)

    try:
        config.validate()
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    bot = ReactorsBot(config)

    try:
        await bot.start(config.discord_token)
    except KeyboardInterrupt:
        pass
    finally:
        await bot.close()


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
