"""
Rate limiting for leaderboard commands.

Simple in-memory sliding-window limiter. A /leaderboard call triggers a full
channel scan, so each user gets a limited number per window.
"""

import time
import asyncio
from functools import wraps
from collections import defaultdict, deque
import logging

from reactors_bot.utils.error_embeds import ErrorEmbeds

logger = logging.getLogger(__name__)


class SimpleRateLimiter:
    """In-memory rate limiter keyed by user and command."""

    def __init__(self, clock=time.monotonic):
        self._requests = defaultdict(deque)
        self._lock = asyncio.Lock()
        self._clock = clock

    async def is_allowed(self, user_id: int, command: str, limit: int, window: int) -> bool:
        """Check if user can execute command within rate limit, recording the call if so."""
        if limit <= 0 or window <= 0:
            return False

        key = f"{user_id}:{command}"
        now = self._clock()

        async with self._lock:
            # Clean old requests outside window
            while self._requests[key] and self._requests[key][0] <= now - window:
                self._requests[key].popleft()

            if len(self._requests[key]) < limit:
                self._requests[key].append(now)
                return True

            return False

    async def retry_after(self, user_id: int, command: str, window: int) -> float:
        """Seconds until the oldest recorded call leaves the window."""
        key = f"{user_id}:{command}"
        async with self._lock:
            if not self._requests[key]:
                return 0.0
            return max(0.0, self._requests[key][0] + window - self._clock())


def rate_limit(command: str, limit: int = 1):
    """Decorator for rate limiting slash commands on a cog.

    The window comes from the bot's configured cooldown; the owner bypasses it.
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(self, interaction, *args, **kwargs):
            rate_limiter = self.bot.rate_limiter
            config = self.bot.config

            if interaction.user.id == config.owner_discord_id:
                return await func(self, interaction, *args, **kwargs)

            window = config.cooldown_seconds
            if not await rate_limiter.is_allowed(interaction.user.id, command, limit, window):
                wait = await rate_limiter.retry_after(interaction.user.id, command, window)
                logger.info(f"Rate limited /{command} for user {interaction.user.id} ({wait:.0f}s left)")
                await interaction.response.send_message(embed=ErrorEmbeds.rate_limited(wait), ephemeral=True)
                return

            return await func(self, interaction, *args, **kwargs)
        return wrapper
    return decorator
