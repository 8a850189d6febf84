"""
Channel history transport for the reactors scan.

The scan engine only needs two REST capabilities: a page of channel messages
and a page of users for one emoji on one message. ``HistorySource`` names that
contract so the engine can run against a fake in tests; ``DiscordHistorySource``
fulfils it with the bot's own discord.py HTTP client.
"""

import logging
from typing import Any, Dict, List, Optional, Protocol

import discord
from discord.http import HTTPClient

from reactors_bot.constants import ScanConstants
from reactors_bot.utils.leaderboard_exceptions import TransportError

logger = logging.getLogger(__name__)

Payload = Dict[str, Any]


class HistorySource(Protocol):
    """Narrow read-only view of a Discord channel."""

    async def fetch_message_page(
        self,
        channel_id: int,
        before: Optional[str] = None,
        limit: int = ScanConstants.MESSAGE_PAGE_SIZE,
    ) -> List[Payload]:
        """Newest-first page of message payloads older than ``before``."""
        ...

    async def fetch_reaction_user_page(
        self,
        channel_id: int,
        message_id: str,
        emoji_token: str,
        after: Optional[str] = None,
        limit: int = ScanConstants.REACTION_PAGE_SIZE,
    ) -> List[Payload]:
        """Page of user payloads who applied ``emoji_token``, ids above ``after``."""
        ...


class DiscordHistorySource:
    """HistorySource backed by discord.py's REST client.

    ``HTTPClient`` percent-encodes path segments itself, so emoji tokens are
    passed in their literal form. Any ``discord.HTTPException`` is re-raised as
    ``TransportError`` carrying the response status.
    """

    def __init__(self, http: HTTPClient):
        self.http = http

    async def fetch_message_page(
        self,
        channel_id: int,
        before: Optional[str] = None,
        limit: int = ScanConstants.MESSAGE_PAGE_SIZE,
    ) -> List[Payload]:
        try:
            return await self.http.logs_from(channel_id, limit, before=before)
        except discord.HTTPException as e:
            logger.error(f"Get messages failed for channel {channel_id}: {e.status}")
            raise TransportError("Get messages", e.status, e.text) from e

    async def fetch_reaction_user_page(
        self,
        channel_id: int,
        message_id: str,
        emoji_token: str,
        after: Optional[str] = None,
        limit: int = ScanConstants.REACTION_PAGE_SIZE,
    ) -> List[Payload]:
        try:
            return await self.http.get_reaction_users(channel_id, message_id, emoji_token, limit, after=after)
        except discord.HTTPException as e:
            logger.error(
                f"Get reactions failed for message {message_id} ({emoji_token}) "
                f"in channel {channel_id}: {e.status}"
            )
            raise TransportError("Get reactions", e.status, e.text) from e
