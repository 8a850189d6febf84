"""
Resolve who reacted to a message.

The message payload only carries per-emoji counts, so each emoji's user list
is paged through separately and the results are merged into one set of
non-bot user ids.
"""

import logging
from typing import Iterable, Optional, Set

from reactors_bot.constants import ScanConstants
from reactors_bot.data_models.leaderboard import ReactionSummary
from reactors_bot.services.history_source import HistorySource

logger = logging.getLogger(__name__)


async def collect_emoji_reactors(
    source: HistorySource,
    channel_id: int,
    message_id: str,
    emoji_token: str,
    page_size: int = ScanConstants.REACTION_PAGE_SIZE,
) -> Set[str]:
    """Page through every user who applied one emoji, skipping bots."""
    users: Set[str] = set()
    after: Optional[str] = None

    while True:
        batch = await source.fetch_reaction_user_page(
            channel_id, message_id, emoji_token, after=after, limit=page_size
        )
        for user in batch:
            if user.get('bot'):
                continue
            users.add(str(user['id']))

        # A short page is the last one
        if len(batch) < page_size:
            break
        after = str(batch[-1]['id'])

    return users


async def collect_reactors(
    source: HistorySource,
    channel_id: int,
    message_id: str,
    reactions: Iterable[ReactionSummary],
    page_size: int = ScanConstants.REACTION_PAGE_SIZE,
) -> Set[str]:
    """
    Union of non-bot users who reacted to a message with any emoji.

    Summaries with a zero count or no usable emoji are skipped. Emoji are
    resolved one after another; a failed page aborts the whole message.

    Raises:
        TransportError: If any reaction page fetch fails
    """
    reactors: Set[str] = set()

    for summary in reactions:
        token = summary.emoji_token
        if not summary.count or token is None:
            continue
        reactors |= await collect_emoji_reactors(source, channel_id, message_id, token, page_size=page_size)

    logger.debug(f"Message {message_id}: {len(reactors)} distinct reactors")
    return reactors
