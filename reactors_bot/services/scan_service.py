"""
Reactors scan service.

Runs one scan of the configured source channel: paginate the window, resolve
reactors for every message that has reactions, score, and rank. Requests are
issued one at a time; any transport failure aborts the scan and nothing
partial is returned.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import AsyncIterator, Callable, Optional, Set, Tuple

from reactors_bot.config import Config
from reactors_bot.constants import ScanConstants
from reactors_bot.data_models.leaderboard import Message, ScanResult
from reactors_bot.services.history_source import HistorySource
from reactors_bot.services.message_paginator import iter_window_messages
from reactors_bot.services.reaction_collector import collect_reactors
from reactors_bot.services.scoring import score_message_stream
from reactors_bot.utils.embeds import mention
from reactors_bot.utils.leaderboard_exceptions import ConfigurationError
from reactors_bot.utils.ranking import rank_entries

logger = logging.getLogger(__name__)


class ReactionScanService:
    """Computes the reactors leaderboard for the source channel."""

    def __init__(
        self,
        source: HistorySource,
        config: Config,
        name_resolver: Callable[[str], str] = mention,
    ):
        self.source = source
        self.config = config
        self.name_resolver = name_resolver

    async def run_scan(
        self,
        window: timedelta = ScanConstants.WEEKLY_WINDOW,
        max_messages: Optional[int] = None,
        now: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> ScanResult:
        """
        Scan the trailing window and rank reactors.

        Args:
            window: Trailing duration of eligible messages
            max_messages: Optional cap on messages scanned
            now: Reference time (defaults to current UTC time)
            limit: Leaderboard size (defaults to the configured size)

        Returns:
            ScanResult with ranked entries and the unique reactor count

        Raises:
            ConfigurationError: If the source channel is not configured
            TransportError: If any Discord fetch fails
        """
        channel_id = self.config.source_channel_id
        if not channel_id:
            raise ConfigurationError(["SOURCE_CHANNEL_ID"])

        now = now or datetime.now(timezone.utc)
        window_start = now - window
        limit = limit if limit is not None else self.config.leaderboard_size

        logger.info(
            f"Starting reactors scan of channel {channel_id} since {window_start.isoformat()}"
            + (f" (cap {max_messages} messages)" if max_messages is not None else "")
        )

        counters = {'scanned': 0, 'with_reactions': 0}

        async def reactor_pairs() -> AsyncIterator[Tuple[Message, Set[str]]]:
            async for message in iter_window_messages(
                self.source, channel_id, window_start, max_messages=max_messages
            ):
                counters['scanned'] += 1
                if not message.has_reactions:
                    continue
                counters['with_reactions'] += 1
                reactors = await collect_reactors(self.source, channel_id, message.id, message.reactions)
                yield message, reactors

        ledger = await score_message_stream(reactor_pairs())
        entries = rank_entries(ledger.points, limit)

        logger.info(
            f"Reactors scan complete: {counters['scanned']} messages scanned, "
            f"{counters['with_reactions']} with reactions, "
            f"{ledger.unique_reactors} unique reactors, {len(entries)} entries"
        )

        return ScanResult(
            entries=entries,
            name_resolver=self.name_resolver,
            unique_reactors=ledger.unique_reactors,
            window_start=window_start,
            messages_scanned=counters['scanned'],
            messages_with_reactions=counters['with_reactions'],
        )
