"""
Backward pagination over a channel's message history.

``MessagePaginator`` pulls one page at a time using a ``before`` cursor and
exposes an explicit exhausted state. ``iter_window_messages`` drives it and
owns the stop rules: the first message older than the window start ends the
walk, as does an optional cap on the number of messages yielded.
"""

import logging
from datetime import datetime
from typing import AsyncIterator, List, Optional

from reactors_bot.constants import ScanConstants
from reactors_bot.data_models.leaderboard import Message
from reactors_bot.services.history_source import HistorySource

logger = logging.getLogger(__name__)


class MessagePaginator:
    """Newest-to-oldest page stream for one channel."""

    def __init__(self, source: HistorySource, channel_id: int, page_size: int = ScanConstants.MESSAGE_PAGE_SIZE):
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.source = source
        self.channel_id = channel_id
        self.page_size = page_size
        self.pages_fetched = 0
        self._before: Optional[str] = None
        self._exhausted = False

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @property
    def cursor(self) -> Optional[str]:
        """Id of the oldest message seen so far."""
        return self._before

    async def next_page(self) -> List[Message]:
        """Fetch the next older page. Returns [] once exhausted."""
        if self._exhausted:
            return []

        batch = await self.source.fetch_message_page(self.channel_id, before=self._before, limit=self.page_size)
        self.pages_fetched += 1

        if not batch:
            self._exhausted = True
            return []

        messages = [Message.from_payload(payload) for payload in batch]
        self._before = messages[-1].id
        logger.debug(f"Fetched page {self.pages_fetched} ({len(messages)} messages) from channel {self.channel_id}")
        return messages

    def close(self):
        """Stop paginating; no further pages will be requested."""
        self._exhausted = True


async def iter_window_messages(
    source: HistorySource,
    channel_id: int,
    since: datetime,
    max_messages: Optional[int] = None,
    page_size: int = ScanConstants.MESSAGE_PAGE_SIZE,
) -> AsyncIterator[Message]:
    """
    Yield messages newer than ``since``, most recent first.

    Stops at the first message strictly older than ``since`` without
    requesting further pages, or once ``max_messages`` have been yielded,
    whichever comes first. Each call starts a fresh walk from the newest
    message.

    Args:
        source: Channel history transport
        channel_id: Channel to walk
        since: Window start (timezone-aware)
        max_messages: Optional cap on yielded messages
        page_size: Messages per request

    Raises:
        TransportError: If any page fetch fails
    """
    if max_messages is not None and max_messages <= 0:
        return

    paginator = MessagePaginator(source, channel_id, page_size=page_size)
    yielded = 0

    while not paginator.exhausted:
        page = await paginator.next_page()
        for message in page:
            if message.created_at < since:
                paginator.close()
                return

            yield message
            yielded += 1

            if max_messages is not None and yielded >= max_messages:
                paginator.close()
                return
