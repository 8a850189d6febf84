"""
Per-scan point ledger.

Every non-bot reactor earns one point per message they reacted to, however
many emoji they used on it.
"""

from dataclasses import dataclass, field
from typing import AsyncIterable, Dict, Iterable, Set, Tuple

from reactors_bot.data_models.leaderboard import Message


@dataclass
class ScoreLedger:
    """Points per user id plus every distinct reactor seen."""
    points: Dict[str, int] = field(default_factory=dict)
    participants: Set[str] = field(default_factory=set)
    messages_scored: int = 0

    def award(self, reactors: Iterable[str]):
        """Give one point to each reactor of a single message."""
        for user_id in set(reactors):
            self.points[user_id] = self.points.get(user_id, 0) + 1
            self.participants.add(user_id)
        self.messages_scored += 1

    @property
    def unique_reactors(self) -> int:
        return len(self.participants)

    def __len__(self) -> int:
        return len(self.points)


def score_messages(pairs: Iterable[Tuple[Message, Set[str]]]) -> ScoreLedger:
    """Build a ledger from (message, reactor set) pairs."""
    ledger = ScoreLedger()
    for message, reactors in pairs:
        if not message.has_reactions:
            continue
        ledger.award(reactors)
    return ledger


async def score_message_stream(pairs: AsyncIterable[Tuple[Message, Set[str]]]) -> ScoreLedger:
    """Async counterpart of ``score_messages``."""
    ledger = ScoreLedger()
    async for message, reactors in pairs:
        if not message.has_reactions:
            continue
        ledger.award(reactors)
    return ledger
