"""
Leaderboard data models for the reactors scan.

Immutable values built from Discord REST payloads, plus the ranked entries and
scan result handed to the publishing layer.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from discord.utils import parse_time


@dataclass(frozen=True)
class ReactionSummary:
    """One emoji on a message and how many times it was applied."""
    emoji_name: Optional[str]
    emoji_id: Optional[str]
    count: int

    @property
    def is_custom(self) -> bool:
        return self.emoji_id is not None

    @property
    def emoji_token(self) -> Optional[str]:
        """Literal glyph for unicode emoji, ``name:id`` for custom emoji.

        Deleted custom emoji come back without a name; the id alone still
        identifies them, so a placeholder name is used.
        """
        if self.is_custom:
            return f"{self.emoji_name or '_'}:{self.emoji_id}"
        return self.emoji_name or None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> 'ReactionSummary':
        emoji = payload.get('emoji') or {}
        emoji_id = emoji.get('id')
        return cls(
            emoji_name=emoji.get('name'),
            emoji_id=str(emoji_id) if emoji_id is not None else None,
            count=int(payload.get('count') or 0),
        )


@dataclass(frozen=True)
class Message:
    """A channel message as returned by the history endpoint."""
    id: str
    created_at: datetime
    author_id: Optional[str]
    reactions: Tuple[ReactionSummary, ...] = ()

    @property
    def has_reactions(self) -> bool:
        return len(self.reactions) > 0

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> 'Message':
        author = payload.get('author') or {}
        return cls(
            id=str(payload['id']),
            created_at=parse_time(payload['timestamp']),
            author_id=str(author['id']) if 'id' in author else None,
            reactions=tuple(ReactionSummary.from_payload(r) for r in payload.get('reactions') or ()),
        )


@dataclass(frozen=True)
class LeaderboardEntry:
    """Single leaderboard row. Rank is zero-based."""
    rank: int
    user_id: str
    points: int


@dataclass(frozen=True)
class ScanResult:
    """Outcome of one scan, ready for rendering."""
    entries: List[LeaderboardEntry]
    name_resolver: Callable[[str], str]
    unique_reactors: int
    window_start: datetime
    messages_scanned: int = 0
    messages_with_reactions: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.entries
