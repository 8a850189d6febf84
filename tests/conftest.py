"""Pytest configuration and shared fixtures."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from reactors_bot.config import Config
from reactors_bot.utils.leaderboard_exceptions import TransportError

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def message_payload(
    message_id: str,
    minutes_ago: float,
    reactions: Optional[List[Dict[str, Any]]] = None,
    author_id: str = "900",
) -> Dict[str, Any]:
    """Discord-shaped message payload created ``minutes_ago`` before NOW."""
    payload = {
        "id": message_id,
        "timestamp": (NOW - timedelta(minutes=minutes_ago)).isoformat(),
        "author": {"id": author_id, "username": f"author{author_id}"},
        "content": "read chapter 4",
    }
    if reactions is not None:
        payload["reactions"] = reactions
    return payload


def reaction_payload(name: str, count: int, emoji_id: Optional[str] = None) -> Dict[str, Any]:
    return {"count": count, "me": False, "emoji": {"id": emoji_id, "name": name}}


def user_payload(user_id: str, bot: bool = False) -> Dict[str, Any]:
    payload = {"id": user_id, "username": f"user{user_id}"}
    if bot:
        payload["bot"] = True
    return payload


class FakeHistorySource:
    """In-memory HistorySource that pages like the Discord REST API.

    ``messages`` are newest first. ``reactors`` maps (message_id, emoji_token)
    to the users who applied that emoji, in ascending id order.
    """

    def __init__(
        self,
        messages: Optional[List[Dict[str, Any]]] = None,
        reactors: Optional[Dict[Tuple[str, str], List[Dict[str, Any]]]] = None,
    ):
        self.messages = messages or []
        self.reactors = reactors or {}
        self.message_calls: List[Dict[str, Any]] = []
        self.reaction_calls: List[Dict[str, Any]] = []
        self.fail_messages_status: Optional[int] = None
        self.fail_reactions_status: Optional[int] = None

    async def fetch_message_page(self, channel_id, before=None, limit=100):
        self.message_calls.append({"channel_id": channel_id, "before": before, "limit": limit})
        if self.fail_messages_status is not None:
            raise TransportError("Get messages", self.fail_messages_status)

        start = 0
        if before is not None:
            ids = [m["id"] for m in self.messages]
            start = ids.index(before) + 1
        return list(self.messages[start:start + limit])

    async def fetch_reaction_user_page(self, channel_id, message_id, emoji_token, after=None, limit=100):
        self.reaction_calls.append({
            "channel_id": channel_id,
            "message_id": message_id,
            "emoji_token": emoji_token,
            "after": after,
            "limit": limit,
        })
        if self.fail_reactions_status is not None:
            raise TransportError("Get reactions", self.fail_reactions_status)

        users = self.reactors.get((message_id, emoji_token), [])
        start = 0
        if after is not None:
            ids = [u["id"] for u in users]
            start = ids.index(after) + 1
        return list(users[start:start + limit])


@pytest.fixture
def config() -> Config:
    return Config(
        discord_token="token",
        source_channel_id=111,
        post_channel_id=222,
        owner_discord_id=333,
    )


@pytest.fixture
def fake_source() -> FakeHistorySource:
    return FakeHistorySource()
