"""
Ranking utilities for the reactors leaderboard.
"""

from typing import List, Mapping

from reactors_bot.constants import LeaderboardConstants
from reactors_bot.data_models.leaderboard import LeaderboardEntry


def rank_entries(points: Mapping[str, int], limit: int = LeaderboardConstants.DEFAULT_SIZE) -> List[LeaderboardEntry]:
    """
    Top ``limit`` users by points.

    Ties are broken by ascending user id string, so the ranking does not
    depend on the ledger's iteration order.
    """
    if limit <= 0:
        return []

    ordered = sorted(points.items(), key=lambda item: (-item[1], item[0]))
    return [
        LeaderboardEntry(rank=index, user_id=user_id, points=total)
        for index, (user_id, total) in enumerate(ordered[:limit])
    ]
