"""
Services package for the Weekly Reactors Leaderboard bot.
"""

from .history_source import DiscordHistorySource, HistorySource
from .rate_limiter import SimpleRateLimiter
from .scan_lock import ScanLockRegistry
from .scan_service import ReactionScanService

__all__ = [
    'DiscordHistorySource',
    'HistorySource',
    'ReactionScanService',
    'ScanLockRegistry',
    'SimpleRateLimiter',
]
