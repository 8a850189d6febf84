"""
Custom exceptions for the reactors leaderboard with user-friendly error messages.
"""

from typing import Iterable, Optional


class LeaderboardException(Exception):
    """Base exception for leaderboard-related errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message


class TransportError(LeaderboardException):
    """Raised when a Discord fetch returns a non-success status."""
    def __init__(self, operation: str, status: Optional[int], details: str = None):
        message = f"{operation} failed: {status}"
        if details:
            message += f" ({details})"
        super().__init__(
            message,
            "❌ Failed to compute leaderboard."
        )
        self.operation = operation
        self.status = status


class ConfigurationError(LeaderboardException):
    """Raised when required identifiers or credentials are missing."""
    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(
            f"Missing or invalid configuration: {', '.join(self.missing)}",
            "❌ The leaderboard is not configured correctly. Please contact an administrator."
        )


class ScanInProgressError(LeaderboardException):
    """Raised when a scan for the same target is already running."""
    def __init__(self, target_id: int):
        super().__init__(
            f"Scan already in progress for target {target_id}",
            "⏳ A leaderboard scan is already running here. Please wait for it to finish."
        )
        self.target_id = target_id
