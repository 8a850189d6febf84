"""
Time window parsing utilities for admin scan commands.

Handles conversion between compact duration strings and timedeltas.
"""

import math
import re
from datetime import timedelta

from reactors_bot.constants import ScanConstants

_UNIT_SECONDS = {
    's': 1,
    'm': 60,
    'h': 3600,
    'd': 86400,
    'w': 604800,
}

_WINDOW_PATTERN = re.compile(r'^(\d+(?:\.\d+)?)\s*([smhdw]?)$')


def parse_window(window_str: str) -> timedelta:
    """
    Parse a duration string into a timedelta.

    Supported formats:
    - 45s, 30m, 2h, 7d, 1w
    - 1.5h (fractional values)
    - 90 (bare numbers are minutes)

    Args:
        window_str: Duration string to parse

    Returns:
        Duration as timedelta

    Raises:
        ValueError: If the format is invalid, the duration is not positive
            or it exceeds ScanConstants.MAX_WINDOW
    """
    if window_str is None:
        raise ValueError("Window is required")

    cleaned = window_str.strip().lower()
    if not cleaned:
        raise ValueError("Window is required")

    if cleaned.startswith('-'):
        raise ValueError("Negative windows are not allowed")

    match = _WINDOW_PATTERN.match(cleaned)
    if not match:
        raise ValueError(f"Invalid window format: {window_str}. Use e.g. 30m, 2h or 7d")

    value = float(match.group(1))
    unit = match.group(2) or 'm'
    if math.isnan(value) or value <= 0:
        raise ValueError(f"Window must be positive: {window_str}")

    seconds = value * _UNIT_SECONDS[unit]
    if seconds > ScanConstants.MAX_WINDOW.total_seconds():
        raise ValueError(f"Window is too long: {window_str}. Maximum is {format_window(ScanConstants.MAX_WINDOW)}")

    return timedelta(seconds=seconds)


def format_window(window: timedelta) -> str:
    """
    Format a timedelta as a compact label.

    Args:
        window: Duration to format

    Returns:
        Label such as "30m", "7d" or "1h 30m"
    """
    total_seconds = int(window.total_seconds())
    if total_seconds <= 0:
        return "0m"

    days, remainder = divmod(total_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if seconds:
        parts.append(f"{seconds}s")
    return " ".join(parts)
