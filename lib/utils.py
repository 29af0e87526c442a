# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - ApplicationError: base class for framework-agnostic errors
# - parse_duration: turns "1d", "2 hours", "90s" into a timedelta
# =============================================================================

import math
import re
from datetime import timedelta
from typing import Any


# =============================================================================
# Duration Parsing
# =============================================================================

# Seconds per unit. A year is 365.25 days.
_UNIT_SECONDS: dict[str, float] = {
    "ms": 0.001, "msec": 0.001, "msecs": 0.001,
    "millisecond": 0.001, "milliseconds": 0.001,
    "s": 1, "sec": 1, "secs": 1, "second": 1, "seconds": 1,
    "m": 60, "min": 60, "mins": 60, "minute": 60, "minutes": 60,
    "h": 3600, "hr": 3600, "hrs": 3600, "hour": 3600, "hours": 3600,
    "d": 86400, "day": 86400, "days": 86400,
    "w": 604800, "week": 604800, "weeks": 604800,
    "y": 31557600, "yr": 31557600, "yrs": 31557600,
    "year": 31557600, "years": 31557600,
}

# Longer strings are rejected without matching
_MAX_DURATION_LENGTH = 100

_DURATION_PATTERN = re.compile(
    r"^(?P<amount>-?(?:\d+)?\.?\d+) *(?P<unit>[a-z]+)?$",
    re.IGNORECASE,
)


def parse_duration(value: str | int | float) -> timedelta:
    """
    Parse a human-readable duration into a timedelta.

    Follows the syntax of the `ms` package used by jsonwebtoken's expiresIn:
    int/float values are seconds, while strings are a number followed by
    optional spaces and a unit (ms, s, m, h, d, w, y and their long forms).
    A unit-less string is milliseconds, so "3600" is 3.6 seconds.

    Args:
        value: Duration such as 3600, "1d", "1 day", "1.5h", "500"

    Returns:
        The duration as a timedelta

    Raises:
        ValueError: If the value is empty, too long, not finite or the unit
            is unknown

    Example:
        parse_duration("1d")      # timedelta(days=1)
        parse_duration("15 min")  # timedelta(minutes=15)
    """
    # bool is an int subclass
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")

    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            raise ValueError(f"Invalid duration: {value!r}")
        return _seconds(value, value)

    if not isinstance(value, str):
        raise ValueError(f"Invalid duration: {value!r}")

    if len(value) > _MAX_DURATION_LENGTH:
        raise ValueError(f"Duration longer than {_MAX_DURATION_LENGTH} characters")

    match = _DURATION_PATTERN.match(value)
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")

    amount = float(match.group("amount"))
    unit = (match.group("unit") or "ms").lower()

    if unit not in _UNIT_SECONDS:
        raise ValueError(f"Unknown duration unit '{unit}' in {value!r}")

    return _seconds(amount * _UNIT_SECONDS[unit], value)


def _seconds(seconds: float, value: Any) -> timedelta:
    try:
        return timedelta(seconds=seconds)
    except OverflowError:
        raise ValueError(f"Duration out of range: {value!r}") from None


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging

    Example:
        class MyServiceError(ApplicationError):
            def __init__(self, message: str, **kwargs):
                super().__init__(message, code="MY_SERVICE_ERROR", **kwargs)
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }
