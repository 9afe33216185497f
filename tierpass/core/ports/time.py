"""
Time port interface.

All instants are timezone-aware UTC. Entitlement validity is always derived
from a comparison against now_utc() at the moment of use.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class TimePort(Protocol):
    """Time provider interface."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
