"""
Configuration data class for MonitorApp.

MonitorConfig holds the refresh interval (milliseconds) and the sort field a session starts with.
It is created once at startup and not changed afterwards.
"""
from __future__ import annotations

from dataclasses import dataclass

from .models import SortField

DEFAULT_REFRESH_RATE_MS = 1000
DEFAULT_SORT = SortField.CPU


@dataclass(frozen=True)
class MonitorConfig:
    refreshRateMs: int = DEFAULT_REFRESH_RATE_MS
    defaultSort: SortField = DEFAULT_SORT

    @property
    def refreshIntervalSec(self) -> float:
        return self.refreshRateMs / 1000.0
