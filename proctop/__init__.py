from .app import MonitorApp
from .config import MonitorConfig
from .core import SessionEngine
from .models import Frame, NetworkCounters, ProcessRecord, SearchMode, SessionState, Snapshot, SortField, SortOrder
from .pipeline import computeView
from .selection import clampSelection

__all__ = [
    "MonitorApp",
    "MonitorConfig",
    "SessionEngine",
    "Frame",
    "NetworkCounters",
    "ProcessRecord",
    "SearchMode",
    "SessionState",
    "Snapshot",
    "SortField",
    "SortOrder",
    "computeView",
    "clampSelection",
]
