from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SortField(Enum):
    CPU = "cpu"
    MEMORY = "mem"
    NAME = "name"


class SortOrder(Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    def flipped(self) -> SortOrder:
        return SortOrder.ASCENDING if self is SortOrder.DESCENDING else SortOrder.DESCENDING


class SearchMode(Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"


@dataclass(frozen=True)
class ProcessRecord:
    pid: int
    name: str
    cpuPercent: float = 0.0  # 0.0 - 100.0 * core count
    memoryBytes: int = 0


@dataclass(frozen=True)
class NetworkCounters:
    name: str
    bytesReceived: int = 0
    bytesSent: int = 0


@dataclass(frozen=True)
class Snapshot:
    processes: tuple[ProcessRecord, ...] = ()
    networks: tuple[NetworkCounters, ...] = ()


@dataclass
class SessionState:
    sortField: SortField = SortField.CPU
    sortOrder: SortOrder = SortOrder.DESCENDING
    searchMode: SearchMode = SearchMode.INACTIVE
    searchQuery: str = ""
    selectedIndex: int | None = None
    lastRefresh: float = 0.0
    quitRequested: bool = False

    @property
    def searching(self) -> bool:
        return self.searchMode is SearchMode.ACTIVE


@dataclass(frozen=True)
class Frame:
    banner: str
    status: str
    sortField: SortField
    sortOrder: SortOrder
    searching: bool = False
    networks: tuple[NetworkCounters, ...] = ()
    rows: tuple[ProcessRecord, ...] = field(default_factory=tuple)
    selectedIndex: int | None = None
