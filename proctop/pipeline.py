from __future__ import annotations

import math
from typing import Any, Callable, Iterable

from .models import ProcessRecord, SessionState, SortField, SortOrder


def matchesQuery(rec: ProcessRecord, query: str) -> bool:
    queryLower = query.lower()
    return queryLower in rec.name.lower() or queryLower in str(rec.pid)


def cpuRank(rec: ProcessRecord) -> tuple[int, float]:
    # NaN / non-numeric values rank below everything else
    try:
        cpu = float(rec.cpuPercent)
    except (TypeError, ValueError):
        return (0, 0.0)
    if math.isnan(cpu):
        return (0, 0.0)
    return (1, cpu)


def sortKeyFor(sortField: SortField) -> Callable[[ProcessRecord], Any]:
    if sortField is SortField.CPU:
        return cpuRank
    if sortField is SortField.MEMORY:
        return lambda rec: rec.memoryBytes
    if sortField is SortField.NAME:
        return lambda rec: rec.name
    raise ValueError(f"unknown sort field: {sortField!r}")


def filterRecords(records: Iterable[ProcessRecord], query: str) -> list[ProcessRecord]:
    if not query:
        return list(records)
    return [rec for rec in records if matchesQuery(rec, query)]


def computeView(snapshot: Iterable[ProcessRecord], state: SessionState) -> list[ProcessRecord]:
    """
    Turn a process snapshot into the rows to display.

    Filtering applies only while search is active and the query is non-empty.
    Sorting is stable ascending; descending is the reversed ascending order,
    so tied records also come out reversed.
    """
    query = state.searchQuery if state.searching else ""
    rows = filterRecords(snapshot, query)
    rows.sort(key=sortKeyFor(state.sortField))
    if state.sortOrder is SortOrder.DESCENDING:
        rows.reverse()
    return rows
