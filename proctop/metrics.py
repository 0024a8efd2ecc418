from __future__ import annotations

from typing import Any

import psutil

from .models import NetworkCounters, ProcessRecord, Snapshot
from .utils import parseFloat, parseInt, safeStr


class MetricsProvider:
    """
    Reads processes and network interface counters through psutil.

    process_iter() keeps its Process objects between calls, so cpu_percent is
    measured against the previous call (the very first value is 0.0).
    """

    processAttrs = ["pid", "name", "cpu_percent", "memory_info"]

    def collectSnapshot(self) -> Snapshot:
        return Snapshot(
            processes=tuple(self.collectProcesses()),
            networks=tuple(self.collectNetworks()),
        )

    def collectProcesses(self) -> list[ProcessRecord]:
        records: list[ProcessRecord] = []

        for proc in psutil.process_iter(attrs=self.processAttrs):
            try:
                records.append(self.recordFor(proc.info))
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                # process went away (or is hidden from us) mid-iteration
                continue

        return records

    def recordFor(self, info: dict[str, Any]) -> ProcessRecord:
        memInfo = info.get("memory_info")
        memoryBytes = parseInt(getattr(memInfo, "rss", 0), 0) if memInfo else 0

        return ProcessRecord(
            pid=parseInt(info.get("pid"), 0),
            name=safeStr(info.get("name") or ""),
            cpuPercent=parseFloat(info.get("cpu_percent"), 0.0),
            memoryBytes=max(0, memoryBytes),
        )

    def collectNetworks(self) -> list[NetworkCounters]:
        countersByNic = psutil.net_io_counters(pernic=True) or {}
        return [
            NetworkCounters(
                name=nicName,
                bytesReceived=parseInt(counters.bytes_recv, 0),
                bytesSent=parseInt(counters.bytes_sent, 0),
            )
            for nicName, counters in countersByNic.items()
        ]
