from __future__ import annotations
from pathlib import Path
from typing import Any, Iterable

import tomli

from .models import NetworkCounters


def safeStr(val: Any) -> str:
    try:
        return str(val)
    except Exception:
        return ""


def parseInt(val: Any, defaultVal: int) -> int:
    if val is None or isinstance(val, bool):
        return int(defaultVal)
    if isinstance(val, int):
        return val
    try:
        s = safeStr(val).strip()
        if not s:
            return int(defaultVal)
        return int(float(s)) if any(ch in s for ch in ".eE") else int(s)
    except Exception:
        return int(defaultVal)


def parseFloat(val: Any, defaultVal: float) -> float:
    if val is None or isinstance(val, bool):
        return float(defaultVal)
    try:
        return float(val)
    except Exception:
        return float(defaultVal)


def loadToml(pathObj: Path) -> dict[str, Any]:
    dataObj = tomli.loads(pathObj.read_text(encoding="utf-8"))
    if isinstance(dataObj, dict):
        return dataObj
    raise RuntimeError(f"{pathObj.name}: invalid toml root")


def formatCpu(cpuPercent: float) -> str:
    return f"{cpuPercent:.2f}%"


def formatMemory(memoryBytes: int) -> str:
    # kept as bytes / 1024 labelled "MB" for output compatibility
    return f"{memoryBytes / 1024.0:.2f} MB"


def formatNetwork(counters: NetworkCounters) -> str:
    return f"{counters.name} ↓{counters.bytesReceived // 1024} KB ↑{counters.bytesSent // 1024} KB"


def formatNetworks(networks: Iterable[NetworkCounters]) -> str:
    return " | ".join(formatNetwork(n) for n in networks)
