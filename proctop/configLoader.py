from __future__ import annotations

from pathlib import Path

from .config import MonitorConfig
from .models import SortField
from .utils import loadToml

DEFAULT_CONFIG_PATH = "config.toml"

sortFieldByName: dict[str, SortField] = {
    "cpu": SortField.CPU,
    "mem": SortField.MEMORY,
    "name": SortField.NAME,
}


def parseSortField(val: str) -> SortField:
    return sortFieldByName.get(val, SortField.CPU)


def loadConfig(configPath: str | Path = DEFAULT_CONFIG_PATH) -> MonitorConfig:
    cfgPath = Path(configPath)

    try:
        cfgObj = loadToml(cfgPath)
    except Exception:
        return MonitorConfig()

    refreshRate = cfgObj.get("refresh_rate")
    defaultSort = cfgObj.get("default_sort")

    # both keys are required; a partial file counts as malformed
    if isinstance(refreshRate, bool) or not isinstance(refreshRate, int) or refreshRate < 0:
        return MonitorConfig()
    if not isinstance(defaultSort, str):
        return MonitorConfig()

    return MonitorConfig(
        refreshRateMs=int(refreshRate),
        defaultSort=parseSortField(defaultSort),
    )
