"""Shared test fixtures for proctop."""

import pytest

from proctop.config import MonitorConfig
from proctop.core import SessionEngine
from proctop.models import NetworkCounters, ProcessRecord, Snapshot


def make_record(pid: int = 1, name: str = "proc", cpu: float = 0.0, mem: int = 0) -> ProcessRecord:
    """Create a ProcessRecord for testing."""
    return ProcessRecord(pid=pid, name=name, cpuPercent=cpu, memoryBytes=mem)


class FakeProvider:
    """Metrics provider that hands out prepared snapshots in order."""

    def __init__(self, *snapshots):
        self.snapshots = list(snapshots) or [Snapshot()]
        self.calls = 0

    def collectSnapshot(self):
        self.calls += 1
        item = self.snapshots[min(self.calls - 1, len(self.snapshots) - 1)]
        if isinstance(item, Exception):
            raise item
        return item


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedKeys:
    """Key source returning scripted keys, then quitting."""

    def __init__(self, keys, on_poll=None):
        self.keys = list(keys)
        self.timeouts = []
        self.on_poll = on_poll

    def __call__(self, timeout: float):
        self.timeouts.append(timeout)
        if self.on_poll is not None:
            self.on_poll()
        if not self.keys:
            return "q"
        return self.keys.pop(0)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sample_snapshot() -> Snapshot:
    return Snapshot(
        processes=(
            make_record(1, "bash", cpu=1.5, mem=100),
            make_record(2, "chrome", cpu=35.0, mem=50),
            make_record(42, "init", cpu=0.1, mem=200),
        ),
        networks=(NetworkCounters("eth0", bytesReceived=4096, bytesSent=2048),),
    )


@pytest.fixture
def engine(sample_snapshot, clock) -> SessionEngine:
    return SessionEngine(MonitorConfig(), FakeProvider(sample_snapshot), clock=clock)
