from __future__ import annotations

import time
from typing import Any, Callable, Optional

from .config import MonitorConfig
from .models import Frame, ProcessRecord, SearchMode, SessionState, Snapshot, SortField
from .pipeline import computeView
from .selection import clampSelection

KEY_QUIT = "q"
KEY_SEARCH = "/"
KEY_CANCEL = "\x1b"
KEY_BACKSPACE = ("\x08", "\x7f")
KEY_UP = "KEY_UP"
KEY_DOWN = "KEY_DOWN"
KEY_TOGGLE_ORDER = "r"

sortFieldByKey: dict[str, SortField] = {
    "c": SortField.CPU,
    "m": SortField.MEMORY,
    "n": SortField.NAME,
}

BANNER_HINT = "Press '/' to search, 'q' to quit"
SEARCH_PREFIX = "Search: "

PollKeyFn = Callable[[float], Optional[str]]
RenderFn = Callable[[Frame], Any]


def isPrintableChar(ch: str) -> bool:
    return len(ch) == 1 and ch.isprintable()


class SessionEngine:
    """
    Owns the session state and the current snapshot.

    Every state change goes through handleKey() or a refresh; the pipeline and
    the selection helpers only ever read the state.
    """

    def __init__(
        self,
        config: MonitorConfig,
        provider: Any,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self.provider = provider
        self.clock = clock

        self.state = SessionState(sortField=config.defaultSort)
        self.commandLog: list[str] = []
        self.maxLogLines: int = 512
        self.statusMsg: str = "ready"

        # a provider failure here is fatal: there is nothing to show yet
        self.snapshot: Snapshot = self.provider.collectSnapshot()
        self.state.lastRefresh = self.clock()

    def writeLog(self, msg: str) -> None:
        tsStr = time.strftime("%H:%M:%S")
        self.commandLog.append(f"[{tsStr}] {msg}")
        if len(self.commandLog) > self.maxLogLines:
            self.commandLog = self.commandLog[-self.maxLogLines :]

    ########### input transitions #########################

    def handleKey(self, ch: str) -> None:
        st = self.state

        if ch == KEY_QUIT:
            st.quitRequested = True
            return

        if ch == KEY_SEARCH:
            st.searchMode = SearchMode.ACTIVE
            st.searchQuery = ""
            return

        if ch == KEY_CANCEL:
            st.searchMode = SearchMode.INACTIVE
            st.searchQuery = ""
            return

        if st.searching and isPrintableChar(ch):
            st.searchQuery += ch
            return

        if st.searching and ch in KEY_BACKSPACE:
            st.searchQuery = st.searchQuery[:-1]
            return

        if ch in sortFieldByKey:
            st.sortField = sortFieldByKey[ch]
            return

        if ch == KEY_TOGGLE_ORDER:
            st.sortOrder = st.sortOrder.flipped()
            return

        if ch == KEY_UP:
            self.moveSelection(-1)
            return

        if ch == KEY_DOWN:
            self.moveSelection(+1)
            return

    def moveSelection(self, delta: int) -> None:
        self.state.selectedIndex = clampSelection(self.state.selectedIndex, delta, len(self.currentView()))

    ########### refresh #########################

    def refreshIfDue(self) -> bool:
        nowTs = self.clock()
        if nowTs - self.state.lastRefresh < self.config.refreshIntervalSec:
            return False
        self.forceRefresh(nowTs)
        return True

    def forceRefresh(self, nowTs: float | None = None) -> None:
        # A failed refresh keeps the previous snapshot; the next tick tries again.
        self.state.lastRefresh = self.clock() if nowTs is None else nowTs
        try:
            self.snapshot = self.provider.collectSnapshot()
        except Exception as exc:
            self.statusMsg = f"refresh failed: {type(exc).__name__}"
            self.writeLog(f"REFRESH EXC {type(exc).__name__}: {exc}")
            return
        self.statusMsg = "ready"

    ########### view #########################

    def currentView(self) -> list[ProcessRecord]:
        return computeView(self.snapshot.processes, self.state)

    def bannerText(self) -> str:
        if self.state.searching:
            return SEARCH_PREFIX + self.state.searchQuery
        return BANNER_HINT

    def buildFrame(self) -> Frame:
        rows = self.currentView()
        self.state.selectedIndex = clampSelection(self.state.selectedIndex, 0, len(rows))

        return Frame(
            banner=self.bannerText(),
            status=self.statusMsg,
            sortField=self.state.sortField,
            sortOrder=self.state.sortOrder,
            searching=self.state.searching,
            networks=self.snapshot.networks,
            rows=tuple(rows),
            selectedIndex=self.state.selectedIndex,
        )

    ########### loop #########################

    def runLoop(self, pollKeyFn: PollKeyFn, renderFn: RenderFn, *, pollTimeoutSec: float = 0.1) -> None:
        self.writeLog("session started")

        while not self.state.quitRequested:
            ch = pollKeyFn(pollTimeoutSec)
            if ch is not None:
                self.handleKey(ch)
                if self.state.quitRequested:
                    break

            self.refreshIfDue()
            renderFn(self.buildFrame())

        self.writeLog("session ended")
