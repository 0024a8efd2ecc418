from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from rich import box
from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .core import SEARCH_PREFIX
from .models import Frame, SortOrder
from .utils import formatCpu, formatMemory, formatNetworks

# banner + network line + panel borders + table header
CHROME_LINES = 5


class RichUi:
    def __init__(self, *, console: Console | None = None) -> None:
        self.console = console or Console()
        self.live: Live | None = None

        self.styleBanner = "bold"
        self.styleSearch = "black on white"
        self.styleStatus = "dim"
        self.styleStatusBad = "bold red"
        self.styleNetwork = "cyan"
        self.styleTableHeader = "bold"
        self.styleSelected = "reverse"

        self.scrollOffset = 0

    @contextmanager
    def session(self) -> Iterator[RichUi]:
        # screen=True switches to the alternate screen and restores it on exit
        with Live(console=self.console, auto_refresh=False, screen=True) as live:
            self.live = live
            try:
                yield self
            finally:
                self.live = None

    def render(self, frame: Frame) -> None:
        layoutObj = self.buildLayout(frame)
        if self.live is None:
            self.console.print(layoutObj)
            return
        self.live.update(layoutObj, refresh=True)

    def tableHeight(self) -> int:
        return max(1, self.console.size.height - CHROME_LINES)

    def visibleWindow(self, rowCount: int, selectedIndex: int | None, height: int) -> tuple[int, int]:
        height = max(1, height)

        if selectedIndex is None:
            self.scrollOffset = 0
        elif selectedIndex < self.scrollOffset:
            self.scrollOffset = selectedIndex
        elif selectedIndex >= self.scrollOffset + height:
            self.scrollOffset = selectedIndex - height + 1

        maxOffset = max(0, rowCount - height)
        self.scrollOffset = max(0, min(self.scrollOffset, maxOffset))
        return self.scrollOffset, min(rowCount, self.scrollOffset + height)

    def fitBanner(self, banner: str, maxWidth: int) -> str:
        # too long: keep the end, so the last typed query characters stay visible
        if maxWidth <= 0:
            return ""
        if len(banner) <= maxWidth:
            return banner

        prefix = SEARCH_PREFIX if banner.startswith(SEARCH_PREFIX) and maxWidth > len(SEARCH_PREFIX) + 1 else ""
        tailLen = maxWidth - len(prefix) - 1
        return prefix + "…" + (banner[-tailLen:] if tailLen > 0 else "")

    def renderBanner(self, frame: Frame) -> Text:
        width = self.console.size.width
        arrow = "↓" if frame.sortOrder is SortOrder.DESCENDING else "↑"
        right = f"sort: {frame.sortField.name} {arrow}  {frame.status} "
        left = self.fitBanner(frame.banner, width - len(right) - 1)
        fill = max(1, width - len(left) - len(right))

        t = Text(left, style=self.styleSearch if frame.searching else self.styleBanner)
        t.append(" " * fill)
        statusStyle = self.styleStatus if frame.status == "ready" else self.styleStatusBad
        t.append(right, style=statusStyle)
        return t

    def renderNetworks(self, frame: Frame) -> Text:
        return Text(formatNetworks(frame.networks) or "-", style=self.styleNetwork, no_wrap=True, overflow="ellipsis")

    def renderTable(self, frame: Frame, height: int | None = None) -> Table:
        tableObj = Table(
            expand=False,
            show_header=True,
            header_style=self.styleTableHeader,
            show_lines=False,
            pad_edge=False,
            box=None,
        )

        tableObj.add_column("PID", width=10, no_wrap=True)
        tableObj.add_column("Name", width=25, no_wrap=True, overflow="ellipsis")
        tableObj.add_column("CPU %", width=10, no_wrap=True)
        tableObj.add_column("Memory MB", width=15, no_wrap=True)

        start, end = self.visibleWindow(
            len(frame.rows),
            frame.selectedIndex,
            self.tableHeight() if height is None else height,
        )

        for rowIdx in range(start, end):
            rec = frame.rows[rowIdx]
            tableObj.add_row(
                str(rec.pid),
                rec.name,
                formatCpu(rec.cpuPercent),
                formatMemory(rec.memoryBytes),
                style=self.styleSelected if rowIdx == frame.selectedIndex else None,
            )

        return tableObj

    def renderTablePanel(self, frame: Frame) -> Panel:
        return Panel(
            self.renderTable(frame),
            title="Processes",
            title_align="left",
            expand=True,
            box=box.SQUARE,
        )

    def buildLayout(self, frame: Frame) -> Layout:
        layoutObj = Layout(name="root")
        layoutObj.split_column(
            Layout(self.renderBanner(frame), name="banner", size=1),
            Layout(self.renderNetworks(frame), name="network", size=1),
            Layout(self.renderTablePanel(frame), name="processes"),
        )
        return layoutObj
