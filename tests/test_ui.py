"""Tests for rendering and formatting."""

from io import StringIO

from conftest import make_record
from rich.console import Console

from proctop.models import Frame, NetworkCounters, SortField, SortOrder
from proctop.ui import RichUi
from proctop.utils import formatCpu, formatMemory, formatNetworks, parseFloat, parseInt


def make_console(width: int = 100, height: int = 20) -> Console:
    return Console(file=StringIO(), record=True, width=width, height=height, color_system=None)


def make_frame(rows=(), selected=None, **kwargs) -> Frame:
    defaults = dict(
        banner="Press '/' to search, 'q' to quit",
        status="ready",
        sortField=SortField.CPU,
        sortOrder=SortOrder.DESCENDING,
    )
    defaults.update(kwargs)
    return Frame(rows=tuple(rows), selectedIndex=selected, **defaults)


class TestFormatting:
    """Tests for value formatting helpers."""

    def test_cpu(self):
        """CPU has two decimals and a percent sign."""
        assert formatCpu(12.345) == "12.35%"

    def test_memory_uses_1024_denominator(self):
        """Memory divides by 1024 and is labelled MB."""
        assert formatMemory(2048) == "2.00 MB"
        assert formatMemory(1536) == "1.50 MB"

    def test_networks(self):
        """Interfaces are pipe separated with integer KB totals."""
        nets = [NetworkCounters("eth0", 4096, 2047), NetworkCounters("lo", 0, 1024)]
        assert formatNetworks(nets) == "eth0 ↓4 KB ↑1 KB | lo ↓0 KB ↑1 KB"

    def test_no_networks(self):
        """No interfaces gives an empty string."""
        assert formatNetworks([]) == ""

    def test_parse_helpers(self):
        """parseInt / parseFloat fall back on junk."""
        assert parseInt("12", 0) == 12
        assert parseInt("1e3", 0) == 1000
        assert parseInt(None, 5) == 5
        assert parseInt("junk", 5) == 5
        assert parseFloat("2.5", 0.0) == 2.5
        assert parseFloat(object(), 1.0) == 1.0


class TestVisibleWindow:
    """Tests for table scrolling."""

    def test_fits(self):
        """Short lists show from the top."""
        ui = RichUi(console=make_console())
        assert ui.visibleWindow(5, 3, 10) == (0, 5)

    def test_scrolls_down_to_selection(self):
        """Selecting past the bottom scrolls the window."""
        ui = RichUi(console=make_console())
        assert ui.visibleWindow(50, 12, 10) == (3, 13)

    def test_scrolls_up_to_selection(self):
        """Selecting above the window scrolls back up."""
        ui = RichUi(console=make_console())
        ui.visibleWindow(50, 30, 10)
        assert ui.visibleWindow(50, 5, 10) == (5, 15)

    def test_shrinking_list_pulls_window_back(self):
        """When rows disappear the window stays inside the list."""
        ui = RichUi(console=make_console())
        ui.visibleWindow(50, 40, 10)
        assert ui.visibleWindow(12, 11, 10) == (2, 12)

    def test_no_selection_resets(self):
        """No selection shows the top."""
        ui = RichUi(console=make_console())
        ui.visibleWindow(50, 40, 10)
        assert ui.visibleWindow(0, None, 10) == (0, 0)


class TestRender:
    """Tests for rendered output."""

    def test_table_contents(self):
        """Rows render with PID, name, CPU and memory columns."""
        console = make_console()
        ui = RichUi(console=console)
        frame = make_frame([make_record(42, "init", cpu=1.5, mem=2048)], selected=0)
        console.print(ui.renderTable(frame, height=10))
        text = console.export_text()
        assert "PID" in text and "Name" in text and "CPU %" in text and "Memory MB" in text
        assert "42" in text and "init" in text and "1.50%" in text and "2.00 MB" in text

    def test_table_only_visible_rows(self):
        """Rows outside the viewport are not rendered."""
        console = make_console()
        ui = RichUi(console=console)
        rows = [make_record(100 + i, f"proc{i:02d}") for i in range(30)]
        console.print(ui.renderTable(make_frame(rows, selected=29), height=5))
        text = console.export_text()
        assert "proc29" in text and "proc25" in text
        assert "proc24" not in text

    def test_banner_shows_sort_and_status(self):
        """The banner carries the hint, sort mode and status."""
        ui = RichUi(console=make_console(width=80))
        text = ui.renderBanner(make_frame(sortField=SortField.MEMORY, sortOrder=SortOrder.ASCENDING)).plain
        assert text.startswith("Press '/' to search")
        assert "sort: MEMORY ↑" in text
        assert "ready" in text

    def test_banner_search_prompt(self):
        """While searching, the banner is the search prompt."""
        ui = RichUi(console=make_console(width=80))
        text = ui.renderBanner(make_frame(banner="Search: ch", searching=True)).plain
        assert text.startswith("Search: ch")

    def test_network_line_placeholder(self):
        """Without interfaces the network line shows a dash."""
        ui = RichUi(console=make_console())
        assert ui.renderNetworks(make_frame()).plain == "-"

    def test_render_without_live_prints(self):
        """render() outside a session prints the full layout."""
        console = make_console(width=90, height=12)
        ui = RichUi(console=console)
        frame = make_frame(
            [make_record(1, "bash")],
            selected=0,
            networks=(NetworkCounters("eth0", 2048, 1024),),
        )
        ui.render(frame)
        text = console.export_text()
        assert "Processes" in text
        assert "eth0 ↓2 KB ↑1 KB" in text
        assert "bash" in text


class TestBannerFit:
    """Tests for fitting the banner into the line."""

    def test_short_banner_unchanged(self):
        """A banner that fits is left alone."""
        ui = RichUi(console=make_console())
        assert ui.fitBanner("Search: ch", 40) == "Search: ch"

    def test_long_query_keeps_its_end(self):
        """A long query shows its most recently typed characters."""
        ui = RichUi(console=make_console())
        banner = "Search: " + "abcdefghijklmnopqrstuvwxyz"
        fitted = ui.fitBanner(banner, 20)
        assert len(fitted) == 20
        assert fitted.startswith("Search: …")
        assert fitted.endswith("uvwxyz")

    def test_no_room(self):
        """Without any room the banner is empty."""
        ui = RichUi(console=make_console())
        assert ui.fitBanner("Search: abc", 0) == ""

    def test_rendered_banner_shows_last_typed_chars(self):
        """In a narrow terminal the banner still ends with the query's tail."""
        ui = RichUi(console=make_console(width=50))
        query = "q" * 40 + "TAIL"
        text = ui.renderBanner(make_frame(banner="Search: " + query, searching=True)).plain
        assert text.startswith("Search: …")
        assert "TAIL" in text
        assert len(text) <= 50
