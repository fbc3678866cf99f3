"""procfmt - Textual viewer for formatted live entities."""

import argparse
import logging
from enum import Enum
from queue import Empty, Queue

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container
from textual.css.query import NoMatches
from textual.logging import TextualHandler
from textual.widgets import DataTable, Footer, Static
from textual.widgets.data_table import CellDoesNotExist, DuplicateKey, RowDoesNotExist

from procfmt.formatters import format_load_average, format_mem_stats
from procfmt.models import LoadAverage
from procfmt.monitor import EntityMonitor, EntitySnapshot
from procfmt.sampler import ProcessEntry

logger = logging.getLogger(__name__)

LOADING_TEXT = "Loading load average..."


class SortKey(Enum):
    """Sort keys for the process table."""

    RES = "res"
    PID = "pid"
    NAME = "name"


def format_bytes(size: int) -> str:
    """Format bytes as human-readable string."""
    for unit in ["B", "K", "M", "G", "T"]:
        if size < 1024:
            return f"{size:5.1f}{unit}" if unit != "B" else f"{size:5d}{unit}"
        size = size / 1024
    return f"{size:.1f}P"


class LoadHeader(Static):
    """Header widget showing the formatted load average."""

    DEFAULT_CSS = """
    LoadHeader {
        height: auto;
        padding: 1;
        background: $surface;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize LoadHeader."""
        super().__init__(LOADING_TEXT, *args, **kwargs)
        self._load_average: LoadAverage | None = None

    @property
    def load_text(self) -> str:
        """Get the text currently shown."""
        if self._load_average is None:
            return LOADING_TEXT
        return format_load_average(self._load_average)

    def update_load(self, load_average: LoadAverage) -> None:
        """Show a new load average."""
        self._load_average = load_average
        self.update(self.load_text)


class ProcessTable(Container):
    """Container for the process memory table."""

    DEFAULT_CSS = """
    ProcessTable {
        height: 1fr;
        border: solid $primary;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize ProcessTable."""
        super().__init__(*args, **kwargs)
        self._current_pids: set[int] = set()
        self._sort_key: SortKey = SortKey.RES
        self._sort_reverse: bool = True  # Default: descending for RES

    @property
    def sort_key(self) -> SortKey:
        """Get current sort key."""
        return self._sort_key

    def cycle_sort(self) -> SortKey:
        """Cycle to the next sort key and return it."""
        keys = list(SortKey)
        current_index = keys.index(self._sort_key)
        next_index = (current_index + 1) % len(keys)
        self._sort_key = keys[next_index]
        self._sort_reverse = self._sort_key is SortKey.RES
        return self._sort_key

    def compose(self) -> ComposeResult:
        """Compose the process table."""
        yield DataTable(id="process-table")

    def on_mount(self) -> None:
        """Initialize the data table when mounted."""
        table = self.query_one("#process-table", DataTable)
        table.cursor_type = "row"

        table.add_column("PID", key="pid", width=8)
        table.add_column("NAME", key="name", width=16)
        table.add_column("RES", key="res", width=8)
        table.add_column("MEM_STATS", key="mem_stats")

    def update_processes(self, processes: list[ProcessEntry]) -> None:
        """
        Update the process table with new data.

        Uses update_cell for existing rows to avoid re-rendering the whole table.
        """
        table = self.query_one("#process-table", DataTable)

        sorted_processes = self._sort_processes(processes)
        new_pids = {proc.pid for proc in sorted_processes}

        for pid in self._current_pids - new_pids:
            try:
                table.remove_row(str(pid))
            except RowDoesNotExist:
                logger.debug("Row for pid %d already gone", pid)

        for proc in sorted_processes:
            row_key = str(proc.pid)
            if proc.pid in self._current_pids:
                self._update_row(table, row_key, proc)
            else:
                self._add_row(table, row_key, proc)

        self._current_pids = new_pids

    def _sort_processes(self, processes: list[ProcessEntry]) -> list[ProcessEntry]:
        """Sort processes based on the current sort key."""
        key_func = {
            SortKey.RES: lambda p: p.mem_stats.resident,
            SortKey.PID: lambda p: p.pid,
            SortKey.NAME: lambda p: p.name.lower(),
        }
        return sorted(processes, key=key_func[self._sort_key], reverse=self._sort_reverse)

    def _update_row(self, table: DataTable, row_key: str, proc: ProcessEntry) -> None:
        """Update an existing row using update_cell for performance."""
        try:
            table.update_cell(row_key, "name", proc.name[:16])
            table.update_cell(row_key, "res", format_bytes(proc.mem_stats.resident))
            table.update_cell(row_key, "mem_stats", Text(format_mem_stats(proc.mem_stats)))
        except CellDoesNotExist:
            logger.debug("Row for pid %s vanished during update", row_key)

    def _add_row(self, table: DataTable, row_key: str, proc: ProcessEntry) -> None:
        """Add a new row to the table."""
        try:
            table.add_row(
                str(proc.pid),
                proc.name[:16],
                format_bytes(proc.mem_stats.resident),
                Text(format_mem_stats(proc.mem_stats)),
                key=row_key,
            )
        except DuplicateKey:
            logger.debug("Row for pid %s already present", row_key)


class ProcfmtApp(App):
    """Main procfmt application."""

    TITLE = "procfmt"
    SUB_TITLE = "Formatted process state"

    CSS = """
    Screen {
        layout: vertical;
    }

    #load-header {
        dock: top;
        height: auto;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("f6", "sort", "Sort"),
    ]

    def __init__(self, poll_rate: float = 2.0) -> None:
        """Initialize the ProcfmtApp."""
        super().__init__()
        self._update_queue: Queue[EntitySnapshot] = Queue()
        self._monitor = EntityMonitor(self._update_queue, poll_rate=poll_rate)

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        # Formatted entities are full of brackets; render them as plain text
        yield LoadHeader(id="load-header", markup=False)
        yield ProcessTable()
        yield Footer()

    def on_mount(self) -> None:
        """Start the entity monitor when the app is mounted."""
        self._monitor.start()
        self.set_interval(0.5, self._check_for_updates)

    def _check_for_updates(self) -> None:
        """Check the queue for snapshots and refresh the UI."""
        # Drain the queue to get the most recent snapshot
        snapshot = None
        while True:
            try:
                snapshot = self._update_queue.get_nowait()
            except Empty:
                break

        if snapshot is not None:
            self._update_ui(snapshot)

    def _update_ui(self, snapshot: EntitySnapshot) -> None:
        """Update the UI with a new entity snapshot."""
        try:
            self.query_one("#load-header", LoadHeader).update_load(snapshot.load_average)
            self.query_one(ProcessTable).update_processes(snapshot.processes)
        except NoMatches:
            logger.debug("Widgets not mounted yet, dropping snapshot")

    def action_sort(self) -> None:
        """Handle sort action - cycle through sort keys."""
        new_sort_key = self.query_one(ProcessTable).cycle_sort()
        self.notify(f"Sort: {new_sort_key.value.upper()}")

    def action_quit(self) -> None:
        """Handle quit action with graceful cleanup."""
        self._monitor.stop()
        self.exit()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line options."""
    parser = argparse.ArgumentParser(
        prog="procfmt",
        description="Show live process state in procfmt's formatted form.",
    )
    parser.add_argument(
        "--poll-rate",
        type=float,
        default=2.0,
        help="seconds between samples (minimum 0.1, default 2.0)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="log level for the Textual devtools console (default WARNING)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Entry point for procfmt application."""
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, handlers=[TextualHandler()])
    app = ProcfmtApp(poll_rate=args.poll_rate)
    app.run()


if __name__ == "__main__":
    main()
