from typing import List, Union

from rich.console import Console

from serverstats.config import get_settings
from serverstats.errors import MetricUnavailable
from serverstats.formatting import INDENT, print_error, print_header, print_line, table_row
from serverstats.models.process import ProcessEntry
from serverstats.services import process_monitor

COLUMNS = ("USER", "PID", "%CPU", "%MEM", "COMMAND")
COLUMN_WIDTHS = (20, 10, 10, 10)

ProcessTable = Union[List[ProcessEntry], MetricUnavailable]


def load_process_table() -> ProcessTable:
    """
    Take one process snapshot for both ranked views.

    An unavailable process table is returned rather than raised, so each view
    can print its own inline error.
    """
    try:
        return process_monitor.get_process_table()
    except MetricUnavailable as exc:
        return exc


def _render_ranked(console: Console, title: str, table: ProcessTable, key: str) -> None:
    print_header(console, title)
    if isinstance(table, MetricUnavailable):
        print_error(console, str(table))
        return

    limit = get_settings().top_process_count
    print_line(console, table_row(COLUMNS, COLUMN_WIDTHS), indent=INDENT)
    for entry in process_monitor.top_processes(table, key, limit):
        row = table_row(
            [entry.user, entry.pid, entry.cpu_percent, entry.mem_percent, entry.command],
            COLUMN_WIDTHS,
        )
        print_line(console, row, indent=INDENT)


def render_top_cpu(console: Console, table: ProcessTable) -> None:
    count = get_settings().top_process_count
    _render_ranked(console, f"TOP {count} PROCESSES BY CPU USAGE", table, "cpu_percent")


def render_top_memory(console: Console, table: ProcessTable) -> None:
    count = get_settings().top_process_count
    _render_ranked(console, f"TOP {count} PROCESSES BY MEMORY USAGE", table, "mem_percent")
