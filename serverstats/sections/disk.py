from rich.console import Console

from serverstats.errors import MetricUnavailable
from serverstats.formatting import (
    INDENT,
    humanize_kb,
    print_error,
    print_field,
    print_header,
    print_line,
    print_subheader,
    table_row,
)
from serverstats.models.disk import to_gb
from serverstats.services import disk_monitor

TITLE = "DISK USAGE"

# device, size, used, avail, use%, mountpoint
COLUMN_WIDTHS = (30, 10, 10, 10, 5)


def render(console: Console) -> None:
    print_header(console, TITLE)
    try:
        summary = disk_monitor.get_disk_summary()
    except MetricUnavailable as exc:
        print_error(console, str(exc))
        return

    print_field(console, "Filesystem Usage")
    for entry in summary.entries:
        row = table_row(
            [
                entry.device,
                humanize_kb(entry.size_kb),
                humanize_kb(entry.used_kb),
                humanize_kb(entry.avail_kb),
                entry.use_percent,
                entry.mountpoint,
            ],
            COLUMN_WIDTHS,
        )
        print_line(console, row, indent=INDENT)

    print_subheader(console, "Total Disk Summary")
    print_line(console, f"Total: {to_gb(summary.total_kb)} GB", indent=INDENT)
    print_line(console, f"Used: {to_gb(summary.used_kb)} GB", indent=INDENT)
    print_line(console, f"Available: {to_gb(summary.avail_kb)} GB", indent=INDENT)
    print_line(console, f"Usage: {summary.use_percent}", indent=INDENT)
