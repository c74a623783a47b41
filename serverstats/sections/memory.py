from rich.console import Console

from serverstats.errors import MetricUnavailable
from serverstats.formatting import print_error, print_field, print_header
from serverstats.models.memory import to_mb
from serverstats.services import memory_monitor

TITLE = "MEMORY USAGE"


def render(console: Console) -> None:
    print_header(console, TITLE)
    try:
        mem = memory_monitor.get_memory_snapshot()
    except MetricUnavailable as exc:
        print_error(console, str(exc))
        return

    print_field(console, "Total Memory", f"{to_mb(mem.total_kb)} MB")
    print_field(console, "Used Memory", f"{to_mb(mem.used_kb)} MB ({mem.used_percent}%)")
    print_field(
        console,
        "Available Memory",
        f"{to_mb(mem.available_kb)} MB ({mem.available_percent}%)",
    )
    print_field(console, "Free Memory", f"{to_mb(mem.free_kb)} MB")
    if mem.has_swap:
        print_field(
            console,
            "Swap Used",
            f"{to_mb(mem.swap_used_kb)} MB / {to_mb(mem.swap_total_kb)} MB "
            f"({mem.swap_used_percent}%)",
        )
