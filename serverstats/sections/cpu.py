from rich.console import Console

from serverstats.errors import MetricUnavailable
from serverstats.formatting import print_error, print_field, print_header
from serverstats.services import cpu_monitor

TITLE = "CPU USAGE"


def render(console: Console) -> None:
    """
    Print cumulative usage since boot, the optional mpstat sample, the core
    count and the load averages.
    """
    print_header(console, TITLE)
    try:
        status = cpu_monitor.get_cpu_status()
    except MetricUnavailable as exc:
        print_error(console, str(exc))
        return

    print_field(console, "Total CPU Usage", f"{status.snapshot.usage_percent}%")
    if status.sampled_usage_percent is not None:
        print_field(console, "CPU Usage (mpstat)", f"{status.sampled_usage_percent:.1f}%")
    print_field(console, "CPU Cores", status.cores)
    print_field(
        console,
        "Load Average",
        ", ".join(f"{load:.2f}" for load in status.load_average),
    )
