from rich.console import Console

from serverstats.errors import MetricUnavailable
from serverstats.formatting import print_field, print_header, print_line, print_subheader, print_warning
from serverstats.services import login_monitor

TITLE = "FAILED LOGIN ATTEMPTS (Last 24 hours)"


def render(console: Console) -> None:
    print_header(console, TITLE)
    try:
        report = login_monitor.get_failed_logins()
    except MetricUnavailable as exc:
        print_warning(console, f"Warning: {exc}")
        return

    print_field(console, "Failed login attempts", report.count)
    if report.count > 0 and report.recent:
        print_subheader(console, "Recent failed attempts")
        for event in report.recent:
            print_line(console, event.raw_line)
