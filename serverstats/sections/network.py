from rich.console import Console

from serverstats.errors import MetricUnavailable
from serverstats.formatting import (
    INDENT,
    print_error,
    print_field,
    print_header,
    print_line,
    print_subheader,
    print_warning,
    table_row,
)
from serverstats.services import network_monitor

TITLE = "NETWORK INFORMATION"

COLUMN_WIDTHS = (6, 40, 8)


def render(console: Console) -> None:
    print_header(console, TITLE)

    print_field(console, "IP Addresses")
    try:
        for address in network_monitor.get_private_addresses():
            print_line(console, address, indent=INDENT)
    except MetricUnavailable as exc:
        print_error(console, str(exc))

    print_subheader(console, "Network Connections")
    try:
        listeners = network_monitor.get_listeners()
    except MetricUnavailable as exc:
        print_warning(console, str(exc))
        return

    for listener in listeners:
        row = table_row(
            [
                listener.protocol,
                f"{listener.local_address}:{listener.local_port}",
                listener.state,
            ],
            COLUMN_WIDTHS,
        )
        print_line(console, row, indent=INDENT)
