from rich.console import Console

from serverstats.formatting import print_field, print_header
from serverstats.services import identity_monitor

TITLE = "SYSTEM INFORMATION"


def render(console: Console) -> None:
    print_header(console, TITLE)
    identity = identity_monitor.get_system_identity()
    print_field(console, "OS", identity.os_name)
    print_field(console, "Kernel", identity.kernel)
    print_field(console, "Hostname", identity.hostname)
    print_field(console, "Uptime", identity.uptime)
    print_field(console, "Current Time", identity.current_time)
