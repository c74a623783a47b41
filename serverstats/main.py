import logging
from typing import Optional

from rich.console import Console

from serverstats.config import get_settings
from serverstats.formatting import (
    make_console,
    print_banner,
    print_field,
    print_separator,
    print_warning,
)
from serverstats.sections import cpu, disk, identity, logins, memory, network, processes, sessions
from serverstats.services import privilege
from serverstats.services.identity_monitor import current_time

TITLE = "SERVER PERFORMANCE STATISTICS"


def build_report(console: Console) -> None:
    """
    Print the full report: banner, root warning, then every section in its
    fixed order with a separator between sections.
    """
    print_banner(console, TITLE)
    if privilege.is_privileged_user():
        print_warning(console, "Warning: Running as root user")

    process_table = processes.load_process_table()
    steps = [
        identity.render,
        cpu.render,
        memory.render,
        disk.render,
        lambda c: processes.render_top_cpu(c, process_table),
        lambda c: processes.render_top_memory(c, process_table),
        sessions.render,
        logins.render,
        network.render,
    ]
    for index, step in enumerate(steps):
        if index:
            print_separator(console)
        step(console)

    console.print()
    print_field(console, "Script completed at", current_time())


def main(console: Optional[Console] = None) -> int:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    console = console or make_console()
    console.clear()
    build_report(console)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
