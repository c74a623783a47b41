from rich.console import Console

from serverstats.config import get_settings
from serverstats.errors import MetricUnavailable
from serverstats.formatting import print_error, print_field, print_header, print_line, print_subheader
from serverstats.services import session_monitor

TITLE = "LOGGED IN USERS"


def render(console: Console) -> None:
    print_header(console, TITLE)
    try:
        sessions = session_monitor.get_sessions()
    except MetricUnavailable as exc:
        print_error(console, str(exc))
        return

    users = session_monitor.distinct_usernames(sessions)
    print_field(console, "Currently logged in users", " ".join(users))

    print_subheader(console, f"User sessions ({len(sessions)})")
    for session in sessions[: get_settings().session_limit]:
        print_line(console, session.raw)
