import datetime as dt
from typing import Iterable, List, Optional

import psutil

from serverstats.errors import ToolUnavailable
from serverstats.models.session import UserSession
from serverstats.services import sources
from serverstats.services.commands import run_tool, tool_available

WHO_TIME_FORMAT = "%Y-%m-%d %H:%M"


def parse_who_line(line: str) -> Optional[UserSession]:
    """
    Parse one line of `who`, e.g.

        alice    pts/0        2026-10-18 08:12 (10.0.0.5)
    """
    fields = line.split()
    if len(fields) < 3:
        return None

    remote_host = None
    time_fields = []
    for field in fields[2:]:
        if field.startswith("(") and field.endswith(")"):
            remote_host = field[1:-1] or None
            break
        time_fields.append(field)

    return UserSession(
        username=fields[0],
        tty=fields[1],
        login_time=" ".join(time_fields),
        remote_host=remote_host,
        raw=line.rstrip(),
    )


def parse_who_output(output: str) -> List[UserSession]:
    sessions = []
    for line in output.splitlines():
        session = parse_who_line(line)
        if session is not None:
            sessions.append(session)
    return sessions


def _read_from_who() -> List[UserSession]:
    if not tool_available("who"):
        raise ToolUnavailable("who command not available")
    return parse_who_output(run_tool(["who"]))


def _read_native() -> List[UserSession]:
    sessions = []
    for user in psutil.users():
        login_time = dt.datetime.fromtimestamp(user.started).strftime(WHO_TIME_FORMAT)
        tty = user.terminal or "?"
        raw = f"{user.name:<8} {tty:<12} {login_time}"
        if user.host:
            raw += f" ({user.host})"
        sessions.append(
            UserSession(
                username=user.name,
                tty=tty,
                login_time=login_time,
                remote_host=user.host or None,
                raw=raw,
            )
        )
    return sessions


def get_sessions() -> List[UserSession]:
    """Active login sessions; an empty list when nobody is logged in."""
    return sources.collect(_read_native, _read_from_who)


def distinct_usernames(sessions: Iterable[UserSession]) -> List[str]:
    return sorted({session.username for session in sessions})
