import datetime as dt
import logging
import os
import re
from collections import deque
from pathlib import Path
from typing import Iterable, Optional

from serverstats.config import get_settings
from serverstats.errors import SourceUnreadable
from serverstats.models.login import FailedLoginReport, LoginFailureEvent

logger = logging.getLogger(__name__)

# "Oct 18 09:41:07" at the start of a classic syslog line
_SYSLOG_STAMP = re.compile(r"^([A-Z][a-z]{2} [ \d]\d \d{2}:\d{2}:\d{2})")


def find_auth_log(paths: Iterable[str]) -> Optional[Path]:
    """Return the first candidate that exists and is readable, else None."""
    for candidate in paths:
        path = Path(candidate)
        if path.is_file() and os.access(path, os.R_OK):
            return path
    return None


def failure_day_stamp(now: Optional[dt.datetime] = None) -> str:
    """
    Day filter in syslog form: abbreviated month plus space-padded day.

    Example: 2026-10-08 -> 'Oct  8'. This is a calendar-day match, so a run
    shortly after midnight sees only the last few minutes of failures.
    """
    now = now or dt.datetime.now()
    return f"{now:%b} {now.day:>2}"


def _event_from_line(line: str) -> LoginFailureEvent:
    match = _SYSLOG_STAMP.match(line)
    if match:
        timestamp = match.group(1)
    else:
        # rsyslog high-precision format: "2026-10-18T09:41:07.123+02:00 host ..."
        timestamp = line.split(None, 1)[0] if line.strip() else ""
    return LoginFailureEvent(timestamp=timestamp, raw_line=line)


def scan_failed_logins(
    lines: Iterable[str],
    day_stamp: str,
    log_path: str = "",
    marker: str = "Failed password",
    tail: int = 5,
) -> FailedLoginReport:
    """
    Count failed-password lines carrying `day_stamp` anywhere in the line.

    `recent` holds the last `tail` failed-password lines regardless of day,
    like `grep marker log | tail -n 5`.
    """
    count = 0
    recent = deque(maxlen=max(tail, 0))
    for raw in lines:
        line = raw.rstrip("\n")
        if marker not in line:
            continue
        recent.append(line)
        if day_stamp in line:
            count += 1

    return FailedLoginReport(
        log_path=log_path,
        day_stamp=day_stamp,
        count=count,
        recent=[_event_from_line(line) for line in recent],
    )


def get_failed_logins(now: Optional[dt.datetime] = None) -> FailedLoginReport:
    """
    Scan the first accessible authentication log for today's failed passwords.

    Raises SourceUnreadable when none of the candidate logs can be read.
    """
    settings = get_settings()
    path = find_auth_log(settings.auth_log_paths)
    if path is None:
        raise SourceUnreadable(
            "Could not access auth logs (permission denied or file not found)"
        )

    logger.debug("scanning %s for failed logins", path)
    try:
        with path.open(encoding="utf-8", errors="replace") as log:
            return scan_failed_logins(
                log,
                failure_day_stamp(now),
                log_path=str(path),
                marker=settings.failed_password_marker,
                tail=settings.failed_login_tail,
            )
    except OSError as exc:
        raise SourceUnreadable(f"Could not read {path}: {exc}") from exc
