import datetime as dt
import logging
import platform
import socket
import time
from typing import Dict, Iterable, Optional

import psutil

from serverstats.config import get_settings
from serverstats.errors import MetricUnavailable, SourceUnreadable
from serverstats.models.identity import SystemIdentity
from serverstats.services import sources
from serverstats.services.commands import read_text, run_tool

logger = logging.getLogger(__name__)

# date(1) default output, e.g. "Sun Oct 18 09:41:07 CEST 2026"
DATE_FORMAT = "%a %b %e %H:%M:%S %Z %Y"

_UPTIME_UNITS = (
    ("year", 365 * 24 * 3600),
    ("week", 7 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
)


def parse_os_release(text: str) -> Dict[str, str]:
    """Parse KEY=value lines of an os-release file, unquoting the values."""
    fields: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        fields[key.strip()] = value
    return fields


def read_os_name(paths: Optional[Iterable[str]] = None) -> str:
    """
    Return PRETTY_NAME of the first readable os-release file.

    Falls back to the kernel family (what `uname -s` prints) when no
    descriptor exists or none carries a PRETTY_NAME.
    """
    if paths is None:
        paths = get_settings().os_release_paths
    for path in paths:
        try:
            fields = parse_os_release(read_text(path))
        except SourceUnreadable:
            continue
        pretty_name = fields.get("PRETTY_NAME")
        if pretty_name:
            return pretty_name
    return platform.system()


def humanize_uptime(seconds: float) -> str:
    """
    Format seconds the way `uptime -p` does, without the leading 'up '.

    Example: 183840 -> '2 days, 3 hours, 4 minutes'.
    """
    remaining = max(int(seconds), 0)
    parts = []
    for name, size in _UPTIME_UNITS:
        count, remaining = divmod(remaining, size)
        if count:
            parts.append(f"{count} {name}{'' if count == 1 else 's'}")
    if not parts:
        return "0 minutes"
    return ", ".join(parts)


def _uptime_native() -> str:
    return humanize_uptime(time.time() - psutil.boot_time())


def _uptime_from_tool() -> str:
    output = run_tool(["uptime", "-p"]).strip()
    if output.startswith("up "):
        output = output[len("up "):]
    return output


def read_uptime() -> str:
    return sources.collect(_uptime_native, _uptime_from_tool)


def current_time(now: Optional[dt.datetime] = None) -> str:
    now = now or dt.datetime.now()
    return now.astimezone().strftime(DATE_FORMAT)


def get_system_identity() -> SystemIdentity:
    """
    Collect OS, kernel, hostname, uptime and current time.

    None of these reads is fatal: a missing value is shown as 'unknown'.
    """
    try:
        uptime = read_uptime()
    except MetricUnavailable as exc:
        logger.warning("uptime unavailable: %s", exc)
        uptime = "unknown"

    return SystemIdentity(
        os_name=read_os_name(),
        kernel=platform.release() or "unknown",
        hostname=socket.gethostname() or "unknown",
        uptime=uptime,
        current_time=current_time(),
    )
