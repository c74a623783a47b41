import logging
import time
from operator import attrgetter
from typing import Iterable, List

import psutil

from serverstats.errors import ToolUnavailable
from serverstats.models.process import ProcessEntry
from serverstats.services import sources
from serverstats.services.commands import run_tool, tool_available

logger = logging.getLogger(__name__)

_PROCESS_ATTRS = [
    "pid",
    "name",
    "username",
    "cmdline",
    "cpu_times",
    "create_time",
    "memory_percent",
]

SORT_KEYS = ("cpu_percent", "mem_percent")


def _first_word(command: str) -> str:
    parts = command.split(None, 1)
    return parts[0] if parts else ""


def parse_ps_aux(output: str) -> List[ProcessEntry]:
    """
    Parse `ps aux` output.

    Only USER, PID, %CPU, %MEM and the first word of COMMAND are kept.
    """
    entries: List[ProcessEntry] = []
    for line in output.splitlines()[1:]:
        fields = line.split(None, 10)
        if len(fields) < 11:
            continue
        try:
            entries.append(
                ProcessEntry(
                    user=fields[0],
                    pid=int(fields[1]),
                    cpu_percent=float(fields[2].replace(",", ".")),
                    mem_percent=float(fields[3].replace(",", ".")),
                    command=_first_word(fields[10]),
                )
            )
        except ValueError:
            logger.debug("skipping unparsable ps line: %r", line)
    return entries


def _read_from_ps() -> List[ProcessEntry]:
    if not tool_available("ps"):
        raise ToolUnavailable("ps command not available")
    return parse_ps_aux(run_tool(["ps", "aux"]))


def _lifetime_cpu_percent(cpu_times, create_time, now: float) -> float:
    # ps(1) semantics: CPU time used divided by time since the process started
    if cpu_times is None or not create_time:
        return 0.0
    elapsed = now - create_time
    if elapsed <= 0:
        return 0.0
    return round((cpu_times.user + cpu_times.system) * 100.0 / elapsed, 1)


def _read_native() -> List[ProcessEntry]:
    now = time.time()
    entries: List[ProcessEntry] = []
    for proc in psutil.process_iter(attrs=_PROCESS_ATTRS):
        info = proc.info
        cmdline = info.get("cmdline") or []
        command = cmdline[0] if cmdline else f"[{info.get('name') or '?'}]"
        entries.append(
            ProcessEntry(
                user=info.get("username") or "?",
                pid=int(info["pid"]),
                cpu_percent=_lifetime_cpu_percent(
                    info.get("cpu_times"), info.get("create_time"), now
                ),
                mem_percent=round(float(info.get("memory_percent") or 0.0), 1),
                command=command,
            )
        )
    return entries


def get_process_table() -> List[ProcessEntry]:
    """Snapshot of the live process table, unsorted."""
    return sources.collect(_read_native, _read_from_ps)


def top_processes(
    entries: Iterable[ProcessEntry], key: str, limit: int = 5
) -> List[ProcessEntry]:
    """Return at most `limit` entries sorted descending by `key`."""
    if key not in SORT_KEYS:
        raise ValueError(f"unknown sort key {key!r}, expected one of {SORT_KEYS}")
    return sorted(entries, key=attrgetter(key), reverse=True)[:limit]
