import logging
import os
from typing import Optional, Tuple

import psutil

from serverstats.errors import MetricUnavailable, SourceUnreadable
from serverstats.models.cpu import CpuSnapshot, CpuStatus
from serverstats.services import sources
from serverstats.services.commands import read_text, run_tool, tool_available

logger = logging.getLogger(__name__)

PROC_STAT = "/proc/stat"

# Column order of the aggregate "cpu" line in /proc/stat
_COUNTER_FIELDS = (
    "user",
    "nice",
    "system",
    "idle",
    "iowait",
    "irq",
    "softirq",
    "steal",
    "guest",
    "guest_nice",
)


def parse_cpu_line(line: str) -> CpuSnapshot:
    """
    Parse the aggregate counter line of /proc/stat.

    Example: "cpu  4705 356 584 3699176 23060 0 277 0 0 0". Older kernels
    print fewer columns; missing counters are 0.
    """
    tokens = line.split()
    if tokens and tokens[0].startswith("cpu"):
        tokens = tokens[1:]
    try:
        values = [int(token) for token in tokens]
    except ValueError as exc:
        raise SourceUnreadable(f"malformed cpu counter line: {line!r}") from exc
    if not values:
        raise SourceUnreadable("empty cpu counter line")

    return CpuSnapshot(**dict(zip(_COUNTER_FIELDS, values)))


def _read_counters_from_proc() -> CpuSnapshot:
    for line in read_text(PROC_STAT).splitlines():
        if line.startswith("cpu "):
            return parse_cpu_line(line)
    raise SourceUnreadable(f"no aggregate cpu line in {PROC_STAT}")


def _clock_ticks() -> int:
    try:
        return os.sysconf("SC_CLK_TCK")
    except (AttributeError, ValueError, OSError):
        return 100


def _read_counters_native() -> CpuSnapshot:
    times = psutil.cpu_times()
    ticks = _clock_ticks()
    counters = {
        name: int(round(getattr(times, name, 0.0) * ticks))
        for name in _COUNTER_FIELDS
    }
    return CpuSnapshot(**counters)


def read_cpu_counters() -> CpuSnapshot:
    return sources.collect(_read_counters_native, _read_counters_from_proc)


def parse_mpstat_average(output: str) -> float:
    """
    Return 100 - %idle from the 'Average:' row of `mpstat 1 1`.

    %idle is the last column in every sysstat release. Header rows such as
    "Average:     CPU ... %idle" are skipped.
    """
    for line in output.splitlines():
        if not line.startswith("Average:"):
            continue
        idle_text = line.split()[-1].replace(",", ".")
        try:
            idle = float(idle_text)
        except ValueError:
            continue
        return round(min(max(100.0 - idle, 0.0), 100.0), 1)
    raise MetricUnavailable("mpstat printed no numeric Average row")


def sample_usage_with_mpstat() -> Optional[float]:
    """One second sample; None when mpstat is not installed or fails."""
    if not tool_available("mpstat"):
        return None
    try:
        return parse_mpstat_average(run_tool(["mpstat", "1", "1"]))
    except MetricUnavailable as exc:
        logger.debug("mpstat sample skipped: %s", exc)
        return None


def read_load_average() -> Tuple[float, float, float]:
    load1, load5, load15 = psutil.getloadavg()
    return (load1, load5, load15)


def get_cpu_status() -> CpuStatus:
    return CpuStatus(
        snapshot=read_cpu_counters(),
        sampled_usage_percent=sample_usage_with_mpstat(),
        cores=psutil.cpu_count(logical=True) or os.cpu_count() or 1,
        load_average=read_load_average(),
    )
