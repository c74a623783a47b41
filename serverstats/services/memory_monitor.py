import logging
from typing import Dict

import psutil

from serverstats.errors import SourceUnreadable
from serverstats.models.memory import MemorySnapshot
from serverstats.services import sources
from serverstats.services.commands import read_text

logger = logging.getLogger(__name__)

PROC_MEMINFO = "/proc/meminfo"


def _meminfo_fields(text: str) -> Dict[str, int]:
    # "MemTotal:       16318480 kB" -> {"MemTotal": 16318480}
    fields: Dict[str, int] = {}
    for line in text.splitlines():
        if ":" not in line:
            continue
        key, rest = line.split(":", 1)
        parts = rest.split()
        if not parts:
            continue
        try:
            fields[key.strip()] = int(parts[0])
        except ValueError:
            continue
    return fields


def parse_meminfo(text: str) -> MemorySnapshot:
    """
    Build a MemorySnapshot from the contents of /proc/meminfo.

    Kernels older than 3.14 have no MemAvailable; free + buffers + cached
    stands in for it there.
    """
    fields = _meminfo_fields(text)
    if "MemTotal" not in fields:
        raise SourceUnreadable(f"MemTotal missing from {PROC_MEMINFO}")

    free = fields.get("MemFree", 0)
    buffers = fields.get("Buffers", 0)
    cached = fields.get("Cached", 0)
    available = fields.get("MemAvailable", free + buffers + cached)

    return MemorySnapshot(
        total_kb=fields["MemTotal"],
        free_kb=free,
        available_kb=available,
        buffers_kb=buffers,
        cached_kb=cached,
        has_swap="SwapTotal" in fields,
        swap_total_kb=fields.get("SwapTotal", 0),
        swap_free_kb=fields.get("SwapFree", 0),
    )


def _read_from_proc() -> MemorySnapshot:
    return parse_meminfo(read_text(PROC_MEMINFO))


def _read_native() -> MemorySnapshot:
    mem = psutil.virtual_memory()
    swap = psutil.swap_memory()
    return MemorySnapshot(
        total_kb=int(mem.total) // 1024,
        free_kb=int(mem.free) // 1024,
        available_kb=int(mem.available) // 1024,
        buffers_kb=int(getattr(mem, "buffers", 0)) // 1024,
        cached_kb=int(getattr(mem, "cached", 0)) // 1024,
        has_swap=True,
        swap_total_kb=int(swap.total) // 1024,
        swap_free_kb=int(swap.free) // 1024,
    )


def get_memory_snapshot() -> MemorySnapshot:
    snapshot = sources.collect(_read_native, _read_from_proc)
    if snapshot.anomaly:
        logger.warning(
            "available memory (%d kB) exceeds total (%d kB); used memory clamped to 0",
            snapshot.available_kb,
            snapshot.total_kb,
        )
    return snapshot
