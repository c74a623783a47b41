import logging
from typing import List

import psutil

from serverstats.models.disk import DiskEntry, DiskSummary, use_percent
from serverstats.services import sources
from serverstats.services.commands import run_tool

logger = logging.getLogger(__name__)

# Real block devices only; tmpfs, overlay, proc and friends have other sources.
DEVICE_PREFIX = "/dev/"


def parse_df_output(output: str) -> List[DiskEntry]:
    """
    Parse `df -kP` output into DiskEntry rows for /dev/* filesystems.

    Example line: "/dev/sda1   102400   51200   46080   53% /"
    """
    entries: List[DiskEntry] = []
    for line in output.splitlines()[1:]:
        if not line.startswith(DEVICE_PREFIX):
            continue
        fields = line.split()
        if len(fields) < 6:
            continue
        try:
            size_kb, used_kb, avail_kb = (int(value) for value in fields[1:4])
        except ValueError:
            continue
        entries.append(
            DiskEntry(
                device=fields[0],
                size_kb=size_kb,
                used_kb=used_kb,
                avail_kb=avail_kb,
                use_percent=fields[4],
                # mount points may contain spaces
                mountpoint=" ".join(fields[5:]),
            )
        )
    return entries


def _read_from_df() -> List[DiskEntry]:
    return parse_df_output(run_tool(["df", "-kP"]))


def _read_native() -> List[DiskEntry]:
    entries: List[DiskEntry] = []
    seen_devices = set()
    for partition in psutil.disk_partitions(all=False):
        device = partition.device
        if not device.startswith(DEVICE_PREFIX) or device in seen_devices:
            continue
        try:
            usage = psutil.disk_usage(partition.mountpoint)
        except (PermissionError, FileNotFoundError) as exc:
            logger.debug("skipping %s: %s", partition.mountpoint, exc)
            continue
        seen_devices.add(device)

        used_kb = int(usage.used) // 1024
        avail_kb = int(usage.free) // 1024
        entries.append(
            DiskEntry(
                device=device,
                size_kb=int(usage.total) // 1024,
                used_kb=used_kb,
                avail_kb=avail_kb,
                use_percent=use_percent(used_kb, avail_kb),
                mountpoint=partition.mountpoint,
            )
        )
    return entries


def get_disk_summary() -> DiskSummary:
    """Collect all real filesystems; the aggregate is derived by DiskSummary."""
    return DiskSummary(entries=sources.collect(_read_native, _read_from_df))
