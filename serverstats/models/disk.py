from typing import List

from pydantic import BaseModel, Field


def to_gb(kb: int) -> int:
    return kb // 1024 // 1024


def use_percent(used_kb: int, avail_kb: int) -> str:
    """Use% the way df(1) computes it: used / (used + avail), rounded up."""
    denominator = used_kb + avail_kb
    if denominator <= 0:
        return "-"
    return f"{-(-used_kb * 100 // denominator)}%"


class DiskEntry(BaseModel):
    """Usage of one mounted block-device filesystem."""

    device: str = Field(..., description="Block device, e.g. /dev/nvme0n1p2")
    size_kb: int = Field(..., ge=0)
    used_kb: int = Field(..., ge=0)
    avail_kb: int = Field(..., ge=0)
    use_percent: str = Field(..., description="Use% string, e.g. '43%'")
    mountpoint: str = Field(..., description="Mount point, e.g. /home")


class DiskSummary(BaseModel):
    """All real filesystems plus their aggregate."""

    entries: List[DiskEntry] = Field(default_factory=list)

    @property
    def total_kb(self) -> int:
        return sum(entry.size_kb for entry in self.entries)

    @property
    def used_kb(self) -> int:
        return sum(entry.used_kb for entry in self.entries)

    @property
    def avail_kb(self) -> int:
        return sum(entry.avail_kb for entry in self.entries)

    @property
    def use_percent(self) -> str:
        return use_percent(self.used_kb, self.avail_kb)
