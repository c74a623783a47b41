from pydantic import BaseModel, Field


def to_mb(kb: int) -> int:
    return kb // 1024


class MemorySnapshot(BaseModel):
    """Memory counters in kilobytes, as exposed by /proc/meminfo."""

    total_kb: int = Field(..., ge=0)
    free_kb: int = Field(0, ge=0)
    available_kb: int = Field(0, ge=0)
    buffers_kb: int = Field(0, ge=0)
    cached_kb: int = Field(0, ge=0)
    has_swap: bool = Field(False, description="True if the source reports swap counters")
    swap_total_kb: int = Field(0, ge=0)
    swap_free_kb: int = Field(0, ge=0)

    @property
    def anomaly(self) -> bool:
        """Available memory larger than total memory means malformed input."""
        return self.available_kb > self.total_kb

    @property
    def used_kb(self) -> int:
        return max(self.total_kb - self.available_kb, 0)

    @property
    def used_percent(self) -> int:
        if self.total_kb == 0:
            return 0
        return self.used_kb * 100 // self.total_kb

    @property
    def available_percent(self) -> int:
        # Truncating division: used + available need not add up to 100.
        if self.total_kb == 0:
            return 0
        return self.available_kb * 100 // self.total_kb

    @property
    def swap_used_kb(self) -> int:
        return max(self.swap_total_kb - self.swap_free_kb, 0)

    @property
    def swap_used_percent(self) -> int:
        if self.swap_total_kb == 0:
            return 0
        return self.swap_used_kb * 100 // self.swap_total_kb
