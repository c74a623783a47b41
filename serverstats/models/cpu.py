from typing import Optional, Tuple

from pydantic import BaseModel, Field


class CpuSnapshot(BaseModel):
    """
    Aggregate CPU time counters since boot, in clock ticks.

    The usage derived from them is a cumulative ratio over the whole uptime,
    not the load of the last few seconds.
    """

    user: int = Field(0, ge=0)
    nice: int = Field(0, ge=0)
    system: int = Field(0, ge=0)
    idle: int = Field(0, ge=0)
    iowait: int = Field(0, ge=0)
    irq: int = Field(0, ge=0)
    softirq: int = Field(0, ge=0)
    steal: int = Field(0, ge=0)
    guest: int = Field(0, ge=0)
    guest_nice: int = Field(0, ge=0)

    @property
    def total(self) -> int:
        return (
            self.user
            + self.nice
            + self.system
            + self.idle
            + self.iowait
            + self.irq
            + self.softirq
            + self.steal
            + self.guest
            + self.guest_nice
        )

    @property
    def usage_percent(self) -> int:
        total = self.total
        if total <= 0:
            return 0
        return 100 * (total - self.idle) // total


class CpuStatus(BaseModel):
    """Everything printed in the CPU section."""

    snapshot: CpuSnapshot
    sampled_usage_percent: Optional[float] = Field(
        None,
        ge=0.0,
        le=100.0,
        description="100 - %idle of a one second mpstat sample, if mpstat exists",
    )
    cores: int = Field(..., ge=1, description="Number of logical CPUs")
    load_average: Tuple[float, float, float] = Field(
        ...,
        description="1, 5 and 15 minute load averages",
    )
