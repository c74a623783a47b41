from pydantic import BaseModel, Field


class ProcessEntry(BaseModel):
    """One row of the process table, with ps(1) style percentages."""

    user: str = Field(..., description="Owner of the process")
    pid: int = Field(..., ge=0)
    cpu_percent: float = Field(
        ...,
        ge=0.0,
        description="CPU time over the process lifetime in percent (may exceed 100 on SMP)",
    )
    mem_percent: float = Field(..., ge=0.0, le=100.0, description="Resident memory share")
    command: str = Field(..., description="Executable, first word of the command line")
