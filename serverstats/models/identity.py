from pydantic import BaseModel, Field


class SystemIdentity(BaseModel):
    """Static facts about the host plus the wall-clock time of the report."""

    os_name: str = Field(..., description="PRETTY_NAME from os-release or the kernel family")
    kernel: str = Field(..., description="Kernel release string, e.g. 6.8.0-45-generic")
    hostname: str = Field(..., description="System hostname")
    uptime: str = Field(
        ...,
        description="Humanised uptime without the 'up' prefix, e.g. '2 days, 3 hours'",
    )
    current_time: str = Field(..., description="Current local time in date(1) format")
