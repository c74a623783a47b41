from typing import List

from pydantic import BaseModel, Field


class LoginFailureEvent(BaseModel):
    """A failed-password line of the authentication log."""

    timestamp: str = Field(..., description="Syslog stamp at the start of the line")
    raw_line: str


class FailedLoginReport(BaseModel):
    log_path: str = Field(..., description="The authentication log that was scanned")
    day_stamp: str = Field(..., description="Day filter in '%b %e' form, e.g. 'Oct  8'")
    count: int = Field(..., ge=0, description="Failed passwords stamped with day_stamp")
    recent: List[LoginFailureEvent] = Field(
        default_factory=list,
        description="Last failed-password lines of the log, any day",
    )
