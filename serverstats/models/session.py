from typing import Optional

from pydantic import BaseModel, Field


class UserSession(BaseModel):
    """An entry of the active-session (utmp) table."""

    username: str
    tty: str = Field(..., description="Terminal, e.g. pts/0")
    login_time: str = Field(..., description="Login time as shown by who(1)")
    remote_host: Optional[str] = Field(
        None,
        description="Origin of the session, None for local logins",
    )
    raw: str = Field(..., description="The session record as printed")
