from typing import List, Literal
from pydantic import BaseModel, Field
from functools import lru_cache


class Settings(BaseModel):
    # Which accessor the collectors try first; the other one is the fallback
    metric_source: Literal["native", "tool"] = Field(
        default="native",
        description="'native' reads psutil/kernel APIs, 'tool' parses command output",
    )

    # Failed logins
    auth_log_paths: List[str] = Field(
        default_factory=lambda: ["/var/log/auth.log", "/var/log/secure"],
        description="Candidate authentication logs, the first accessible one wins",
    )
    failed_password_marker: str = Field(
        default="Failed password",
        description="Substring identifying a failed login line",
    )
    failed_login_tail: int = Field(
        default=5,
        ge=0,
        description="How many recent failed-login lines to show",
    )

    # System identity
    os_release_paths: List[str] = Field(
        default_factory=lambda: ["/etc/os-release", "/usr/lib/os-release"],
        description="Candidate os-release descriptors",
    )

    # Report sizes
    top_process_count: int = Field(default=5, ge=0)
    session_limit: int = Field(default=10, ge=0)
    listener_limit: int = Field(default=10, ge=0)

    # Loose private-range rule: "172." covers more than 172.16.0.0/12
    private_prefixes: List[str] = Field(
        default_factory=lambda: ["192.168", "10.", "172."],
        description="IPv4 text prefixes treated as private addresses",
    )

    log_level: str = Field(
        default="WARNING",
        description="Level for diagnostics written to stderr",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
