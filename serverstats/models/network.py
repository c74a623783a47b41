from pydantic import BaseModel, Field


class NetworkListener(BaseModel):
    """A socket bound locally and waiting for traffic."""

    protocol: str = Field(..., description="tcp, tcp6, udp or udp6")
    local_address: str
    local_port: int = Field(..., ge=0, le=65535)
    state: str = Field(..., description="LISTEN for TCP, UNCONN for bound UDP sockets")
