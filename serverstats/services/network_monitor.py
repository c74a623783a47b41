import ipaddress
import logging
import socket
from typing import Iterable, List, Optional, Tuple

import psutil

from serverstats.config import get_settings
from serverstats.errors import ToolUnavailable
from serverstats.models.network import NetworkListener
from serverstats.services import sources
from serverstats.services.commands import run_tool, tool_available

logger = logging.getLogger(__name__)


def is_private_address(address: str, prefixes: Optional[Iterable[str]] = None) -> bool:
    """
    Text-prefix check for private IPv4 addresses.

    "172." is deliberately broader than 172.16.0.0/12: 172.99.0.1 matches.
    """
    if prefixes is None:
        prefixes = get_settings().private_prefixes
    return any(address.startswith(prefix) for prefix in prefixes)


# -- interface addresses ---------------------------------------------------


def parse_ip_addr(output: str) -> List[str]:
    """Extract IPv4 CIDRs from `ip addr show`, e.g. 'inet 10.0.0.5/24 brd ...'."""
    addresses = []
    for line in output.splitlines():
        fields = line.split()
        if len(fields) >= 2 and fields[0] == "inet":
            addresses.append(fields[1])
    return addresses


def _addresses_from_ip() -> List[str]:
    return parse_ip_addr(run_tool(["ip", "addr", "show"]))


def _addresses_native() -> List[str]:
    addresses = []
    for name, addrs in psutil.net_if_addrs().items():
        for addr in addrs:
            if addr.family != socket.AF_INET:
                continue
            if not addr.netmask:
                addresses.append(addr.address)
                continue
            try:
                prefix = ipaddress.IPv4Network(f"0.0.0.0/{addr.netmask}").prefixlen
            except ValueError:
                # non-contiguous mask has no prefix length
                logger.debug("unusable netmask %s on %s", addr.netmask, name)
                addresses.append(addr.address)
                continue
            addresses.append(f"{addr.address}/{prefix}")
    return addresses


def get_private_addresses() -> List[str]:
    addresses = sources.collect(_addresses_native, _addresses_from_ip)
    return [address for address in addresses if is_private_address(address)]


# -- listening sockets -----------------------------------------------------


def split_endpoint(endpoint: str) -> Tuple[str, int]:
    """
    Split 'addr:port' as printed by netstat/ss.

    Handles '[::]:22', '127.0.0.53%lo:53', ':::22' and wildcard ports ('*').
    """
    address, _, port_text = endpoint.rpartition(":")
    if address.startswith("[") and address.endswith("]"):
        address = address[1:-1]
    try:
        port = int(port_text)
    except ValueError:
        port = 0
    return address or "*", port


def parse_netstat(output: str) -> List[NetworkListener]:
    """Parse `netstat -tunl`, keeping LISTEN rows only."""
    listeners = []
    for line in output.splitlines():
        fields = line.split()
        if len(fields) < 6 or fields[-1] != "LISTEN":
            continue
        address, port = split_endpoint(fields[3])
        listeners.append(
            NetworkListener(
                protocol=fields[0],
                local_address=address,
                local_port=port,
                state=fields[-1],
            )
        )
    return listeners


def parse_ss(output: str) -> List[NetworkListener]:
    """Parse `ss -tunl`; with -l every row is a listening socket."""
    listeners = []
    for line in output.splitlines()[1:]:
        fields = line.split()
        if len(fields) < 5:
            continue
        address, port = split_endpoint(fields[4])
        listeners.append(
            NetworkListener(
                protocol=fields[0],
                local_address=address,
                local_port=port,
                state=fields[1],
            )
        )
    return listeners


def _listeners_from_tools() -> List[NetworkListener]:
    if tool_available("netstat"):
        logger.debug("listing sockets with netstat")
        return parse_netstat(run_tool(["netstat", "-tunl"]))
    if tool_available("ss"):
        logger.debug("listing sockets with ss")
        return parse_ss(run_tool(["ss", "-tunl"]))
    raise ToolUnavailable("Network tools not available")


def _listeners_native() -> List[NetworkListener]:
    listeners = []
    for conn in psutil.net_connections(kind="inet"):
        if conn.type == socket.SOCK_STREAM:
            if conn.status != psutil.CONN_LISTEN:
                continue
            protocol, state = "tcp", "LISTEN"
        elif conn.type == socket.SOCK_DGRAM:
            # bound UDP sockets without a peer are what `ss -l` lists
            if conn.raddr:
                continue
            protocol, state = "udp", "UNCONN"
        else:
            continue

        if conn.family == socket.AF_INET6:
            protocol += "6"
        ip = getattr(conn.laddr, "ip", None)
        port = getattr(conn.laddr, "port", None)
        if ip is None or port is None:
            continue
        listeners.append(
            NetworkListener(
                protocol=protocol,
                local_address=ip,
                local_port=int(port),
                state=state,
            )
        )

    listeners.sort(key=lambda listener: (listener.protocol, listener.local_port))
    return listeners


def get_listeners(limit: Optional[int] = None) -> List[NetworkListener]:
    """Up to `limit` listening TCP/UDP sockets (default from settings)."""
    if limit is None:
        limit = get_settings().listener_limit
    return sources.collect(_listeners_native, _listeners_from_tools)[:limit]
