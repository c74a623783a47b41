import pytest

from serverstats import main as report_main
from serverstats.errors import SourceUnreadable, ToolUnavailable
from serverstats.models.cpu import CpuSnapshot, CpuStatus
from serverstats.models.disk import DiskEntry, DiskSummary
from serverstats.models.identity import SystemIdentity
from serverstats.models.login import FailedLoginReport, LoginFailureEvent
from serverstats.models.memory import MemorySnapshot
from serverstats.models.network import NetworkListener
from serverstats.models.process import ProcessEntry
from serverstats.models.session import UserSession
from serverstats.services import (
    cpu_monitor,
    disk_monitor,
    identity_monitor,
    login_monitor,
    memory_monitor,
    network_monitor,
    privilege,
    process_monitor,
    session_monitor,
)

SECTION_HEADERS = [
    "=== SYSTEM INFORMATION ===",
    "=== CPU USAGE ===",
    "=== MEMORY USAGE ===",
    "=== DISK USAGE ===",
    "=== TOP 5 PROCESSES BY CPU USAGE ===",
    "=== TOP 5 PROCESSES BY MEMORY USAGE ===",
    "=== LOGGED IN USERS ===",
    "=== FAILED LOGIN ATTEMPTS (Last 24 hours) ===",
    "=== NETWORK INFORMATION ===",
]


@pytest.fixture
def fake_host(monkeypatch):
    """
    Patch every service function used by the sections with canned data, so
    the report can be rendered without touching the real host.
    """
    monkeypatch.setattr(privilege, "is_privileged_user", lambda: False)
    monkeypatch.setattr(
        identity_monitor,
        "get_system_identity",
        lambda: SystemIdentity(
            os_name="Ubuntu 24.04.1 LTS",
            kernel="6.8.0-45-generic",
            hostname="web01",
            uptime="2 days, 3 hours",
            current_time="Sun Oct 18 09:41:07 UTC 2026",
        ),
    )
    monkeypatch.setattr(
        cpu_monitor,
        "get_cpu_status",
        lambda: CpuStatus(
            snapshot=CpuSnapshot(user=100, system=50, idle=800, iowait=50),
            sampled_usage_percent=None,
            cores=4,
            load_average=(0.5, 0.25, 0.125),
        ),
    )
    monkeypatch.setattr(
        memory_monitor,
        "get_memory_snapshot",
        lambda: MemorySnapshot(
            total_kb=2048 * 1024,
            free_kb=512 * 1024,
            available_kb=1024 * 1024,
            has_swap=True,
            swap_total_kb=0,
            swap_free_kb=0,
        ),
    )
    monkeypatch.setattr(
        disk_monitor,
        "get_disk_summary",
        lambda: DiskSummary(
            entries=[
                DiskEntry(
                    device="/dev/sda1",
                    size_kb=20 * 1024 * 1024,
                    used_kb=5 * 1024 * 1024,
                    avail_kb=15 * 1024 * 1024,
                    use_percent="25%",
                    mountpoint="/",
                )
            ]
        ),
    )
    monkeypatch.setattr(
        process_monitor,
        "get_process_table",
        lambda: [
            ProcessEntry(user="root", pid=1, cpu_percent=0.1, mem_percent=0.2, command="/sbin/init"),
            ProcessEntry(user="bob", pid=5151, cpu_percent=95.0, mem_percent=0.5, command="yes"),
            ProcessEntry(user="alice", pid=4242, cpu_percent=1.3, mem_percent=25.0, command="[python3]"),
        ],
    )
    monkeypatch.setattr(
        session_monitor,
        "get_sessions",
        lambda: [
            UserSession(
                username="alice",
                tty="pts/0",
                login_time="2026-10-18 08:12",
                remote_host="10.0.0.5",
                raw="alice    pts/0        2026-10-18 08:12 (10.0.0.5)",
            )
        ],
    )
    monkeypatch.setattr(
        login_monitor,
        "get_failed_logins",
        lambda: FailedLoginReport(
            log_path="/var/log/auth.log",
            day_stamp="Oct 18",
            count=1,
            recent=[
                LoginFailureEvent(
                    timestamp="Oct 18 09:15:00",
                    raw_line="Oct 18 09:15:00 web01 sshd[2003]: Failed password for root",
                )
            ],
        ),
    )
    monkeypatch.setattr(network_monitor, "get_private_addresses", lambda: ["192.168.1.20/24"])
    monkeypatch.setattr(
        network_monitor,
        "get_listeners",
        lambda: [NetworkListener(protocol="tcp", local_address="0.0.0.0", local_port=22, state="LISTEN")],
    )


def _render(console_buffer):
    console, buffer = console_buffer
    report_main.build_report(console)
    return buffer.getvalue()


def test_sections_appear_once_in_fixed_order(fake_host, console_buffer):
    output = _render(console_buffer)

    positions = [output.index(header) for header in SECTION_HEADERS]
    assert positions == sorted(positions)
    for header in SECTION_HEADERS:
        assert output.count(header) == 1
    assert output.count("-" * 48) == len(SECTION_HEADERS) - 1
    assert "SERVER PERFORMANCE STATISTICS" in output
    assert "Script completed at:" in output
    assert "Warning: Running as root user" not in output


def test_report_values(fake_host, console_buffer):
    output = _render(console_buffer)

    assert "OS: Ubuntu 24.04.1 LTS" in output
    assert "Total CPU Usage: 20%" in output
    assert "CPU Usage (mpstat)" not in output
    assert "Load Average: 0.50, 0.25, 0.12" in output
    assert "Used Memory: 1024 MB (50%)" in output
    assert "Swap Used: 0 MB / 0 MB (0%)" in output
    assert "Total: 20 GB" in output
    assert "Usage: 25%" in output
    assert "  bob                  5151       95.0       0.5        yes" in output
    assert "[python3]" in output
    assert "Currently logged in users: alice" in output
    assert "Failed login attempts: 1" in output
    assert "sshd[2003]: Failed password for root" in output
    assert "  192.168.1.20/24" in output
    assert "0.0.0.0:22" in output


def test_root_warning_is_advisory(fake_host, monkeypatch, console_buffer):
    monkeypatch.setattr(privilege, "is_privileged_user", lambda: True)

    output = _render(console_buffer)

    assert "Warning: Running as root user" in output
    assert "=== NETWORK INFORMATION ===" in output


def test_zero_logged_in_users(fake_host, monkeypatch, console_buffer):
    monkeypatch.setattr(session_monitor, "get_sessions", lambda: [])

    output = _render(console_buffer)

    assert "Currently logged in users:\n" in output
    assert "User sessions (0):" in output
    assert "=== FAILED LOGIN ATTEMPTS (Last 24 hours) ===" in output
    assert "=== NETWORK INFORMATION ===" in output


def test_session_records_capped_at_ten(fake_host, monkeypatch, console_buffer):
    sessions = [
        UserSession(
            username=f"user{i}",
            tty=f"pts/{i}",
            login_time="2026-10-18 08:12",
            raw=f"user{i}    pts/{i}        2026-10-18 08:12",
        )
        for i in range(12)
    ]
    monkeypatch.setattr(session_monitor, "get_sessions", lambda: sessions)

    output = _render(console_buffer)
    section = output.split("=== LOGGED IN USERS ===")[1].split("=== FAILED LOGIN ATTEMPTS")[0]

    assert "User sessions (12):" in section
    records = [line for line in section.splitlines() if line.endswith("2026-10-18 08:12")]
    assert len(records) == 10
    assert "user10    pts/10" not in section
    assert "user11    pts/11" not in section


def test_missing_auth_logs_print_single_warning(fake_host, monkeypatch, console_buffer):
    def no_logs():
        raise SourceUnreadable("Could not access auth logs (permission denied or file not found)")

    monkeypatch.setattr(login_monitor, "get_failed_logins", no_logs)

    output = _render(console_buffer)
    section = output.split("=== FAILED LOGIN ATTEMPTS (Last 24 hours) ===\n", 1)[1]
    section = section.split("=== NETWORK INFORMATION ===", 1)[0]

    assert section.strip().splitlines() == [
        "Warning: Could not access auth logs (permission denied or file not found)",
        "-" * 48,
    ]
    assert "IP Addresses:" in output


def test_missing_ps_only_affects_process_sections(fake_host, monkeypatch, console_buffer):
    def no_ps():
        raise ToolUnavailable("ps command not available")

    monkeypatch.setattr(process_monitor, "get_process_table", no_ps)

    output = _render(console_buffer)

    assert output.count("Error: ps command not available") == 2
    assert "Currently logged in users: alice" in output
    assert "=== NETWORK INFORMATION ===" in output


def test_missing_socket_tools_warn_in_network_section(fake_host, monkeypatch, console_buffer):
    def no_tools(limit=None):
        raise ToolUnavailable("Network tools not available")

    monkeypatch.setattr(network_monitor, "get_listeners", no_tools)

    output = _render(console_buffer)

    assert "Network tools not available" in output
    assert "  192.168.1.20/24" in output
    assert "Script completed at:" in output


def test_failed_login_lines_hidden_when_count_is_zero(fake_host, monkeypatch, console_buffer):
    monkeypatch.setattr(
        login_monitor,
        "get_failed_logins",
        lambda: FailedLoginReport(
            log_path="/var/log/secure",
            day_stamp="Oct 18",
            count=0,
            recent=[LoginFailureEvent(timestamp="Oct 15 01:00:00", raw_line="Oct 15 01:00:00 x Failed password")],
        ),
    )

    output = _render(console_buffer)

    assert "Failed login attempts: 0" in output
    assert "Recent failed attempts" not in output


def test_main_returns_zero(fake_host, console_buffer):
    console, buffer = console_buffer

    assert report_main.main(console) == 0
    assert "=== NETWORK INFORMATION ===" in buffer.getvalue()
