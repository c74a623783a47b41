import logging
import shutil
import subprocess
from pathlib import Path
from typing import List

from serverstats.errors import SourceUnreadable, ToolUnavailable

logger = logging.getLogger(__name__)


def tool_available(name: str) -> bool:
    """Return True if `name` resolves to an executable on PATH."""
    return shutil.which(name) is not None


def run_tool(args: List[str]) -> str:
    """
    Run an external command and return its stdout.

    A missing binary or a non-zero exit status is reported as ToolUnavailable
    so that the calling section can print an inline error instead of failing.
    There is no timeout: a hanging command blocks the report.
    """
    logger.debug("running %s", " ".join(args))
    try:
        result = subprocess.run(
            args,
            check=True,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as exc:
        raise ToolUnavailable(f"{args[0]} command not available") from exc
    except subprocess.CalledProcessError as exc:
        raise ToolUnavailable(
            f"{args[0]} failed with return code {exc.returncode}: {exc.stderr}"
        ) from exc

    return result.stdout


def read_text(path: str) -> str:
    """Read a kernel or config file, mapping OS errors to SourceUnreadable."""
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SourceUnreadable(f"cannot read {path}: {exc}") from exc
