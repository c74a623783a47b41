import logging
from typing import Callable, Optional, TypeVar

import psutil

from serverstats.config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Errors a psutil-backed reader may raise when the platform or the current
# user cannot provide the data natively.
NATIVE_ERRORS = (psutil.Error, OSError, NotImplementedError)


def collect(
    native: Callable[[], T],
    tool: Callable[[], T],
    source: Optional[str] = None,
) -> T:
    """
    Run a collector through the configured metric source.

    With source "native" the psutil/kernel reader runs first and the
    command-parsing reader is the fallback. With source "tool" only the
    command-parsing reader runs, so missing tools surface as errors.
    """
    source = source or get_settings().metric_source
    if source == "tool":
        return tool()

    try:
        return native()
    except NATIVE_ERRORS as exc:
        logger.debug(
            "native reader %s failed (%s), falling back to %s",
            getattr(native, "__name__", native),
            exc,
            getattr(tool, "__name__", tool),
        )
        return tool()
