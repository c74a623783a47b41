import os


def is_privileged_user() -> bool:
    """Return True when the effective user is root (uid 0)."""
    geteuid = getattr(os, "geteuid", None)
    if geteuid is None:
        return False
    return geteuid() == 0
