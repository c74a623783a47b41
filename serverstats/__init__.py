"""Point-in-time server health report for the terminal."""

__version__ = "1.0.0"
