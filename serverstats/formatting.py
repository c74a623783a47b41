"""
Terminal rendering helpers shared by all report sections.

Everything here is stateless: sections receive a rich Console and call these
functions. Dynamic text (process names, log lines) is never parsed as rich
markup, so brackets like "[kthreadd]" or "sshd[812]" print verbatim.
"""

import math
from typing import IO, Optional, Sequence

from rich.console import Console
from rich.text import Text

BANNER_STYLE = "magenta"
HEADER_STYLE = "cyan"
SEPARATOR_STYLE = "blue"
LABEL_STYLE = "green"
ERROR_STYLE = "red"
WARNING_STYLE = "bold yellow"

BANNER_RULE = "═" * 62
SEPARATOR_RULE = "-" * 48
INDENT = "  "

_SIZE_UNITS = "KMGTPE"


def make_console(file: Optional[IO[str]] = None, **kwargs) -> Console:
    """Console for the report; colour support is detected by rich."""
    kwargs.setdefault("highlight", False)
    kwargs.setdefault("soft_wrap", True)
    kwargs.setdefault("emoji", False)
    return Console(file=file, **kwargs)


def print_banner(console: Console, title: str) -> None:
    console.print(BANNER_RULE, style=BANNER_STYLE, markup=False)
    console.print(title.center(len(BANNER_RULE)).rstrip(), style=BANNER_STYLE, markup=False)
    console.print(BANNER_RULE, style=BANNER_STYLE, markup=False)


def print_header(console: Console, title: str) -> None:
    console.print()
    console.print(f"=== {title} ===", style=HEADER_STYLE, markup=False)


def print_separator(console: Console) -> None:
    console.print(SEPARATOR_RULE, style=SEPARATOR_STYLE, markup=False)


def print_field(console: Console, label: str, value: object = "") -> None:
    """Print 'Label: value' with a coloured label."""
    text = Text.assemble((f"{label}:", LABEL_STYLE))
    if value != "":
        text.append(f" {value}")
    console.print(text)


def print_subheader(console: Console, label: str) -> None:
    console.print()
    print_field(console, label)


def print_line(console: Console, line: str, indent: str = "") -> None:
    console.print(f"{indent}{line}", markup=False)


def print_error(console: Console, message: str) -> None:
    console.print(f"Error: {message}", style=ERROR_STYLE, markup=False)


def print_warning(console: Console, message: str) -> None:
    console.print(message, style=WARNING_STYLE, markup=False)


def table_row(values: Sequence[object], widths: Sequence[int]) -> str:
    """
    Left-aligned fixed-width row; the column after the last width is free.

    table_row(["USER", "PID", "CMD"], [20, 10]) -> 'USER                 PID        CMD'
    """
    cells = []
    for index, value in enumerate(values):
        text = str(value)
        if index < len(widths):
            text = f"{text:<{widths[index]}}"
        cells.append(text)
    return " ".join(cells).rstrip()


def humanize_kb(kb: int) -> str:
    """Size in the style of `df -h`: 1024-based, rounded up, e.g. 4.0K, 15G."""
    if kb <= 0:
        return "0"
    value = float(kb)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    if value < 10:
        value = math.ceil(value * 10) / 10
        if value < 10:
            return f"{value:.1f}{_SIZE_UNITS[unit]}"
    return f"{math.ceil(value)}{_SIZE_UNITS[unit]}"
