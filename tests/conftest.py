import io

import pytest

from serverstats.config import Settings
from serverstats.formatting import make_console
from serverstats.services import sources


@pytest.fixture
def console_buffer():
    """A colourless console writing into a StringIO, plus that buffer."""
    buffer = io.StringIO()
    console = make_console(file=buffer, color_system=None, width=200)
    return console, buffer


@pytest.fixture
def tool_source(monkeypatch):
    """Force every collector onto its command-parsing reader."""
    settings = Settings(metric_source="tool")
    monkeypatch.setattr(sources, "get_settings", lambda: settings)
    return settings
