class MetricUnavailable(RuntimeError):
    """A metric source could not deliver data for its report section."""


class ToolUnavailable(MetricUnavailable):
    """An external command is missing or exited with an error."""


class SourceUnreadable(MetricUnavailable):
    """A file-backed source is missing or cannot be read."""
