"""Output formatting for the CLI."""

from orchestra.output.formatters import ResultFormatter

__all__ = ["ResultFormatter"]
