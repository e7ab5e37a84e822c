"""
Error types for varcss configuration, snapshot loading, and token sources.

Generation itself never raises: broken or circular aliases, missing mode
values and unmatched breakpoint names are collected as diagnostics on the
generation report instead.
"""

from dataclasses import dataclass
from pathlib import Path


class VarCSSError(Exception):
    """Base exception for all varcss errors."""

    def __init__(self, message: str, context: "ErrorContext | None" = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ConfigError(VarCSSError):
    """
    Raised when export options or breakpoint widths are invalid.

    Examples:
    - Option value outside its enumerated set
    - Non-positive or non-integer breakpoint width
    - Unreadable or malformed varcss.toml
    """

    pass


class SnapshotError(VarCSSError):
    """
    Raised when a token snapshot file cannot be loaded.

    Examples:
    - File missing or not JSON/YAML
    - Collection or variable entries with the wrong shape
    """

    pass


class SourceError(VarCSSError):
    """Raised when the upstream token source fails to answer a lookup."""

    pass


@dataclass
class ErrorContext:
    """
    Location information for an error.

    Attributes:
        file: Path to the file being read
        key: Optional dotted key inside the file (e.g. "export.outputMode")
    """

    file: Path
    key: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "varcss.toml [export.outputMode]"
        """
        if self.key:
            return f"{self.file} [{self.key}]"
        return str(self.file)
