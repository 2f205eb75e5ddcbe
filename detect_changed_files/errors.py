"""
Exception hierarchy for detect-changed-files.

Every failure the tool reports is one of these; the CLI catches the base
class and turns it into an error message and a non-zero exit code.
"""

from __future__ import annotations


class DetectChangedFilesError(Exception):
    """Base exception for all detect-changed-files errors."""


class InvalidEncodingError(DetectChangedFilesError):
    """
    Raised when a pattern or a changed path is not valid UTF-8.

    Attributes:
        source: Where the bytes came from (a file path or '<stdin>').
        line: 1-based line number, when known.
    """

    def __init__(self, source: str, reason: str, line: int | None = None):
        self.source = source
        self.reason = reason
        self.line = line

        msg = f"Invalid UTF-8 in {source}"
        if line is not None:
            msg += f" at line {line}"
        super().__init__(f"{msg}: {reason}")


class ConfigError(DetectChangedFilesError):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """
    Raised when the configuration text cannot be parsed.

    Attributes:
        message: Human-readable explanation of the failure.
        line: 1-based line number, when known.
    """

    def __init__(self, message: str, line: int | None = None):
        self.message = message
        self.line = line
        if line is not None:
            super().__init__(f"Parse error at line {line}: {message}")
        else:
            super().__init__(f"Parse error: {message}")


class MalformedGroupDefinitionError(ConfigParseError):
    """Raised for a duplicate group name or a group whose patterns are not a list of strings."""
