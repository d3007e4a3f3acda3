"""
Error hierarchy for ninja-compdb.

Every failure in the pipeline is fatal. Stages raise one of these exceptions
and nothing recovers from them internally; the CLI turns a CompdbError into a
diagnostic message and a nonzero exit status.
"""

from typing import Optional


class CompdbError(Exception):
    """Base class for all ninja-compdb failures."""

    pass


class ConfigurationError(CompdbError):
    """A required parameter is missing, or the parameter file is unusable."""

    pass


class InputFormatError(CompdbError):
    """The input artifact has an unsupported kind or malformed content."""

    pass


class DecodeError(CompdbError):
    """A line of the build log is not valid UTF-8 text."""

    def __init__(self, line_number: int, reason: str):
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"Line {line_number} is not valid UTF-8: {reason}")


class TokenizeError(CompdbError):
    """A command string has unterminated quoting or escaping."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Cannot split command '{command}': {reason}")


class EntryConstructionError(CompdbError):
    """A command produced no arguments, so no database entry can be built."""

    pass


class FileAccessError(CompdbError):
    """An input file cannot be opened or an output file cannot be created."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)
