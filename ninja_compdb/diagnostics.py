"""Diagnostic logging for ninja-compdb.

Leveled diagnostic output written to stderr so that it never mixes with the
tool output printed on stdout (the completion notice, the nothing-found
message).
"""

import os
import sys
from enum import IntEnum
from typing import Optional, TextIO


class DiagnosticLevel(IntEnum):
    """Diagnostic message levels in order of severity."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4


LEVEL_NAMES = {level.name: level for level in DiagnosticLevel}


def parse_level(name: str, default: DiagnosticLevel = DiagnosticLevel.INFO) -> DiagnosticLevel:
    """Map a level name (any case) to a DiagnosticLevel, or return the default."""
    return LEVEL_NAMES.get(str(name).upper(), default)


class DiagnosticLogger:
    """Writes diagnostics with a level prefix to a configurable stream."""

    def __init__(
        self, level: DiagnosticLevel = DiagnosticLevel.INFO, output_stream: Optional[TextIO] = None
    ):
        self.level = level
        self.output_stream = output_stream
        self._enabled = True

    def set_level(self, level: DiagnosticLevel):
        """Set the minimum diagnostic level to output."""
        self.level = level

    def set_output_stream(self, stream: Optional[TextIO]):
        """Set the output stream for diagnostics (None means current sys.stderr)."""
        self.output_stream = stream

    def set_enabled(self, enabled: bool):
        """Enable or disable all diagnostic output."""
        self._enabled = enabled

    def _should_output(self, level: DiagnosticLevel) -> bool:
        return self._enabled and level >= self.level

    def _format_message(self, level: DiagnosticLevel, message: str) -> str:
        return f"[{level.name}] {message}"

    def log(self, level: DiagnosticLevel, message: str):
        """Output a message at the given level."""
        if self._should_output(level):
            stream = self.output_stream if self.output_stream is not None else sys.stderr
            print(self._format_message(level, message), file=stream, flush=True)

    def debug(self, message: str):
        self.log(DiagnosticLevel.DEBUG, message)

    def info(self, message: str):
        self.log(DiagnosticLevel.INFO, message)

    def warning(self, message: str):
        self.log(DiagnosticLevel.WARNING, message)

    def error(self, message: str):
        self.log(DiagnosticLevel.ERROR, message)

    def fatal(self, message: str):
        self.log(DiagnosticLevel.FATAL, message)


# Global diagnostic logger instance
_global_logger: Optional[DiagnosticLogger] = None


def get_logger() -> DiagnosticLogger:
    """Get the global diagnostic logger instance."""
    global _global_logger
    if _global_logger is None:
        _global_logger = _create_default_logger()
    return _global_logger


def reset_logger():
    """Drop the global logger so the next call recreates it from the environment."""
    global _global_logger
    _global_logger = None


def _create_default_logger() -> DiagnosticLogger:
    level = parse_level(os.environ.get("NINJA_COMPDB_DIAGNOSTIC_LEVEL", "INFO"))
    return DiagnosticLogger(level=level)


def configure_from_config(config: dict):
    """Configure the global logger from a parameter dictionary.

    Expected format:
    {
        "diagnostics": {
            "level": "info",  # debug, info, warning, error, fatal
            "enabled": true
        }
    }
    """
    diag_config = config.get("diagnostics") or {}
    logger = get_logger()

    level_str = str(diag_config.get("level", "")).upper()
    if level_str in LEVEL_NAMES:
        logger.set_level(LEVEL_NAMES[level_str])

    logger.set_enabled(bool(diag_config.get("enabled", True)))


# Convenience functions that use the global logger
def debug(message: str):
    get_logger().debug(message)


def info(message: str):
    get_logger().info(message)


def warning(message: str):
    get_logger().warning(message)


def error(message: str):
    get_logger().error(message)


def fatal(message: str):
    get_logger().fatal(message)
