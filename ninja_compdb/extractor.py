"""
Compiler command extraction from ninja build logs.

A ninja log written by the Android/Soong build wraps every compiler invocation
in a bash one-liner:

    command = /bin/bash -c "PWD=/proc/self/cwd prebuilts/clang/bin/clang++ -c foo.cpp"

Only lines of exactly that shape whose payload runs ``clang`` or ``clang++``
are recognized. Everything else in the log is skipped.
"""

import re
from typing import Iterable, Iterator, Optional, Union

from . import diagnostics
from .errors import DecodeError

# Compiled without flags: the match must not depend on IGNORECASE/MULTILINE.
COMMAND_LINE_PATTERN = re.compile(
    r'^\s*command = /bin/bash -c "(PWD=.*\b(clang|clang\+\+)\b.*)"$'
)

CWD_PREFIX = "PWD=/proc/self/cwd "

Line = Union[str, bytes]


def strip_cwd_prefix(payload: str) -> str:
    """Remove one leading ``PWD=/proc/self/cwd `` assignment, if present."""
    if payload.startswith(CWD_PREFIX):
        return payload[len(CWD_PREFIX):]
    return payload


def _strip_line_ending(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def decode_line(line: Line, line_number: int) -> str:
    """Decode a raw log line as strict UTF-8.

    Raises:
        DecodeError: If the bytes are not valid UTF-8
    """
    if isinstance(line, str):
        return line
    try:
        return line.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(line_number, str(e)) from e


def match_command_line(line: str) -> Optional[str]:
    """Return the quoted payload of a recognized compiler line, else None."""
    match = COMMAND_LINE_PATTERN.fullmatch(_strip_line_ending(line))
    if match is None:
        return None
    return match.group(1)


def extract_commands(lines: Iterable[Line]) -> Iterator[str]:
    """Lazily yield the compiler command of every recognized log line.

    Commands come out in log order with the ``PWD=/proc/self/cwd `` prefix
    removed and no other unescaping applied.

    Args:
        lines: Log lines, as text or as raw bytes

    Raises:
        DecodeError: If a bytes line is not valid UTF-8
    """
    scanned = 0
    found = 0
    for line_number, raw_line in enumerate(lines, start=1):
        scanned = line_number
        payload = match_command_line(decode_line(raw_line, line_number))
        if payload is None:
            continue
        found += 1
        yield strip_cwd_prefix(payload)

    diagnostics.debug(f"Scanned {scanned} log lines, found {found} compiler commands")
