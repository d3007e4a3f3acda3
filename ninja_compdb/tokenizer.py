"""Shell word splitting for extracted compiler commands."""

import shlex
from typing import List

from .errors import TokenizeError


def split_command(command: str) -> List[str]:
    """Split a command string into its argument vector.

    Uses POSIX word-splitting rules: whitespace separates words, single and
    double quotes group, backslashes escape, and the quotes themselves are
    removed. No variable, glob or command substitution is performed.

    Raises:
        TokenizeError: On an unterminated quote or a trailing backslash
    """
    lexer = shlex.shlex(command, posix=True)
    lexer.whitespace_split = True
    # "#" is an ordinary character; shlex would also cut words at a mid-word "#".
    lexer.commenters = ""
    try:
        return list(lexer)
    except ValueError as e:
        raise TokenizeError(command, str(e)) from e
