"""Substring filtering of compilation database entries."""

from typing import Iterable, List, Sequence

from . import diagnostics
from .compdb import DatabaseEntry


def matches_any(file: str, patterns: Sequence[str]) -> bool:
    """True if any pattern occurs in ``file`` as a literal, case-sensitive substring."""
    return any(pattern in file for pattern in patterns)


def filter_entries(entries: Iterable[DatabaseEntry], patterns: Sequence[str]) -> List[DatabaseEntry]:
    """Keep the entries whose ``file`` contains at least one of ``patterns``.

    Relative order is preserved and an entry matching several patterns is
    kept once. An empty ``patterns`` matches nothing, so callers that mean
    "no filtering" must skip the call instead.
    """
    patterns = list(patterns)
    kept = [entry for entry in entries if matches_any(entry.file, patterns)]
    diagnostics.debug(f"Pattern filter {patterns} kept {len(kept)} entries")
    return kept
