"""
Mode dispatch: build a compilation database from a ninja log, or filter an
existing one.

    ninja log  -> extract commands -> split -> build entries -> [filter] -> write
    .json file -> load entries -> filter -> write

Nothing here catches errors. A run either returns a PipelineResult or raises
a CompdbError.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from . import diagnostics
from .compdb import CompilationDatabase, build_entry, load_database, write_database
from .errors import ConfigurationError, FileAccessError, InputFormatError
from .extractor import Line, extract_commands
from .parameters import CompdbParameters
from .pattern_filter import filter_entries
from .tokenizer import split_command


class InputKind(Enum):
    """Kind of input artifact, inferred from the file extension."""

    NINJA = "ninja"
    JSON = "json"


class RunStatus(Enum):
    WRITTEN = "written"
    NOTHING_FOUND = "nothing_found"


@dataclass
class PipelineResult:
    """Outcome of a successful run."""
    status: RunStatus
    mode: InputKind
    entry_count: int = 0
    output_path: Optional[Path] = None

    @property
    def written(self) -> bool:
        return self.status is RunStatus.WRITTEN


def detect_input_kind(path: Union[str, Path]) -> InputKind:
    """Infer the input kind from the extension (``.ninja`` or ``.json``).

    Raises:
        InputFormatError: For any other extension, or none at all
    """
    suffix = Path(path).suffix
    for kind in InputKind:
        if suffix == "." + kind.value:
            return kind
    if not suffix:
        raise InputFormatError(f"Not a .ninja or .json input file: {path}")
    raise InputFormatError(f"Unsupported file type: {suffix[1:]}")


def build_database(lines: Iterable[Line], directory: str) -> CompilationDatabase:
    """Turn every recognized compiler line into an entry, in log order."""
    return [build_entry(split_command(command), directory) for command in extract_commands(lines)]


def apply_patterns(database: CompilationDatabase, patterns: Sequence[str]) -> CompilationDatabase:
    """Filter by ``patterns``; with no patterns the database is kept whole."""
    if not patterns:
        return database
    return filter_entries(database, patterns)


def _read_log(path: Path, directory: str) -> CompilationDatabase:
    try:
        log = open(path, "rb")
    except OSError as e:
        raise FileAccessError(f"Cannot open input file {path}: {e}", str(path)) from e
    with log:
        return build_database(log, directory)


def run(params: CompdbParameters) -> PipelineResult:
    """Run one conversion or filtering pass as described by ``params``.

    Raises:
        ConfigurationError: If a parameter required by the selected mode is missing
        InputFormatError: If the input kind is unsupported or the database is malformed
        DecodeError, TokenizeError, EntryConstructionError: On a bad log line
        FileAccessError: If the input cannot be read or the output written
    """
    if not params.input:
        raise ConfigurationError("Missing --input parameter!")

    input_path = Path(params.input)
    kind = detect_input_kind(input_path)

    if kind is InputKind.JSON:
        if not params.patterns:
            raise ConfigurationError("Missing --pattern parameter!")
        diagnostics.debug(f"Filtering compilation database {input_path}")
        database = load_database(input_path)
    else:
        if params.root is None:
            raise ConfigurationError("Missing --root parameter!")
        diagnostics.debug(f"Extracting compiler commands from {input_path}")
        database = _read_log(input_path, params.root)

    if not database:
        return PipelineResult(status=RunStatus.NOTHING_FOUND, mode=kind)

    database = apply_patterns(database, params.patterns)

    output_path = write_database(database, params.output_path, pretty=params.pretty)
    diagnostics.debug(f"{len(database)} entries written to {output_path}")
    return PipelineResult(
        status=RunStatus.WRITTEN,
        mode=kind,
        entry_count=len(database),
        output_path=output_path,
    )
