"""
Compilation database entries and their JSON form.

A compilation database is an ordered list of entries, one per compiled
source file:

    [{"directory": "...", "arguments": ["clang", ...], "file": "..."}, ...]

Entries are immutable. Loading and writing support orjson for large
databases (optional dependency) and fall back to the stdlib json module.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Tuple, Union

# Try to import orjson for faster JSON parsing (optional)
try:
    import orjson
    HAS_ORJSON = True
except ImportError:
    HAS_ORJSON = False

from . import diagnostics
from .errors import EntryConstructionError, FileAccessError, InputFormatError

PathLike = Union[str, Path]


@dataclass(frozen=True)
class DatabaseEntry:
    """One compilation database record."""
    directory: str
    arguments: Tuple[str, ...]
    file: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            "directory": self.directory,
            "arguments": list(self.arguments),
            "file": self.file,
        }

    @classmethod
    def from_dict(cls, data: Any, index: int = 0) -> "DatabaseEntry":
        """Create an entry from a loaded JSON object.

        The entry is trusted as-is: ``file`` is not checked against the last
        argument. Only the shape of the object is validated.

        Raises:
            InputFormatError: If a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise InputFormatError(
                f"Entry {index} must be a JSON object, got {type(data).__name__}"
            )
        for key in ("directory", "arguments", "file"):
            if key not in data:
                raise InputFormatError(f"Entry {index} is missing the '{key}' field")

        directory = data["directory"]
        arguments = data["arguments"]
        file = data["file"]
        if not isinstance(directory, str) or not isinstance(file, str):
            raise InputFormatError(f"Entry {index}: 'directory' and 'file' must be strings")
        if not isinstance(arguments, list) or not all(isinstance(a, str) for a in arguments):
            raise InputFormatError(f"Entry {index}: 'arguments' must be a list of strings")

        return cls(directory=directory, arguments=tuple(arguments), file=file)


CompilationDatabase = List[DatabaseEntry]


def build_entry(tokens: Sequence[str], directory: str) -> DatabaseEntry:
    """Build a database entry from a command's argument vector.

    Args:
        tokens: The argument vector, compiler first and source file last
        directory: Working directory shared by the whole log, used verbatim

    Raises:
        EntryConstructionError: If ``tokens`` is empty
    """
    if not tokens:
        raise EntryConstructionError("Cannot build an entry from an empty argument list")
    arguments = tuple(tokens)
    return DatabaseEntry(directory=directory, arguments=arguments, file=arguments[-1])


def parse_database(data: Any) -> CompilationDatabase:
    """Convert a decoded JSON document into database entries, keeping order."""
    if not isinstance(data, list):
        raise InputFormatError(
            f"A compilation database must be a JSON array, got {type(data).__name__}"
        )
    return [DatabaseEntry.from_dict(item, index) for index, item in enumerate(data)]


def load_database(path: PathLike) -> CompilationDatabase:
    """Load an existing compile_commands.json file.

    Raises:
        FileAccessError: If the file cannot be read
        InputFormatError: If the content is not a valid compilation database
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise FileAccessError(f"Cannot open input file {path}: {e}", str(path)) from e

    try:
        if HAS_ORJSON:
            data = orjson.loads(raw)
        else:
            data = json.loads(raw.decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as e:
        # orjson.JSONDecodeError and json.JSONDecodeError are both ValueErrors
        raise InputFormatError(f"Malformed JSON in {path}: {e}") from e

    database = parse_database(data)
    diagnostics.debug(f"Loaded {len(database)} entries from {path}")
    return database


def dump_database(database: Iterable[DatabaseEntry], pretty: bool = True) -> bytes:
    """Encode a database as UTF-8 JSON, indented by two spaces or compact."""
    payload = [entry.to_dict() for entry in database]
    if HAS_ORJSON:
        return orjson.dumps(payload, option=orjson.OPT_INDENT_2 if pretty else 0)
    if pretty:
        text = json.dumps(payload, indent=2, ensure_ascii=False)
    else:
        text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return text.encode("utf-8")


def write_database(database: Iterable[DatabaseEntry], path: PathLike, pretty: bool = True) -> Path:
    """Serialize a database to ``path``, creating the parent directory if needed.

    Raises:
        FileAccessError: If the output file cannot be created
    """
    path = Path(path)
    data = dump_database(database, pretty=pretty)
    try:
        output_dir = path.parent
        if str(output_dir) and not output_dir.exists():
            os.makedirs(output_dir)
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise FileAccessError(f"Cannot create output file {path}: {e}", str(path)) from e

    diagnostics.debug(f"Wrote {len(data)} bytes to {path}")
    return path
