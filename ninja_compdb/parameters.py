"""Run parameters and the JSON parameter file."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from . import diagnostics
from .errors import ConfigurationError, FileAccessError

DEFAULT_OUTPUT_DIR = "."
DEFAULT_FILENAME = "compile_commands.json"
TEMPLATE_FILENAME = "template.json"

# Passing this as the config path asks for a template instead of a run.
TEMPLATE_REQUEST = "-"


@dataclass
class CompdbParameters:
    """The parameters of one run, exactly as stored in a parameter file.

    The parameter file path is deliberately not a field: it selects where
    parameters come from and is never written into a template.
    """
    input: Optional[str] = None
    root: Optional[str] = None
    output: str = DEFAULT_OUTPUT_DIR
    filename: str = DEFAULT_FILENAME
    pretty: bool = True
    patterns: List[str] = field(default_factory=list)

    @property
    def output_path(self) -> Path:
        return Path(self.output) / self.filename

    @classmethod
    def from_args(cls, args) -> "CompdbParameters":
        """Build parameters from an argparse namespace."""
        return cls(
            input=args.input,
            root=args.root,
            output=args.output,
            filename=args.filename,
            pretty=args.pretty,
            patterns=list(args.patterns or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input": self.input,
            "root": self.root,
            "output": self.output,
            "filename": self.filename,
            "pretty": self.pretty,
            "patterns": list(self.patterns),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompdbParameters":
        """Create parameters from a parameter-file object.

        Missing keys take their defaults. The optional ``diagnostics``
        section is consumed by the diagnostics module, other unknown keys
        are reported and ignored.

        Raises:
            ConfigurationError: If a value has the wrong type
        """
        known = {"input", "root", "output", "filename", "pretty", "patterns", "diagnostics"}
        for key in data:
            if key not in known:
                diagnostics.warning(f"Ignoring unknown parameter '{key}'")

        params = cls()
        for key in ("input", "root"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ConfigurationError(f"Parameter '{key}' must be a string or null")
            setattr(params, key, value)

        for key in ("output", "filename"):
            if key in data:
                if not isinstance(data[key], str):
                    raise ConfigurationError(f"Parameter '{key}' must be a string")
                setattr(params, key, data[key])

        if "pretty" in data:
            if not isinstance(data["pretty"], bool):
                raise ConfigurationError("Parameter 'pretty' must be true or false")
            params.pretty = data["pretty"]

        if "patterns" in data:
            patterns = data["patterns"]
            if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
                raise ConfigurationError("Parameter 'patterns' must be a list of strings")
            params.patterns = list(patterns)

        validate_diagnostics_section(data.get("diagnostics"))
        return params


def validate_diagnostics_section(section: Any):
    """Check the optional ``diagnostics`` section of a parameter file.

    Raises:
        ConfigurationError: If the section is not an object, ``level`` is not a
            known level name or ``enabled`` is not a boolean
    """
    if section is None:
        return
    if not isinstance(section, dict):
        raise ConfigurationError("Parameter 'diagnostics' must be an object")

    if "level" in section:
        level = section["level"]
        if not isinstance(level, str) or level.upper() not in diagnostics.LEVEL_NAMES:
            names = ", ".join(name.lower() for name in diagnostics.LEVEL_NAMES)
            raise ConfigurationError(
                f"Parameter 'diagnostics.level' must be one of: {names}"
            )

    if "enabled" in section and not isinstance(section["enabled"], bool):
        raise ConfigurationError("Parameter 'diagnostics.enabled' must be true or false")


def load_parameters(path: Union[str, Path]) -> CompdbParameters:
    """Load run parameters from a JSON parameter file.

    Raises:
        ConfigurationError: If the file is unreadable or does not hold a JSON object
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read parameter file {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Parameter file {path} content is invalid: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Parameter file {path} must contain a JSON object, got {type(data).__name__}"
        )

    params = CompdbParameters.from_dict(data)
    diagnostics.configure_from_config(data)
    diagnostics.debug(f"Parameters loaded from {path}")
    return params


def write_template(params: CompdbParameters, path: Union[str, Path] = TEMPLATE_FILENAME) -> Path:
    """Write ``params`` as a pretty-printed parameter file template.

    Raises:
        FileAccessError: If the template cannot be written
    """
    path = Path(path)
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(params.to_dict(), f, indent=2)
    except OSError as e:
        raise FileAccessError(f"Cannot write template {path}: {e}", str(path)) from e

    diagnostics.info(f"Created parameter template at: {path}")
    return path
