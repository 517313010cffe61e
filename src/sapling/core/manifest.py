import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ManifestError

MANIFEST_FILENAME = "sapling.toml"

# =============================================================================
# Output Configuration
# =============================================================================


@dataclass
class OutputConfig:
    """Where and how grammar.json files are written."""

    dir: str = "grammars"  # relative to the manifest
    indent: int = 2


# =============================================================================
# Logging Configuration
# =============================================================================


@dataclass
class LoggingConfig:
    """Log level for CLI runs."""

    level: str = "WARNING"  # DEBUG | INFO | WARNING | ERROR

    @property
    def level_value(self) -> int:
        return logging.getLevelName(self.level.upper())


@dataclass
class SaplingManifest:
    """
    Project manifest loaded from sapling.toml.

    Example:

        [project]
        name = "calc"
        schema = "schema/calc.toml"

        [output]
        dir = "grammars"
        indent = 2

        [logging]
        level = "INFO"
    """

    name: str
    schema: str
    root: Path = field(default_factory=Path.cwd)  # directory holding the manifest
    output: OutputConfig = field(default_factory=OutputConfig)
    log: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def schema_path(self) -> Path:
        return self.root / self.schema

    @property
    def output_dir(self) -> Path:
        return self.root / self.output.dir


def load_manifest(path: Path) -> SaplingManifest:
    if not path.exists():
        raise ManifestError(f"Manifest not found: {path}")
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid manifest {path}: {e}") from e

    project = data.get("project", {})
    output_data = data.get("output", {})
    logging_data = data.get("logging", {})

    schema = project.get("schema")
    if not schema:
        raise ManifestError(f"project.schema must be set in {path}")

    indent = output_data.get("indent", 2)
    if not isinstance(indent, int) or isinstance(indent, bool) or indent < 0:
        raise ManifestError(f"output.indent must be a non-negative integer in {path}")

    level = str(logging_data.get("level", "WARNING")).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ManifestError(f"Unknown logging.level '{level}' in {path}")

    return SaplingManifest(
        name=project.get("name", path.parent.name),
        schema=schema,
        root=path.parent,
        output=OutputConfig(
            dir=output_data.get("dir", "grammars"),
            indent=indent,
        ),
        log=LoggingConfig(level=level),
    )
