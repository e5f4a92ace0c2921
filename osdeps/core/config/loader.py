"""
Configuration loader — reads osdeps.yml into a WorkspaceConfig.

The file holds persisted option values plus the list of options the
user has explicitly confirmed::

    version: 1
    options:
      osdeps_mode: all
      emerge_update: "no"
    validated:
      - emerge_update

Options are *declared* by the code that uses them (name, type, default,
doc); ``get`` falls back to the declared default when nothing is
persisted.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from osdeps.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "osdeps.yml"

_TRUE = {"yes", "y", "true", "on", "1"}
_FALSE = {"no", "n", "false", "off", "0"}


class OptionDeclaration(BaseModel):
    """A configuration switch registered by a component."""

    name: str
    type: Literal["boolean", "string"] = "string"
    default: Any = None
    doc: list[str] = Field(default_factory=list)


class ConfigFile(BaseModel):
    """On-disk schema of osdeps.yml."""

    version: int = 1
    options: dict[str, Any] = Field(default_factory=dict)
    validated: list[str] = Field(default_factory=list)


def parse_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigurationError(f"Invalid boolean value: {value!r} (expected yes or no)")


class WorkspaceConfig:
    """Declared options plus their persisted values."""

    def __init__(self, path: Path | None = None, data: ConfigFile | None = None):
        self.path = path
        self._data = data or ConfigFile()
        self._declared: dict[str, OptionDeclaration] = {}
        self.declare(
            "osdeps_mode", "string", default="all",
            doc=[
                "Which package managers should osdeps install packages with?",
                "'all' for every manager, 'none' to install them yourself,",
                "or a comma-separated list of manager names",
            ],
        )
        self.declare(
            "osdeps_silent", "boolean", default="no",
            doc=["Should osdeps skip the install instructions it shows when it",
                 "is not allowed to install packages itself?"],
        )

    # ── Declarations ──────────────────────────────────────────────

    def declare(
        self,
        name: str,
        type: Literal["boolean", "string"],
        default: Any = None,
        doc: list[str] | str | None = None,
    ) -> OptionDeclaration:
        if isinstance(doc, str):
            doc = [doc]
        decl = OptionDeclaration(name=name, type=type, default=default, doc=doc or [])
        self._declared[name] = decl
        return decl

    def declared(self, name: str) -> OptionDeclaration | None:
        return self._declared.get(name)

    @property
    def declarations(self) -> list[OptionDeclaration]:
        return list(self._declared.values())

    # ── Values ────────────────────────────────────────────────────

    def has_value(self, name: str) -> bool:
        return name in self._data.options

    def get(self, name: str) -> Any:
        """Persisted value, else the declared default, typed.

        Raises:
            ConfigurationError: Unknown option or uncoercible value.
        """
        decl = self._declared.get(name)
        if name in self._data.options:
            value = self._data.options[name]
        elif decl is not None:
            value = decl.default
        else:
            raise ConfigurationError(f"Unknown configuration option: {name}")

        if decl is not None and decl.type == "boolean":
            return parse_boolean(value)
        return value

    def set(self, name: str, value: Any, user_validated: bool = False) -> None:
        decl = self._declared.get(name)
        if decl is not None and decl.type == "boolean":
            value = parse_boolean(value)
        self._data.options[name] = value
        if user_validated and name not in self._data.validated:
            self._data.validated.append(name)
        logger.debug("Config %s = %r (validated=%s)", name, value, user_validated)

    def validated(self, name: str) -> bool:
        return name in self._data.validated

    def to_dict(self) -> dict[str, Any]:
        return self._data.model_dump()

    # ── Persistence ───────────────────────────────────────────────

    def save(self, path: Path | None = None) -> Path:
        """Write the config atomically (temp file, then rename)."""
        target = path or self.path
        if target is None:
            raise ConfigurationError("No configuration file path to save to")
        target.parent.mkdir(parents=True, exist_ok=True)
        content = yaml.safe_dump(self.to_dict(), sort_keys=False)

        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=".osdeps_", suffix=".tmp")
        tmp = Path(tmp_name)
        try:
            with open(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            tmp.replace(target)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
        self.path = target
        logger.debug("Config saved to %s", target)
        return target


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for osdeps.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to osdeps.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> WorkspaceConfig:
    """Load the workspace configuration.

    A missing file is not an error: the workspace then runs on declared
    defaults, and ``save()`` creates the file in the current directory.

    Raises:
        ConfigurationError: If the file exists but is invalid.
    """
    if path is None:
        path = find_config_file()
    if path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILE)
        return WorkspaceConfig(path=Path.cwd() / CONFIG_FILE)
    if not path.exists():
        logger.debug("Config file %s does not exist yet, using defaults", path)
        return WorkspaceConfig(path=path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config_file = ConfigFile.model_validate(data)
    except Exception as e:
        raise ConfigurationError(f"Invalid osdeps configuration: {e}") from e

    logger.info("Loaded %d option(s) from %s", len(config_file.options), path)
    return WorkspaceConfig(path=path, data=config_file)
