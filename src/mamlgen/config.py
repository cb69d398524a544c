"""Generator configuration.

Configuration is read from TOML, either a dedicated ``mamlgen.toml`` or the
``[tool.mamlgen]`` table of a ``pyproject.toml``:

    [tool.mamlgen]
    extractors = ["reflection", "xml-comments", "docstrings"]
    common_namespaces = ["builtins"]
    companion_extension = ".xml"
    indent = "  "

Every key is optional.
"""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mamlgen.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_EXTRACTORS = ("reflection", "xml-comments", "docstrings")
KNOWN_EXTRACTORS = frozenset(DEFAULT_EXTRACTORS)
CONFIG_FILENAME = "mamlgen.toml"
PYPROJECT_FILENAME = "pyproject.toml"


def _string_list(data: dict[str, Any], key: str, default: list[str]) -> list[str]:
    if key not in data:
        return default
    value = data[key]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    return list(value)


def _string(data: dict[str, Any], key: str, default: str) -> str:
    if key not in data:
        return default
    value = data[key]
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string")
    return value


@dataclass
class GeneratorConfig:
    """MAML generator configuration.

    Attributes:
        extractors: Extractor names in chain order
        common_namespaces: Modules whose classes are named without a module prefix
        companion_extension: Extension of companion XML documentation files
        indent: Indentation used when writing XML
    """

    extractors: list[str] = field(default_factory=lambda: list(DEFAULT_EXTRACTORS))
    common_namespaces: list[str] = field(default_factory=lambda: ["builtins"])
    companion_extension: str = ".xml"
    indent: str = "  "

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeneratorConfig":
        """Create configuration from a parsed TOML table.

        Raises:
            ConfigError: If a value has the wrong type or names an unknown extractor
        """
        defaults = cls()
        config = cls(
            extractors=_string_list(data, "extractors", defaults.extractors),
            common_namespaces=_string_list(data, "common_namespaces", defaults.common_namespaces),
            companion_extension=_string(data, "companion_extension", defaults.companion_extension),
            indent=_string(data, "indent", defaults.indent),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ConfigError: If validation fails
        """
        unknown = [name for name in self.extractors if name not in KNOWN_EXTRACTORS]
        if unknown:
            raise ConfigError(
                f"Unknown extractor(s): {', '.join(unknown)}. "
                f"Valid extractors: {', '.join(DEFAULT_EXTRACTORS)}"
            )
        if not self.extractors:
            raise ConfigError("At least one extractor must be configured")
        if not self.companion_extension.startswith("."):
            raise ConfigError(f"Companion extension must start with '.': {self.companion_extension}")


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config: {e}") from e


def _table_from(path: Path) -> dict[str, Any]:
    data = _read_toml(path)
    if path.name == PYPROJECT_FILENAME:
        table = data.get("tool", {}).get("mamlgen", {})
        if not isinstance(table, dict):
            raise ConfigError(f"[tool.mamlgen] in {path} must be a table")
        return table
    return data


def load_config(path: str | Path | None = None, search_dir: str | Path | None = None) -> GeneratorConfig:
    """Load generator configuration.

    Args:
        path: Explicit config file (mamlgen.toml or pyproject.toml)
        search_dir: Directory searched when no path is given (default: cwd)

    Returns:
        GeneratorConfig (defaults when no config file is found)

    Raises:
        ConfigError: If an explicit file is missing, or a file is invalid
    """
    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
        logger.debug(f"Loading config from: {config_path}")
        return GeneratorConfig.from_dict(_table_from(config_path))

    directory = Path(search_dir) if search_dir is not None else Path.cwd()
    for candidate in (directory / CONFIG_FILENAME, directory / PYPROJECT_FILENAME):
        if candidate.is_file():
            logger.debug(f"Loading config from: {candidate}")
            return GeneratorConfig.from_dict(_table_from(candidate))

    logger.debug("Config file not found, using defaults")
    return GeneratorConfig()
