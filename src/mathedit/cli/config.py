#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the mathedit CLI.

Editor options can be stored in ``.mathedit.toml``, ``.mathedit.yaml``,
``.mathedit.yml``, ``.mathedit.json`` or a ``[tool.mathedit]`` table of
``pyproject.toml``::

    cursor_color = "red"
    placeholder_when_empty = false

    [renderer]
    placeholder = "\\square"
"""

import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Mapping, Optional

import yaml

from mathedit.constants import CONFIG_FILENAMES, PYPROJECT_SECTION
from mathedit.exceptions import ConfigError, ValidationError
from mathedit.options.editor import EditorOptions

logger = logging.getLogger(__name__)


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the [tool.mathedit] section from a pyproject.toml file.

    Returns an empty dict when the section is absent.

    Raises
    ------
    ConfigError
        If pyproject.toml cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {pyproject_path}: {e}", str(pyproject_path), e) from e

    section = data.get("tool", {}).get(PYPROJECT_SECTION)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_SECTION}] in {pyproject_path} must be a table, got {type(section).__name__}",
            str(pyproject_path),
        )
    return section


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Each directory from ``start_dir`` up to the filesystem root is checked
    for the dedicated config files, in priority order, and then for a
    pyproject.toml with a [tool.mathedit] section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for the search, defaults to the current working directory

    Returns
    -------
    Path or None
        Path to the first config file found, or None

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigError:
                # Unreadable pyproject.toml, keep searching upwards
                logger.debug("Skipping unreadable %s", pyproject_path)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file() -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    Searches the current directory and its parents first, then the user's
    home directory.

    Returns
    -------
    Path or None
        Path to the discovered config file, or None if not found

    """
    found = find_config_in_parents()
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

    The format is chosen from the file name and extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    ConfigError
        If the file cannot be read or parsed, or its root is not a mapping

    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise ConfigError(f"Configuration file does not exist: {config_path}", str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)

    try:
        if ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
            if config is None:
                config = {}
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ConfigError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", str(config_path))
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", str(config_path), e) from e

    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a mapping at root level, got {type(config).__name__}",
            str(config_path),
        )
    return config


def options_from_config(config: Mapping[str, Any], base: Optional[EditorOptions] = None) -> EditorOptions:
    """Build editor options from a loaded configuration.

    Parameters
    ----------
    config : Mapping[str, Any]
        Configuration as returned by ``load_config_file``
    base : EditorOptions, optional
        Options whose values are kept for keys the configuration does not set

    Returns
    -------
    EditorOptions
        The resulting options

    Raises
    ------
    ConfigError
        If the configuration names unknown options or holds invalid values

    """
    try:
        loaded = EditorOptions.from_mapping(config)
    except (ValidationError, ValueError, TypeError) as e:
        raise ConfigError(f"Invalid editor configuration: {e}", original_error=e) from e

    if base is None:
        return loaded

    # Only the keys present in the config override the base options
    overrides: Dict[str, Any] = {}
    for key in config:
        name = str(key).replace("-", "_")
        overrides[name] = getattr(loaded, name)
    return base.create_updated(**overrides)
