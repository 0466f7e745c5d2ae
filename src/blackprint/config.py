#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Loading of configuration and data files.

Tag dictionaries and template data can be kept in JSON, TOML or YAML files.
The format is chosen from the file extension; ``pyproject.toml`` files are
read from their ``[tool.blackprint]`` table.

A tag dictionary file looks like this (TOML)::

    [config]
    global_allowed_classes = ["note", "warning"]

    [[tags]]
    name = "kbd"
    inline = { elem = "kbd" }
"""

import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional, Union

import yaml

from blackprint.exceptions import ConfigurationError
from blackprint.markup.defaults import default_tag_dictionary
from blackprint.markup.dictionary import TagDictionary

logger = logging.getLogger(__name__)

PYPROJECT_SECTION = "blackprint"


def load_config_file(config_path: Union[Path, str]) -> Dict[str, Any]:
    """Load a mapping from a JSON, TOML, YAML or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the file

    Returns
    -------
    dict
        Mapping stored in the file. For ``pyproject.toml`` this is the
        ``[tool.blackprint]`` table, or an empty dict when it is absent.

    Raises
    ------
    ConfigurationError
        If the file does not exist, cannot be parsed, has an unsupported
        extension or does not hold a mapping at its root

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file does not exist: {config_path}", source=str(config_path))
    if not config_path.is_file():
        raise ConfigurationError(f"Configuration path is not a file: {config_path}", source=str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        data = _load_toml(config_path).get("tool", {}).get(PYPROJECT_SECTION, {})
    elif ext == ".toml":
        data = _load_toml(config_path)
    elif ext in (".yaml", ".yml"):
        data = _load_yaml(config_path)
    elif ext == ".json":
        data = _load_json(config_path)
    else:
        raise ConfigurationError(
            f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", source=str(config_path)
        )

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file must contain a mapping at root level, got {type(data).__name__}", source=str(config_path)
        )
    logger.debug("Loaded configuration from %s", config_path)
    return data


def _load_toml(config_path: Path) -> Any:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigurationError(f"Error reading {config_path}: {e}", str(config_path), e) from e


def _load_yaml(config_path: Path) -> Any:
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigurationError(f"Error reading {config_path}: {e}", str(config_path), e) from e
    # An empty YAML document loads as None
    return {} if data is None else data


def _load_json(config_path: Path) -> Any:
    try:
        with open(config_path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigurationError(f"Error reading {config_path}: {e}", str(config_path), e) from e


def load_tag_dictionary(config_path: Union[Path, str], base: Optional[TagDictionary] = None) -> TagDictionary:
    """Build a tag dictionary from a config file, extending ``base``.

    Parameters
    ----------
    config_path : Path or str
        File holding ``config`` and ``tags`` entries
    base : TagDictionary, optional
        Dictionary to extend, :data:`default_tag_dictionary` by default

    Returns
    -------
    TagDictionary
        The extended dictionary

    Raises
    ------
    ConfigurationError
        If the file cannot be loaded or does not describe a tag dictionary

    """
    data = load_config_file(config_path)
    try:
        return TagDictionary.from_mapping(data, base=base or default_tag_dictionary)
    except ConfigurationError as e:
        raise ConfigurationError(f"{e.message} (in {config_path})", str(config_path), e) from e
