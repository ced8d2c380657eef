#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the bbcode-ast CLI.

This module finds configuration files, loads them from JSON, TOML or YAML,
and turns the loaded settings into :class:`BBCodeParserOptions`.

Recognized keys are ``supported_tags`` (list of tag names),
``case_sensitive`` and ``lenient`` (booleans).
"""

import argparse
import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from bbcode_ast.constants import CONFIG_FILENAMES, CONFIG_SECTION_NAME
from bbcode_ast.exceptions import ValidationError
from bbcode_ast.options import BBCodeParserOptions

logger = logging.getLogger(__name__)

CONFIG_KEYS = frozenset({"supported_tags", "case_sensitive", "lenient"})


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the [tool.bbcode-ast] section from a pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        Configuration dictionary from the section, or empty dict if not found

    Raises
    ------
    argparse.ArgumentTypeError
        If pyproject.toml cannot be parsed

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get(CONFIG_SECTION_NAME, {})
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.{CONFIG_SECTION_NAME}] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Each directory from ``start_dir`` up to the filesystem root is checked
    for the dedicated config files (in :data:`CONFIG_FILENAMES` order) and
    then for a pyproject.toml with a [tool.bbcode-ast] section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

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
            except argparse.ArgumentTypeError as e:
                logger.debug("Skipping unreadable %s: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file() -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    The working directory and its parents are searched first, then the
    user's home directory.

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    config_in_parents = find_config_in_parents()
    if config_in_parents:
        return config_in_parents

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML, or pyproject.toml file.

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
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has invalid format

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")

    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)
    elif ext == ".toml":
        return _load_toml_config(config_path)
    elif ext in (".yaml", ".yml"):
        return _load_yaml_config(config_path)
    elif ext == ".json":
        return _load_json_config(config_path)
    raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    """Load configuration from TOML file."""
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading TOML config {config_path}: {e}") from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    """Load configuration from JSON file."""
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid JSON in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading JSON config {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"JSON config file must contain an object, got {type(config).__name__}")
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    """Load configuration from YAML file. An empty file yields an empty config."""
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise argparse.ArgumentTypeError(f"Invalid YAML in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading YAML config {config_path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"YAML config file must contain a mapping, got {type(config).__name__}")
    return config


def options_from_config(
    config: Dict[str, Any], base: Optional[BBCodeParserOptions] = None
) -> BBCodeParserOptions:
    """Apply a loaded configuration dictionary to parser options.

    Parameters
    ----------
    config : dict
        Configuration loaded by :func:`load_config_file`
    base : BBCodeParserOptions, optional
        Options to start from, defaults to ``BBCodeParserOptions()``

    Returns
    -------
    BBCodeParserOptions
        Options with the configured fields replaced

    Raises
    ------
    argparse.ArgumentTypeError
        If the configuration has unknown keys or invalid values

    """
    base = base or BBCodeParserOptions()
    unknown = sorted(set(config) - CONFIG_KEYS)
    if unknown:
        raise argparse.ArgumentTypeError(f"Unknown configuration key(s): {', '.join(unknown)}")

    for key in ("case_sensitive", "lenient"):
        if key in config and not isinstance(config[key], bool):
            raise argparse.ArgumentTypeError(f"Configuration key '{key}' must be a boolean")
    if "supported_tags" in config and not isinstance(config["supported_tags"], list):
        raise argparse.ArgumentTypeError("Configuration key 'supported_tags' must be a list of tag names")

    try:
        return base.create_updated(**config)
    except ValidationError as e:
        raise argparse.ArgumentTypeError(f"Invalid configuration: {e.message}") from e
