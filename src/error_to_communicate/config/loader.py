"""Configuration loader with YAML parsing and environment variable substitution."""

import os
import re
from pathlib import Path

import yaml

from .schema import ReporterConfig

DEFAULT_CONFIG_NAMES = (".error_to_communicate.yaml", ".error_to_communicate.yml")


def substitute_env_vars(text: str) -> str:
    """
    Replace ${VAR_NAME} patterns with environment variable values.

    Args:
        text: Text containing ${VAR_NAME} patterns

    Returns:
        Text with environment variables substituted

    Raises:
        ValueError: If a referenced environment variable is not found
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ValueError(f"Environment variable {var_name} not found")
        return value

    return re.sub(r"\$\{([^}]+)\}", replacer, text)


def load_config(path: Path) -> ReporterConfig:
    """
    Load configuration from YAML file with environment variable substitution.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated ReporterConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If environment variables are missing or config is invalid
        ValidationError: If config doesn't match schema
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open() as f:
        raw_yaml = f.read()

    yaml_with_env = substitute_env_vars(raw_yaml)

    # An empty file means "all defaults"
    config_dict = yaml.safe_load(yaml_with_env) or {}
    if not isinstance(config_dict, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")

    return ReporterConfig.model_validate(config_dict)


def find_config(directory: Path) -> Path | None:
    """
    Find a default configuration file in ``directory``.

    Args:
        directory: Directory to look in (usually the project root)

    Returns:
        Path to the first existing default config file, or None
    """
    for name in DEFAULT_CONFIG_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def load_default_config(directory: Path | None = None) -> ReporterConfig:
    """
    Load the default config file if one exists, otherwise use defaults.

    Args:
        directory: Directory to search (defaults to the current directory)

    Returns:
        ReporterConfig instance
    """
    path = find_config(directory if directory is not None else Path.cwd())
    if path is None:
        return ReporterConfig()
    return load_config(path)
