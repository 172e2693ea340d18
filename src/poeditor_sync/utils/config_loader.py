"""Configuration file loading utilities."""

from pathlib import Path
from typing import Any, Optional

import yaml

DEFAULT_CONFIG_NAMES = ("poeditor.yml", "poeditor.yaml")


def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in ``start`` or one of its parents.

    Args:
        start: Directory to start searching from (default: working directory)

    Returns:
        Path to the first configuration file found, or None
    """
    current = Path(start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        for name in DEFAULT_CONFIG_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None


def load_yaml(config_path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file.

    Args:
        config_path: Path to the YAML config file

    Returns:
        Dictionary containing the configuration (empty for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
        ValueError: If the top-level YAML value is not a mapping
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data
