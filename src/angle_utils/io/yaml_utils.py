"""Define utility functions for reading and writing plain data as YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from angle_utils.io.logging import log_debug


def export_yaml_data(data: dict[str, Any], yaml_path: Path) -> None:
    """Write the given data (plain Python types only) to a YAML file, sorted by key."""
    yaml_path.write_text(yaml.safe_dump(data, sort_keys=True, default_flow_style=False))
    log_debug(f"Exported YAML data to {yaml_path}")


def load_yaml_data(yaml_path: Path) -> Any:
    """Load the contents of a YAML file into plain Python data.

    :param yaml_path: Path to the YAML file to be read
    :return: Loaded data (None if the file is empty)
    :raises FileNotFoundError: If no file exists at the given path
    :raises RuntimeError: If the file is not valid YAML
    """
    if not yaml_path.is_file():
        raise FileNotFoundError(f"Cannot load data from nonexistent YAML file: {yaml_path}")

    try:
        yaml_data = yaml.safe_load(yaml_path.read_text())
    except yaml.YAMLError as error:
        raise RuntimeError(f"Failed to load from YAML file: {yaml_path}") from error

    log_debug(f"Loaded YAML data from {yaml_path}")
    return yaml_data
