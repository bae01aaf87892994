"""Define functions to load named angles and comparison tolerances from YAML files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict

import numpy as np

from angle_utils.io.logging import log_info
from angle_utils.io.pydantic_schemata import AngleConfigSchema, angle_from_schema, serialize_radians
from angle_utils.io.yaml_utils import export_yaml_data
from angle_utils.math.approx import Tolerance

if TYPE_CHECKING:
    from pathlib import Path

    from angle_utils.math.angles import Angle


@dataclass
class AngleConfig:
    """A collection of named angles with the tolerance used to compare them."""

    angles: Dict[str, Angle] = field(default_factory=dict)
    tolerance: Tolerance = field(default_factory=Tolerance)
    float_type: type = np.float64

    def __getitem__(self, name: str) -> Angle:
        """Retrieve the angle with the given name."""
        if name not in self.angles:
            raise KeyError(f"No angle named '{name}'; known angles: {sorted(self.angles)}")
        return self.angles[name]

    def matches(self, name: str, angle: Angle) -> bool:
        """Evaluate whether the named angle approximately equals the given angle."""
        return self[name].approx_eq(angle, self.tolerance)


def load_angle_config(yaml_path: Path) -> AngleConfig:
    """Load named angles and their comparison tolerance from a YAML file.

    :param yaml_path: Path to a YAML file matching AngleConfigSchema
    :return: Angles (in the configured precision) and the configured tolerance
    :raises RuntimeError: If the file cannot be parsed or fails validation
    """
    schema = AngleConfigSchema.validate_yaml(yaml_path)
    float_type = schema.float_type

    angles = {name: angle_from_schema(entry, float_type) for name, entry in schema.angles.items()}
    log_info(f"Loaded {len(angles)} {float_type.__name__} angles from {yaml_path}")

    return AngleConfig(angles, schema.tolerance.to_tolerance(), float_type)


def export_angles(angles: Dict[str, Angle], yaml_path: Path) -> None:
    """Export named angles to a YAML file as bare values in radians.

    :param angles: Map from names to the angles to be exported
    :param yaml_path: Path to the YAML file written
    """
    precisions = {angle.float_type for angle in angles.values()}
    if len(precisions) > 1:
        names = sorted(t.__name__ for t in precisions)
        raise TypeError(f"Cannot export angles of mixed precisions: {names}")

    data = {"angles": {name: serialize_radians(angle) for name, angle in angles.items()}}
    if precisions == {np.float32}:
        data["precision"] = 32

    export_yaml_data(data, yaml_path)
    log_info(f"Exported {len(angles)} angles to {yaml_path}")
