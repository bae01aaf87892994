"""Define Pydantic models for serializing angles and validating angle YAML configuration files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Literal, Optional, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from typing_extensions import Annotated

from angle_utils.io.yaml_utils import load_yaml_data
from angle_utils.math.angles import Angle
from angle_utils.math.approx import ComparisonMethod, Tolerance
from angle_utils.math.float_traits import float_traits

# =============================================================================
# Serialized Angle Fields
# =============================================================================


def serialize_radians(angle: Angle) -> float:
    """Serialize an angle as its bare value in radians (no unit tag)."""
    return float(angle.as_radians())


NON_FINITE_JSON = {"Infinity": np.inf, "-Infinity": -np.inf, "NaN": np.nan}
"""JSON has no literals for non-finite numbers, so these angles are written as strings."""


def serialize_radians_field(angle: Angle, info: core_schema.SerializationInfo) -> float | str:
    """Serialize an angle field as bare radians, spelling non-finite values out in JSON."""
    radians = serialize_radians(angle)
    if info.mode_is_json() and not np.isfinite(radians):
        return "NaN" if np.isnan(radians) else ("Infinity" if radians > 0 else "-Infinity")
    return radians


@dataclass(frozen=True)
class RadiansAnnotation:
    """Pydantic annotation storing an Angle field as a plain number of radians.

    Validation accepts a real number (interpreted as radians, stored without conversion) or an
    Angle of the annotation's precision. Serialization emits the bare radian value, except that
    non-finite angles are written to JSON as the strings in NON_FINITE_JSON, which validate back.
    """

    float_type: type = np.float64

    def validate(self, value: Any) -> Angle:
        """Convert a raw field value into an angle of this annotation's precision."""
        traits = float_traits(self.float_type)
        if isinstance(value, Angle):
            if value.float_type is not traits.float_type:
                raise ValueError(
                    f"Expected a {traits.float_type.__name__} angle, "
                    f"got a {value.float_type.__name__} angle",
                )
            return value
        if isinstance(value, str) and value in NON_FINITE_JSON:
            return Angle.from_radians(NON_FINITE_JSON[value], float_type=traits.float_type)
        if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
            raise ValueError(f"Expected a number of radians, got {type(value).__name__}: {value!r}")
        return Angle.from_radians(value, float_type=traits.float_type)

    def __get_pydantic_core_schema__(
        self,
        source_type: Any,
        handler: Callable[[Any], core_schema.CoreSchema],
    ) -> core_schema.CoreSchema:
        """Build a core schema that bypasses Angle's fields entirely."""
        return core_schema.no_info_plain_validator_function(
            self.validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                serialize_radians_field,
                info_arg=True,
            ),
        )

    def __get_pydantic_json_schema__(
        self,
        schema: core_schema.CoreSchema,
        handler: Callable[[Any], JsonSchemaValue],
    ) -> JsonSchemaValue:
        """Describe the field as a number in generated JSON schemas."""
        return handler(core_schema.float_schema())


Angle32Field = Annotated[Angle, RadiansAnnotation(np.float32)]
"""A float32 Angle field serialized as its bare value in radians."""

Angle64Field = Annotated[Angle, RadiansAnnotation(np.float64)]
"""A float64 Angle field serialized as its bare value in radians."""

# =============================================================================
# Angle Specification Schemata
# =============================================================================

ANGLE_UNITS = ("rad", "deg", "cycles")
"""Unit keys accepted when specifying an angle as a dictionary."""


class AngleDictSchema(BaseModel):
    """Schema for specifying an angle as a dictionary with exactly one unit key."""

    rad: Optional[float] = Field(default=None, description="Angle in radians")
    deg: Optional[float] = Field(default=None, description="Angle in degrees")
    cycles: Optional[float] = Field(default=None, description="Angle in full turns")

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_single_unit(self) -> AngleDictSchema:
        """Validate that exactly one unit was given."""
        given = [unit for unit in ANGLE_UNITS if getattr(self, unit) is not None]
        if len(given) != 1:
            raise ValueError(f"Angle must specify exactly one of {ANGLE_UNITS}, got {given}")
        return self


AngleSchema = Union[float, AngleDictSchema]
"""An angle can be given as a bare number (radians) or a dictionary with a unit key."""


def angle_from_schema(schema: AngleSchema, float_type: Any = np.float64) -> Angle:
    """Construct an angle from its validated schema.

    :param schema: Bare number of radians, or a dictionary schema with one unit key
    :param float_type: Precision of the constructed angle (defaults to np.float64)
    :return: Angle described by the schema
    """
    if not isinstance(schema, AngleDictSchema):
        return Angle.from_radians(schema, float_type=float_type)
    if schema.rad is not None:
        return Angle.from_radians(schema.rad, float_type=float_type)
    if schema.deg is not None:
        return Angle.from_degrees(schema.deg, float_type=float_type)
    if schema.cycles is not None:
        return Angle.from_cycles(schema.cycles, float_type=float_type)
    raise ValueError(f"Angle schema specifies no unit: {schema}")


# =============================================================================
# Tolerance Schemata
# =============================================================================


class ToleranceSchema(BaseModel):
    """Schema for the tolerance used to compare angles."""

    method: Literal["relative", "ulps"] = "relative"
    epsilon: Optional[float] = Field(default=None, ge=0, description="Absolute tolerance (radians)")
    max_relative: Optional[float] = Field(default=None, ge=0, description="Relative tolerance")
    max_ulps: Optional[int] = Field(default=None, ge=0, description="Maximum ULP distance")

    model_config = ConfigDict(extra="forbid")

    def to_tolerance(self) -> Tolerance:
        """Convert the validated schema into a Tolerance."""
        return Tolerance(
            method=ComparisonMethod(self.method),
            epsilon=self.epsilon,
            max_relative=self.max_relative,
            max_ulps=self.max_ulps,
        )


# =============================================================================
# Angle Configuration Schemata
# =============================================================================


class AngleConfigSchema(BaseModel):
    """Schema for a YAML file of named angles and the tolerance used to compare them."""

    precision: Literal[32, 64] = 64
    angles: Dict[str, AngleSchema] = Field(default_factory=dict)
    tolerance: ToleranceSchema = Field(default_factory=ToleranceSchema)

    model_config = ConfigDict(extra="forbid")

    @property
    def float_type(self) -> type:
        """NumPy float type corresponding to the configured precision."""
        return np.float32 if self.precision == 32 else np.float64

    @classmethod
    def validate_yaml(cls, yaml_path: Path) -> AngleConfigSchema:
        """Validate an angle config YAML file and return the resulting schema.

        :param yaml_path: Path to a YAML file to be validated by the schema
        :return: Validated AngleConfigSchema instance
        """
        yaml_data = load_yaml_data(yaml_path)
        if yaml_data is None:
            yaml_data = {}  # An empty file specifies no angles

        try:
            return AngleConfigSchema.model_validate(yaml_data)
        except ValidationError as v_err:
            raise RuntimeError(f"Validation error in {yaml_path}: {v_err}") from v_err
