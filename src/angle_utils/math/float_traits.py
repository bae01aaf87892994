"""Define the floating-point capabilities shared by all angle computations.

Each supported precision (NumPy float32 and float64) has one FloatTraits instance bundling
its transcendental constants, machine epsilon, finite bounds, and the integer type used to
measure distances in units in the last place (ULPs).
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, Type, TypeVar, Union

import numpy as np

FloatT = TypeVar("FloatT", np.float32, np.float64)
"""A floating-point scalar type supported by angle computations."""

Scalar = Union[Real, np.floating, np.integer]
"""A real number accepted wherever a floating-point scalar is expected."""

DEFAULT_MAX_ULPS = 4
"""Default maximum distance (in ULPs) for two floats to be considered approximately equal."""


@dataclass(frozen=True)
class FloatTraits:
    """Constants and types describing one floating-point precision."""

    float_type: Type[np.floating]
    """NumPy scalar type of the precision (e.g., np.float64)."""

    int_type: Type[np.signedinteger]
    """Signed integer type with the same width, used to compare bit patterns."""

    default_max_ulps: int = DEFAULT_MAX_ULPS
    """Default ULP distance used by ULP-based approximate equality."""

    @property
    def bits(self) -> int:
        """Width (in bits) of the floating-point type."""
        return int(np.finfo(self.float_type).bits)

    @property
    def pi(self) -> np.floating:
        """Ratio of a circle's circumference to its diameter, in this precision."""
        return self.float_type(np.pi)

    @property
    def tau(self) -> np.floating:
        """One full turn in radians (2 * pi), in this precision."""
        return self.float_type(2.0) * self.pi

    @property
    def epsilon(self) -> np.floating:
        """Difference between 1.0 and the next representable value."""
        return np.finfo(self.float_type).eps

    @property
    def min(self) -> np.floating:
        """Most negative finite value."""
        return np.finfo(self.float_type).min

    @property
    def max(self) -> np.floating:
        """Most positive finite value."""
        return np.finfo(self.float_type).max

    @property
    def default_epsilon(self) -> np.floating:
        """Default absolute tolerance for approximate equality."""
        return self.epsilon

    @property
    def default_max_relative(self) -> np.floating:
        """Default relative tolerance for approximate equality."""
        return self.epsilon

    def cast(self, value: Any) -> np.floating:
        """Convert the given real number into this precision (out-of-range values become inf)."""
        with np.errstate(over="ignore"):
            return self.float_type(value)

    def to_bits(self, value: Any) -> int:
        """Reinterpret the bits of the given value (in this precision) as a signed integer."""
        return int(np.asarray(value, dtype=self.float_type).view(self.int_type))


FLOAT32_TRAITS = FloatTraits(float_type=np.float32, int_type=np.int32)
FLOAT64_TRAITS = FloatTraits(float_type=np.float64, int_type=np.int64)

_TRAITS_BY_TYPE: Dict[Type[np.floating], FloatTraits] = {
    np.float32: FLOAT32_TRAITS,
    np.float64: FLOAT64_TRAITS,
}


def float_traits(float_type: Any) -> FloatTraits:
    """Look up the capabilities of the given floating-point type.

    :param float_type: NumPy float type, NumPy dtype, or anything accepted by np.dtype()
    :return: Traits of the corresponding precision
    :raises TypeError: If the type is not float32 or float64
    """
    try:
        scalar_type = np.dtype(float_type).type
    except TypeError as error:
        raise TypeError(f"Cannot interpret {float_type!r} as a floating-point type") from error

    traits = _TRAITS_BY_TYPE.get(scalar_type)
    if traits is None:
        supported = ", ".join(t.__name__ for t in _TRAITS_BY_TYPE)
        raise TypeError(f"Unsupported float type {scalar_type.__name__}; expected: {supported}")
    return traits


def traits_of(value: Any, float_type: Any = None) -> FloatTraits:
    """Choose the precision used to store the given value.

    An explicit float type always wins. Otherwise NumPy float scalars keep their precision,
    and any other real number (Python float, int, NumPy integer) is stored as float64.

    :param value: Scalar value about to be stored
    :param float_type: Optional explicit float type (defaults to None = infer from the value)
    :return: Traits of the chosen precision
    """
    if float_type is not None:
        return float_traits(float_type)
    if isinstance(value, np.floating):
        return float_traits(type(value))
    if isinstance(value, (Real, np.integer)):
        return FLOAT64_TRAITS
    raise TypeError(f"Expected a real number, got {type(value).__name__}: {value!r}")
