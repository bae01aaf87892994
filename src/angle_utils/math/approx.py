"""Define approximate-equality comparisons between floating-point scalars.

Two tolerance protocols are supported:

    relative - Values are equal if their absolute difference is within `epsilon`, or if it is
        within `max_relative` times the larger of their magnitudes.

    ulps - Values are equal if their absolute difference is within `epsilon`, or if they share
        a sign and are at most `max_ulps` representable values (units in the last place) apart.

Unspecified tolerances fall back to the defaults of the compared values' precision.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from angle_utils.math.float_traits import FloatTraits, traits_of


class ComparisonMethod(Enum):
    """Protocol used to decide whether two floats are approximately equal."""

    RELATIVE = "relative"
    ULPS = "ulps"


def _common_traits(a: Any, b: Any) -> FloatTraits:
    """Find the precision in which two scalars are compared (the wider of the two)."""
    traits_a = traits_of(a)
    traits_b = traits_of(b)
    return traits_a if traits_a.bits >= traits_b.bits else traits_b


def abs_diff_eq(a: Any, b: Any, epsilon: Any = None) -> bool:
    """Evaluate whether two scalars differ by at most an absolute tolerance.

    :param a: First scalar in the comparison
    :param b: Second scalar in the comparison
    :param epsilon: Absolute tolerance (defaults to None = machine epsilon)
    :return: True if |a - b| <= epsilon, else False
    """
    traits = _common_traits(a, b)
    a, b = traits.cast(a), traits.cast(b)
    epsilon = traits.default_epsilon if epsilon is None else traits.cast(epsilon)

    with np.errstate(invalid="ignore", over="ignore"):
        return bool(np.abs(a - b) <= epsilon)


def relative_eq(a: Any, b: Any, epsilon: Any = None, max_relative: Any = None) -> bool:
    """Evaluate whether two scalars are equal up to absolute and relative tolerances.

    :param a: First scalar in the comparison
    :param b: Second scalar in the comparison
    :param epsilon: Absolute tolerance, used near zero (defaults to None = machine epsilon)
    :param max_relative: Relative tolerance (defaults to None = machine epsilon)
    :return: True if the scalars are approximately equal, else False
    """
    traits = _common_traits(a, b)
    a, b = traits.cast(a), traits.cast(b)
    epsilon = traits.default_epsilon if epsilon is None else traits.cast(epsilon)
    if max_relative is None:
        max_relative = traits.default_max_relative
    max_relative = traits.cast(max_relative)

    if a == b:
        return True
    if np.isinf(a) or np.isinf(b):
        return False  # Infinities only match themselves, handled above

    with np.errstate(invalid="ignore", over="ignore"):
        abs_diff = np.abs(a - b)
        if abs_diff <= epsilon:
            return True

        largest = max(np.abs(a), np.abs(b))
        return bool(abs_diff <= largest * max_relative)


def ulps_eq(a: Any, b: Any, epsilon: Any = None, max_ulps: int | None = None) -> bool:
    """Evaluate whether two scalars are equal up to an absolute tolerance or a ULP distance.

    :param a: First scalar in the comparison
    :param b: Second scalar in the comparison
    :param epsilon: Absolute tolerance, used near zero (defaults to None = machine epsilon)
    :param max_ulps: Maximum distance in units in the last place (defaults to None = 4)
    :return: True if the scalars are approximately equal, else False
    """
    traits = _common_traits(a, b)
    a, b = traits.cast(a), traits.cast(b)
    if max_ulps is None:
        max_ulps = traits.default_max_ulps

    if abs_diff_eq(a, b, epsilon):
        return True
    if np.isnan(a) or np.isnan(b):
        return False
    if np.signbit(a) != np.signbit(b):
        return bool(a == b)  # Only +0.0 and -0.0 match across signs

    return abs(traits.to_bits(a) - traits.to_bits(b)) <= max_ulps


def ulps_distance(a: Any, b: Any) -> int:
    """Count the representable floats between two same-signed scalars.

    :param a: First scalar (its precision determines the ULP size)
    :param b: Second scalar
    :return: Absolute difference between the scalars' bit patterns
    """
    traits = _common_traits(a, b)
    return abs(traits.to_bits(traits.cast(a)) - traits.to_bits(traits.cast(b)))


@dataclass(frozen=True)
class Tolerance:
    """A choice of approximate-equality protocol together with its tolerances."""

    method: ComparisonMethod = ComparisonMethod.RELATIVE
    """Protocol used to compare values (defaults to relative comparison)."""

    epsilon: float | None = None
    """Absolute tolerance (defaults to None = machine epsilon of the compared values)."""

    max_relative: float | None = None
    """Relative tolerance for the relative protocol (defaults to None = machine epsilon)."""

    max_ulps: int | None = None
    """Maximum ULP distance for the ULP protocol (defaults to None = 4)."""

    def compare(self, a: Any, b: Any) -> bool:
        """Evaluate whether two scalars are approximately equal under this tolerance."""
        if self.method is ComparisonMethod.ULPS:
            return ulps_eq(a, b, epsilon=self.epsilon, max_ulps=self.max_ulps)
        return relative_eq(a, b, epsilon=self.epsilon, max_relative=self.max_relative)
