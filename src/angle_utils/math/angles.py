"""Define a value type representing a planar angle."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from numbers import Real
from typing import TYPE_CHECKING, Any, Callable, Generic, Union

import numpy as np

from angle_utils.math import approx
from angle_utils.math.float_traits import FloatT, FloatTraits, Scalar, float_traits, traits_of
from angle_utils.math.units import Deg, Rad

if TYPE_CHECKING:
    from collections.abc import Iterable

ScalarOperator = Callable[[Any, Any], Any]
"""A binary operator on floating-point scalars (e.g., operator.add)."""


def _is_scalar(value: object) -> bool:
    """Check whether the given value is a real number usable to scale an angle."""
    return isinstance(value, (Real, np.floating, np.integer))


def _wrap_positive(radians: np.floating, traits: FloatTraits) -> np.floating:
    """Wrap an angle (radians) into [0, 2*pi) using a floored modulo."""
    tau = traits.tau
    with np.errstate(invalid="ignore"):
        wrapped = np.fmod(radians, tau)  # Exact; keeps the sign of the dividend
        if wrapped < 0:
            wrapped = wrapped + tau
        if wrapped >= tau:
            wrapped = traits.cast(0.0)  # Tiny negative remainders can round up to 2*pi
    return traits.cast(wrapped)


def _wrap_around_zero(radians: np.floating, traits: FloatTraits) -> np.floating:
    """Wrap an angle (radians) into [-pi, pi) using a floored modulo.

    Both corrections subtract values within a factor of two of each other, so they are exact.
    """
    tau = traits.tau
    with np.errstate(invalid="ignore"):
        wrapped = np.fmod(radians, tau)
        if wrapped >= traits.pi:
            wrapped = wrapped - tau
        elif wrapped < -traits.pi:
            wrapped = wrapped + tau
    return traits.cast(wrapped)


@dataclass(eq=False)
class Angle(Generic[FloatT]):
    """A planar angle, stored as a floating-point number of radians.

    Functions interoperating with plain numbers are explicit about the units of those numbers
    (radians, degrees, or cycles). The precision of the stored value (NumPy float32 or float64)
    is preserved by every operation, and angles of different precisions are never mixed.

    Angles are mutable values: normalization and compound assignment (+=, *=, ...) modify the
    angle in place, so use copy() before mutating an angle that is shared.
    """

    value: FloatT
    """Magnitude of the angle (radians)."""

    __array_ufunc__ = None  # Make NumPy scalars defer to reflected operators (e.g., 2.0 * angle)

    def __post_init__(self) -> None:
        """Store the value using its inferred floating-point precision."""
        self.value = traits_of(self.value).cast(self.value)

    @property
    def float_type(self) -> type[np.floating]:
        """NumPy scalar type used to store the angle."""
        return type(self.value)

    @property
    def traits(self) -> FloatTraits:
        """Floating-point capabilities of the angle's precision."""
        return float_traits(self.float_type)

    # =========================================================================
    # Construction & Extraction
    # =========================================================================

    @classmethod
    def from_radians(cls, radians: Scalar, float_type: Any = None) -> Angle:
        """Create an angle from radians.

        :param radians: Magnitude of the angle (radians), stored unchanged
        :param float_type: Optional precision (defaults to None = inferred from the value)
        """
        traits = traits_of(radians, float_type)
        return cls(traits.cast(radians))

    new_radians = from_radians

    def as_radians(self) -> FloatT:
        """Get the value of the angle as radians."""
        return self.value

    @classmethod
    def from_degrees(cls, degrees: Scalar, float_type: Any = None) -> Angle:
        """Create an angle from degrees."""
        traits = traits_of(degrees, float_type)
        with np.errstate(over="ignore", invalid="ignore"):
            return cls(traits.pi * traits.cast(degrees) / traits.cast(180.0))

    new_degrees = from_degrees

    def as_degrees(self) -> FloatT:
        """Get the value of the angle as degrees."""
        traits = self.traits
        with np.errstate(over="ignore", invalid="ignore"):
            return self.float_type(self.value * traits.cast(180.0) / traits.pi)

    @classmethod
    def from_cycles(cls, cycles: Scalar, float_type: Any = None) -> Angle:
        """Create an angle from cycles (1 cycle is a full circle)."""
        traits = traits_of(cycles, float_type)
        with np.errstate(over="ignore", invalid="ignore"):
            return cls(traits.tau * traits.cast(cycles))

    new_cycles = from_cycles

    def as_cycles(self) -> FloatT:
        """Get the value of the angle as a number of cycles (full circles)."""
        with np.errstate(over="ignore", invalid="ignore"):
            return self.float_type(self.value / self.traits.tau)

    def copy(self) -> Angle:
        """Create an independent copy of the angle."""
        return type(self)(self.value)

    # =========================================================================
    # Identities & Bounds
    # =========================================================================

    @classmethod
    def zero(cls, float_type: Any = np.float64) -> Angle:
        """Construct the additive identity (an angle of zero radians)."""
        return cls(float_traits(float_type).cast(0.0))

    @classmethod
    def one(cls, float_type: Any = np.float64) -> Angle:
        """Construct the multiplicative identity (one radian, not one full turn)."""
        return cls(float_traits(float_type).cast(1.0))

    def is_zero(self) -> bool:
        """Check whether the angle equals zero radians."""
        return bool(self.value == 0)

    def is_one(self) -> bool:
        """Check whether the angle equals one radian."""
        return bool(self.value == 1)

    @classmethod
    def min_value(cls, float_type: Any = np.float64) -> Angle:
        """Construct the most negative finite angle of the given precision."""
        return cls(float_traits(float_type).min)

    @classmethod
    def max_value(cls, float_type: Any = np.float64) -> Angle:
        """Construct the most positive finite angle of the given precision."""
        return cls(float_traits(float_type).max)

    @classmethod
    def sum(cls, angles: Iterable[Angle], float_type: Any = None) -> Angle:
        """Add up a sequence of angles, starting from the zero angle.

        :param angles: Angles to be summed (all of the same precision)
        :param float_type: Precision of the sum (defaults to None = that of the first angle)
        :return: Sum of the angles (zero if the sequence is empty)
        """
        total = None if float_type is None else cls.zero(float_type)
        for angle in angles:
            if total is None:
                total = cls.zero(angle.float_type)
            total += angle
        return cls.zero() if total is None else total

    # =========================================================================
    # Normalization
    # =========================================================================

    def normalize_around_zero(self) -> None:
        """Normalize the angle in place into the radian range [-pi, pi) (half cycle each way)."""
        self.value = _wrap_around_zero(self.value, self.traits)

    def normalize_as_positive(self) -> None:
        """Normalize the angle in place into the radian range [0, 2*pi) (full circle, positive)."""
        self.value = _wrap_positive(self.value, self.traits)

    def normalized_around_zero(self) -> Angle:
        """Return a copy of the angle normalized into the radian range [-pi, pi)."""
        result = self.copy()
        result.normalize_around_zero()
        return result

    def normalized_as_positive(self) -> Angle:
        """Return a copy of the angle normalized into the radian range [0, 2*pi)."""
        result = self.copy()
        result.normalize_as_positive()
        return result

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def _operand_value(self, other: Angle) -> FloatT:
        """Retrieve another angle's value, ensuring that it shares this angle's precision."""
        if not isinstance(other, Angle):
            raise TypeError(f"Expected an Angle, got {type(other).__name__}: {other!r}")
        if other.float_type is not self.float_type:
            raise TypeError(
                f"Cannot combine a {self.float_type.__name__} angle "
                f"with a {other.float_type.__name__} angle",
            )
        return other.value

    def _apply(self, other: object, op: ScalarOperator, scalars: bool) -> FloatT | None:
        """Apply a scalar operator to this angle's value and the given operand.

        :param other: Right-hand operand (an angle, or a real number if `scalars` is True)
        :param op: Operator applied to the underlying floating-point values
        :param scalars: Whether real numbers are accepted as the operand
        :return: Resulting value (radians), or None if the operand is unsupported
        """
        if isinstance(other, Angle):
            rhs = self._operand_value(other)
        elif scalars and _is_scalar(other):
            rhs = self.traits.cast(other)
        else:
            return None

        with np.errstate(all="ignore"):  # Division by zero and overflow yield inf/NaN
            return self.float_type(op(self.value, rhs))

    def _binary(self, other: object, op: ScalarOperator, scalars: bool = False) -> Angle:
        result = self._apply(other, op, scalars)
        return NotImplemented if result is None else type(self)(result)

    def _in_place(self, other: object, op: ScalarOperator, scalars: bool = False) -> Angle:
        result = self._apply(other, op, scalars)
        if result is None:
            return NotImplemented
        self.value = result
        return self

    def __add__(self, other: Angle) -> Angle:
        return self._binary(other, operator.add)

    def __sub__(self, other: Angle) -> Angle:
        return self._binary(other, operator.sub)

    def __mul__(self, other: Union[Angle, Scalar]) -> Angle:
        return self._binary(other, operator.mul, scalars=True)

    def __rmul__(self, other: Scalar) -> Angle:
        return self._binary(other, operator.mul, scalars=True)

    def __truediv__(self, other: Union[Angle, Scalar]) -> Angle:
        return self._binary(other, operator.truediv, scalars=True)

    def __mod__(self, other: Angle) -> Angle:
        """Compute the truncated remainder, which takes the sign of this angle."""
        return self._binary(other, np.fmod)

    def __neg__(self) -> Angle:
        return type(self)(-self.value)

    def __iadd__(self, other: Angle) -> Angle:
        return self._in_place(other, operator.add)

    def __isub__(self, other: Angle) -> Angle:
        return self._in_place(other, operator.sub)

    def __imul__(self, other: Union[Angle, Scalar]) -> Angle:
        return self._in_place(other, operator.mul, scalars=True)

    def __itruediv__(self, other: Union[Angle, Scalar]) -> Angle:
        return self._in_place(other, operator.truediv, scalars=True)

    def __imod__(self, other: Angle) -> Angle:
        return self._in_place(other, np.fmod)

    # =========================================================================
    # Comparison
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Angle) or other.float_type is not self.float_type:
            return NotImplemented
        return bool(self.value == other.value)

    def _compare(self, other: object, op: ScalarOperator) -> bool:
        if not isinstance(other, Angle):
            return NotImplemented
        return bool(op(self.value, self._operand_value(other)))

    def __lt__(self, other: Angle) -> bool:
        return self._compare(other, operator.lt)

    def __le__(self, other: Angle) -> bool:
        return self._compare(other, operator.le)

    def __gt__(self, other: Angle) -> bool:
        return self._compare(other, operator.gt)

    def __ge__(self, other: Angle) -> bool:
        return self._compare(other, operator.ge)

    def abs_diff_eq(self, other: Angle, epsilon: Scalar | None = None) -> bool:
        """Evaluate whether two angles' values (radians) differ by at most `epsilon`."""
        return approx.abs_diff_eq(self.value, self._operand_value(other), epsilon)

    def relative_eq(
        self,
        other: Angle,
        epsilon: Scalar | None = None,
        max_relative: Scalar | None = None,
    ) -> bool:
        """Evaluate whether another angle is approximately equal to this one.

        Compares the stored values directly, so angles a full turn apart are not equal unless
        both are normalized first.

        :param other: Angle compared against this one
        :param epsilon: Absolute tolerance (radians) (defaults to None = machine epsilon)
        :param max_relative: Relative tolerance (defaults to None = machine epsilon)
        :return: True if the angles are approximately equal, else False
        """
        return approx.relative_eq(self.value, self._operand_value(other), epsilon, max_relative)

    def ulps_eq(
        self,
        other: Angle,
        epsilon: Scalar | None = None,
        max_ulps: int | None = None,
    ) -> bool:
        """Evaluate whether another angle is within `max_ulps` representable values of this one.

        :param other: Angle compared against this one
        :param epsilon: Absolute tolerance (radians) (defaults to None = machine epsilon)
        :param max_ulps: Maximum distance in units in the last place (defaults to None = 4)
        :return: True if the angles are approximately equal, else False
        """
        return approx.ulps_eq(self.value, self._operand_value(other), epsilon, max_ulps)

    def approx_eq(self, other: Angle, tolerance: approx.Tolerance | None = None) -> bool:
        """Evaluate whether another angle is approximately equal to this one.

        :param other: Angle compared against this one
        :param tolerance: Comparison protocol and tolerances (defaults to None = relative)
        :return: True if the angles are approximately equal, else False
        """
        if tolerance is None:
            tolerance = approx.Tolerance()
        return tolerance.compare(self.value, self._operand_value(other))

    # =========================================================================
    # Unit-Tagged Conversions
    # =========================================================================

    @classmethod
    def from_rad(cls, rad: Rad) -> Angle:
        """Create an angle from a radian-tagged scalar (lossless)."""
        return cls.from_radians(rad.value)

    def to_rad(self) -> Rad:
        """Convert the angle into a radian-tagged scalar (lossless)."""
        return Rad(self.value)

    @classmethod
    def from_deg(cls, deg: Deg) -> Angle:
        """Create an angle from a degree-tagged scalar."""
        return cls.from_degrees(deg.value)

    def to_deg(self) -> Deg:
        """Convert the angle into a degree-tagged scalar."""
        return Deg(self.as_degrees())

    @classmethod
    def from_unit(cls, quantity: Union[Rad, Deg]) -> Angle:
        """Create an angle from either kind of unit-tagged scalar."""
        if isinstance(quantity, Rad):
            return cls.from_rad(quantity)
        if isinstance(quantity, Deg):
            return cls.from_deg(quantity)
        raise TypeError(f"Expected a Rad or Deg quantity, got {type(quantity).__name__}")
