"""Unit tests for the Angle class."""

from __future__ import annotations

import operator
import warnings

import numpy as np
import pytest
from hypothesis import given

from angle_utils.math import Angle, Deg, Rad
from angle_utils.math.angles import ScalarOperator
from angle_utils.math.approx import relative_eq
from angle_utils.math.float_traits import float_traits

from .strategies.angle_strategies import (
    FLOAT_TYPES,
    angle_pairs,
    angles,
    angles_with_scalars,
    float_types,
    scalars,
)


def same_value(a: np.floating, b: np.floating) -> bool:
    """Check whether two scalars are identical, treating NaN as equal to NaN."""
    return bool(a == b) or bool(np.isnan(a) and np.isnan(b))


@given(float_types().flatmap(lambda t: scalars(t, allow_infinity=True)))
def test_radians_round_trip_is_exact(radians: np.floating) -> None:
    """Verify that any value is unchanged, bit for bit, after storing it as radians."""
    # Arrange/Act - Given any scalar, construct an angle from it and extract its radians
    result = Angle.from_radians(radians).as_radians()

    # Assert - Expect the same precision and the same bit pattern
    traits = float_traits(type(radians))
    assert type(result) is type(radians)
    assert traits.to_bits(result) == traits.to_bits(radians)


@given(float_types().flatmap(lambda t: scalars(t, max_magnitude=1e6)))
def test_degrees_round_trip_is_approximate(degrees: np.floating) -> None:
    """Verify that any angle in degrees approximately survives conversion to and from radians."""
    # Arrange/Act - Given an angle in degrees, convert into an Angle and back into degrees
    result = Angle.from_degrees(degrees).as_degrees()

    # Assert - Expect equality up to a few roundings of the value's precision
    eps = float_traits(type(degrees)).epsilon
    assert type(result) is type(degrees)
    assert relative_eq(result, degrees, max_relative=4 * eps)


@given(float_types().flatmap(lambda t: scalars(t, max_magnitude=1e6)))
def test_cycles_round_trip_is_approximate(cycles: np.floating) -> None:
    """Verify that any number of cycles approximately survives conversion to and from radians."""
    # Arrange/Act - Given a number of cycles, convert into an Angle and back into cycles
    result = Angle.from_cycles(cycles).as_cycles()

    # Assert - Expect equality up to a few roundings of the value's precision
    eps = float_traits(type(cycles)).epsilon
    assert relative_eq(result, cycles, max_relative=4 * eps)


@pytest.mark.parametrize("float_type", FLOAT_TYPES)
def test_half_turn_in_every_unit(float_type: type) -> None:
    """Verify that pi radians, 180 degrees, and half a cycle are approximately equal."""
    # Arrange - Construct a half turn from each unit
    eps = float_traits(float_type).epsilon
    h1 = Angle.from_radians(float_type(np.pi))
    h2 = Angle.from_degrees(float_type(180.0))
    h3 = Angle.from_cycles(float_type(0.5))

    # Act/Assert - Expect the angles to be pairwise equal under both tolerance protocols
    for a, b in [(h1, h2), (h1, h3), (h2, h3)]:
        assert a.ulps_eq(b, epsilon=2 * eps, max_ulps=2)
        assert a.relative_eq(b, epsilon=2 * eps, max_relative=2 * eps)


def test_aliases_match_constructors() -> None:
    """Verify that the new_* constructors create the same angles as the from_* constructors."""
    assert Angle.new_radians(0.5) == Angle.from_radians(0.5)
    assert Angle.new_degrees(30.0) == Angle.from_degrees(30.0)
    assert Angle.new_cycles(0.1) == Angle.from_cycles(0.1)


def test_precision_is_inferred_or_explicit() -> None:
    """Verify that angles store Python numbers as float64 unless a precision is requested."""
    assert Angle.from_radians(1.0).float_type is np.float64
    assert Angle.from_radians(3).float_type is np.float64
    assert Angle.from_radians(np.float32(1.0)).float_type is np.float32
    assert Angle.from_degrees(90.0, float_type=np.float32).float_type is np.float32
    assert Angle.from_cycles(0.25, float_type="float32").float_type is np.float32


@pytest.mark.parametrize("value", [np.float16(1.0), "1.0", None, 1j])
def test_unsupported_values_raise_type_error(value: object) -> None:
    """Verify that angles cannot be constructed from unsupported value types."""
    with pytest.raises(TypeError):
        _ = Angle(value)


def test_unsupported_precision_raises_type_error() -> None:
    """Verify that requesting an unsupported precision raises a TypeError."""
    with pytest.raises(TypeError, match="float16"):
        _ = Angle.from_radians(1.0, float_type=np.float16)


@pytest.mark.parametrize("float_type", FLOAT_TYPES)
def test_identities_and_bounds(float_type: type) -> None:
    """Verify the additive/multiplicative identities and the finite bounds of each precision."""
    # Arrange - Construct the identities and bounds of the precision
    zero = Angle.zero(float_type)
    one = Angle.one(float_type)
    angle = Angle.from_degrees(float_type(42.0))

    # Act/Assert - Expect identity laws to hold and bounds to match the precision's extremes
    assert zero.is_zero() and not zero.is_one()
    assert one.is_one() and not one.is_zero()
    assert one.as_radians() == float_type(1.0)  # One radian, not one full turn
    assert angle + zero == angle
    assert angle * one == angle
    assert Angle.min_value(float_type).as_radians() == np.finfo(float_type).min
    assert Angle.max_value(float_type).as_radians() == np.finfo(float_type).max
    assert Angle.min_value(float_type) < zero < Angle.max_value(float_type)


@pytest.mark.parametrize("float_type", FLOAT_TYPES)
def test_sum_of_two_half_turns_is_one_cycle(float_type: type) -> None:
    """Verify that summing pi radians and 180 degrees yields one full cycle."""
    # Arrange - Given two half turns expressed in different units
    half_turns = [
        Angle.from_radians(float_type(np.pi)),
        Angle.from_degrees(float_type(180.0)),
    ]

    # Act - Sum the angles using the class method and the builtin sum()
    total = Angle.sum(half_turns)
    builtin_total = sum(half_turns, Angle.zero(float_type))

    # Assert - Expect one full cycle, in the precision of the summed angles
    assert total.float_type is float_type
    assert total.relative_eq(Angle.from_cycles(float_type(1.0)))
    assert total == builtin_total


def test_sum_of_no_angles_is_zero() -> None:
    """Verify that summing an empty sequence yields the zero angle of the requested precision."""
    assert Angle.sum([]) == Angle.zero()
    assert Angle.sum([], float_type=np.float32) == Angle.zero(np.float32)


def test_sum_does_not_modify_summed_angles() -> None:
    """Verify that summation leaves its input angles untouched."""
    angles_in = [Angle.from_radians(1.0), Angle.from_radians(2.0)]
    _ = Angle.sum(angles_in)
    assert [a.as_radians() for a in angles_in] == [1.0, 2.0]


BINARY_OPERATORS = [
    (operator.add, operator.iadd, operator.add),
    (operator.sub, operator.isub, operator.sub),
    (operator.mul, operator.imul, operator.mul),
    (operator.truediv, operator.itruediv, operator.truediv),
    (operator.mod, operator.imod, np.fmod),
]
"""Triples of (binary operator, in-place operator, underlying scalar operator)."""


@pytest.mark.parametrize(("binary_op", "in_place_op", "scalar_op"), BINARY_OPERATORS)
@given(angle_pairs(allow_infinity=True))
def test_binary_operators_apply_to_values(
    binary_op: ScalarOperator,
    in_place_op: ScalarOperator,
    scalar_op: ScalarOperator,
    pair: tuple[Angle, Angle],
) -> None:
    """Verify that operators combine angles by applying the scalar operator to their values."""
    # Arrange - Given two angles of the same precision
    a, b = pair
    with np.errstate(all="ignore"):
        expected = a.float_type(scalar_op(a.as_radians(), b.as_radians()))

    # Act - Apply the operator, then its compound-assignment form to a copy of `a`
    result = binary_op(a, b)
    target = a.copy()
    in_place_result = in_place_op(target, b)

    # Assert - Expect both forms to produce the scalar result, with `a += b` mutating in place
    assert result.float_type is a.float_type
    assert same_value(result.as_radians(), expected)
    assert in_place_result is target
    assert same_value(target.as_radians(), result.as_radians())


@pytest.mark.parametrize(
    ("binary_op", "in_place_op"),
    [(operator.mul, operator.imul), (operator.truediv, operator.itruediv)],
)
@given(angles_with_scalars())
def test_scalar_operators_scale_value(
    binary_op: ScalarOperator,
    in_place_op: ScalarOperator,
    angle_and_scalar: tuple[Angle, np.floating],
) -> None:
    """Verify that multiplying or dividing by a scalar scales the angle's value."""
    # Arrange - Given an angle and a scalar of the same precision
    angle, scalar = angle_and_scalar
    with np.errstate(all="ignore"):
        expected = binary_op(angle.as_radians(), scalar)

    # Act - Scale the angle using the operator and its compound-assignment form
    result = binary_op(angle, scalar)
    target = angle.copy()
    in_place_op(target, scalar)

    # Assert - Expect the scaled value in both cases
    assert same_value(result.as_radians(), expected)
    assert same_value(target.as_radians(), expected)


def test_scalars_can_multiply_from_the_left() -> None:
    """Verify that Python and NumPy scalars can scale an angle from the left."""
    angle = Angle.from_radians(np.float32(1.5))
    assert (2.0 * angle).as_radians() == np.float32(3.0)
    assert (np.float32(2.0) * angle) == angle * 2
    assert (2.0 * angle).float_type is np.float32


def test_negation_flips_sign() -> None:
    """Verify that negating an angle flips the sign of its value."""
    angle = Angle.from_degrees(30.0)
    assert (-angle).as_radians() == -angle.as_radians()
    assert -(-angle) == angle


def test_remainder_keeps_sign_of_dividend() -> None:
    """Verify that the remainder between angles is truncated, not floored."""
    result = Angle.from_radians(-7.0) % Angle.from_radians(3.0)
    assert result.as_radians() == -1.0


@pytest.mark.parametrize("float_type", FLOAT_TYPES)
def test_division_by_zero_yields_ieee_values(float_type: type) -> None:
    """Verify that dividing by zero produces inf or NaN without raising or warning."""
    # Arrange - Given a nonzero angle and a zero angle of the same precision
    angle = Angle.from_radians(float_type(1.0))
    zero = Angle.zero(float_type)

    # Act - Divide by the zero angle and by a zero scalar, treating warnings as errors
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        by_angle = angle / zero
        by_scalar = angle / 0.0
        zero_by_zero = zero / zero
        remainder = angle % zero

    # Assert - Expect IEEE-754 results
    assert np.isposinf(by_angle.as_radians())
    assert np.isposinf(by_scalar.as_radians())
    assert np.isnan(zero_by_zero.as_radians())
    assert np.isnan(remainder.as_radians())


def test_overflowing_float32_values_become_infinite() -> None:
    """Verify that values too large for float32 overflow to inf without warning."""
    # Arrange - Given a float32 angle
    angle = Angle.from_radians(np.float32(2.0))

    # Act - Construct and scale float32 angles from values beyond the float32 range
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        constructed = Angle.from_radians(1e300, float_type=np.float32)
        negated = Angle.from_degrees(-1e300, float_type=np.float32)
        scaled = angle * 1e300

    # Assert - Expect signed infinities stored in float32
    assert constructed.float_type is np.float32
    assert np.isposinf(constructed.as_radians())
    assert np.isneginf(negated.as_radians())
    assert scaled.float_type is np.float32
    assert np.isposinf(scaled.as_radians())


def test_mixed_precisions_raise_type_error() -> None:
    """Verify that combining angles of different precisions raises a TypeError."""
    # Arrange - Given a float32 angle and a float64 angle
    a32 = Angle.from_radians(np.float32(1.0))
    a64 = Angle.from_radians(1.0)

    # Act/Assert - Expect arithmetic and ordering to fail, and equality to report inequality
    with pytest.raises(TypeError, match="float32"):
        _ = a32 + a64
    with pytest.raises(TypeError):
        a64 += a32
    with pytest.raises(TypeError):
        _ = a32 < a64
    with pytest.raises(TypeError):
        _ = a32.relative_eq(a64)
    assert a32 != a64


@pytest.mark.parametrize("operand", [1.0, "text", [1.0]])
def test_adding_non_angles_raises_type_error(operand: object) -> None:
    """Verify that angles only add to other angles."""
    with pytest.raises(TypeError):
        _ = Angle.from_radians(1.0) + operand


def test_comparisons_follow_ieee() -> None:
    """Verify that comparisons delegate to the values, including NaN semantics."""
    # Arrange - Given ordered angles and a NaN-valued angle
    small = Angle.from_degrees(10.0)
    large = Angle.from_degrees(20.0)
    nan = Angle.from_radians(float("nan"))

    # Act/Assert - Expect ordering by value, and NaN to be unequal and unordered
    assert small < large <= large
    assert large > small >= small
    assert small != large
    assert nan != nan
    assert not (nan < small or nan > small or nan <= nan or nan >= nan)


def test_angles_are_unhashable() -> None:
    """Verify that (mutable) angles cannot be hashed."""
    with pytest.raises(TypeError):
        hash(Angle.zero())


@given(angles())
def test_copy_is_independent(angle: Angle) -> None:
    """Verify that mutating a copied angle leaves the original unchanged."""
    # Arrange - Given an angle and a copy of it
    original_value = angle.as_radians()
    duplicate = angle.copy()

    # Act - Mutate the copy in place
    duplicate += Angle.one(angle.float_type)

    # Assert - Expect the original to keep its value
    assert same_value(angle.as_radians(), original_value)


class Bearing(Angle):
    """Angle subclass used to check that operations preserve the concrete type."""


def test_operations_preserve_subclass() -> None:
    """Verify that copies, arithmetic results, and negations keep the angle's subclass."""
    # Arrange - Given two instances of an Angle subclass
    a = Bearing.from_degrees(30.0)
    b = Bearing.from_degrees(60.0)

    # Act - Copy, combine, scale, negate, and normalize the angles
    results = [a.copy(), a + b, a - b, a * 2.0, 2.0 * a, a / 2.0, a % b, -a]
    results.append(a.normalized_as_positive())

    # Assert - Expect every result to remain a Bearing
    assert all(type(result) is Bearing for result in results)


@given(float_types().flatmap(lambda t: scalars(t, allow_infinity=True)))
def test_rad_round_trip_is_exact(radians: np.floating) -> None:
    """Verify that converting an angle to a radian-tagged scalar and back is bit-exact."""
    # Arrange/Act - Given an angle, convert to Rad and back
    angle = Angle.from_radians(radians)
    rad = angle.to_rad()
    result = Angle.from_rad(rad)

    # Assert - Expect the Rad to hold the raw value and the result to match bit for bit
    traits = float_traits(type(radians))
    assert isinstance(rad, Rad)
    assert traits.to_bits(rad.value) == traits.to_bits(radians)
    assert traits.to_bits(result.as_radians()) == traits.to_bits(radians)


def test_deg_conversions_route_through_degrees() -> None:
    """Verify that degree-tagged scalars convert via the degree conversions."""
    # Arrange/Act - Convert a right angle to and from a degree-tagged scalar
    angle = Angle.from_deg(Deg(90.0))
    deg = angle.to_deg()

    # Assert - Expect pi/2 radians and (approximately) 90 degrees
    assert angle == Angle.from_degrees(90.0)
    assert isinstance(deg, Deg)
    assert relative_eq(deg.value, 90.0)


def test_from_unit_dispatches_on_wrapper_type() -> None:
    """Verify that from_unit() accepts both wrapper types and rejects anything else."""
    assert Angle.from_unit(Rad(1.0)) == Angle.from_radians(1.0)
    assert Angle.from_unit(Deg(45.0)) == Angle.from_degrees(45.0)
    with pytest.raises(TypeError, match="Rad or Deg"):
        Angle.from_unit(1.0)
