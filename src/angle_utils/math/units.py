"""Define unit-tagged scalar wrappers used to exchange angles with linear-algebra code."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic

from angle_utils.math.float_traits import FloatT


@dataclass(frozen=True)
class Rad(Generic[FloatT]):
    """A scalar tagged as an angle measured in radians."""

    value: FloatT


@dataclass(frozen=True)
class Deg(Generic[FloatT]):
    """A scalar tagged as an angle measured in degrees."""

    value: FloatT
