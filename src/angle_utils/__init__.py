"""Provide a planar angle value type with unit conversions, normalization, and tolerances."""

from .math import Angle as Angle
from .math import Deg as Deg
from .math import Rad as Rad
from .math import Tolerance as Tolerance
