"""Import definitions relating to angles and floating-point comparisons."""

from .angles import Angle as Angle
from .approx import ComparisonMethod as ComparisonMethod
from .approx import Tolerance as Tolerance
from .float_traits import FLOAT32_TRAITS as FLOAT32_TRAITS
from .float_traits import FLOAT64_TRAITS as FLOAT64_TRAITS
from .float_traits import FloatTraits as FloatTraits
from .units import Deg as Deg
from .units import Rad as Rad
