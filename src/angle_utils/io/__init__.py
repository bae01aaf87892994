"""Import classes and definitions used for input/output or user interfaces."""

from .angle_config import AngleConfig as AngleConfig
from .angle_config import export_angles as export_angles
from .angle_config import load_angle_config as load_angle_config
from .logging import console as console
from .logging import log_info as log_info
from .pydantic_schemata import Angle32Field as Angle32Field
from .pydantic_schemata import Angle64Field as Angle64Field
