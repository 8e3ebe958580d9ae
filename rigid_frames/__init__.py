from .frame import Frame  # noqa: F401
from .quaternion import Quaternion  # noqa: F401
from .vector import Vector  # noqa: F401
