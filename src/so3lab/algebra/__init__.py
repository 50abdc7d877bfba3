"""Vector and quaternion algebra."""

from .quaternion import Quaternion
from .vector import Vector3, as_vector

__all__ = [
    "Vector3",
    "Quaternion",
    "as_vector",
]
