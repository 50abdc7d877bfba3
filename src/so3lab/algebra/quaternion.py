"""
Unit quaternions as elements of SU(2).

A unit quaternion q = (w, x, y, z) = w + xi + yj + zk with
w² + x² + y² + z² = 1. Rotation by angle θ about unit axis n is

    q = (cos(θ/2), sin(θ/2)·n)

The half angle is the double cover: q and -q give the same rotation in
SO(3) but are different points of SU(2) ≅ S³. A 2π rotation is
(-1, 0, 0, 0), a 4π rotation is (+1, 0, 0, 0) again.

Convention: scalar-first [w, x, y, z]. scipy's ``Rotation`` is scalar-last
[x, y, z, w]; the interop methods below convert.
"""
from __future__ import annotations

import math
import warnings
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.transform import Rotation as ScR

from so3lab.algebra.vector import Vector3, VectorLike, as_vector, clamp
from so3lab.config import DEFAULT_AXIS, EPSILON, QUATERNION_APPROX_EPSILON


@dataclass(frozen=True)
class Quaternion:
    """
    Immutable quaternion (w, x, y, z).

    Multiplication composes rotations right-to-left: ``a * b`` applies b
    first, then a.

    Examples
    --------
    >>> q = Quaternion.from_axis_angle((0, 0, 1), math.pi / 2)
    >>> q.to_axis_angle()[1]  # doctest: +ELLIPSIS
    1.5707963...
    >>> Quaternion.from_axis_angle((1, 0, 0), 2 * math.pi).w
    -1.0
    """

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def identity(cls) -> Quaternion:
        return cls(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_axis_angle(cls, axis: VectorLike, angle: float) -> Quaternion:
        """
        Quaternion for a rotation of ``angle`` radians about ``axis``.

        Parameters
        ----------
        axis : Vector3 | array-like
            Rotation axis. Normalized here; a zero axis falls back to (0, 0, 1).
        angle : float
            Rotation angle [rad]. Not reduced: angles 2π apart give q and -q.

        Returns
        -------
        Quaternion
            ``(cos(angle/2), sin(angle/2)·axis)``
        """
        n = as_vector(axis).normalize()
        half = angle / 2
        s = math.sin(half)
        return cls(math.cos(half), s * n.x, s * n.y, s * n.z)

    @classmethod
    def from_so3_point(cls, p: VectorLike) -> Quaternion:
        """
        Quaternion for a point of the SO(3) ball (axis = p/‖p‖, angle = ‖p‖).

        The origin gives the identity.
        """
        v = as_vector(p)
        theta = v.magnitude()
        if theta < EPSILON:
            return cls.identity()
        return cls.from_axis_angle(v.scale(1 / theta), theta)

    @classmethod
    def from_rotation(cls, rot: ScR) -> Quaternion:
        """Convert a scipy ``Rotation`` (scalar-last) to a Quaternion."""
        x, y, z, w = rot.as_quat()
        return cls(float(w), float(x), float(y), float(z))

    @staticmethod
    def exp(v: VectorLike) -> Quaternion:
        """
        Exponential map from a pure-imaginary quaternion (0, v) to SU(2).

        exp(v) = cos‖v‖ + sin‖v‖ · v/‖v‖. A rotation by θ about n is
        exp(θ/2 · n).
        """
        v = as_vector(v)
        theta = v.magnitude()
        if theta < EPSILON:
            return Quaternion.identity()
        s = math.sin(theta) / theta
        return Quaternion(math.cos(theta), s * v.x, s * v.y, s * v.z)

    # ------------------------------------------------------------------
    # Group operations
    # ------------------------------------------------------------------

    def multiply(self, other: Quaternion) -> Quaternion:
        """Hamilton product ``self * other`` (apply other, then self)."""
        a, b = self, other
        return Quaternion(
            a.w * b.w - a.x * b.x - a.y * b.y - a.z * b.z,
            a.w * b.x + a.x * b.w + a.y * b.z - a.z * b.y,
            a.w * b.y - a.x * b.z + a.y * b.w + a.z * b.x,
            a.w * b.z + a.x * b.y - a.y * b.x + a.z * b.w,
        )

    def conjugate(self) -> Quaternion:
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def negate(self) -> Quaternion:
        return Quaternion(-self.w, -self.x, -self.y, -self.z)

    def norm_sq(self) -> float:
        return self.w * self.w + self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> float:
        return math.sqrt(self.norm_sq())

    def normalize(self) -> Quaternion:
        """
        Unit quaternion in the same direction.

        Returns the identity (with a RuntimeWarning) if the norm is below
        ``EPSILON``.
        """
        n = self.norm()
        if n < EPSILON:
            warnings.warn(
                "Zero-norm quaternion detected. Returning identity quaternion [1,0,0,0].",
                RuntimeWarning,
                stacklevel=2
            )
            return Quaternion.identity()
        return Quaternion(self.w / n, self.x / n, self.y / n, self.z / n)

    def inverse(self) -> Quaternion:
        """
        Multiplicative inverse conjugate / ‖q‖².

        Equal to the conjugate for unit quaternions. A near-zero quaternion
        has no inverse; the identity is returned with a RuntimeWarning.
        """
        ns = self.norm_sq()
        if ns < EPSILON:
            warnings.warn(
                "Inverse of a zero-norm quaternion requested. Returning identity.",
                RuntimeWarning,
                stacklevel=2
            )
            return Quaternion.identity()
        return Quaternion(self.w / ns, -self.x / ns, -self.y / ns, -self.z / ns)

    def dot(self, other: Quaternion) -> float:
        return self.w * other.w + self.x * other.x + self.y * other.y + self.z * other.z

    def __mul__(self, other: Quaternion) -> Quaternion:
        return self.multiply(other)

    def __neg__(self) -> Quaternion:
        return self.negate()

    # ------------------------------------------------------------------
    # Axis-angle and ball conversions
    # ------------------------------------------------------------------

    def to_axis_angle(self) -> tuple[Vector3, float]:
        """
        Rotation axis and angle, with angle in [0, π].

        The w >= 0 representative of {q, -q} is used, so both signs give the
        same answer. For the identity the axis is (0, 0, 1) by convention.
        """
        q = self.normalize()
        if q.w < 0:
            q = q.negate()
        w = clamp(q.w, -1.0, 1.0)
        angle = 2 * math.acos(w)
        sin_half = math.sqrt(1 - w * w)

        if sin_half < EPSILON:
            return Vector3(*DEFAULT_AXIS), 0.0

        return Vector3(q.x / sin_half, q.y / sin_half, q.z / sin_half), angle

    def to_so3_point(self) -> Vector3:
        """Point of the SO(3) ball: axis scaled by angle ∈ [0, π]."""
        axis, angle = self.to_axis_angle()
        return axis.scale(angle)

    def log(self) -> Vector3:
        """
        Logarithm to the tangent space, inverse of :meth:`exp`.

        Principal branch: the result has magnitude acos(|w|), and the sign
        follows the w >= 0 hemisphere, so ``q.log() == (-q).log()``.
        """
        q = self.normalize()
        w = clamp(q.w, -1.0, 1.0)
        theta = math.acos(abs(w))

        if theta < EPSILON:
            return Vector3.zero()

        s = theta / math.sin(theta)
        sign = -1.0 if w < 0 else 1.0
        return Vector3(sign * s * q.x, sign * s * q.y, sign * s * q.z)

    # ------------------------------------------------------------------
    # Interpolation
    # ------------------------------------------------------------------

    @staticmethod
    def _lerp_normalized(a: Quaternion, b: Quaternion, t: float) -> Quaternion:
        return Quaternion(
            a.w + (b.w - a.w) * t,
            a.x + (b.x - a.x) * t,
            a.y + (b.y - a.y) * t,
            a.z + (b.z - a.z) * t,
        ).normalize()

    @staticmethod
    def slerp(a: Quaternion, b: Quaternion, t: float) -> Quaternion:
        """
        Spherical linear interpolation along the shortest arc of S³.

        If a·b < 0, b is negated first (same rotation, nearer sheet). Nearly
        parallel endpoints fall back to normalized linear interpolation.
        """
        dot = a.dot(b)
        if dot < 0:
            b = b.negate()
            dot = -dot

        if dot > 1 - EPSILON:
            return Quaternion._lerp_normalized(a, b, t)

        omega = math.acos(clamp(dot, -1.0, 1.0))
        sin_omega = math.sin(omega)
        sa = math.sin((1 - t) * omega) / sin_omega
        sb = math.sin(t * omega) / sin_omega
        return Quaternion(
            sa * a.w + sb * b.w,
            sa * a.x + sb * b.x,
            sa * a.y + sb * b.y,
            sa * a.z + sb * b.z,
        ).normalize()

    @staticmethod
    def slerp_long(a: Quaternion, b: Quaternion, t: float) -> Quaternion:
        """
        Spherical interpolation that keeps b's hemisphere.

        Unlike :meth:`slerp`, b is never replaced by -b, so q and -q stay
        distinct endpoints; this is the interpolation to use in SU(2).
        """
        dot = a.dot(b)

        if abs(dot) > 1 - EPSILON:
            return Quaternion._lerp_normalized(a, b, t)

        # dot < 0 gives omega > π/2: the arc through b's own hemisphere
        omega = math.acos(clamp(dot, -1.0, 1.0))
        sin_omega = math.sin(omega)
        sa = math.sin((1 - t) * omega) / sin_omega
        sb = math.sin(t * omega) / sin_omega
        return Quaternion(
            sa * a.w + sb * b.w,
            sa * a.x + sb * b.x,
            sa * a.y + sb * b.y,
            sa * a.z + sb * b.z,
        ).normalize()

    # ------------------------------------------------------------------
    # Comparison and export
    # ------------------------------------------------------------------

    def approx_equal(self, other: Quaternion, eps: float = QUATERNION_APPROX_EPSILON) -> bool:
        """Equality in SU(2): q and -q are NOT identified."""
        return (
            abs(self.w - other.w) < eps
            and abs(self.x - other.x) < eps
            and abs(self.y - other.y) < eps
            and abs(self.z - other.z) < eps
        )

    def same_rotation(self, other: Quaternion, eps: float = QUATERNION_APPROX_EPSILON) -> bool:
        """Equality in SO(3): q and -q are the same rotation."""
        return self.approx_equal(other, eps) or self.approx_equal(other.negate(), eps)

    def to_s3(self) -> tuple[float, float, float, float]:
        """4D coordinates (w, x, y, z) on S³."""
        return (self.w, self.x, self.y, self.z)

    def as_array(self) -> NDArray[np.float64]:
        """Scalar-first array [w, x, y, z]."""
        return np.array([self.w, self.x, self.y, self.z], dtype=np.float64)

    def to_rotation(self) -> ScR:
        """scipy ``Rotation`` for this quaternion (sign is lost)."""
        return ScR.from_quat([self.x, self.y, self.z, self.w])

    def to_rotation_matrix(self) -> NDArray[np.float64]:
        """3x3 rotation matrix, identical for q and -q."""
        return self.to_rotation().as_matrix()

    def rotate(self, v: VectorLike) -> Vector3:
        """Rotate a vector: q v q*."""
        return Vector3.from_array(self.to_rotation().apply(as_vector(v).as_array()))
