"""
SO(3) as the closed ball of radius π with antipodal boundary identification.

A point p of the ball B³(π) encodes a rotation:
- direction(p) = rotation axis
- ‖p‖ = rotation angle θ ∈ [0, π]
- p = 0 is the identity
- ‖p‖ = π: p and -p are the same rotation, since R(n, π) = R(-n, π)

Topologically this is RP³. The ball has no composition law of its own;
:func:`compose` and :func:`geodesic_distance` go through quaternions.
"""
from __future__ import annotations

import math

from so3lab.algebra.quaternion import Quaternion
from so3lab.algebra.vector import Vector3, VectorLike, as_vector
from so3lab.config import (
    BOUNDARY_EPSILON,
    DEFAULT_AXIS,
    EPSILON,
    IDENTITY_EPSILON,
    QUATERNION_APPROX_EPSILON,
)

TWO_PI = 2 * math.pi

# A ball point is a Vector3 with ‖p‖ <= π
BallPoint = Vector3


def axis_angle_to_point(axis: VectorLike, angle: float) -> BallPoint:
    """
    Map a rotation of ``angle`` about ``axis`` into the ball.

    The angle is reduced mod 2π to θ ∈ [0, 2π). For θ <= π the point is
    axis·θ; for θ > π the same rotation is (2π - θ) about -axis, so the point
    re-enters the ball from the antipodal side. Residues within ``EPSILON``
    of 0 or 2π are the identity.

    Parameters
    ----------
    axis : Vector3 | array-like
        Rotation axis, normalized here.
    angle : float
        Continuous (unwrapped) rotation angle [rad]. May be negative or
        exceed 2π.

    Returns
    -------
    BallPoint
        Point with ‖p‖ <= π.

    Examples
    --------
    >>> axis_angle_to_point((1, 0, 0), 3 * math.pi / 2)  # doctest: +ELLIPSIS
    Vector3(x=-1.5707963..., y=..., z=...)
    """
    if abs(angle) < EPSILON:
        return Vector3.zero()
    n = as_vector(axis).normalize()
    theta = angle % TWO_PI

    if theta < EPSILON or abs(theta - TWO_PI) < EPSILON:
        return Vector3.zero()

    if theta <= math.pi:
        return n.scale(theta)
    return n.negate().scale(TWO_PI - theta)


def point_to_axis_angle(p: BallPoint) -> tuple[Vector3, float]:
    """Axis and angle of a ball point. The origin gives ((0, 0, 1), 0)."""
    theta = p.magnitude()
    if theta < EPSILON:
        return Vector3(*DEFAULT_AXIS), 0.0
    return p.scale(1 / theta), theta


def point_radius(p: BallPoint) -> float:
    return p.magnitude()


def is_on_boundary(p: BallPoint, eps: float = BOUNDARY_EPSILON) -> bool:
    return abs(p.magnitude() - math.pi) < eps


def is_identity(p: BallPoint, eps: float = IDENTITY_EPSILON) -> bool:
    return p.magnitude() < eps


def antipodal_partner(p: BallPoint) -> BallPoint:
    """
    The antipode -p.

    Only on the boundary sphere is -p the same rotation as p; inside the
    ball it is the inverse rotation.
    """
    return p.negate()


def canonicalize(p: BallPoint, eps: float = BOUNDARY_EPSILON) -> BallPoint:
    """
    Canonical representative of a boundary class {p, -p}.

    Picks the member whose first non-zero coordinate (x, then y, then z) is
    positive. Interior points are returned unchanged.
    """
    if not is_on_boundary(p, eps):
        return p
    for c in (p.x, p.y, p.z):
        if abs(c) > EPSILON:
            return p if c > 0 else p.negate()
    return p


def compose(a: BallPoint, b: BallPoint) -> BallPoint:
    """Rotation ``a ∘ b`` (apply b, then a) as a ball point."""
    qa = Quaternion.from_so3_point(a)
    qb = Quaternion.from_so3_point(b)
    return qa.multiply(qb).to_so3_point()


def geodesic_distance(a: BallPoint, b: BallPoint) -> float:
    """Bi-invariant distance: the rotation angle of a⁻¹b, in [0, π]."""
    qa = Quaternion.from_so3_point(a)
    qb = Quaternion.from_so3_point(b)
    _, angle = qa.inverse().multiply(qb).to_axis_angle()
    return angle


def same_rotation(a: BallPoint, b: BallPoint, eps: float = QUATERNION_APPROX_EPSILON) -> bool:
    """True if a and b are the same rotation, including boundary antipodes."""
    qa = Quaternion.from_so3_point(a)
    qb = Quaternion.from_so3_point(b)
    return qa.same_rotation(qb, eps)
