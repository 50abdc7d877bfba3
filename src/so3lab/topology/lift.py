"""
Lifting ball paths to the double cover SU(2) ≅ S³.

The map SU(2) → SO(3) sends q to its rotation and has kernel {±1}, so
SO(3) ≅ SU(2)/{±1}. Since S³ is simply connected, a loop in SO(3) is
contractible exactly when its continuous lift is a closed loop:

- a 2π loop lifts to a path from +1 to -1 (open: the generator of Z/2)
- a 4π loop lifts to a great circle from +1 back to +1 (closed: trivial)

Lifted paths are shown in R³ through stereographic projection from the
south pole (-1, 0, 0, 0).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Sequence, Union

from so3lab.algebra.quaternion import Quaternion
from so3lab.algebra.vector import Vector3, clamp
from so3lab.config import (
    EPSILON,
    LIFT_CLOSURE_EPSILON,
    MAX_LIFT_STEP,
    STEREOGRAPHIC_CLAMP_RADIUS,
)
from so3lab.topology.ball import BallPoint
from so3lab.utils.validation import validate_angular_step


class HomotopyClass(Enum):
    """
    Class of a ball-model loop in π₁(SO(3)) ≅ Z/2.

    OPEN means the lift ends neither at its start nor at its antipode: the
    ball path was not a closed loop in the first place.
    """

    CONTRACTIBLE = auto()  # lift closes up in SU(2)
    NON_CONTRACTIBLE = auto()  # lift ends at -start
    OPEN = auto()  # not a loop


@dataclass(frozen=True)
class LiftedPath:
    """
    Continuous quaternion path covering a ball path.

    Consecutive entries have non-negative dot product. At a ball-model jump
    the lift does not jump: it keeps going on the same sheet.
    """

    quaternions: tuple[Quaternion, ...]

    def __len__(self) -> int:
        return len(self.quaternions)

    def __getitem__(self, i: int) -> Quaternion:
        return self.quaternions[i]

    def __iter__(self) -> Iterator[Quaternion]:
        return iter(self.quaternions)

    @property
    def start(self) -> Quaternion:
        return self.quaternions[0]

    @property
    def end(self) -> Quaternion:
        return self.quaternions[-1]

    def is_closed(self, eps: float = LIFT_CLOSURE_EPSILON) -> bool:
        return is_lifted_path_closed(self, eps)

    def is_antipodal(self, eps: float = LIFT_CLOSURE_EPSILON) -> bool:
        return is_lifted_path_antipodal(self, eps)


QuaternionPath = Union[LiftedPath, Sequence[Quaternion]]


def stereographic_project(
    q: Quaternion,
    clamp_radius: float = STEREOGRAPHIC_CLAMP_RADIUS,
) -> Vector3:
    """
    Stereographic projection S³ → R³ from the south pole (-1, 0, 0, 0).

    (w, x, y, z) ↦ (x, y, z) / (1 + w). The north pole (identity) goes to the
    origin, the equator w = 0 to the unit sphere.

    Notes
    -----
    Rendering convention, not an exact projection: the south pole has no
    image, and points near it would land arbitrarily far away. Any result
    farther than ``clamp_radius`` is pulled back to that radius along the
    imaginary direction (x, y, z); if that direction has also vanished, the
    point (0, 0, clamp_radius) is used.
    """
    denom = 1 + q.w
    imag = Vector3(q.x, q.y, q.z)
    n = imag.magnitude()

    if abs(denom) < EPSILON or n / abs(denom) > clamp_radius:
        if n < EPSILON:
            return Vector3(0.0, 0.0, clamp_radius)
        return imag.scale(clamp_radius / n)

    return imag.scale(1 / denom)


def project_path(
    quaternions: QuaternionPath,
    clamp_radius: float = STEREOGRAPHIC_CLAMP_RADIUS,
) -> list[Vector3]:
    """Stereographic image of a whole quaternion path."""
    return [stereographic_project(q, clamp_radius) for q in quaternions]


def double_cover_map(q: Quaternion) -> BallPoint:
    """SU(2) → SO(3): the ball point of q (same for q and -q)."""
    return q.to_so3_point()


def lift_path(points: Sequence[BallPoint], max_step: float = MAX_LIFT_STEP) -> LiftedPath:
    """
    Lift a ball path to a continuous path in SU(2).

    The first quaternion is taken with w >= 0. Each later point has two
    preimages ±q; the one with non-negative dot product against the previous
    lifted quaternion is kept. Across an antipodal jump the ball path is
    discontinuous but the preimage nearest the previous sample is the
    continuation, so the lift stays continuous.

    Parameters
    ----------
    points : Sequence[BallPoint]
        Ball path, e.g. ``generate_loop(...).points``.
    max_step : float
        Largest trusted rotation between consecutive samples [rad].

    Returns
    -------
    LiftedPath
        Same length as ``points``.

    Warns
    -----
    RuntimeWarning
        If any step exceeds ``max_step``. Sheet selection is only reliable
        when consecutive samples differ by much less than π; under-sampled
        paths can land on the wrong sheet and be misclassified.
    """
    if len(points) == 0:
        return LiftedPath(())

    q = Quaternion.from_so3_point(points[0])
    if q.w < 0:
        q = q.negate()
    lifted = [q]
    min_dot = 1.0

    for p in points[1:]:
        qi = Quaternion.from_so3_point(p)
        d = qi.dot(lifted[-1])
        if d < 0:
            qi = qi.negate()
            d = -d
        min_dot = min(min_dot, d)
        lifted.append(qi)

    # |q_i · q_{i-1}| = cos(step/2)
    validate_angular_step(2 * math.acos(clamp(min_dot, -1.0, 1.0)), max_step)
    return LiftedPath(tuple(lifted))


def is_lifted_path_closed(path: QuaternionPath, eps: float = LIFT_CLOSURE_EPSILON) -> bool:
    """First and last quaternion coincide in SU(2). Trivially true below 2 samples."""
    if len(path) < 2:
        return True
    return path[0].approx_equal(path[-1], eps)


def is_lifted_path_antipodal(path: QuaternionPath, eps: float = LIFT_CLOSURE_EPSILON) -> bool:
    """Last quaternion is the negation of the first."""
    if len(path) < 2:
        return False
    return path[0].approx_equal(path[-1].negate(), eps)


def classify_loop(points: Sequence[BallPoint], eps: float = LIFT_CLOSURE_EPSILON) -> HomotopyClass:
    """
    Homotopy class of a ball path, decided through its lift.

    Examples
    --------
    >>> from so3lab.topology.loops import generate_loop
    >>> classify_loop(generate_loop((0, 0, 1), 4 * math.pi).points)
    <HomotopyClass.CONTRACTIBLE: 1>
    """
    lifted = lift_path(points)
    if is_lifted_path_closed(lifted, eps):
        return HomotopyClass.CONTRACTIBLE
    if is_lifted_path_antipodal(lifted, eps):
        return HomotopyClass.NON_CONTRACTIBLE
    return HomotopyClass.OPEN
