"""
Rotation loops in SO(3) and the null-homotopy of the 4π loop.

π₁(SO(3)) = Z/2:
- the constant loop at the identity is contractible
- a full 2π turn about a fixed axis is the generator (not contractible)
- a 4π turn is twice the generator, hence trivial (contractible)

In the ball picture a 2π loop runs from the centre out along +n to the
boundary, reappears at the antipode -n·π and returns to the centre: one
boundary crossing. A 4π loop does this twice. Crossings can only be created
or cancelled in pairs, so the parity is the obstruction.

Every loop here is driven by one continuous angle per sample. The quaternion
view of that angle is continuous; its ball view wraps at the boundary. Both
views are computed from the same angle track and are never stored apart.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cached_property

import numpy as np
from numpy.typing import NDArray

from so3lab.algebra.quaternion import Quaternion
from so3lab.algebra.vector import Vector3, VectorLike, as_vector, clamp
from so3lab.config import (
    DEFAULT_NUM_SAMPLES,
    DEFAULT_STAGE_COUNT,
    DEFAULT_STAGE_SAMPLES,
    JUMP_DISTANCE_THRESHOLD,
    LOOP_PRESETS,
)
from so3lab.topology.ball import BallPoint, axis_angle_to_point
from so3lab.utils.validation import validate_angular_step, validate_sample_count

FOUR_PI = 4 * math.pi


def sample_parameters(num_samples: int) -> NDArray[np.float64]:
    """Loop parameters t_i = i/N for i = 0..N."""
    validate_sample_count(num_samples)
    return np.arange(num_samples + 1, dtype=np.float64) / num_samples


def detect_jumps(
    points: list[BallPoint] | tuple[BallPoint, ...],
    threshold: float = JUMP_DISTANCE_THRESHOLD,
) -> tuple[int, ...]:
    """
    Indices where a ball path jumps across the boundary.

    Index i is a jump when ‖points[i] - points[i-1]‖ exceeds ``threshold``.
    A wrap through the boundary moves the point by nearly the ball diameter
    2π, ordinary motion by one angular step.
    """
    return tuple(
        i for i in range(1, len(points))
        if points[i].subtract(points[i - 1]).magnitude() > threshold
    )


@dataclass(frozen=True)
class LoopPath:
    """
    Sampled rotation loop ``t ↦ R(axis, t·total_angle)``, t ∈ [0, 1].

    Only the axis, the total angle and the sample count are stored. The
    unwrapped angle track and its two views (continuous quaternions and
    wrapped ball points) are derived on first access.

    Parameters
    ----------
    axis : Vector3
        Unit rotation axis.
    total_angle : float
        Total rotation over the loop [rad].
    num_samples : int
        N; the path holds N+1 samples.

    Attributes
    ----------
    angles : NDArray[np.float64]
        Continuous angle t_i·total_angle, never wrapped (N+1,)
    points : tuple[BallPoint, ...]
        Wrapped ball points (N+1)
    quaternions : tuple[Quaternion, ...]
        Unwrapped quaternions (N+1)
    jump_indices : tuple[int, ...]
        Samples at which the ball path crosses the boundary

    Notes
    -----
    Build with :func:`generate_loop`. Any parameter change means a new
    LoopPath; instances are never updated. Jump indices are only complete
    while the angular step stays within ``MAX_LIFT_STEP``; coarser sampling
    is warned about at construction.
    """

    axis: Vector3
    total_angle: float
    num_samples: int

    @cached_property
    def parameters(self) -> NDArray[np.float64]:
        return sample_parameters(self.num_samples)

    @cached_property
    def angles(self) -> NDArray[np.float64]:
        return self.parameters * self.total_angle

    @cached_property
    def points(self) -> tuple[BallPoint, ...]:
        return tuple(axis_angle_to_point(self.axis, float(a)) for a in self.angles)

    @cached_property
    def quaternions(self) -> tuple[Quaternion, ...]:
        return tuple(Quaternion.from_axis_angle(self.axis, float(a)) for a in self.angles)

    @cached_property
    def jump_indices(self) -> tuple[int, ...]:
        return detect_jumps(self.points)

    @property
    def angular_step(self) -> float:
        """Rotation between consecutive samples [rad]."""
        return abs(self.total_angle) / self.num_samples

    def jump_near(self, t: float, window: int = 1) -> int | None:
        """
        Jump index within ``window`` samples of progress ``t``, if any.

        Lets an animation fire a jump effect while scrubbing with
        :func:`get_loop_point` instead of walking the sample list.
        """
        idx = math.floor(clamp(t, 0.0, 1.0) * self.num_samples)
        for j in self.jump_indices:
            if j - window <= idx <= j + window:
                return j
        return None

    def points_array(self) -> NDArray[np.float64]:
        """Ball points as an (N+1, 3) array."""
        return np.array([p.as_array() for p in self.points], dtype=np.float64)

    def quaternions_array(self) -> NDArray[np.float64]:
        """Quaternions as an (N+1, 4) scalar-first array."""
        return np.array([q.as_array() for q in self.quaternions], dtype=np.float64)


def generate_loop(
    axis: VectorLike,
    total_angle: float,
    num_samples: int = DEFAULT_NUM_SAMPLES,
) -> LoopPath:
    """
    Sample a continuous rotation by ``total_angle`` about ``axis``.

    Parameters
    ----------
    axis : Vector3 | array-like
        Rotation axis, normalized here.
    total_angle : float
        Total rotation [rad]. Multiples of 2π give closed loops in SO(3).
    num_samples : int
        N >= 1. Sample i is at t = i/N.

    Returns
    -------
    LoopPath
        For total_angle = 2πk the path has exactly k jump indices, near
        t = (2j-1)/(2k), provided the angular step |total_angle|/N stays
        within ``MAX_LIFT_STEP``.

    Raises
    ------
    ValueError
        If num_samples < 1

    Warns
    -----
    RuntimeWarning
        If |total_angle|/N exceeds ``MAX_LIFT_STEP``. A step of π or more
        hides boundary wraps from :func:`detect_jumps` entirely.

    Examples
    --------
    >>> loop = generate_loop((1, 0, 0), 2 * math.pi, 200)
    >>> loop.jump_indices
    (101,)
    >>> loop.quaternions[-1].w
    -1.0
    """
    validate_sample_count(num_samples)
    validate_angular_step(abs(total_angle) / num_samples)
    return LoopPath(as_vector(axis).normalize(), float(total_angle), int(num_samples))


def get_loop_point(axis: VectorLike, total_angle: float, t: float) -> BallPoint:
    """Ball point at progress t of the loop, without sampling the path."""
    n = as_vector(axis).normalize()
    return axis_angle_to_point(n, t * total_angle)


def get_loop_quaternion(axis: VectorLike, total_angle: float, t: float) -> Quaternion:
    """Quaternion at progress t of the loop, without sampling the path."""
    n = as_vector(axis).normalize()
    return Quaternion.from_axis_angle(n, t * total_angle)


def excursion_angle(t: float, s: float) -> float:
    """
    Rotation angle of the contracted 4π loop at (s, t).

    Out-and-back form::

        t <= 1/2 : (1 - s)·4π·t
        t >  1/2 : (1 - s)·4π·(1 - t)

    The angle is 0 at t = 0 and t = 1 for every s, so the basepoint stays at
    the identity throughout. Scaling the loop's angle directly,
    (1 - s)·4π·t, would end at a rotation by (1 - s)·4π, which is the
    identity only for s = 0 and s = 1.
    """
    if t <= 0.5:
        return (1 - s) * FOUR_PI * t
    return (1 - s) * FOUR_PI * (1 - t)


def contracted_loop_points(
    axis: VectorLike,
    s: float,
    num_samples: int = DEFAULT_NUM_SAMPLES,
) -> tuple[BallPoint, ...]:
    """
    Stage s of the null-homotopy of the 4π loop.

    Parameters
    ----------
    axis : Vector3 | array-like
        Rotation axis, normalized here.
    s : float
        Contraction parameter, 0 = full 4π loop, 1 = constant loop at the
        identity. Clamped into [0, 1].
    num_samples : int
        N >= 1.

    Returns
    -------
    tuple[BallPoint, ...]
        N+1 ball points.

    Notes
    -----
    Each half of the path is an excursion out to angle (1 - s)·2π and back.
    While that exceeds π the excursion wraps through the boundary once per
    half (two crossings in total). At s = 1/2 it just touches the boundary;
    for s > 1/2 the path stays inside the ball. The maximum radius is
    therefore π for s <= 1/2 and (1 - s)·2π afterwards.
    """
    n = as_vector(axis).normalize()
    s = clamp(s, 0.0, 1.0)
    return tuple(
        axis_angle_to_point(n, excursion_angle(float(t), s))
        for t in sample_parameters(num_samples)
    )


def contraction_stages(
    axis: VectorLike,
    stage_count: int = DEFAULT_STAGE_COUNT,
    num_samples: int = DEFAULT_STAGE_SAMPLES,
) -> list[tuple[BallPoint, ...]]:
    """
    The homotopy sampled at ``stage_count`` evenly spaced s ∈ [0, 1].

    Used for layered "ghost trail" display of the contraction. A single
    stage is s = 0.
    """
    validate_sample_count(stage_count, "stage_count")
    return [
        contracted_loop_points(axis, float(s), num_samples)
        for s in np.linspace(0.0, 1.0, stage_count)
    ]


def generate_diameter_path(
    axis: VectorLike,
    num_samples: int = DEFAULT_NUM_SAMPLES,
) -> tuple[BallPoint, ...]:
    """
    One traversal of the 2π loop as a ball diameter.

    Origin → +axis·π, jump to -axis·π, back to the origin. This is the
    non-contractible generator: however it is deformed, it keeps an odd
    number of boundary crossings.
    """
    validate_sample_count(num_samples)
    validate_angular_step(2 * math.pi / num_samples)
    n = as_vector(axis).normalize()
    return tuple(
        axis_angle_to_point(n, float(t) * 2 * math.pi)
        for t in sample_parameters(num_samples)
    )


def loop_from_preset(name: str, num_samples: int = DEFAULT_NUM_SAMPLES) -> LoopPath:
    """
    Generate a loop from a named entry of ``LOOP_PRESETS``.

    Raises
    ------
    ValueError
        If the preset name is unknown
    """
    try:
        preset = LOOP_PRESETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown preset {name!r}. Valid options: {sorted(LOOP_PRESETS)}"
        ) from None
    return generate_loop(preset["axis"], preset["total_angle"], num_samples)
