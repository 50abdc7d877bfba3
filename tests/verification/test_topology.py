"""
Topology Verification Tests.

Checks the facts behind the belt trick:
- A 2π loop closes in SO(3) but its SU(2) lift does not (generator of Z/2)
- A 4π loop lifts to a closed loop and contracts through the ball
"""
import math

import numpy as np
import pytest

from so3lab.algebra.quaternion import Quaternion
from so3lab.algebra.vector import Vector3
from so3lab.topology.ball import (
    antipodal_partner,
    axis_angle_to_point,
    canonicalize,
    compose,
    is_identity,
    point_radius,
    point_to_axis_angle,
)
from so3lab.topology.lift import (
    HomotopyClass,
    classify_loop,
    is_lifted_path_antipodal,
    is_lifted_path_closed,
    lift_path,
)
from so3lab.topology.loops import LoopPath, contracted_loop_points, detect_jumps, generate_loop

TWO_PI = 2 * math.pi
FOUR_PI = 4 * math.pi

POINT_TOLERANCE = 1e-9  # ball coordinates [rad]
QUATERNION_TOLERANCE = 1e-9  # quaternion components


def max_radius(points) -> float:
    """Largest distance from the identity along a ball path."""
    return max(point_radius(p) for p in points)


def closes_in_ball(loop: LoopPath, tol: float = POINT_TOLERANCE) -> bool:
    """Both ends of a ball path at the identity."""
    return loop.points[0].magnitude() < tol and loop.points[-1].magnitude() < tol


class TestScenario360:
    """
    The 360° loop about X with N = 200.

    Out along +X to the boundary at t = 1/2, reappears at -X·π and returns:
    the ball path closes, the quaternion path ends on the other sheet.
    """

    def test_ball_path(self, loop_2pi):
        pts = loop_2pi.points
        assert pts[0].approx_equal(Vector3.zero(), POINT_TOLERANCE)
        assert pts[100].approx_equal(Vector3(math.pi, 0.0, 0.0), POINT_TOLERANCE)
        assert pts[101].x < -3.0
        assert pts[200].approx_equal(Vector3.zero(), POINT_TOLERANCE)

    def test_single_jump(self, loop_2pi):
        assert loop_2pi.jump_indices == (101,)

    def test_quaternion_endpoints(self, loop_2pi):
        assert loop_2pi.quaternions[0] == Quaternion(1.0, 0.0, 0.0, 0.0)
        np.testing.assert_allclose(
            loop_2pi.quaternions[200].as_array(), [-1.0, 0.0, 0.0, 0.0], atol=QUATERNION_TOLERANCE
        )

    def test_lift_does_not_close(self, loop_2pi):
        lifted = lift_path(loop_2pi.points)
        assert not is_lifted_path_closed(lifted)
        assert is_lifted_path_antipodal(lifted)
        assert classify_loop(loop_2pi.points) is HomotopyClass.NON_CONTRACTIBLE


class TestScenario720:

    def test_ball_path_closes_with_two_jumps(self, loop_4pi):
        assert closes_in_ball(loop_4pi)
        assert len(loop_4pi.jump_indices) == 2

    def test_lift_closes(self, loop_4pi):
        lifted = lift_path(loop_4pi.points)
        assert is_lifted_path_closed(lifted)
        assert not is_lifted_path_antipodal(lifted)
        assert classify_loop(loop_4pi.points) is HomotopyClass.CONTRACTIBLE


class TestDoubleCoverParity:

    @pytest.mark.parametrize("k", range(-3, 5))
    def test_full_turn_parity(self, k):
        for axis in [(1, 0, 0), (0, 1, 0), (0.6, 0.0, 0.8)]:
            q = Quaternion.from_axis_angle(axis, TWO_PI * k)
            assert q.w == pytest.approx((-1) ** k, abs=1e-12)
            assert is_identity(axis_angle_to_point(axis, TWO_PI * k))

    @pytest.mark.parametrize("k", [1, 2, 3, 4, 5])
    def test_jumps_and_closure_per_turn(self, k):
        loop = generate_loop((0.0, 0.6, 0.8), TWO_PI * k, 100 * k)
        assert len(loop.jump_indices) == k
        assert closes_in_ball(loop)
        expected = HomotopyClass.CONTRACTIBLE if k % 2 == 0 else HomotopyClass.NON_CONTRACTIBLE
        assert classify_loop(loop.points) is expected


class TestHomotopy:
    """
    Null-homotopy of the 4π loop.

    H(s, t) is the rotation by (1 - s)·4π·t on the way out and
    (1 - s)·4π·(1 - t) on the way back; H(s, 0) = H(s, 1) = identity.
    """

    N = 200

    def test_boundary_condition_at_s0(self, x_axis, loop_4pi):
        pts = contracted_loop_points(x_axis, 0.0, self.N)
        half = self.N // 2
        for i in range(half + 1):
            assert pts[i].approx_equal(loop_4pi.points[i], POINT_TOLERANCE)
        for i in range(half + 1, self.N + 1):
            q = Quaternion.from_so3_point(pts[i])
            assert q.same_rotation(loop_4pi.quaternions[3 * half - i])

    def test_boundary_condition_at_s1(self, x_axis):
        assert all(p == Vector3.zero() for p in contracted_loop_points(x_axis, 1.0, self.N))

    def test_max_radius_non_increasing(self):
        axis = (0.0, 0.6, 0.8)
        radii = [max_radius(contracted_loop_points(axis, float(s), self.N))
                 for s in np.linspace(0.0, 1.0, 41)]
        # below s = 1/2 the sampled maximum sits within one step of π
        assert all(a >= b - FOUR_PI / self.N for a, b in zip(radii, radii[1:]))
        assert all(a >= b for a, b in zip(radii[20:], radii[21:]))
        assert radii[0] == pytest.approx(math.pi)
        assert radii[-1] == 0.0

    def test_max_radius_profile(self):
        step = FOUR_PI / self.N
        for s in np.linspace(0.0, 1.0, 21):
            r = max_radius(contracted_loop_points((1, 0, 0), float(s), self.N))
            if s <= 0.5:
                assert math.pi - step <= r <= math.pi + 1e-12
            else:
                assert r == pytest.approx((1 - s) * TWO_PI)

    def test_every_stage_is_contractible(self):
        for s in np.linspace(0.0, 1.0, 11):
            pts = contracted_loop_points((1, 1, 0), float(s), self.N)
            assert classify_loop(pts) is HomotopyClass.CONTRACTIBLE

    def test_crossings_cancel_in_pairs(self):
        """The crossing count changes only from 2 to 0, never to an odd number."""
        counts = {len(detect_jumps(contracted_loop_points((0, 0, 1), float(s), self.N)))
                  for s in np.linspace(0.0, 1.0, 51)}
        assert counts == {0, 2}


class TestAntipodalIdentification:

    def test_partner_is_involution(self, ball_point):
        assert antipodal_partner(antipodal_partner(ball_point)) == ball_point

    def test_canonicalize_idempotent(self, ball_point):
        c = canonicalize(ball_point)
        assert canonicalize(c) == c

    def test_canonicalize_identifies_boundary_antipodes(self):
        for p in [Vector3(0.0, 0.0, math.pi), Vector3(-math.pi, 0.0, 0.0),
                  Vector3(1.0, -2.0, 0.5).normalize().scale(math.pi)]:
            assert canonicalize(p) == canonicalize(-p)

    def test_inverse_rotation_composes_to_identity(self, ball_point):
        axis, angle = point_to_axis_angle(ball_point)
        inverse = axis_angle_to_point(axis, -angle)
        assert is_identity(compose(ball_point, inverse))
