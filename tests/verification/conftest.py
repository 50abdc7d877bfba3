"""
Verification Test Suite for SO3Lab.

These tests check the topological facts the engine exists to demonstrate
against their closed-form statements.

Test Categories:
- Double cover: parity of full turns in SU(2)
- Ball model: boundary crossings, antipodal identification
- Homotopy: boundary conditions and monotone shrinking of the contraction
- Lifting: closed vs antipodal lifts, classification in π₁(SO(3)) ≅ Z/2

References:
- Hatcher, Algebraic Topology, §1.3 (covering spaces, lifting)
- Dirac belt trick / plate trick
"""
import math

import pytest

from so3lab.algebra.vector import Vector3
from so3lab.topology.loops import generate_loop

# -----------------------------------------------------------------------------
# Test Configuration
# -----------------------------------------------------------------------------

SCENARIO_SAMPLES = 200


# -----------------------------------------------------------------------------
# Common Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def x_axis():
    return Vector3(1.0, 0.0, 0.0)


@pytest.fixture
def loop_2pi(x_axis):
    """The 360° scenario loop about X."""
    return generate_loop(x_axis, 2 * math.pi, SCENARIO_SAMPLES)


@pytest.fixture
def loop_4pi(x_axis):
    """The 720° loop about X."""
    return generate_loop(x_axis, 4 * math.pi, SCENARIO_SAMPLES)


@pytest.fixture(params=[
    Vector3(0.5, 0.0, 0.0),
    Vector3(0.0, -2.0, 1.0),
    Vector3(1.0, 1.0, 1.0),
    Vector3(0.0, 0.0, math.pi),
    Vector3(-math.pi, 0.0, 0.0),
], ids=["small", "oblique", "diagonal", "boundary_z", "boundary_minus_x"])
def ball_point(request):
    """Points inside the ball and on its boundary sphere."""
    return request.param

