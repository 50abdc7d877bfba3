"""
SO3Lab - Topology engine for visualizing the rotation group SO(3).

Shows why a 360° rotation loop cannot be shrunk to a point while a 720°
loop can: SO(3) is modelled as the ball of radius π with antipodal boundary
points identified, and loops are lifted to the double cover SU(2).

Core Components
---------------
Vector3 : Immutable 3-vector (axes, ball points)
Quaternion : Unit quaternion, element of SU(2)
LoopPath : Sampled rotation loop with ball points, quaternions and jumps
LiftedPath : Continuous SU(2) lift of a ball path

Operations
----------
generate_loop : Sample a rotation loop of any total angle
contracted_loop_points : Basepoint-preserving contraction of the 4π loop
lift_path : Lift a ball path to SU(2)
classify_loop : Decide contractibility through the lift

Examples
--------
>>> import math
>>> from so3lab import generate_loop, lift_path
>>> loop = generate_loop((1, 0, 0), 2 * math.pi, 200)
>>> loop.jump_indices
(101,)
>>> lift_path(loop.points).is_closed()
False
"""

__version__ = "0.1.0"

from so3lab.algebra import Quaternion, Vector3

# Logging
from so3lab.logger import PathLogger
from so3lab.topology import (
    BallPoint,
    HomotopyClass,
    LiftedPath,
    LoopPath,
    antipodal_partner,
    axis_angle_to_point,
    canonicalize,
    classify_loop,
    compose,
    contracted_loop_points,
    contraction_stages,
    double_cover_map,
    generate_diameter_path,
    generate_loop,
    geodesic_distance,
    get_loop_point,
    get_loop_quaternion,
    is_lifted_path_antipodal,
    is_lifted_path_closed,
    lift_path,
    loop_from_preset,
    point_to_axis_angle,
    project_path,
    stereographic_project,
)

__all__ = [
    # Version
    "__version__",
    # Algebra
    "Vector3",
    "Quaternion",
    # Ball model
    "BallPoint",
    "axis_angle_to_point",
    "point_to_axis_angle",
    "antipodal_partner",
    "canonicalize",
    "compose",
    "geodesic_distance",
    # Loops
    "LoopPath",
    "generate_loop",
    "get_loop_point",
    "get_loop_quaternion",
    "contracted_loop_points",
    "contraction_stages",
    "generate_diameter_path",
    "loop_from_preset",
    # Double cover
    "LiftedPath",
    "HomotopyClass",
    "lift_path",
    "is_lifted_path_closed",
    "is_lifted_path_antipodal",
    "classify_loop",
    "double_cover_map",
    "stereographic_project",
    "project_path",
    # Logging
    "PathLogger",
]
