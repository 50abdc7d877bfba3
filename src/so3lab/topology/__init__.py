"""
SO(3) topology: the ball model, rotation loops and the SU(2) lift.

Example
-------
>>> import math
>>> from so3lab.topology import generate_loop, lift_path
>>> lifted = lift_path(generate_loop((1, 0, 0), 2 * math.pi).points)
>>> lifted.is_antipodal()
True
"""

from .ball import (
    BallPoint,
    antipodal_partner,
    axis_angle_to_point,
    canonicalize,
    compose,
    geodesic_distance,
    is_identity,
    is_on_boundary,
    point_radius,
    point_to_axis_angle,
    same_rotation,
)
from .lift import (
    HomotopyClass,
    LiftedPath,
    classify_loop,
    double_cover_map,
    is_lifted_path_antipodal,
    is_lifted_path_closed,
    lift_path,
    project_path,
    stereographic_project,
)
from .loops import (
    LoopPath,
    contracted_loop_points,
    contraction_stages,
    detect_jumps,
    excursion_angle,
    generate_diameter_path,
    generate_loop,
    get_loop_point,
    get_loop_quaternion,
    loop_from_preset,
)

__all__ = [
    # Ball model
    "BallPoint",
    "axis_angle_to_point",
    "point_to_axis_angle",
    "point_radius",
    "is_on_boundary",
    "is_identity",
    "antipodal_partner",
    "canonicalize",
    "compose",
    "geodesic_distance",
    "same_rotation",
    # Loops and homotopy
    "LoopPath",
    "generate_loop",
    "get_loop_point",
    "get_loop_quaternion",
    "detect_jumps",
    "excursion_angle",
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
]
