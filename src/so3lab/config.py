"""
Numeric policy constants for SO3Lab.

All tolerance bands, thresholds and default sample counts used by the
algebra and topology modules live here so they can be inspected and tested
independently of the code that applies them.

Angles are in radians throughout.
"""
from __future__ import annotations

import math

# Degenerate-input guard for norms (zero vectors, zero quaternions, sin→0)
EPSILON = 1e-10

# Radius bands for ball-model membership tests
BOUNDARY_EPSILON = 1e-4  # |‖p‖ - π| below this => on the boundary sphere
IDENTITY_EPSILON = 1e-4  # ‖p‖ below this => identity rotation

# Component-wise tolerance for quaternion equality (SU(2) sense)
QUATERNION_APPROX_EPSILON = 1e-6

# Tolerance used when comparing the endpoints of a lifted path
LIFT_CLOSURE_EPSILON = 1e-4

# Two consecutive ball samples further apart than this are an antipodal jump.
# Ordinary motion moves far less per sample; a wrap moves ≈ 2π.
JUMP_DISTANCE_THRESHOLD = math.pi

# Radius used in place of the point at infinity of the stereographic chart
STEREOGRAPHIC_CLAMP_RADIUS = 20.0

# Largest rotation between consecutive samples for which nearest-sheet
# lifting is trusted
MAX_LIFT_STEP = math.pi / 4

# Sampling defaults
DEFAULT_NUM_SAMPLES = 200
DEFAULT_STAGE_COUNT = 6
DEFAULT_STAGE_SAMPLES = 100

# Placeholder axis for the identity rotation and for zero-length inputs
DEFAULT_AXIS = (0.0, 0.0, 1.0)

LOOP_PRESETS = {
    "loop_2pi": {
        "axis": (1.0, 0.0, 0.0),
        "total_angle": 2 * math.pi,
        "description": "360° about X. Not contractible in SO(3).",
    },
    "loop_4pi": {
        "axis": (1.0, 0.0, 0.0),
        "total_angle": 4 * math.pi,
        "description": "720° about X. Contractible in SO(3).",
    },
    "contraction_4pi": {
        "axis": (1.0, 0.0, 0.0),
        "total_angle": 4 * math.pi,
        "description": "The 720° loop shrinking continuously to the identity.",
    },
    "compare_2pi_z": {
        "axis": (0.0, 0.0, 1.0),
        "total_angle": 2 * math.pi,
        "description": "360° about Z, for side-by-side comparison with 720°.",
    },
}
