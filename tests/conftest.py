import math
import os
import sys

import pytest

# Make the src/ layout importable without installing the package
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(project_root, 'src'))

from so3lab.algebra.vector import Vector3  # noqa: E402

TWO_PI = 2 * math.pi
FOUR_PI = 4 * math.pi


@pytest.fixture(params=[
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
    (1.0, 1.0, 1.0),
    (0.3, -0.5, 0.8),
], ids=["x", "y", "z", "diagonal", "oblique"])
def axis(request):
    """Rotation axes, not all normalized."""
    return Vector3(*request.param)
