"""
Validation utilities for sampling parameters.

Invalid sizes are programming errors and raise ValueError. Parameters that
are legal but numerically risky (coarse sampling before lifting) only warn.
"""
from __future__ import annotations

import math
import numbers
import warnings

from so3lab.config import MAX_LIFT_STEP


def validate_positive(value: float, name: str, strict: bool = True) -> None:
    """
    Validate that a scalar value is positive.

    Parameters
    ----------
    value : float
        Value to validate
    name : str
        Parameter name for error messages
    strict : bool
        If True, raise ValueError. If False, issue warning.

    Raises
    ------
    ValueError
        If strict=True and value <= 0
    """
    if value <= 0:
        msg = f"{name} must be positive, got {value}"
        if strict:
            raise ValueError(msg)
        else:
            warnings.warn(msg, RuntimeWarning, stacklevel=2)


def validate_sample_count(n: int, name: str = "num_samples") -> None:
    """
    Validate a sample or stage count: an integer >= 1.

    Raises
    ------
    ValueError
        If ``n`` is not an integer or is smaller than 1. Integral floats
        such as 2.0 are rejected too.
    """
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise ValueError(f"{name} must be an integer, got {n!r}")
    validate_positive(n, name)


def validate_angular_step(step: float, max_step: float = MAX_LIFT_STEP) -> None:
    """
    Warn when consecutive samples are too far apart to track reliably.

    Nearest-sheet lifting chooses between q and -q by proximity to the
    previous sample, and jump detection tells a boundary wrap from ordinary
    motion by distance. Both are only unambiguous while the rotation between
    samples stays well below π.

    Parameters
    ----------
    step : float
        Largest rotation angle between consecutive samples [rad]
    max_step : float
        Largest trusted step [rad]
    """
    if step > max_step:
        warnings.warn(
            f"Angular step {step:.4f} rad exceeds {max_step:.4f} rad. "
            f"Boundary jumps and the lifted sheet may be misidentified; use at least "
            f"{math.ceil(step / max_step)}x more samples.",
            RuntimeWarning,
            stacklevel=3
        )
