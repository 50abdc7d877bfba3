"""
Utility functions for SO3Lab.

DataFrame export lives in :mod:`so3lab.utils.io` and is imported from there;
it depends on the topology modules, which themselves use the validators
below.
"""

from .validation import (
    validate_angular_step,
    validate_positive,
    validate_sample_count,
)

__all__ = [
    "validate_positive",
    "validate_sample_count",
    "validate_angular_step",
]
