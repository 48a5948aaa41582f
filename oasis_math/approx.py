################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tolerance, index and shape helpers shared by the math types."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from .constants import MathConstants
from .errors import DimensionMismatch
from .errors import IndexOutOfRange


def stable_norm(x: NDArray[np.float64]) -> float:
    """Return the Euclidean (Frobenius) norm without underflow or overflow.

    The elements are scaled by the largest magnitude before squaring, so
    values such as 1e-200 keep a nonzero norm.
    """
    if x.size == 0:
        return 0.0
    scale: float = float(np.max(np.abs(x)))
    if scale == 0.0 or not np.isfinite(scale):
        return float(np.linalg.norm(x))
    return scale * float(np.linalg.norm(x / scale))


def is_approx_array(
    a: NDArray[np.float64],
    b: NDArray[np.float64],
    tolerance: float = MathConstants.DUMMY_PRECISION,
) -> bool:
    """Check fuzzy equality of two arrays.

    The arrays compare equal when ``||a - b|| <= tolerance * min(||a||, ||b||)``
    using the Frobenius norm. Arrays of different shapes never compare equal.
    """
    if a.shape != b.shape:
        return False
    diff: float = stable_norm(a - b)
    scale: float = min(stable_norm(a), stable_norm(b))
    return diff <= tolerance * scale


def is_approx_scalar(
    a: float,
    b: float,
    tolerance: float = MathConstants.DUMMY_PRECISION,
) -> bool:
    """Check fuzzy equality of two scalars."""
    return abs(a - b) <= tolerance * min(abs(a), abs(b))


def check_index(index: int, size: int, name: str = "index") -> int:
    """Return the index when it lies in [0, size), raise otherwise."""
    idx: int = int(index)
    if idx < 0 or idx >= size:
        raise IndexOutOfRange(f"{name} {idx} out of range [0, {size})")
    return idx


def check_size(size: int, name: str = "size") -> int:
    """Return the size when it is non-negative, raise otherwise."""
    value: int = int(size)
    if value < 0:
        raise DimensionMismatch(f"{name} must be non-negative, got {value}")
    return value


def ensure_same_shape(
    a: NDArray[np.float64],
    b: NDArray[np.float64],
    operation: str,
) -> None:
    """Raise DimensionMismatch when two arrays differ in shape."""
    if a.shape != b.shape:
        raise DimensionMismatch(
            f"{operation} requires equal shapes, got {a.shape} and {b.shape}"
        )


def assert_finite(x: NDArray[np.float64], name: str) -> None:
    """Raise ValueError when the array contains non-finite values."""
    if not np.all(np.isfinite(x)):
        raise ValueError(f"{name} must be finite")
