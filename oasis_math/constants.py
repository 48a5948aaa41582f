################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Numeric constants and flag values shared by the math types."""

from __future__ import annotations

import numpy as np


class MathConstants:
    """Tolerances used by the math types."""

    # Default relative tolerance for approximate equality of doubles
    DUMMY_PRECISION: float = 1e-12

    # Machine epsilon for float64
    EPSILON: float = float(np.finfo(np.float64).eps)

    # Below this norm a rotation axis is treated as undefined
    AXIS_EPS: float = 1e-12


# SVD output flags, OR-able into a single bitmask
# Compute the full (rows x rows) left singular vectors
COMPUTE_FULL_U: int = 0x04
# Compute the thin (rows x min(rows, cols)) left singular vectors
COMPUTE_THIN_U: int = 0x08
# Compute the full (cols x cols) right singular vectors
COMPUTE_FULL_V: int = 0x10
# Compute the thin (cols x min(rows, cols)) right singular vectors
COMPUTE_THIN_V: int = 0x20

# Index of the X basis axis for Euler composition
AXIS_X: int = 0
# Index of the Y basis axis for Euler composition
AXIS_Y: int = 1
# Index of the Z basis axis for Euler composition
AXIS_Z: int = 2
