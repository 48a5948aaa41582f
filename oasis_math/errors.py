################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Exceptions raised by the math types."""

from __future__ import annotations


class GeometryError(Exception):
    """Base class for errors raised by oasis_math."""


class IndexOutOfRange(GeometryError, IndexError):
    """Raised when an element, row, column or axis index is out of range."""


class DimensionMismatch(GeometryError, ValueError):
    """Raised when operand shapes are incompatible for an operation."""


class DegenerateOperation(GeometryError, ArithmeticError):
    """Raised when an operation is undefined for the given value.

    Examples are normalizing a zero-norm vector or quaternion, or inverting
    an affine transform with a singular linear part.
    """


class InvalidState(GeometryError, RuntimeError):
    """Raised when an object lacks the data needed for an operation."""


class InvalidOptions(GeometryError, ValueError):
    """Raised when an options bitmask contains contradictory flags."""
