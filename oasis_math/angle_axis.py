################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Rotation represented by an angle about an axis."""

from __future__ import annotations

from typing import Any
from typing import List
from typing import Optional
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from .approx import is_approx_array
from .approx import is_approx_scalar
from .constants import MathConstants
from .dense import DenseMatrix
from .errors import DimensionMismatch
from .quaternion import Quaternion
from .rotation import SO3
from .rotation import Rotation
from .vector import Vector3


class AngleAxis(Rotation):
    """Rotation of ``angle`` radians about ``axis``.

    The axis is stored as given and is expected, not forced, to be unit
    length. Composition goes through quaternions, so the result of
    ``concatenate`` has its angle in [0, pi].
    """

    __slots__ = ("_angle", "_axis")

    # Mutable value type
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, angle: float = 0.0, axis: Optional[Vector3] = None) -> None:
        self._angle: float = float(angle)
        self._axis: NDArray[np.float64] = (
            np.array([1.0, 0.0, 0.0], dtype=np.float64)
            if axis is None
            else axis.to_numpy()
        )

    @classmethod
    def _wrap(cls, angle: float, axis: NDArray[np.float64]) -> "AngleAxis":
        aa: AngleAxis = cls.__new__(cls)
        aa._angle = float(angle)
        aa._axis = axis
        return aa

    @classmethod
    def identity(cls) -> "AngleAxis":
        """Return the identity rotation, zero angle about X."""
        return cls(0.0, Vector3.unit_x())

    @classmethod
    def from_quaternion(cls, q: Quaternion) -> "AngleAxis":
        """Create the angle-axis equivalent of a quaternion."""
        aa: AngleAxis = cls()
        aa.set_from_quaternion(q)
        return aa

    @classmethod
    def from_euler(
        cls, angles: Vector3, axis0: int, axis1: int, axis2: int
    ) -> "AngleAxis":
        """Create a rotation from Euler angles, see ``Quaternion.set_from_euler()``."""
        aa: AngleAxis = cls()
        aa.set_from_euler(angles, axis0, axis1, axis2)
        return aa

    @classmethod
    def from_matrix(cls, matrix: DenseMatrix) -> "AngleAxis":
        """Create the angle-axis equivalent of a 3x3 rotation matrix."""
        aa: AngleAxis = cls()
        aa.set_from_matrix(matrix)
        return aa

    @classmethod
    def from_list(cls, values: Sequence[Any]) -> "AngleAxis":
        """Create from ``[angle, [x, y, z]]``."""
        if len(values) != 2:
            raise DimensionMismatch("AngleAxis needs [angle, [x, y, z]]")
        angle, axis = values
        return cls(float(angle), Vector3.from_list(axis))

    @property
    def angle(self) -> float:
        """Return the rotation angle in radians."""
        return self._angle

    @angle.setter
    def angle(self, value: float) -> None:
        self._angle = float(value)

    def axis(self) -> Vector3:
        """Return a copy of the rotation axis."""
        return Vector3._wrap(self._axis.copy())

    def set_axis(self, axis: Vector3) -> None:
        """Replace the rotation axis."""
        self._axis = axis.to_numpy()

    def to_list(self) -> List[Any]:
        """Return ``[angle, [x, y, z]]``."""
        return [self._angle, [float(c) for c in self._axis]]

    def copy(self) -> "AngleAxis":
        """Return an independent copy."""
        return AngleAxis._wrap(self._angle, self._axis.copy())

    def __copy__(self) -> "AngleAxis":
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> "AngleAxis":
        return self.copy()

    def to_quaternion(self) -> Quaternion:
        """Return the equivalent quaternion."""
        return Quaternion._wrap(SO3.axis_angle_to_quaternion(self._angle, self._axis))

    def to_scaled_axis(self) -> Vector3:
        """Return the rotation vector, axis scaled by angle."""
        return Vector3._wrap(self._axis * self._angle)

    def rotation_matrix(self) -> NDArray[np.float64]:
        return SO3.axis_angle_to_matrix(self._angle, self._axis)

    def concatenate(self, other: "AngleAxis") -> "AngleAxis":
        """Return the rotation applying ``other`` first, then ``self``."""
        q: NDArray[np.float64] = SO3.hamilton(
            SO3.axis_angle_to_quaternion(self._angle, self._axis),
            SO3.axis_angle_to_quaternion(other._angle, other._axis),
        )
        return AngleAxis._wrap(*SO3.quaternion_to_axis_angle(q))

    def inverse(self) -> "AngleAxis":
        """Return the opposite rotation about the same axis."""
        return AngleAxis._wrap(-self._angle, self._axis.copy())

    def set_from_quaternion(self, q: Quaternion) -> None:
        """Reset from a quaternion."""
        self._set_from_wxyz(q.to_numpy())

    def set_from_euler(
        self, angles: Vector3, axis0: int, axis1: int, axis2: int
    ) -> None:
        """Reset from Euler angles, see ``Quaternion.set_from_euler()``."""
        self._set_from_wxyz(
            SO3.euler_to_quaternion(angles.to_list(), axis0, axis1, axis2)
        )

    def set_from_matrix(self, matrix: DenseMatrix) -> None:
        """Reset from a 3x3 rotation matrix."""
        if matrix.shape != (3, 3):
            raise DimensionMismatch(
                f"Rotation matrix must be 3x3, got {matrix.rows}x{matrix.cols}"
            )
        self._set_from_wxyz(SO3.matrix_to_quaternion(matrix.to_numpy()))

    def _set_from_wxyz(self, wxyz: NDArray[np.float64]) -> None:
        self._angle, self._axis = SO3.quaternion_to_axis_angle(wxyz)

    def is_approx(
        self,
        other: "AngleAxis",
        tolerance: float = MathConstants.DUMMY_PRECISION,
    ) -> bool:
        """Check fuzzy equality of axes and angles."""
        return is_approx_array(self._axis, other._axis, tolerance) and is_approx_scalar(
            self._angle, other._angle, tolerance
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AngleAxis):
            return NotImplemented
        return self._angle == other._angle and bool(
            np.array_equal(self._axis, other._axis)
        )

    def __mul__(self, other: object) -> Any:
        if isinstance(other, AngleAxis):
            return self.concatenate(other)
        if isinstance(other, Vector3):
            return self.transform(other)
        return NotImplemented

    def __repr__(self) -> str:
        x, y, z = (float(c) for c in self._axis)
        return f"AngleAxis(angle {self._angle:g}, axis({x:g}, {y:g}, {z:g}))"
