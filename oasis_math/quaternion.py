################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Quaternion using the wxyz convention."""

from __future__ import annotations

from typing import Any
from typing import List
from typing import Sequence
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from .approx import is_approx_array
from .approx import stable_norm
from .constants import AXIS_Z
from .constants import MathConstants
from .dense import DenseMatrix
from .errors import DegenerateOperation
from .errors import DimensionMismatch
from .rotation import SO3
from .rotation import Rotation
from .vector import Vector3


class Quaternion(Rotation):
    """Quaternion stored in wxyz order.

    Components may be set freely, so unit norm is not enforced. Rotation
    operations (``transform``, ``matrix``, ``to_euler``) assume a unit
    quaternion; call ``normalize_in_place()`` after editing components.

    ``is_approx`` compares components and does not treat q and -q as equal,
    although both represent the same rotation.
    """

    __slots__ = ("_wxyz",)

    # Mutable value type
    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self, w: float = 1.0, x: float = 0.0, y: float = 0.0, z: float = 0.0
    ) -> None:
        self._wxyz: NDArray[np.float64] = np.array([w, x, y, z], dtype=np.float64)

    @classmethod
    def _wrap(cls, wxyz: NDArray[np.float64]) -> "Quaternion":
        q: Quaternion = cls.__new__(cls)
        q._wxyz = wxyz
        return q

    @classmethod
    def identity(cls) -> "Quaternion":
        """Return the identity rotation."""
        return cls(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_list(cls, values: Sequence[float]) -> "Quaternion":
        """Create a quaternion from [w, x, y, z]."""
        if len(values) != 4:
            raise DimensionMismatch(f"Quaternion needs 4 values, got {len(values)}")
        return cls(values[0], values[1], values[2], values[3])

    @classmethod
    def from_angle_axis(cls, angle: float, axis: Vector3) -> "Quaternion":
        """Create the rotation by ``angle`` radians about ``axis``."""
        q: Quaternion = cls()
        q.set_from_angle_axis(angle, axis)
        return q

    @classmethod
    def from_euler(
        cls, angles: Vector3, axis0: int, axis1: int, axis2: int
    ) -> "Quaternion":
        """Create a rotation from Euler angles, see ``set_from_euler()``."""
        q: Quaternion = cls()
        q.set_from_euler(angles, axis0, axis1, axis2)
        return q

    @classmethod
    def from_matrix(cls, matrix: DenseMatrix) -> "Quaternion":
        """Create a quaternion from a 3x3 rotation matrix."""
        q: Quaternion = cls()
        q.set_from_matrix(matrix)
        return q

    @classmethod
    def from_yaw(cls, yaw: float) -> "Quaternion":
        """Create a rotation of ``yaw`` radians about Z."""
        return cls.from_euler(Vector3(yaw, 0.0, 0.0), 2, 1, 0)

    @property
    def w(self) -> float:
        return float(self._wxyz[0])

    @w.setter
    def w(self, value: float) -> None:
        self._wxyz[0] = float(value)

    @property
    def x(self) -> float:
        return float(self._wxyz[1])

    @x.setter
    def x(self, value: float) -> None:
        self._wxyz[1] = float(value)

    @property
    def y(self) -> float:
        return float(self._wxyz[2])

    @y.setter
    def y(self, value: float) -> None:
        self._wxyz[2] = float(value)

    @property
    def z(self) -> float:
        return float(self._wxyz[3])

    @z.setter
    def z(self, value: float) -> None:
        self._wxyz[3] = float(value)

    @property
    def re(self) -> float:
        """Return the real part."""
        return self.w

    @re.setter
    def re(self, value: float) -> None:
        self.w = value

    @property
    def im(self) -> List[float]:
        """Return the imaginary part as [x, y, z]."""
        return [self.x, self.y, self.z]

    @im.setter
    def im(self, values: Sequence[float]) -> None:
        if len(values) != 3:
            raise DimensionMismatch(f"Imaginary part needs 3 values, got {len(values)}")
        self._wxyz[1:4] = np.asarray(values, dtype=np.float64)

    def to_list(self) -> List[float]:
        """Return the components as [w, x, y, z]."""
        return [float(c) for c in self._wxyz]

    def to_numpy(self) -> NDArray[np.float64]:
        """Return a copy of the wxyz components."""
        return np.array(self._wxyz, dtype=np.float64)

    def copy(self) -> "Quaternion":
        """Return an independent copy."""
        return Quaternion._wrap(self._wxyz.copy())

    def __copy__(self) -> "Quaternion":
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> "Quaternion":
        return self.copy()

    def norm(self) -> float:
        """Return the 4D Euclidean norm."""
        return stable_norm(self._wxyz)

    def squared_norm(self) -> float:
        """Return the squared 4D Euclidean norm."""
        return float(np.dot(self._wxyz, self._wxyz))

    def normalize(self) -> "Quaternion":
        """Return a unit-norm copy of this quaternion."""
        return Quaternion._wrap(self._normalized())

    def normalize_in_place(self) -> None:
        """Scale this quaternion to unit norm."""
        self._wxyz = self._normalized()

    def _normalized(self) -> NDArray[np.float64]:
        norm: float = self.norm()
        if norm == 0.0:
            raise DegenerateOperation("Cannot normalize a zero quaternion")
        return self._wxyz / norm

    def conjugate(self) -> "Quaternion":
        """Return the conjugate (w, -x, -y, -z)."""
        return Quaternion._wrap(self._wxyz * np.array([1.0, -1.0, -1.0, -1.0]))

    def inverse(self) -> "Quaternion":
        """Return the multiplicative inverse, conjugate / squared norm.

        The zero quaternion has no inverse and maps to the zero quaternion.
        """
        n2: float = self.squared_norm()
        if n2 > 0.0:
            return Quaternion._wrap(self.conjugate()._wxyz / n2)
        return Quaternion(0.0, 0.0, 0.0, 0.0)

    def concatenate(self, other: "Quaternion") -> "Quaternion":
        """Return the Hamilton product ``self * other``.

        The result applies ``other`` first, then ``self``.
        """
        return Quaternion._wrap(SO3.hamilton(self._wxyz, other._wxyz))

    def rotation_matrix(self) -> NDArray[np.float64]:
        return SO3.quaternion_to_matrix(self._wxyz)

    def transform(self, v: Vector3) -> Vector3:
        """Rotate a 3-vector by this unit quaternion."""
        vec: NDArray[np.float64] = v.to_numpy()
        q_vec: NDArray[np.float64] = self._wxyz[1:4]
        uv: NDArray[np.float64] = np.cross(q_vec, vec)
        uv = uv + uv
        return Vector3._wrap(vec + self._wxyz[0] * uv + np.cross(q_vec, uv))

    def set_from_angle_axis(self, angle: float, axis: Vector3) -> None:
        """Reset to the rotation by ``angle`` radians about ``axis``."""
        self._wxyz = SO3.axis_angle_to_quaternion(float(angle), axis.to_numpy())

    def set_from_euler(
        self, angles: Vector3, axis0: int, axis1: int, axis2: int
    ) -> None:
        """Reset to ``R(axis0, angles.x) * R(axis1, angles.y) * R(axis2, angles.z)``.

        Axis indices 0, 1 and 2 select X, Y and Z. ``to_euler()`` is the
        inverse for axes (2, 1, 0).
        """
        self._wxyz = SO3.euler_to_quaternion(angles.to_list(), axis0, axis1, axis2)

    def set_from_matrix(self, matrix: DenseMatrix) -> None:
        """Reset from a 3x3 rotation matrix."""
        if matrix.shape != (3, 3):
            raise DimensionMismatch(
                f"Rotation matrix must be 3x3, got {matrix.rows}x{matrix.cols}"
            )
        self._wxyz = SO3.matrix_to_quaternion(matrix.to_numpy())

    def to_angle_axis(
        self, eps: float = MathConstants.AXIS_EPS
    ) -> Tuple[float, Vector3]:
        """Return an (angle, axis) pair equivalent to this unit quaternion.

        The angle lies in [0, pi] for w >= 0. If the rotation is closer to
        zero than ``eps`` the axis is undefined and Z is returned.
        """
        vec: NDArray[np.float64] = self._wxyz[1:4]
        norm: float = stable_norm(vec)
        if norm < eps:
            return 0.0, Vector3.unit(AXIS_Z)
        angle: float = 2.0 * float(np.arctan2(norm, self._wxyz[0]))
        return angle, Vector3._wrap(vec / norm)

    def to_scaled_axis(self, eps: float = MathConstants.AXIS_EPS) -> Vector3:
        """Return the rotation vector, axis scaled by angle."""
        angle, axis = self.to_angle_axis(eps)
        return axis * angle

    def is_approx(
        self,
        other: "Quaternion",
        tolerance: float = MathConstants.DUMMY_PRECISION,
    ) -> bool:
        """Check fuzzy equality of the wxyz components."""
        return is_approx_array(self._wxyz, other._wxyz, tolerance)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return bool(np.array_equal(self._wxyz, other._wxyz))

    def __mul__(self, other: object) -> Any:
        if isinstance(other, Quaternion):
            return self.concatenate(other)
        if isinstance(other, Vector3):
            return self.transform(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Quaternion({self.w:g}, ({self.x:g}, {self.y:g}, {self.z:g}))"
