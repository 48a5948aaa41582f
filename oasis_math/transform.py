################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Rigid-body and affine 3D transforms.

A transform maps a point p to ``L @ p + t`` where L is the 3x3 linear part
and t the translation. Composition follows matrix order: ``a.concatenate(b)``
applies b first, then a.

The in-place edits mirror the homogeneous matrix products:

    translate(v)     T = T * Translation(v)
    pretranslate(v)  T = Translation(v) * T
    rotate(r)        T = T * Rotation(r)
    prerotate(r)     T = Rotation(r) * T
"""

from __future__ import annotations

from typing import Any
from typing import Type
from typing import TypeVar
from typing import Union

import numpy as np
from numpy.typing import NDArray

from .approx import is_approx_array
from .constants import MathConstants
from .dense import DenseMatrix
from .errors import DegenerateOperation
from .errors import DimensionMismatch
from .matrix import MatrixN
from .quaternion import Quaternion
from .rotation import SO3
from .rotation import Rotation
from .vector import Vector3


TransformT = TypeVar("TransformT", bound="Transform3")


class Transform3:
    """Base class for 3D transforms with a linear part and a translation."""

    __slots__ = ("_linear", "_translation")

    # Mutable value type
    __hash__ = None  # type: ignore[assignment]

    def __init__(self) -> None:
        """Create the identity transform."""
        self._linear: NDArray[np.float64] = np.eye(3, dtype=np.float64)
        self._translation: NDArray[np.float64] = np.zeros(3, dtype=np.float64)

    @classmethod
    def _wrap(
        cls: Type[TransformT],
        linear: NDArray[np.float64],
        translation: NDArray[np.float64],
    ) -> TransformT:
        t: TransformT = cls.__new__(cls)
        t._linear = linear
        t._translation = translation
        return t

    @classmethod
    def identity(cls: Type[TransformT]) -> TransformT:
        """Return the identity transform."""
        return cls()

    @classmethod
    def from_position_orientation(
        cls: Type[TransformT], position: Vector3, orientation: Rotation
    ) -> TransformT:
        """Create the transform rotating by ``orientation``, then moving to ``position``."""
        t: TransformT = cls()
        t.prerotate(orientation)
        t.pretranslate(position)
        return t

    def translation(self) -> Vector3:
        """Return a copy of the translation."""
        return Vector3._wrap(self._translation.copy())

    def linear(self) -> MatrixN:
        """Return a copy of the 3x3 linear part."""
        return MatrixN._wrap(self._linear.copy())

    def rotation(self) -> Quaternion:
        """Return the rotational part as a quaternion."""
        return Quaternion._wrap(SO3.matrix_to_quaternion(self._rotation_matrix()))

    def _rotation_matrix(self) -> NDArray[np.float64]:
        raise NotImplementedError

    def translate(self, v: Vector3) -> None:
        """Apply a translation expressed in this transform's own frame."""
        self._translation = self._translation + self._linear @ v.to_numpy()

    def pretranslate(self, v: Vector3) -> None:
        """Apply a translation after this transform."""
        self._translation = self._translation + v.to_numpy()

    def rotate(self, rotation: Rotation) -> None:
        """Apply a rotation before this transform."""
        self._linear = self._linear @ rotation.rotation_matrix()

    def prerotate(self, rotation: Rotation) -> None:
        """Apply a rotation after this transform."""
        R: NDArray[np.float64] = rotation.rotation_matrix()
        self._linear = R @ self._linear
        self._translation = R @ self._translation

    def concatenate(self: TransformT, other: TransformT) -> TransformT:
        """Return the transform applying ``other`` first, then ``self``."""
        if type(other) is not type(self):
            raise TypeError(
                f"Cannot concatenate {type(self).__name__} with {type(other).__name__}"
            )
        return self._wrap(
            self._linear @ other._linear,
            self._linear @ other._translation + self._translation,
        )

    def transform(self, point: Vector3) -> Vector3:
        """Transform a point by the linear part and translation."""
        return Vector3._wrap(self._linear @ point.to_numpy() + self._translation)

    def inverse(self: TransformT) -> TransformT:
        """Return the inverse transform."""
        linear_inv: NDArray[np.float64] = self._inverse_linear()
        return self._wrap(linear_inv, -(linear_inv @ self._translation))

    def _inverse_linear(self) -> NDArray[np.float64]:
        raise NotImplementedError

    def _matrix4(self) -> NDArray[np.float64]:
        mat: NDArray[np.float64] = np.eye(4, dtype=np.float64)
        mat[:3, :3] = self._linear
        mat[:3, 3] = self._translation
        return mat

    def matrix(self) -> MatrixN:
        """Return the homogeneous 4x4 matrix."""
        return MatrixN._wrap(self._matrix4())

    def is_approx(
        self,
        other: Transform3,
        tolerance: float = MathConstants.DUMMY_PRECISION,
    ) -> bool:
        """Check fuzzy equality of the homogeneous matrices."""
        return is_approx_array(self._matrix4(), other._matrix4(), tolerance)

    def copy(self: TransformT) -> TransformT:
        """Return an independent copy."""
        return self._wrap(self._linear.copy(), self._translation.copy())

    def __copy__(self: TransformT) -> TransformT:
        return self.copy()

    def __deepcopy__(self: TransformT, memo: dict[int, Any]) -> TransformT:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transform3) or type(other) is not type(self):
            return NotImplemented
        return bool(np.array_equal(self._matrix4(), other._matrix4()))

    def __mul__(self, other: object) -> Any:
        if isinstance(other, Transform3):
            return self.concatenate(other)
        if isinstance(other, Vector3):
            return self.transform(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self.matrix()!r}"


class Isometry3(Transform3):
    """Rigid-body transform, an orthonormal linear part plus a translation.

    Orthonormality is preserved by composition only if every rotation
    applied is itself orthonormal; it is not re-projected.
    """

    __slots__ = ()

    def _rotation_matrix(self) -> NDArray[np.float64]:
        return self._linear

    def _inverse_linear(self) -> NDArray[np.float64]:
        return np.ascontiguousarray(self._linear.T)


class Affine3(Transform3):
    """General affine transform, any 3x3 linear part plus a translation."""

    __slots__ = ()

    @classmethod
    def from_matrix(cls, matrix: DenseMatrix) -> "Affine3":
        """Create from a 4x4 homogeneous or 3x4 affine matrix."""
        if matrix.shape not in ((4, 4), (3, 4)):
            raise DimensionMismatch(
                f"Affine matrix must be 4x4 or 3x4, got {matrix.rows}x{matrix.cols}"
            )
        data: NDArray[np.float64] = matrix.to_numpy()
        return cls._wrap(
            np.array(data[:3, :3], dtype=np.float64),
            np.array(data[:3, 3], dtype=np.float64),
        )

    def _rotation_matrix(self) -> NDArray[np.float64]:
        # Rotation factor of the polar decomposition
        return SO3.project_to_so3(self._linear)

    def _inverse_linear(self) -> NDArray[np.float64]:
        try:
            return np.linalg.inv(self._linear)
        except np.linalg.LinAlgError as exc:
            raise DegenerateOperation("Affine linear part is singular") from exc

    def scale(self, factor: Union[float, Vector3]) -> None:
        """Apply a scaling before this transform."""
        self._linear = self._linear @ np.diag(self._scale_diagonal(factor))

    def prescale(self, factor: Union[float, Vector3]) -> None:
        """Apply a scaling after this transform."""
        diag: NDArray[np.float64] = self._scale_diagonal(factor)
        self._linear = diag[:, np.newaxis] * self._linear
        self._translation = diag * self._translation

    @staticmethod
    def _scale_diagonal(factor: Union[float, Vector3]) -> NDArray[np.float64]:
        if isinstance(factor, Vector3):
            return factor.to_numpy()
        return np.full(3, float(factor), dtype=np.float64)
