################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Fixed-size and variable-size dense vectors."""

from __future__ import annotations

import math
from typing import Iterable
from typing import Sequence
from typing import Union

import numpy as np
from numpy.typing import NDArray

from .approx import check_size
from .dense import DenseVector
from .errors import DimensionMismatch


class VectorN(DenseVector):
    """Variable-length vector of doubles."""

    __slots__ = ()

    def __init__(self, size_or_values: Union[int, Iterable[float]] = 0) -> None:
        """Create a zero vector of a given length, or a vector of values."""
        if isinstance(size_or_values, (int, np.integer)):
            self._data = np.zeros(check_size(size_or_values), dtype=np.float64)
        else:
            self._data = np.array(list(size_or_values), dtype=np.float64)
            if self._data.ndim != 1:
                raise DimensionMismatch("VectorN values must be one-dimensional")

    @classmethod
    def from_list(cls, values: Sequence[float]) -> "VectorN":
        """Create a vector holding the given values."""
        return cls(values)

    @classmethod
    def zero(cls, size: int) -> "VectorN":
        """Return a zero vector of the given length."""
        return cls(size)

    def resize(self, size: int) -> None:
        """Change the length, resetting every element to zero."""
        self._data = np.zeros(check_size(size), dtype=np.float64)

    def conservative_resize(self, size: int) -> None:
        """Change the length, keeping the elements still in range."""
        new_size: int = check_size(size)
        data: NDArray[np.float64] = np.zeros(new_size, dtype=np.float64)
        keep: int = min(new_size, self.size)
        data[:keep] = self._data[:keep]
        self._data = data

    def __repr__(self) -> str:
        values: str = " ".join(f"{v:g}" for v in self.to_list())
        return f"VectorN({values})"


class Vector3(DenseVector):
    """3-vector of doubles with named x, y and z accessors."""

    __slots__ = ()

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self._data = np.array([x, y, z], dtype=np.float64)

    @classmethod
    def from_list(cls, values: Sequence[float]) -> "Vector3":
        """Create a vector from a sequence of three values."""
        if len(values) != 3:
            raise DimensionMismatch(f"Vector3 needs 3 values, got {len(values)}")
        return cls(values[0], values[1], values[2])

    @classmethod
    def unit_x(cls) -> "Vector3":
        """Return the (1, 0, 0) unit vector."""
        return cls(1.0, 0.0, 0.0)

    @classmethod
    def unit_y(cls) -> "Vector3":
        """Return the (0, 1, 0) unit vector."""
        return cls(0.0, 1.0, 0.0)

    @classmethod
    def unit_z(cls) -> "Vector3":
        """Return the (0, 0, 1) unit vector."""
        return cls(0.0, 0.0, 1.0)

    @classmethod
    def unit(cls, axis: int) -> "Vector3":
        """Return the unit vector along basis axis 0, 1 or 2."""
        vec: Vector3 = cls()
        vec.set(axis, 1.0)
        return vec

    @classmethod
    def zero(cls) -> "Vector3":
        """Return the (0, 0, 0) vector."""
        return cls()

    @property
    def x(self) -> float:
        return float(self._data[0])

    @x.setter
    def x(self, value: float) -> None:
        self._data[0] = float(value)

    @property
    def y(self) -> float:
        return float(self._data[1])

    @y.setter
    def y(self, value: float) -> None:
        self._data[1] = float(value)

    @property
    def z(self) -> float:
        return float(self._data[2])

    @z.setter
    def z(self, value: float) -> None:
        self._data[2] = float(value)

    @property
    def data(self) -> list[float]:
        """Return the [x, y, z] triple."""
        return self.to_list()

    @data.setter
    def data(self, values: Sequence[float]) -> None:
        if len(values) != 3:
            raise DimensionMismatch(f"Vector3 needs 3 values, got {len(values)}")
        self._data = np.array(values, dtype=np.float64)

    def cross(self, other: "Vector3") -> "Vector3":
        """Return the cross product ``self x other``."""
        return Vector3._wrap(np.cross(self._data, other._data))

    def angle_to(self, other: "Vector3") -> float:
        """Return the planar angle from self to other about Z, in [-pi, pi]."""
        angle: float = math.atan2(other.y, other.x) - math.atan2(self.y, self.x)
        if angle > math.pi:
            angle -= 2.0 * math.pi
        if angle < -math.pi:
            angle += 2.0 * math.pi
        return angle

    def signed_angle_to(self, other: "Vector3", axis: "Vector3") -> float:
        """Return the angle rotating self onto other, signed about ``axis``.

        The sign is positive when the rotation from self to other is
        counter-clockwise when looking down ``axis``.
        """
        cos_angle: float = self.dot(other) / self.norm() / other.norm()
        # Rounding can push the cosine just outside [-1, 1]
        unsigned: float = math.acos(max(-1.0, min(1.0, cos_angle)))
        direction: float = self.cross(other).dot(axis)
        return unsigned if direction > 0.0 else -unsigned

    def __repr__(self) -> str:
        return f"Vector3({self.x:g}, {self.y:g}, {self.z:g})"
