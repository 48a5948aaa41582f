################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Dense numpy-backed storage shared by vectors and matrices.

Responsibility:
    Hold a privately owned float64 buffer and implement the elementwise
    algebra once for both fixed-size and variable-size types.

Data contract:
    - Vectors are 1D arrays, matrices are 2D arrays.
    - Every operation that returns a value allocates a new buffer; no
      accessor hands out a view into ``_data``.
    - Fixed-size subclasses never change shape.

Equality:
    ``==`` is exact and requires both operands to be the same class.
    ``is_approx()`` uses the relative norm test from ``approx.py``.
"""

from __future__ import annotations

import numbers
from typing import Any
from typing import Iterator
from typing import List
from typing import Tuple
from typing import Type
from typing import TypeVar

import numpy as np
from numpy.typing import NDArray

from .approx import check_index
from .approx import ensure_same_shape
from .approx import is_approx_array
from .approx import stable_norm
from .constants import MathConstants
from .errors import DegenerateOperation
from .errors import DimensionMismatch


VectorT = TypeVar("VectorT", bound="DenseVector")
MatrixT = TypeVar("MatrixT", bound="DenseMatrix")


class DenseVector:
    """Base class for dense real vectors."""

    __slots__ = ("_data",)

    # Mutable value type
    __hash__ = None  # type: ignore[assignment]

    _data: NDArray[np.float64]

    @classmethod
    def _wrap(cls: Type[VectorT], data: NDArray[np.float64]) -> VectorT:
        """Create an instance owning the given buffer without copying it."""
        obj: VectorT = cls.__new__(cls)
        obj._data = data
        return obj

    @property
    def size(self) -> int:
        """Return the number of elements."""
        return int(self._data.shape[0])

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[float]:
        return iter(self.to_list())

    def get(self, index: int) -> float:
        """Return the element at ``index``."""
        return float(self._data[check_index(index, self.size)])

    def set(self, index: int, value: float) -> None:
        """Set the element at ``index``."""
        self._data[check_index(index, self.size)] = float(value)

    def __getitem__(self, index: int) -> float:
        return self.get(index)

    def __setitem__(self, index: int, value: float) -> None:
        self.set(index, value)

    def to_list(self) -> List[float]:
        """Return the elements as a list of floats."""
        return [float(v) for v in self._data]

    def to_numpy(self) -> NDArray[np.float64]:
        """Return a copy of the elements as a numpy array."""
        return np.array(self._data, dtype=np.float64)

    def copy(self: VectorT) -> VectorT:
        """Return an independent copy."""
        return self._wrap(self._data.copy())

    def __copy__(self: VectorT) -> VectorT:
        return self.copy()

    def __deepcopy__(self: VectorT, memo: dict[int, Any]) -> VectorT:
        return self.copy()

    def norm(self) -> float:
        """Return the Euclidean norm."""
        return stable_norm(self._data)

    def squared_norm(self) -> float:
        """Return the squared Euclidean norm."""
        return float(np.dot(self._data, self._data))

    def normalize(self: VectorT) -> VectorT:
        """Return a unit-length copy of this vector."""
        return self._wrap(self._normalized_data())

    def normalize_in_place(self) -> None:
        """Scale this vector to unit length."""
        self._data = self._normalized_data()

    def _normalized_data(self) -> NDArray[np.float64]:
        norm: float = self.norm()
        if norm == 0.0:
            raise DegenerateOperation(
                f"Cannot normalize {type(self).__name__} with zero norm"
            )
        return self._data / norm

    def dot(self, other: DenseVector) -> float:
        """Return the dot product with another vector of the same size."""
        ensure_same_shape(self._data, other._data, "dot")
        return float(np.dot(self._data, other._data))

    def is_approx(
        self,
        other: DenseVector,
        tolerance: float = MathConstants.DUMMY_PRECISION,
    ) -> bool:
        """Check fuzzy equality with another vector of the same size."""
        return is_approx_array(self._data, other._data, tolerance)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DenseVector) or type(other) is not type(self):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    def __add__(self: VectorT, other: object) -> VectorT:
        if not isinstance(other, DenseVector):
            return NotImplemented
        ensure_same_shape(self._data, other._data, "addition")
        return self._wrap(self._data + other._data)

    def __sub__(self: VectorT, other: object) -> VectorT:
        if not isinstance(other, DenseVector):
            return NotImplemented
        ensure_same_shape(self._data, other._data, "subtraction")
        return self._wrap(self._data - other._data)

    def __mul__(self: VectorT, scalar: object) -> VectorT:
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return self._wrap(self._data * float(scalar))

    def __rmul__(self: VectorT, scalar: object) -> VectorT:
        return self.__mul__(scalar)

    def __truediv__(self: VectorT, scalar: object) -> VectorT:
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return self._wrap(self._data / float(scalar))

    def __neg__(self: VectorT) -> VectorT:
        return self._wrap(-self._data)


class DenseMatrix:
    """Base class for dense real matrices."""

    __slots__ = ("_data",)

    # Mutable value type
    __hash__ = None  # type: ignore[assignment]

    _data: NDArray[np.float64]

    @classmethod
    def _wrap(cls: Type[MatrixT], data: NDArray[np.float64]) -> MatrixT:
        """Create an instance owning the given buffer without copying it."""
        obj: MatrixT = cls.__new__(cls)
        obj._data = data
        return obj

    def _wrap_result(self, data: NDArray[np.float64]) -> DenseMatrix:
        """Wrap the result of a shape-changing operation."""
        return self._wrap(data)

    @property
    def rows(self) -> int:
        """Return the number of rows."""
        return int(self._data.shape[0])

    @property
    def cols(self) -> int:
        """Return the number of columns."""
        return int(self._data.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        """Return ``(rows, cols)``."""
        return (self.rows, self.cols)

    @property
    def size(self) -> int:
        """Return the number of elements."""
        return self.rows * self.cols

    def get(self, row: int, col: int) -> float:
        """Return the element at ``(row, col)``."""
        i: int = check_index(row, self.rows, "row")
        j: int = check_index(col, self.cols, "column")
        return float(self._data[i, j])

    def set(self, row: int, col: int, value: float) -> None:
        """Set the element at ``(row, col)``."""
        i: int = check_index(row, self.rows, "row")
        j: int = check_index(col, self.cols, "column")
        self._data[i, j] = float(value)

    def __getitem__(self, index: Tuple[int, int]) -> float:
        row, col = index
        return self.get(row, col)

    def __setitem__(self, index: Tuple[int, int], value: float) -> None:
        row, col = index
        self.set(row, col, value)

    def to_list(self, column_major: bool = True) -> List[float]:
        """Return the elements flattened in column-major or row-major order."""
        order: str = "F" if column_major else "C"
        return [float(v) for v in self._data.flatten(order=order)]

    def to_numpy(self) -> NDArray[np.float64]:
        """Return a copy of the elements as a 2D numpy array."""
        return np.array(self._data, dtype=np.float64)

    def copy(self: MatrixT) -> MatrixT:
        """Return an independent copy."""
        return self._wrap(self._data.copy())

    def __copy__(self: MatrixT) -> MatrixT:
        return self.copy()

    def __deepcopy__(self: MatrixT, memo: dict[int, Any]) -> MatrixT:
        return self.copy()

    def norm(self) -> float:
        """Return the Frobenius norm."""
        return stable_norm(self._data)

    def transpose(self) -> DenseMatrix:
        """Return the transposed matrix."""
        return self._wrap_result(np.ascontiguousarray(self._data.T))

    @property
    def T(self) -> DenseMatrix:
        return self.transpose()

    def dot_m(self, other: DenseMatrix) -> DenseMatrix:
        """Return the matrix product ``self * other``."""
        if self.cols != other.rows:
            raise DimensionMismatch(
                f"Matrix product of {self.shape} and {other.shape} requires "
                f"{self.cols} == {other.rows}"
            )
        return self._wrap_result(self._data @ other._data)

    def __matmul__(self, other: object) -> Any:
        if isinstance(other, DenseMatrix):
            return self.dot_m(other)
        return NotImplemented

    def is_approx(
        self,
        other: DenseMatrix,
        tolerance: float = MathConstants.DUMMY_PRECISION,
    ) -> bool:
        """Check fuzzy equality with another matrix of the same shape."""
        return is_approx_array(self._data, other._data, tolerance)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DenseMatrix) or type(other) is not type(self):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    def __add__(self: MatrixT, other: object) -> MatrixT:
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        ensure_same_shape(self._data, other._data, "addition")
        return self._wrap(self._data + other._data)

    def __sub__(self: MatrixT, other: object) -> MatrixT:
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        ensure_same_shape(self._data, other._data, "subtraction")
        return self._wrap(self._data - other._data)

    def __mul__(self: MatrixT, scalar: object) -> MatrixT:
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return self._wrap(self._data * float(scalar))

    def __rmul__(self: MatrixT, scalar: object) -> MatrixT:
        return self.__mul__(scalar)

    def __truediv__(self: MatrixT, scalar: object) -> MatrixT:
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return self._wrap(self._data / float(scalar))

    def __neg__(self: MatrixT) -> MatrixT:
        return self._wrap(-self._data)

    def __repr__(self) -> str:
        rows: List[str] = [
            " ".join(f"{float(v):g}" for v in self._data[i]) for i in range(self.rows)
        ]
        body: str = "\n".join(rows)
        return f"{type(self).__name__}(\n{body}\n)"
