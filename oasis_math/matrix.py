################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Fixed-size 4x4 and variable-size dense matrices."""

from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any
from typing import Optional
from typing import Sequence
from typing import cast

import numpy as np
from numpy.typing import NDArray

from .approx import check_index
from .approx import check_size
from .dense import DenseMatrix
from .dense import DenseVector
from .errors import DimensionMismatch
from .vector import VectorN


if TYPE_CHECKING:
    from .svd import JacobiSVD


def _fill(
    values: Sequence[float],
    rows: int,
    cols: int,
    column_major: bool,
) -> NDArray[np.float64]:
    """Lay out flat values into a rows x cols array, zero-filling the rest."""
    if len(values) > rows * cols:
        raise DimensionMismatch(
            f"Got {len(values)} values for a {rows}x{cols} matrix"
        )
    flat: NDArray[np.float64] = np.zeros(rows * cols, dtype=np.float64)
    flat[: len(values)] = np.asarray(values, dtype=np.float64)
    order: str = "F" if column_major else "C"
    return np.array(flat.reshape((rows, cols), order=order), dtype=np.float64)


class MatrixN(DenseMatrix):
    """Variable-size matrix of doubles."""

    __slots__ = ()

    def __init__(self, rows: int = 0, cols: int = 0) -> None:
        self._data = np.zeros(
            (check_size(rows, "rows"), check_size(cols, "cols")), dtype=np.float64
        )

    @classmethod
    def zero(cls, rows: int, cols: int) -> "MatrixN":
        """Return a zero matrix."""
        return cls(rows, cols)

    @classmethod
    def identity(cls, rows: int, cols: Optional[int] = None) -> "MatrixN":
        """Return an identity matrix, square unless ``cols`` is given."""
        n_cols: int = rows if cols is None else cols
        return cls._wrap(
            np.eye(check_size(rows, "rows"), check_size(n_cols, "cols"), dtype=np.float64)
        )

    @classmethod
    def from_numpy(cls, array: Any) -> "MatrixN":
        """Create a matrix from a copy of a 2D array-like."""
        data: NDArray[np.float64] = np.array(array, dtype=np.float64)
        if data.ndim != 2:
            raise DimensionMismatch(f"Expected a 2D array, got {data.ndim}D")
        return cls._wrap(data)

    @classmethod
    def from_list(
        cls,
        values: Sequence[float],
        rows: Optional[int] = None,
        cols: Optional[int] = None,
        column_major: bool = True,
    ) -> "MatrixN":
        """Create a matrix from flat values.

        With neither dimension given the values form a single column. With
        one dimension given the other is derived from the number of values.
        """
        if rows is None and cols is None:
            rows, cols = len(values), 1
        matrix: MatrixN = cls()
        matrix.set_from_list(values, rows, cols, column_major)
        return matrix

    def set_from_list(
        self,
        values: Sequence[float],
        rows: Optional[int] = None,
        cols: Optional[int] = None,
        column_major: bool = True,
    ) -> None:
        """Resize to the given shape and fill with flat values.

        Missing dimensions are derived from the number of values, or kept
        from the current shape when both are omitted. Unassigned elements
        are zero.
        """
        n_rows: int
        n_cols: int
        if rows is not None and cols is not None:
            n_rows, n_cols = check_size(rows, "rows"), check_size(cols, "cols")
        elif cols is not None:
            n_cols = check_size(cols, "cols")
            if n_cols == 0:
                raise DimensionMismatch("Cannot derive rows with zero columns")
            n_rows = -(-len(values) // n_cols)
        elif rows is not None:
            n_rows = check_size(rows, "rows")
            if n_rows == 0:
                raise DimensionMismatch("Cannot derive columns with zero rows")
            n_cols = -(-len(values) // n_rows)
        else:
            n_rows, n_cols = self.rows, self.cols
        self._data = _fill(values, n_rows, n_cols, column_major)

    def _wrap_result(self, data: NDArray[np.float64]) -> "MatrixN":
        return MatrixN._wrap(data)

    def transpose(self) -> "MatrixN":
        """Return the transposed matrix."""
        return MatrixN._wrap(np.ascontiguousarray(self._data.T))

    @property
    def T(self) -> "MatrixN":
        return self.transpose()

    def dot_m(self, other: DenseMatrix) -> "MatrixN":
        """Return the matrix product ``self * other``."""
        return cast(MatrixN, super().dot_m(other))

    def resize(self, rows: int, cols: int) -> None:
        """Change the shape, resetting every element to zero."""
        self._data = np.zeros(
            (check_size(rows, "rows"), check_size(cols, "cols")), dtype=np.float64
        )

    def conservative_resize(self, rows: int, cols: int) -> None:
        """Change the shape, keeping the overlapping block of elements."""
        n_rows: int = check_size(rows, "rows")
        n_cols: int = check_size(cols, "cols")
        data: NDArray[np.float64] = np.zeros((n_rows, n_cols), dtype=np.float64)
        keep_rows: int = min(n_rows, self.rows)
        keep_cols: int = min(n_cols, self.cols)
        data[:keep_rows, :keep_cols] = self._data[:keep_rows, :keep_cols]
        self._data = data

    def get_row(self, row: int) -> VectorN:
        """Return a copy of a row."""
        i: int = check_index(row, self.rows, "row")
        return VectorN._wrap(self._data[i, :].copy())

    def get_column(self, col: int) -> VectorN:
        """Return a copy of a column."""
        j: int = check_index(col, self.cols, "column")
        return VectorN._wrap(self._data[:, j].copy())

    def set_row(self, row: int, vector: DenseVector) -> None:
        """Replace a row with the values of a vector of length ``cols``."""
        i: int = check_index(row, self.rows, "row")
        if vector.size != self.cols:
            raise DimensionMismatch(
                f"Row needs {self.cols} values, got {vector.size}"
            )
        self._data[i, :] = vector.to_numpy()

    def set_column(self, col: int, vector: DenseVector) -> None:
        """Replace a column with the values of a vector of length ``rows``."""
        j: int = check_index(col, self.cols, "column")
        if vector.size != self.rows:
            raise DimensionMismatch(
                f"Column needs {self.rows} values, got {vector.size}"
            )
        self._data[:, j] = vector.to_numpy()

    def dot_v(self, vector: DenseVector) -> VectorN:
        """Return the matrix-vector product ``self * vector``."""
        if vector.size != self.cols:
            raise DimensionMismatch(
                f"Product of a {self.rows}x{self.cols} matrix needs a vector "
                f"of length {self.cols}, got {vector.size}"
            )
        return VectorN._wrap(self._data @ vector.to_numpy())

    def __matmul__(self, other: object) -> Any:
        if isinstance(other, DenseVector):
            return self.dot_v(other)
        return super().__matmul__(other)

    def jacobi_svd(self, flags: int = 0) -> "JacobiSVD":
        """Return a least-squares solver for the current contents.

        :param flags: OR-ed ``COMPUTE_*`` constants selecting which singular
            vectors to compute. ``solve()`` needs both U and V.
        """
        from .svd import JacobiSVD

        return JacobiSVD(self, flags)


class Matrix4(DenseMatrix):
    """4x4 matrix of doubles."""

    __slots__ = ()

    def __init__(self) -> None:
        self._data = np.zeros((4, 4), dtype=np.float64)

    @classmethod
    def identity(cls) -> "Matrix4":
        """Return the 4x4 identity matrix."""
        return cls._wrap(np.eye(4, dtype=np.float64))

    @classmethod
    def from_list(
        cls,
        values: Sequence[float],
        column_major: bool = True,
    ) -> "Matrix4":
        """Create a matrix from up to 16 values, zero-filling the rest."""
        matrix: Matrix4 = cls()
        matrix.set_from_list(values, column_major)
        return matrix

    def set_from_list(self, values: Sequence[float], column_major: bool = True) -> None:
        """Fill from up to 16 values, zero-filling the rest."""
        if len(values) > 16:
            raise DimensionMismatch("array should be of size maximum 16")
        self._data = _fill(values, 4, 4, column_major)

    def to_matrix_n(self) -> MatrixN:
        """Return a copy as a variable-size matrix."""
        return MatrixN._wrap(self._data.copy())

    def _wrap_result(self, data: NDArray[np.float64]) -> DenseMatrix:
        if data.shape == (4, 4):
            return Matrix4._wrap(data)
        return MatrixN._wrap(data)
