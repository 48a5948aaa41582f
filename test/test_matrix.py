################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for MatrixN and Matrix4."""

from __future__ import annotations

import pytest

from oasis_math import DimensionMismatch
from oasis_math import IndexOutOfRange
from oasis_math import JacobiSVD
from oasis_math import Matrix4
from oasis_math import MatrixN
from oasis_math import VectorN


def _matrix_2x2() -> MatrixN:
    return MatrixN.from_list([1.0, 2.0, 3.0, 4.0], 2, 2, column_major=False)


def test_matrix_vector_product() -> None:
    """Checks [[1, 2], [3, 4]] * [1, 1] is [3, 7]."""
    A: MatrixN = _matrix_2x2()
    assert A.dot_v(VectorN([1.0, 1.0])) == VectorN([3.0, 7.0])
    assert A @ VectorN([1.0, 1.0]) == VectorN([3.0, 7.0])

    with pytest.raises(DimensionMismatch):
        A.dot_v(VectorN(3))


def test_list_layout() -> None:
    """Checks column-major is the default flat layout."""
    A: MatrixN = MatrixN.from_list([1.0, 2.0, 3.0, 4.0], 2, 2)
    assert A[0, 1] == 3.0
    assert A[1, 0] == 2.0
    assert A.to_list() == [1.0, 2.0, 3.0, 4.0]
    assert A.to_list(column_major=False) == [1.0, 3.0, 2.0, 4.0]


def test_from_list_derives_shape() -> None:
    """Checks missing dimensions are derived from the value count."""
    column: MatrixN = MatrixN.from_list([1.0, 2.0, 3.0, 4.0])
    assert column.shape == (4, 1)

    partial: MatrixN = MatrixN.from_list([1.0, 2.0, 3.0, 4.0, 5.0], rows=2)
    assert partial.shape == (2, 3)
    assert partial.to_list() == [1.0, 2.0, 3.0, 4.0, 5.0, 0.0]

    with pytest.raises(DimensionMismatch):
        MatrixN.from_list([1.0, 2.0, 3.0], 1, 2)
    with pytest.raises(DimensionMismatch):
        MatrixN.from_list([1.0], cols=0)


def test_set_from_list_keeps_shape() -> None:
    """Checks refilling without dimensions keeps the current shape."""
    A: MatrixN = MatrixN(2, 2)
    A.set_from_list([1.0, 2.0])
    assert A.shape == (2, 2)
    assert A.to_list() == [1.0, 2.0, 0.0, 0.0]


def test_transpose_involution() -> None:
    """Checks transposing twice gives back the matrix."""
    A: MatrixN = MatrixN.from_list([1.0, 2.0, 3.0, 4.0, 5.0, 6.0], 2, 3)
    assert A.transpose().shape == (3, 2)
    assert A.transpose().transpose() == A
    assert A.T.T == A


def test_product_associativity() -> None:
    """Checks (A B) C equals A (B C)."""
    A: MatrixN = _matrix_2x2()
    B: MatrixN = MatrixN.from_list([0.5, -1.0, 2.0, 0.0, 1.0, 3.0], 2, 3)
    C: MatrixN = MatrixN.from_list([1.0, 0.0, -2.0, 4.0, 1.0, 1.0], 3, 2)
    left: MatrixN = A.dot_m(B).dot_m(C)
    right: MatrixN = A @ (B @ C)
    assert left.shape == (2, 2)
    assert left.is_approx(right)


def test_product_dimension_check() -> None:
    """Checks mismatched inner dimensions are rejected."""
    with pytest.raises(DimensionMismatch):
        MatrixN(2, 3).dot_m(MatrixN(2, 3))


def test_identity_product() -> None:
    """Checks multiplying by identity is exact."""
    A: MatrixN = _matrix_2x2()
    assert MatrixN.identity(2) @ A == A
    assert MatrixN.identity(2, 3).shape == (2, 3)


def test_rows_and_columns() -> None:
    """Checks row and column access."""
    A: MatrixN = _matrix_2x2()
    assert A.get_row(1) == VectorN([3.0, 4.0])
    assert A.get_column(0) == VectorN([1.0, 3.0])

    A.set_row(0, VectorN([9.0, 8.0]))
    A.set_column(1, VectorN([7.0, 6.0]))
    assert A.to_list(column_major=False) == [9.0, 7.0, 3.0, 6.0]

    with pytest.raises(DimensionMismatch):
        A.set_row(0, VectorN(3))
    with pytest.raises(IndexOutOfRange):
        A.get_column(2)


def test_element_bounds() -> None:
    """Checks element access is bounds checked."""
    A: MatrixN = MatrixN(2, 3)
    A[1, 2] = 5.0
    assert A.get(1, 2) == 5.0
    with pytest.raises(IndexOutOfRange):
        A.get(2, 0)
    with pytest.raises(IndexOutOfRange):
        A.set(0, 3, 1.0)


def test_resize() -> None:
    """Checks resize and conservative_resize."""
    A: MatrixN = _matrix_2x2()
    A.conservative_resize(3, 1)
    assert A.to_list() == [1.0, 3.0, 0.0]

    A.resize(1, 2)
    assert A == MatrixN(1, 2)

    with pytest.raises(DimensionMismatch):
        A.resize(-1, 2)


def test_arithmetic() -> None:
    """Checks elementwise and scalar arithmetic."""
    A: MatrixN = _matrix_2x2()
    assert (A + A) == 2.0 * A
    assert (A - A) == MatrixN(2, 2)
    assert (A / 2.0) * 2.0 == A
    assert -(-A) == A

    with pytest.raises(DimensionMismatch):
        A + MatrixN(2, 3)


def test_copy_is_independent() -> None:
    """Checks copies and numpy exports do not alias the matrix."""
    A: MatrixN = _matrix_2x2()
    B: MatrixN = A.copy()
    B[0, 0] = 100.0
    A.to_numpy()[0, 0] = 100.0
    assert A[0, 0] == 1.0


def test_matrix4_from_list() -> None:
    """Checks Matrix4 list construction and the 16 value limit."""
    m: Matrix4 = Matrix4.from_list([float(i) for i in range(16)])
    assert m[1, 0] == 1.0
    assert m[0, 1] == 4.0

    partial: Matrix4 = Matrix4.from_list([1.0, 2.0])
    assert partial.to_list()[2:] == [0.0] * 14

    with pytest.raises(DimensionMismatch, match="array should be of size maximum 16"):
        Matrix4.from_list([0.0] * 17)


def test_matrix4_products_stay_fixed_size() -> None:
    """Checks 4x4 results stay Matrix4 and other shapes become MatrixN."""
    m: Matrix4 = Matrix4.identity()
    assert isinstance(m @ m, Matrix4)
    assert isinstance(m.transpose(), Matrix4)
    assert isinstance(m @ MatrixN(4, 2), MatrixN)


def test_matrix4_conversion() -> None:
    """Checks conversion to and comparison with MatrixN."""
    m: Matrix4 = Matrix4.identity()
    assert m.to_matrix_n() == MatrixN.identity(4)
    assert m != MatrixN.identity(4)
    assert m.is_approx(MatrixN.identity(4))


def test_jacobi_svd_factory() -> None:
    """Checks the matrix builds a solver for itself."""
    svd: JacobiSVD = _matrix_2x2().jacobi_svd()
    assert svd.rows == 2
    assert svd.cols == 2
    assert svd.rank() == 2


def test_addition_associativity() -> None:
    """Checks (A + B) + C equals A + (B + C)."""
    A: MatrixN = MatrixN.from_list([0.1, -2.5, 3.3, 1.0e-3, 8.0, 0.7], 2, 3)
    B: MatrixN = MatrixN.from_list([7.1, 0.2, -0.3, 4.0, -6.6, 1.9], 2, 3)
    C: MatrixN = MatrixN.from_list([-1.7, 9.9, 0.01, 2.2, 0.3, -4.4], 2, 3)
    assert ((A + B) + C).is_approx(A + (B + C))

    m: Matrix4 = Matrix4.from_list([0.1 * i for i in range(16)])
    n: Matrix4 = Matrix4.identity()
    assert ((m + n) + m).is_approx(m + (n + m))


def test_from_list_derives_rows_from_cols() -> None:
    """Checks the row count is derived when only columns are given."""
    A: MatrixN = MatrixN.from_list([1.0, 2.0, 3.0, 4.0, 5.0], cols=2)
    assert A.shape == (3, 2)
    assert A.get_column(1) == VectorN([4.0, 5.0, 0.0])


def test_tiny_matrix_norm() -> None:
    """Checks the Frobenius norm of tiny entries does not underflow."""
    A: MatrixN = MatrixN.from_list([3.0e-200, 4.0e-200], 1, 2)
    assert A.norm() == pytest.approx(5.0e-200, rel=1.0e-12, abs=0.0)
    assert not MatrixN(1, 2).is_approx(A)
    assert A != "A"
