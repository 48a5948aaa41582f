################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for the SVD least-squares solver."""

from __future__ import annotations

import logging

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_math import COMPUTE_FULL_U
from oasis_math import COMPUTE_FULL_V
from oasis_math import COMPUTE_THIN_U
from oasis_math import COMPUTE_THIN_V
from oasis_math import DimensionMismatch
from oasis_math import InvalidOptions
from oasis_math import InvalidState
from oasis_math import JacobiSVD
from oasis_math import LeastSquaresSolver
from oasis_math import MatrixN
from oasis_math import VectorN


THIN_UV: int = COMPUTE_THIN_U | COMPUTE_THIN_V


def _tall_matrix() -> MatrixN:
    return MatrixN.from_list(
        [1.0, 0.0, 0.0, 1.0, 1.0, 1.0, 2.0, -1.0], 4, 2, column_major=False
    )


def test_solve_consistent_system() -> None:
    """Checks an overdetermined but consistent system is solved exactly."""
    A: MatrixN = MatrixN.from_list([1.0, 0.0, 0.0, 1.0, 1.0, 1.0], 3, 2, False)
    svd: JacobiSVD = A.jacobi_svd(THIN_UV)
    x: VectorN = svd.solve(VectorN([1.0, 2.0, 3.0]))
    assert x.is_approx(VectorN([1.0, 2.0]), 1.0e-9)


def test_solve_least_squares() -> None:
    """Checks an inconsistent system returns the least-squares solution."""
    A: MatrixN = MatrixN.from_list([1.0, 1.0], 2, 1)
    x: VectorN = JacobiSVD(A, THIN_UV).solve(VectorN([1.0, 3.0]))
    assert x.size == 1
    assert x[0] == pytest.approx(2.0)


def test_solve_matches_normal_equations() -> None:
    """Checks the solution satisfies the normal equations."""
    A: MatrixN = _tall_matrix()
    b: VectorN = VectorN([1.0, -2.0, 0.5, 3.0])
    x: VectorN = A.jacobi_svd(THIN_UV).solve(b)

    A_np: NDArray[np.float64] = A.to_numpy()
    residual: NDArray[np.float64] = A_np @ x.to_numpy() - b.to_numpy()
    assert np.allclose(A_np.T @ residual, np.zeros(2), atol=1.0e-10)


def test_solve_rank_deficient_minimum_norm() -> None:
    """Checks a rank-deficient system returns the minimum-norm solution."""
    A: MatrixN = MatrixN.from_list([1.0, 1.0, 1.0, 1.0], 2, 2)
    svd: JacobiSVD = A.jacobi_svd(THIN_UV)
    assert svd.rank() == 1
    x: VectorN = svd.solve(VectorN([2.0, 2.0]))
    assert x.is_approx(VectorN([1.0, 1.0]), 1.0e-9)


def test_rank_deficient_solve_logs(caplog: pytest.LogCaptureFixture) -> None:
    """Checks a rank-deficient solve is reported at debug level."""
    caplog.set_level(logging.DEBUG, logger="oasis_math.svd")
    A: MatrixN = MatrixN.from_list([1.0, 2.0, 2.0, 4.0], 2, 2)
    A.jacobi_svd(THIN_UV).solve(VectorN([1.0, 2.0]))
    assert "Rank-deficient" in caplog.text


def test_solve_with_full_unitaries() -> None:
    """Checks full U and V give the same solution as thin ones."""
    A: MatrixN = _tall_matrix()
    b: VectorN = VectorN([1.0, 2.0, 3.0, 4.0])
    thin: VectorN = A.jacobi_svd(THIN_UV).solve(b)
    full: VectorN = A.jacobi_svd(COMPUTE_FULL_U | COMPUTE_FULL_V).solve(b)
    assert full.is_approx(thin, 1.0e-9)


def test_solve_requires_u_and_v() -> None:
    """Checks solve is rejected unless both U and V are computed."""
    A: MatrixN = _tall_matrix()
    b: VectorN = VectorN(4)
    with pytest.raises(InvalidState):
        A.jacobi_svd().solve(b)
    with pytest.raises(InvalidState):
        A.jacobi_svd(COMPUTE_THIN_U).solve(b)
    with pytest.raises(InvalidState):
        A.jacobi_svd(COMPUTE_FULL_V).solve(b)


def test_solve_checks_rhs_length() -> None:
    """Checks the right-hand side must have one entry per row."""
    with pytest.raises(DimensionMismatch):
        _tall_matrix().jacobi_svd(THIN_UV).solve(VectorN(2))


def test_unitary_shapes() -> None:
    """Checks the shapes of the thin and full unitaries."""
    A: MatrixN = _tall_matrix()

    thin: JacobiSVD = A.jacobi_svd(THIN_UV)
    assert thin.matrix_u().shape == (4, 2)
    assert thin.matrix_v().shape == (2, 2)

    mixed: JacobiSVD = A.jacobi_svd(COMPUTE_FULL_U | COMPUTE_THIN_V)
    assert mixed.matrix_u().shape == (4, 4)
    assert mixed.matrix_v().shape == (2, 2)


def test_accessors_without_vectors() -> None:
    """Checks unitaries are unavailable when not requested."""
    svd: JacobiSVD = _tall_matrix().jacobi_svd()
    assert not svd.compute_u
    assert not svd.compute_v
    assert svd.singular_values().size == 2
    with pytest.raises(InvalidState):
        svd.matrix_u()
    with pytest.raises(InvalidState):
        svd.matrix_v()


def test_reconstruction() -> None:
    """Checks U diag(S) V^T reproduces the matrix."""
    A: MatrixN = _tall_matrix()
    svd: JacobiSVD = A.jacobi_svd(THIN_UV)
    U: NDArray[np.float64] = svd.matrix_u().to_numpy()
    S: NDArray[np.float64] = svd.singular_values().to_numpy()
    V: NDArray[np.float64] = svd.matrix_v().to_numpy()
    assert np.allclose(U @ np.diag(S) @ V.T, A.to_numpy())
    assert S[0] >= S[1] >= 0.0


def test_snapshot_ignores_later_edits() -> None:
    """Checks the decomposition does not follow the source matrix."""
    A: MatrixN = _tall_matrix()
    svd: JacobiSVD = A.jacobi_svd(THIN_UV)
    before: VectorN = svd.singular_values()
    A[0, 0] = 100.0
    assert svd.singular_values() == before


def test_contradictory_flags_rejected() -> None:
    """Checks full and thin on one side cannot be combined."""
    A: MatrixN = _tall_matrix()
    with pytest.raises(InvalidOptions):
        A.jacobi_svd(COMPUTE_FULL_U | COMPUTE_THIN_U)
    with pytest.raises(InvalidOptions):
        A.jacobi_svd(COMPUTE_FULL_V | COMPUTE_THIN_V)
    with pytest.raises(InvalidOptions):
        A.jacobi_svd(0x01)


def test_empty_matrix() -> None:
    """Checks a matrix without rows has rank zero."""
    svd: JacobiSVD = MatrixN(0, 3).jacobi_svd(THIN_UV)
    assert svd.singular_values().size == 0
    assert svd.rank() == 0
    assert svd.solve(VectorN(0)) == VectorN(3)


def test_non_finite_rejected() -> None:
    """Checks NaN input is rejected."""
    A: MatrixN = MatrixN(2, 2)
    A[0, 0] = float("nan")
    with pytest.raises(ValueError):
        A.jacobi_svd()


def test_threshold_and_alias() -> None:
    """Checks the default threshold scales with the smaller dimension."""
    svd: JacobiSVD = _tall_matrix().jacobi_svd()
    assert svd.threshold == 2.0 * np.finfo(np.float64).eps
    assert LeastSquaresSolver is JacobiSVD
