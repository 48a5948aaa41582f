################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Least-squares solver backed by a singular value decomposition.

Responsibility:
    Snapshot the SVD of a matrix at creation time and solve ``A x = b`` in
    the least-squares sense through the pseudo-inverse.

Data contract:
    - ``A`` is rows x cols, ``b`` has ``rows`` elements, ``x`` has ``cols``.
    - U is rows x rows (full) or rows x k (thin), V is cols x cols (full)
      or cols x k (thin), with k = min(rows, cols).
    - The snapshot is never affected by later changes to the source matrix.

Rank:
    Singular values at or below ``threshold * sigma_max`` are treated as
    zero. The default threshold is ``min(rows, cols) * machine epsilon``.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .approx import assert_finite
from .constants import MathConstants
from .dense import DenseVector
from .errors import DimensionMismatch
from .errors import InvalidState
from .matrix import MatrixN
from .svd_options import SvdOptions
from .vector import VectorN


_LOG: logging.Logger = logging.getLogger(__name__)


class JacobiSVD:
    """Immutable SVD snapshot of a MatrixN."""

    def __init__(self, matrix: MatrixN, flags: int = 0) -> None:
        """Decompose a copy of ``matrix``.

        :param flags: OR-ed ``COMPUTE_*`` constants
        """
        self._options: SvdOptions = SvdOptions.from_flags(flags)

        data: NDArray[np.float64] = matrix.to_numpy()
        assert_finite(data, "matrix")

        self._rows: int = int(data.shape[0])
        self._cols: int = int(data.shape[1])
        k: int = min(self._rows, self._cols)

        u: Optional[NDArray[np.float64]] = None
        v: Optional[NDArray[np.float64]] = None
        singular: NDArray[np.float64]

        if k == 0:
            singular = np.zeros(0, dtype=np.float64)
            u_full: NDArray[np.float64] = np.eye(self._rows, dtype=np.float64)
            v_full: NDArray[np.float64] = np.eye(self._cols, dtype=np.float64)
        elif self._options.compute_u or self._options.compute_v:
            vh: NDArray[np.float64]
            u_full, singular, vh = np.linalg.svd(
                data, full_matrices=self._options.any_full
            )
            v_full = np.ascontiguousarray(vh.T)
        else:
            singular = np.linalg.svd(data, compute_uv=False)
            u_full = np.zeros((0, 0), dtype=np.float64)
            v_full = np.zeros((0, 0), dtype=np.float64)

        if self._options.full_u:
            u = u_full
        elif self._options.thin_u:
            u = np.array(u_full[:, :k], dtype=np.float64)
        if self._options.full_v:
            v = v_full
        elif self._options.thin_v:
            v = np.array(v_full[:, :k], dtype=np.float64)

        self._u: Optional[NDArray[np.float64]] = u
        self._v: Optional[NDArray[np.float64]] = v
        self._singular: NDArray[np.float64] = np.array(singular, dtype=np.float64)
        self._threshold: float = k * MathConstants.EPSILON

        _LOG.debug(
            "SVD of %dx%d matrix, flags=%#x, rank=%d",
            self._rows,
            self._cols,
            self._options.to_flags(),
            self.rank(),
        )

    @property
    def rows(self) -> int:
        """Return the row count of the decomposed matrix."""
        return self._rows

    @property
    def cols(self) -> int:
        """Return the column count of the decomposed matrix."""
        return self._cols

    @property
    def options(self) -> SvdOptions:
        return self._options

    @property
    def compute_u(self) -> bool:
        return self._u is not None

    @property
    def compute_v(self) -> bool:
        return self._v is not None

    @property
    def threshold(self) -> float:
        """Return the relative threshold used to determine the rank."""
        return self._threshold

    def singular_values(self) -> VectorN:
        """Return the singular values in decreasing order."""
        return VectorN._wrap(self._singular.copy())

    def matrix_u(self) -> MatrixN:
        """Return the left singular vectors."""
        if self._u is None:
            raise InvalidState("U was not computed, pass COMPUTE_FULL_U or COMPUTE_THIN_U")
        return MatrixN._wrap(self._u.copy())

    def matrix_v(self) -> MatrixN:
        """Return the right singular vectors."""
        if self._v is None:
            raise InvalidState("V was not computed, pass COMPUTE_FULL_V or COMPUTE_THIN_V")
        return MatrixN._wrap(self._v.copy())

    def rank(self) -> int:
        """Return the number of singular values above the threshold."""
        if self._singular.size == 0:
            return 0
        cutoff: float = max(
            float(self._singular[0]) * self._threshold,
            float(np.finfo(np.float64).tiny),
        )
        return int(np.count_nonzero(self._singular > cutoff))

    def solve(self, b: DenseVector) -> VectorN:
        """Return the least-squares solution x of ``A x = b``."""
        if self._u is None or self._v is None:
            raise InvalidState(
                "solve() requires both U and V, pass COMPUTE_THIN_U | COMPUTE_THIN_V"
            )
        if b.size != self._rows:
            raise DimensionMismatch(
                f"Right-hand side needs {self._rows} elements, got {b.size}"
            )

        rank: int = self.rank()
        if rank < min(self._rows, self._cols):
            _LOG.debug(
                "Rank-deficient solve, rank %d of %d",
                rank,
                min(self._rows, self._cols),
            )

        rhs: NDArray[np.float64] = b.to_numpy()
        coeffs: NDArray[np.float64] = self._u[:, :rank].T @ rhs
        coeffs = coeffs / self._singular[:rank]
        x: NDArray[np.float64] = self._v[:, :rank] @ coeffs
        return VectorN._wrap(np.array(x, dtype=np.float64))

    def __repr__(self) -> str:
        return (
            f"JacobiSVD({self._rows}x{self._cols}, flags={self._options.to_flags():#x}, "
            f"rank={self.rank()})"
        )
