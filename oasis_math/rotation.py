################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Rotation conversions shared by Quaternion, AngleAxis and the transforms.

Conventions:
    - Quaternions are stored as [w, x, y, z] and compose with the Hamilton
      product. ``q1 * q2`` applies q2 first, then q1, matching
      ``R(q1 * q2) = R(q1) @ R(q2)``.
    - Rotations are active: a vector v is rotated to ``R @ v``, which for a
      unit quaternion equals ``q * v * q^-1``.
    - Matrix and vector formulas assume a unit quaternion; they do not
      normalize their input.

Euler angles:
    ``euler_to_quaternion(a, i, j, k)`` composes
    ``R(axis_i, a[0]) * R(axis_j, a[1]) * R(axis_k, a[2])``.

    ``matrix_to_euler(R)`` returns (a0, a1, a2) such that
    ``R = Rz(a0) * Ry(a1) * Rx(a2)``, i.e. the inverse of
    ``euler_to_quaternion(a, 2, 1, 0)``. When the pitch reaches +/- pi/2
    (gimbal lock) a0 is pinned to zero and the remaining rotation is
    reported in a2.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from .approx import check_index
from .approx import stable_norm
from .constants import MathConstants
from .matrix import MatrixN
from .vector import Vector3


_LOG: logging.Logger = logging.getLogger(__name__)


class SO3:
    """Conversions between rotation representations."""

    @staticmethod
    def hamilton(q1: NDArray[np.float64], q2: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the Hamilton product q1 * q2 of two wxyz quaternions."""
        w1, x1, y1, z1 = (float(c) for c in q1)
        w2, x2, y2, z2 = (float(c) for c in q2)
        return np.array(
            [
                w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
                w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
                w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
                w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
            ],
            dtype=np.float64,
        )

    @staticmethod
    def quaternion_to_matrix(q: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the rotation matrix of a unit wxyz quaternion."""
        w, x, y, z = (float(c) for c in q)
        xx: float = x * x
        yy: float = y * y
        zz: float = z * z
        wx: float = w * x
        wy: float = w * y
        wz: float = w * z
        xy: float = x * y
        xz: float = x * z
        yz: float = y * z
        return np.array(
            [
                [1.0 - 2.0 * (yy + zz), 2.0 * (xy - wz), 2.0 * (xz + wy)],
                [2.0 * (xy + wz), 1.0 - 2.0 * (xx + zz), 2.0 * (yz - wx)],
                [2.0 * (xz - wy), 2.0 * (yz + wx), 1.0 - 2.0 * (xx + yy)],
            ],
            dtype=np.float64,
        )

    @staticmethod
    def matrix_to_quaternion(R: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the wxyz quaternion of a rotation matrix.

        The result is not normalized, so a non-orthonormal input yields a
        non-unit quaternion instead of an error.
        """
        m: NDArray[np.float64] = R
        trace: float = float(m[0, 0] + m[1, 1] + m[2, 2])
        if trace > 0.0:
            t: float = math.sqrt(trace + 1.0)
            w: float = 0.5 * t
            t = 0.5 / t
            return np.array(
                [
                    w,
                    (m[2, 1] - m[1, 2]) * t,
                    (m[0, 2] - m[2, 0]) * t,
                    (m[1, 0] - m[0, 1]) * t,
                ],
                dtype=np.float64,
            )

        # Pivot on the largest diagonal element for stability
        i: int = 0
        if m[1, 1] > m[0, 0]:
            i = 1
        if m[2, 2] > m[i, i]:
            i = 2
        j: int = (i + 1) % 3
        k: int = (j + 1) % 3

        t = math.sqrt(float(m[i, i] - m[j, j] - m[k, k]) + 1.0)
        vec: NDArray[np.float64] = np.zeros(3, dtype=np.float64)
        vec[i] = 0.5 * t
        t = 0.5 / t
        vec[j] = (m[j, i] + m[i, j]) * t
        vec[k] = (m[k, i] + m[i, k]) * t
        w = float((m[k, j] - m[j, k]) * t)
        return np.array([w, vec[0], vec[1], vec[2]], dtype=np.float64)

    @staticmethod
    def axis_angle_to_quaternion(
        angle: float, axis: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        """Return the wxyz quaternion rotating by ``angle`` about ``axis``."""
        half: float = 0.5 * angle
        s: float = math.sin(half)
        return np.array(
            [math.cos(half), s * axis[0], s * axis[1], s * axis[2]],
            dtype=np.float64,
        )

    @staticmethod
    def quaternion_to_axis_angle(
        q: NDArray[np.float64],
    ) -> Tuple[float, NDArray[np.float64]]:
        """Return (angle, axis) for a wxyz quaternion.

        The angle lies in [0, pi]. The axis flips with the sign of w so that
        q and -q give the same result. A quaternion without a vector part
        maps to a zero angle about the X axis.
        """
        w: float = float(q[0])
        vec: NDArray[np.float64] = np.array(q[1:4], dtype=np.float64)
        n: float = stable_norm(vec)
        if n == 0.0:
            return 0.0, np.array([1.0, 0.0, 0.0], dtype=np.float64)
        angle: float = 2.0 * math.atan2(n, abs(w))
        if w < 0.0:
            n = -n
        return angle, vec / n

    @staticmethod
    def axis_angle_to_matrix(
        angle: float, axis: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        """Return the Rodrigues rotation matrix for ``angle`` about ``axis``."""
        c: float = math.cos(angle)
        sin_axis: NDArray[np.float64] = math.sin(angle) * axis
        cos1_axis: NDArray[np.float64] = (1.0 - c) * axis

        res: NDArray[np.float64] = np.empty((3, 3), dtype=np.float64)
        tmp: float = float(cos1_axis[0] * axis[1])
        res[0, 1] = tmp - sin_axis[2]
        res[1, 0] = tmp + sin_axis[2]

        tmp = float(cos1_axis[0] * axis[2])
        res[0, 2] = tmp + sin_axis[1]
        res[2, 0] = tmp - sin_axis[1]

        tmp = float(cos1_axis[1] * axis[2])
        res[1, 2] = tmp - sin_axis[0]
        res[2, 1] = tmp + sin_axis[0]

        diag: NDArray[np.float64] = cos1_axis * axis + c
        res[0, 0] = diag[0]
        res[1, 1] = diag[1]
        res[2, 2] = diag[2]
        return res

    @staticmethod
    def euler_to_quaternion(
        angles: Sequence[float], axis0: int, axis1: int, axis2: int
    ) -> NDArray[np.float64]:
        """Compose three elemental rotations about basis axes 0, 1 or 2."""
        q: NDArray[np.float64] = np.array([1.0, 0.0, 0.0, 0.0], dtype=np.float64)
        for angle, axis in zip(angles, (axis0, axis1, axis2)):
            unit: NDArray[np.float64] = np.zeros(3, dtype=np.float64)
            unit[check_index(axis, 3, "axis")] = 1.0
            q = SO3.hamilton(q, SO3.axis_angle_to_quaternion(float(angle), unit))
        return q

    @staticmethod
    def matrix_to_euler(R: NDArray[np.float64]) -> NDArray[np.float64]:
        """Decompose a rotation matrix into Z-Y-X angles (a0, a1, a2)."""
        i: float = math.hypot(float(R[2, 2]), float(R[2, 1]))
        pitch: float = math.atan2(-float(R[2, 0]), i)
        if i > MathConstants.DUMMY_PRECISION:
            yaw: float = math.atan2(float(R[1, 0]), float(R[0, 0]))
            roll: float = math.atan2(float(R[2, 1]), float(R[2, 2]))
        else:
            _LOG.debug("Euler decomposition at gimbal lock, pinning yaw to zero")
            yaw = 0.0
            sign: float = 1.0 if R[2, 0] > 0.0 else -1.0
            roll = sign * math.atan2(-float(R[0, 1]), float(R[1, 1]))
        return np.array([yaw, pitch, roll], dtype=np.float64)

    @staticmethod
    def project_to_so3(M: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the rotation factor of the polar decomposition of M."""
        U: NDArray[np.float64]
        S: NDArray[np.float64]
        Vt: NDArray[np.float64]
        U, S, Vt = np.linalg.svd(M)
        R_proj: NDArray[np.float64] = U @ Vt
        if np.linalg.det(R_proj) < 0.0:
            _LOG.debug("Linear part contains a reflection, flipping the weakest axis")
            U[:, -1] *= -1.0
            R_proj = U @ Vt
        return R_proj


class Rotation:
    """Capability shared by the rotation representations.

    Subclasses provide ``rotation_matrix()``; matrix, Euler and vector
    operations are derived from it.
    """

    __slots__ = ()

    def rotation_matrix(self) -> NDArray[np.float64]:
        """Return the 3x3 rotation matrix as a new numpy array."""
        raise NotImplementedError

    def matrix(self) -> MatrixN:
        """Return the equivalent 3x3 rotation matrix."""
        return MatrixN._wrap(self.rotation_matrix())

    def transform(self, v: Vector3) -> Vector3:
        """Rotate a 3-vector."""
        return Vector3._wrap(self.rotation_matrix() @ v.to_numpy())

    def to_euler(self) -> Vector3:
        """Return Z-Y-X Euler angles as Vector3(yaw, pitch, roll)."""
        return Vector3._wrap(SO3.matrix_to_euler(self.rotation_matrix()))

    def yaw(self) -> float:
        """Return the rotation about Z from ``to_euler()``."""
        return self.to_euler().x

    def pitch(self) -> float:
        """Return the rotation about Y from ``to_euler()``."""
        return self.to_euler().y

    def roll(self) -> float:
        """Return the rotation about X from ``to_euler()``."""
        return self.to_euler().z
