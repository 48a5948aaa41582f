################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Dense linear algebra and 3D geometry types."""

from __future__ import annotations

from oasis_math.angle_axis import AngleAxis
from oasis_math.constants import AXIS_X
from oasis_math.constants import AXIS_Y
from oasis_math.constants import AXIS_Z
from oasis_math.constants import COMPUTE_FULL_U
from oasis_math.constants import COMPUTE_FULL_V
from oasis_math.constants import COMPUTE_THIN_U
from oasis_math.constants import COMPUTE_THIN_V
from oasis_math.constants import MathConstants
from oasis_math.errors import DegenerateOperation
from oasis_math.errors import DimensionMismatch
from oasis_math.errors import GeometryError
from oasis_math.errors import IndexOutOfRange
from oasis_math.errors import InvalidOptions
from oasis_math.errors import InvalidState
from oasis_math.matrix import Matrix4
from oasis_math.matrix import MatrixN
from oasis_math.quaternion import Quaternion
from oasis_math.rotation import Rotation
from oasis_math.svd import JacobiSVD
from oasis_math.svd_options import SvdOptions
from oasis_math.transform import Affine3
from oasis_math.transform import Isometry3
from oasis_math.transform import Transform3
from oasis_math.vector import Vector3
from oasis_math.vector import VectorN


RigidTransform = Isometry3
AffineTransform = Affine3
LeastSquaresSolver = JacobiSVD


__all__ = [
    "AXIS_X",
    "AXIS_Y",
    "AXIS_Z",
    "COMPUTE_FULL_U",
    "COMPUTE_FULL_V",
    "COMPUTE_THIN_U",
    "COMPUTE_THIN_V",
    "Affine3",
    "AffineTransform",
    "AngleAxis",
    "DegenerateOperation",
    "DimensionMismatch",
    "GeometryError",
    "IndexOutOfRange",
    "InvalidOptions",
    "InvalidState",
    "Isometry3",
    "JacobiSVD",
    "LeastSquaresSolver",
    "MathConstants",
    "Matrix4",
    "MatrixN",
    "Quaternion",
    "RigidTransform",
    "Rotation",
    "SvdOptions",
    "Transform3",
    "Vector3",
    "VectorN",
]
