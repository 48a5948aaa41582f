################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Validated options for singular value decompositions."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import COMPUTE_FULL_U
from .constants import COMPUTE_FULL_V
from .constants import COMPUTE_THIN_U
from .constants import COMPUTE_THIN_V
from .errors import InvalidOptions


# Every flag bit understood by the decomposition
SVD_FLAG_MASK: int = COMPUTE_FULL_U | COMPUTE_THIN_U | COMPUTE_FULL_V | COMPUTE_THIN_V


@dataclass(frozen=True)
class SvdOptions:
    """Which singular vectors a decomposition computes."""

    full_u: bool = False
    thin_u: bool = False
    full_v: bool = False
    thin_v: bool = False

    def __post_init__(self) -> None:
        """Validate the flag combination."""
        self.validate()

    @staticmethod
    def from_flags(flags: int) -> "SvdOptions":
        """Decode an OR-ed bitmask of ``COMPUTE_*`` constants."""
        value: int = int(flags)
        if value < 0:
            raise InvalidOptions(f"SVD flags must be non-negative, got {value}")
        unknown: int = value & ~SVD_FLAG_MASK
        if unknown:
            raise InvalidOptions(f"Unknown SVD flag bits: {unknown:#x}")
        return SvdOptions(
            full_u=bool(value & COMPUTE_FULL_U),
            thin_u=bool(value & COMPUTE_THIN_U),
            full_v=bool(value & COMPUTE_FULL_V),
            thin_v=bool(value & COMPUTE_THIN_V),
        )

    def to_flags(self) -> int:
        """Encode these options back into a bitmask."""
        flags: int = 0
        if self.full_u:
            flags |= COMPUTE_FULL_U
        if self.thin_u:
            flags |= COMPUTE_THIN_U
        if self.full_v:
            flags |= COMPUTE_FULL_V
        if self.thin_v:
            flags |= COMPUTE_THIN_V
        return flags

    def validate(self) -> None:
        """Reject requests for both the full and thin form of one side."""
        if self.full_u and self.thin_u:
            raise InvalidOptions("Cannot compute both full and thin U")
        if self.full_v and self.thin_v:
            raise InvalidOptions("Cannot compute both full and thin V")

    @property
    def compute_u(self) -> bool:
        """Return True when left singular vectors are computed."""
        return self.full_u or self.thin_u

    @property
    def compute_v(self) -> bool:
        """Return True when right singular vectors are computed."""
        return self.full_v or self.thin_v

    @property
    def any_full(self) -> bool:
        """Return True when either side needs its full unitary."""
        return self.full_u or self.full_v
