################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for SVD options."""

from __future__ import annotations

import dataclasses

import pytest

from oasis_math import COMPUTE_FULL_U
from oasis_math import COMPUTE_FULL_V
from oasis_math import COMPUTE_THIN_U
from oasis_math import COMPUTE_THIN_V
from oasis_math import InvalidOptions
from oasis_math import SvdOptions


def test_flag_values() -> None:
    """Checks the flag bit values."""
    assert COMPUTE_FULL_U == 0x04
    assert COMPUTE_THIN_U == 0x08
    assert COMPUTE_FULL_V == 0x10
    assert COMPUTE_THIN_V == 0x20


def test_from_flags_roundtrip() -> None:
    """Checks decoding and re-encoding a bitmask."""
    flags: int = COMPUTE_THIN_U | COMPUTE_FULL_V
    options: SvdOptions = SvdOptions.from_flags(flags)
    assert options.thin_u
    assert options.full_v
    assert not options.full_u
    assert options.to_flags() == flags


def test_defaults_compute_nothing() -> None:
    """Checks the default options compute no singular vectors."""
    options: SvdOptions = SvdOptions.from_flags(0)
    assert options == SvdOptions()
    assert not options.compute_u
    assert not options.compute_v
    assert not options.any_full


def test_derived_properties() -> None:
    """Checks the compute and full properties."""
    options: SvdOptions = SvdOptions(full_u=True, thin_v=True)
    assert options.compute_u
    assert options.compute_v
    assert options.any_full


def test_contradictory_options_rejected() -> None:
    """Checks full and thin on one side are rejected at construction."""
    with pytest.raises(InvalidOptions):
        SvdOptions(full_u=True, thin_u=True)
    with pytest.raises(InvalidOptions):
        SvdOptions.from_flags(COMPUTE_FULL_V | COMPUTE_THIN_V)


def test_unknown_bits_rejected() -> None:
    """Checks negative masks and unknown bits are rejected."""
    with pytest.raises(InvalidOptions):
        SvdOptions.from_flags(-1)
    with pytest.raises(InvalidOptions):
        SvdOptions.from_flags(0x40)


def test_options_are_frozen() -> None:
    """Checks options cannot be modified after construction."""
    options: SvdOptions = SvdOptions()
    with pytest.raises(dataclasses.FrozenInstanceError):
        options.full_u = True  # type: ignore[misc]
