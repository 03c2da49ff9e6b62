################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for inertial and magnetic sensor calibration."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_fusion.calibration.sensor_calibration import InertialCalibration
from oasis_fusion.calibration.sensor_calibration import MagneticCalibration
from oasis_fusion.calibration.sensor_calibration import calibrate_inertial
from oasis_fusion.calibration.sensor_calibration import calibrate_magnetic


def test_identity_inertial_calibration_is_noop() -> None:
    """Identity misalignment, unit sensitivity and zero offset pass through."""
    raw: NDArray[np.float64] = np.array([0.1, -2.5, 9.0], dtype=np.float64)
    calibrated: NDArray[np.float64] = calibrate_inertial(
        raw, np.eye(3), np.ones(3), np.zeros(3)
    )
    np.testing.assert_array_equal(calibrated, raw)


def test_identity_magnetic_calibration_is_noop() -> None:
    """Identity soft-iron and zero hard-iron pass through."""
    raw: NDArray[np.float64] = np.array([22.0, -5.0, 41.0], dtype=np.float64)
    np.testing.assert_array_equal(
        calibrate_magnetic(raw, np.eye(3), np.zeros(3)), raw
    )


def test_inertial_calibration_order() -> None:
    """Offset is removed before scaling, misalignment is applied last."""
    misalignment: NDArray[np.float64] = np.array(
        [[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64
    )
    calibrated: NDArray[np.float64] = calibrate_inertial(
        [3.0, 2.0, 1.0], misalignment, [2.0, 0.5, 1.0], [1.0, 0.0, 1.0]
    )
    # (raw - b) * s = (4, 1, 0), then rotated +90 degrees about z
    np.testing.assert_allclose(calibrated, [-1.0, 4.0, 0.0])


def test_magnetic_calibration_removes_hard_iron_after_soft_iron() -> None:
    """Hard-iron offset is subtracted after the soft-iron matrix."""
    soft_iron: NDArray[np.float64] = np.diag([2.0, 1.0, 0.5])
    calibrated: NDArray[np.float64] = calibrate_magnetic(
        [3.0, 3.0, 3.0], soft_iron, [1.0, 1.0, 1.0]
    )
    np.testing.assert_allclose(calibrated, [5.0, 2.0, 0.5])


def test_calibration_dataclasses_default_to_identity() -> None:
    """Default calibration blocks are no-ops."""
    inertial: InertialCalibration = InertialCalibration()
    magnetic: MagneticCalibration = MagneticCalibration()
    assert inertial.is_identity()
    assert magnetic.is_identity()
    np.testing.assert_array_equal(inertial.apply([1.0, 2.0, 3.0]), [1.0, 2.0, 3.0])
    np.testing.assert_array_equal(magnetic.apply([1.0, 2.0, 3.0]), [1.0, 2.0, 3.0])


def test_calibration_dataclass_coerces_arrays() -> None:
    """Lists are stored as float64 arrays and shapes are checked."""
    calibration: InertialCalibration = InertialCalibration(
        misalignment=[1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0],
        sensitivity=[1.0, 1.0, 2.0],
        offset=[0.0, 0.0, 0.5],
    )
    assert calibration.misalignment.shape == (3, 3)
    assert not calibration.is_identity()
    np.testing.assert_allclose(calibration.apply([0.0, 0.0, 1.0]), [0.0, 0.0, 1.0])
    with pytest.raises(ValueError):
        MagneticCalibration(hard_iron_offset=[1.0, 2.0])
