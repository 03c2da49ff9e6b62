################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for heading handling in the AHRS fusion engine."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_fusion.ahrs.fusion_ahrs import FusionAhrs
from oasis_fusion.conversions import quaternion_to_euler
from oasis_fusion.fusion_types.euler_angles import EulerAngles
from oasis_fusion.math_utils.quat import Quaternion


DT_SEC: float = 0.01
GYRO_ZERO: NDArray[np.float64] = np.zeros(3, dtype=np.float64)
ACCEL_LEVEL: NDArray[np.float64] = np.array([0.0, 0.0, 1.0], dtype=np.float64)


def test_set_heading_from_identity() -> None:
    """set_heading() rotates about the vertical axis."""
    ahrs: FusionAhrs = FusionAhrs()
    ahrs.set_heading(30.0)
    assert quaternion_to_euler(ahrs.quaternion).yaw == pytest.approx(30.0)


def test_set_heading_preserves_tilt() -> None:
    """Roll and pitch are unchanged by set_heading()."""
    yaw: Quaternion = Quaternion.from_axis_angle([0.0, 0.0, 1.0], math.radians(50.0))
    roll: Quaternion = Quaternion.from_axis_angle([1.0, 0.0, 0.0], math.radians(10.0))
    ahrs: FusionAhrs = FusionAhrs()
    ahrs.set_quaternion(yaw * roll)

    ahrs.set_heading(-20.0)
    euler: EulerAngles = quaternion_to_euler(ahrs.quaternion)
    assert euler.yaw == pytest.approx(-20.0)
    assert euler.roll == pytest.approx(10.0)
    assert euler.pitch == pytest.approx(0.0, abs=1e-9)


def test_magnetometer_aligns_heading() -> None:
    """The magnetometer correction drives yaw onto magnetic north."""
    yaw_deg: float = 40.0
    yaw_rad: float = math.radians(yaw_deg)
    mag: NDArray[np.float64] = np.array(
        [math.cos(yaw_rad), -math.sin(yaw_rad), -0.5], dtype=np.float64
    )
    ahrs: FusionAhrs = FusionAhrs()
    for _ in range(500):
        ahrs.update(GYRO_ZERO, ACCEL_LEVEL, mag, DT_SEC)
    assert quaternion_to_euler(ahrs.quaternion).yaw == pytest.approx(yaw_deg, abs=1e-2)


def test_magnetometer_parallel_to_gravity_is_skipped() -> None:
    """A vertical magnetic field carries no heading information."""
    ahrs: FusionAhrs = FusionAhrs()
    ahrs.update(GYRO_ZERO, ACCEL_LEVEL, [0.0, 0.0, -1.0], DT_SEC)
    assert ahrs.internal_states.magnetometer_ignored
    np.testing.assert_allclose(ahrs.quaternion.wxyz, [1.0, 0.0, 0.0, 0.0])


def test_no_magnetometer_holds_heading_while_initialising() -> None:
    """Without a magnetometer the heading is zero until initialised."""
    ahrs: FusionAhrs = FusionAhrs()
    for _ in range(100):
        ahrs.update_no_magnetometer([0.0, 0.0, 10.0], ACCEL_LEVEL, DT_SEC)
    assert ahrs.flags.initialising
    assert quaternion_to_euler(ahrs.quaternion).yaw == pytest.approx(0.0, abs=1e-6)

    for _ in range(300):
        ahrs.update_no_magnetometer(GYRO_ZERO, ACCEL_LEVEL, DT_SEC)
    assert not ahrs.flags.initialising

    # Once initialised the gyroscope integrates freely about the vertical
    for _ in range(100):
        ahrs.update_no_magnetometer([0.0, 0.0, 10.0], ACCEL_LEVEL, DT_SEC)
    assert quaternion_to_euler(ahrs.quaternion).yaw == pytest.approx(10.0, abs=1e-2)


def test_external_heading_aligns_yaw() -> None:
    """An external heading replaces the magnetometer."""
    ahrs: FusionAhrs = FusionAhrs()
    for _ in range(500):
        ahrs.update_external_heading(GYRO_ZERO, ACCEL_LEVEL, 90.0, DT_SEC)
    euler: EulerAngles = quaternion_to_euler(ahrs.quaternion)
    assert euler.yaw == pytest.approx(90.0, abs=1e-2)
    assert euler.roll == pytest.approx(0.0, abs=1e-6)
    assert not ahrs.internal_states.magnetometer_ignored
