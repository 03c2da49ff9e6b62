################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for quaternion conversions and compass heading."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_fusion.config.ahrs_settings import Convention
from oasis_fusion.conversions import compass_heading
from oasis_fusion.conversions import quaternion_to_axis_angle
from oasis_fusion.conversions import quaternion_to_euler
from oasis_fusion.conversions import quaternion_to_matrix
from oasis_fusion.fusion_types.euler_angles import EulerAngles
from oasis_fusion.math_utils.quat import Quaternion


def test_identity_euler_is_zero() -> None:
    """The identity quaternion has zero Euler angles."""
    euler: EulerAngles = quaternion_to_euler(Quaternion.identity())
    assert euler.as_tuple() == (0.0, 0.0, 0.0)


def test_single_axis_euler_angles() -> None:
    """Rotations about one axis map onto the matching Euler angle."""
    roll: EulerAngles = quaternion_to_euler(
        Quaternion.from_axis_angle([1.0, 0.0, 0.0], math.radians(25.0))
    )
    pitch: EulerAngles = quaternion_to_euler(
        Quaternion.from_axis_angle([0.0, 1.0, 0.0], math.radians(-35.0))
    )
    yaw: EulerAngles = quaternion_to_euler(
        Quaternion.from_axis_angle([0.0, 0.0, 1.0], math.radians(120.0))
    )
    assert roll.roll == pytest.approx(25.0)
    assert pitch.pitch == pytest.approx(-35.0)
    assert yaw.yaw == pytest.approx(120.0)


def test_positive_ninety_pitch_is_finite() -> None:
    """Exactly +90 degrees of pitch does not produce NaN."""
    q: Quaternion = Quaternion.from_axis_angle([0.0, 1.0, 0.0], 0.5 * math.pi)
    euler: EulerAngles = quaternion_to_euler(q)
    assert all(math.isfinite(angle) for angle in euler.as_tuple())
    assert euler.pitch == pytest.approx(90.0)


def test_out_of_range_pitch_argument_is_clamped() -> None:
    """A slightly non-unit quaternion at the pole still converts."""
    s: float = math.sqrt(0.5) * (1.0 + 1e-9)
    euler: EulerAngles = quaternion_to_euler(Quaternion.from_wxyz(s, 0.0, s, 0.0))
    assert euler.pitch == pytest.approx(90.0)


def test_euler_to_dict() -> None:
    """Euler angles serialize by name."""
    euler: EulerAngles = EulerAngles(roll=1.0, pitch=2.0, yaw=3.0)
    assert euler.to_dict() == {"roll": 1.0, "pitch": 2.0, "yaw": 3.0}


def test_matrix_matches_rotation() -> None:
    """quaternion_to_matrix() agrees with vector rotation."""
    q: Quaternion = Quaternion.from_axis_angle([0.2, -0.5, 1.0], 0.8)
    R: NDArray[np.float64] = quaternion_to_matrix(q)
    v: NDArray[np.float64] = np.array([1.0, 2.0, 3.0], dtype=np.float64)
    np.testing.assert_allclose(R @ v, q.rotate(v), atol=1e-12)


def test_axis_angle_recovers_rotation() -> None:
    """Axis and angle are recovered from a unit quaternion."""
    axis: NDArray[np.float64]
    angle: float
    axis, angle = quaternion_to_axis_angle(
        Quaternion.from_axis_angle([0.0, 0.0, 2.0], math.radians(90.0))
    )
    np.testing.assert_allclose(axis, [0.0, 0.0, 1.0], atol=1e-12)
    assert angle == pytest.approx(90.0)


def test_axis_angle_canonicalizes_sign() -> None:
    """q and -q describe the same rotation with an angle in [0, 180]."""
    q: Quaternion = Quaternion.from_axis_angle([1.0, 0.0, 0.0], math.radians(60.0))
    axis: NDArray[np.float64]
    angle: float
    axis, angle = quaternion_to_axis_angle(q.scaled(-1.0))
    np.testing.assert_allclose(axis, [1.0, 0.0, 0.0], atol=1e-12)
    assert angle == pytest.approx(60.0)


def test_axis_angle_identity_falls_back_to_x_axis() -> None:
    """Identity has no defined axis."""
    axis: NDArray[np.float64]
    angle: float
    axis, angle = quaternion_to_axis_angle(Quaternion.identity())
    np.testing.assert_array_equal(axis, [1.0, 0.0, 0.0])
    assert angle == 0.0


@pytest.mark.parametrize(
    "convention,accelerometer,magnetometer",
    [
        (Convention.NWU, [0.0, 0.0, 1.0], [0.0, -1.0, -0.5]),
        (Convention.ENU, [0.0, 0.0, 1.0], [1.0, 0.0, -0.5]),
        (Convention.NED, [0.0, 0.0, -1.0], [0.0, -1.0, 0.5]),
    ],
)
def test_compass_heading_quarter_turn(
    convention: Convention,
    accelerometer: list[float],
    magnetometer: list[float],
) -> None:
    """A quarter turn of the sensor about the vertical reads 90 degrees."""
    assert compass_heading(convention, accelerometer, magnetometer) == pytest.approx(
        90.0
    )


def test_compass_heading_north() -> None:
    """A sensor facing magnetic north reads zero."""
    assert compass_heading(
        Convention.NWU, [0.0, 0.0, 1.0], [1.0, 0.0, -0.5]
    ) == pytest.approx(0.0)
