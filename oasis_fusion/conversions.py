################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Derived views of an orientation quaternion

Conventions:
    * Angles are reported in degrees
    * Euler angles use the ZYX (yaw, pitch, roll) rotation order
    * The pitch term clamps its asin argument so gimbal-adjacent
      orientations never produce NaN
"""

from __future__ import annotations

import math

import numpy as np

from oasis_fusion.config.ahrs_settings import Convention
from oasis_fusion.fusion_types.euler_angles import EulerAngles
from oasis_fusion.math_utils.matrix import Matrix3
from oasis_fusion.math_utils.quat import Quaternion
from oasis_fusion.math_utils.units import NumericConstants
from oasis_fusion.math_utils.units import asin_safe
from oasis_fusion.math_utils.vector import Vector3
from oasis_fusion.math_utils.vector import VectorLike
from oasis_fusion.math_utils.vector import as_vector3
from oasis_fusion.math_utils.vector import cross
from oasis_fusion.math_utils.vector import normalize
from oasis_fusion.math_utils.vector import vec3


def quaternion_to_euler(q: Quaternion) -> EulerAngles:
    """
    Convert a unit quaternion to ZYX Euler angles in degrees
    """

    w: float = q.w
    x: float = q.x
    y: float = q.y
    z: float = q.z

    half_minus_qy_squared: float = 0.5 - y * y
    roll: float = math.atan2(w * x + y * z, half_minus_qy_squared - x * x)
    pitch: float = asin_safe(2.0 * (w * y - z * x))
    yaw: float = math.atan2(w * z + x * y, half_minus_qy_squared - z * z)

    return EulerAngles(
        roll=math.degrees(roll),
        pitch=math.degrees(pitch),
        yaw=math.degrees(yaw),
    )


def quaternion_to_matrix(q: Quaternion) -> Matrix3:
    """
    Convert a unit quaternion to a rotation matrix
    """

    return q.as_matrix()


def quaternion_to_axis_angle(q: Quaternion) -> tuple[Vector3, float]:
    """
    Convert a quaternion to a unit rotation axis and an angle in degrees

    The angle is within [0, 180]. Rotations too small to define an axis
    return the x axis with the recovered (near-zero) angle.
    """

    qn: Quaternion = q.normalized()
    if qn.w < 0.0:
        qn = qn.scaled(-1.0)

    v: Vector3 = qn.vector
    sin_half: float = float(np.linalg.norm(v))
    angle: float = math.degrees(2.0 * math.atan2(sin_half, qn.w))

    if sin_half < NumericConstants.AXIS_ANGLE_EPS:
        return vec3(1.0, 0.0, 0.0), angle

    return v * (1.0 / sin_half), angle


def compass_heading(
    convention: Convention,
    accelerometer: VectorLike,
    magnetometer: VectorLike,
) -> float:
    """
    Return the tilt-compensated magnetic heading in degrees

    The accelerometer supplies the vertical reference, so the result is only
    meaningful while the sensor is not accelerating.
    """

    acc: Vector3 = as_vector3(accelerometer, "accelerometer")
    mag: Vector3 = as_vector3(magnetometer, "magnetometer")

    if convention is Convention.NED:
        up: Vector3 = acc * -1.0
        west: Vector3 = normalize(cross(up, mag))
        north: Vector3 = normalize(cross(west, up))
        return math.degrees(math.atan2(float(west[0]), float(north[0])))

    west = normalize(cross(acc, mag))
    north = normalize(cross(west, acc))
    if convention is Convention.ENU:
        east: Vector3 = west * -1.0
        return math.degrees(math.atan2(float(north[0]), float(east[0])))
    return math.degrees(math.atan2(float(west[0]), float(north[0])))
