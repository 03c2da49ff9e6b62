################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Calibration transforms applied to raw sensor samples before fusion."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field

import numpy as np

from oasis_fusion.math_utils.matrix import Matrix3
from oasis_fusion.math_utils.matrix import MatrixLike
from oasis_fusion.math_utils.matrix import as_matrix3
from oasis_fusion.math_utils.matrix import identity3
from oasis_fusion.math_utils.matrix import matvec3
from oasis_fusion.math_utils.vector import Vector3
from oasis_fusion.math_utils.vector import VectorLike
from oasis_fusion.math_utils.vector import as_vector3
from oasis_fusion.math_utils.vector import hadamard
from oasis_fusion.math_utils.vector import ones3
from oasis_fusion.math_utils.vector import zero3


def calibrate_inertial(
    uncalibrated: VectorLike,
    misalignment: MatrixLike,
    sensitivity: VectorLike,
    offset: VectorLike,
) -> Vector3:
    """Apply gyroscope or accelerometer calibration.

    The offset is removed first, the result is scaled per axis by the
    sensitivity, and the misalignment matrix is applied last:

        calibrated = M * ((raw - offset) ⊙ sensitivity)
    """
    raw: Vector3 = as_vector3(uncalibrated, "uncalibrated")
    M: Matrix3 = as_matrix3(misalignment, "misalignment")
    s: Vector3 = as_vector3(sensitivity, "sensitivity")
    b: Vector3 = as_vector3(offset, "offset")
    return matvec3(M, hadamard(raw - b, s))


def calibrate_magnetic(
    uncalibrated: VectorLike,
    soft_iron_matrix: MatrixLike,
    hard_iron_offset: VectorLike,
) -> Vector3:
    """Apply magnetometer calibration.

        calibrated = S * raw - hard_iron_offset
    """
    raw: Vector3 = as_vector3(uncalibrated, "uncalibrated")
    S: Matrix3 = as_matrix3(soft_iron_matrix, "soft_iron_matrix")
    h: Vector3 = as_vector3(hard_iron_offset, "hard_iron_offset")
    return matvec3(S, raw) - h


@dataclass(frozen=True)
class InertialCalibration:
    """Calibration parameters for a gyroscope or accelerometer.

    Attributes:
        misalignment: 3x3 axis misalignment correction
        sensitivity: Per-axis sensitivity scale
        offset: Per-axis zero offset, in sensor units
    """

    misalignment: Matrix3 = field(default_factory=identity3)
    sensitivity: Vector3 = field(default_factory=ones3)
    offset: Vector3 = field(default_factory=zero3)

    def __post_init__(self) -> None:
        """Coerce parameters into float64 numpy arrays."""
        object.__setattr__(
            self, "misalignment", as_matrix3(self.misalignment, "misalignment")
        )
        object.__setattr__(
            self, "sensitivity", as_vector3(self.sensitivity, "sensitivity")
        )
        object.__setattr__(self, "offset", as_vector3(self.offset, "offset"))

    def apply(self, uncalibrated: VectorLike) -> Vector3:
        """Return the calibrated sample."""
        return calibrate_inertial(
            uncalibrated, self.misalignment, self.sensitivity, self.offset
        )

    def is_identity(self) -> bool:
        """Return True if applying the calibration is a no-op."""
        return bool(
            np.array_equal(self.misalignment, identity3())
            and np.array_equal(self.sensitivity, ones3())
            and np.array_equal(self.offset, zero3())
        )


@dataclass(frozen=True)
class MagneticCalibration:
    """Soft-iron and hard-iron calibration for a magnetometer.

    Attributes:
        soft_iron_matrix: 3x3 soft-iron correction
        hard_iron_offset: Hard-iron offset, in magnetometer units
    """

    soft_iron_matrix: Matrix3 = field(default_factory=identity3)
    hard_iron_offset: Vector3 = field(default_factory=zero3)

    def __post_init__(self) -> None:
        """Coerce parameters into float64 numpy arrays."""
        object.__setattr__(
            self,
            "soft_iron_matrix",
            as_matrix3(self.soft_iron_matrix, "soft_iron_matrix"),
        )
        object.__setattr__(
            self,
            "hard_iron_offset",
            as_vector3(self.hard_iron_offset, "hard_iron_offset"),
        )

    def apply(self, uncalibrated: VectorLike) -> Vector3:
        """Return the calibrated sample."""
        return calibrate_magnetic(
            uncalibrated, self.soft_iron_matrix, self.hard_iron_offset
        )

    def is_identity(self) -> bool:
        """Return True if applying the calibration is a no-op."""
        return bool(
            np.array_equal(self.soft_iron_matrix, identity3())
            and np.array_equal(self.hard_iron_offset, zero3())
        )
