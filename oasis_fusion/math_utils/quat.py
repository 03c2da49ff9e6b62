################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Quaternion utilities using the wxyz convention."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .matrix import Matrix3
from .units import NumericConstants
from .vector import Vector3
from .vector import VectorLike
from .vector import as_vector3


@dataclass(frozen=True)
class Quaternion:
    """Quaternion stored in wxyz order.

    Conventions:
        - Composition uses the Hamilton product.
        - The fusion engine's orientation maps sensor-frame vectors into the
          earth frame: v_E = q ⊗ (0, v_S) ⊗ q*.

    Determinism and edge cases:
        - Construction only checks the shape so the per-sample path never
          raises on degenerate data.
        - normalized() returns the identity quaternion for near-zero or
          non-finite norms.
    """

    wxyz: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Validate quaternion shape and normalize storage."""
        wxyz: NDArray[np.float64] = np.asarray(self.wxyz, dtype=np.float64)
        if wxyz.shape != (4,):
            raise ValueError("wxyz must be shape (4,)")
        object.__setattr__(self, "wxyz", wxyz)

    @staticmethod
    def identity() -> Quaternion:
        """Return the identity quaternion."""
        return Quaternion.from_wxyz(1.0, 0.0, 0.0, 0.0)

    @staticmethod
    def from_wxyz(w: float, x: float, y: float, z: float) -> Quaternion:
        """Create a quaternion from components."""
        return Quaternion(np.array([w, x, y, z], dtype=np.float64))

    @staticmethod
    def from_axis_angle(axis: VectorLike, angle_rad: float) -> Quaternion:
        """Create a unit quaternion rotating angle_rad about axis."""
        a: Vector3 = as_vector3(axis, "axis")
        norm: float = float(np.linalg.norm(a))
        if norm * norm < NumericConstants.NORM_SQ_EPS:
            return Quaternion.identity()
        half: float = 0.5 * angle_rad
        s: float = math.sin(half) / norm
        return Quaternion.from_wxyz(
            math.cos(half), float(a[0]) * s, float(a[1]) * s, float(a[2]) * s
        )

    @property
    def w(self) -> float:
        return float(self.wxyz[0])

    @property
    def x(self) -> float:
        return float(self.wxyz[1])

    @property
    def y(self) -> float:
        return float(self.wxyz[2])

    @property
    def z(self) -> float:
        return float(self.wxyz[3])

    @property
    def vector(self) -> Vector3:
        """Return the vector part (x, y, z)."""
        return np.array(self.wxyz[1:], dtype=np.float64)

    def magnitude(self) -> float:
        """Return the quaternion norm."""
        return math.sqrt(float(np.dot(self.wxyz, self.wxyz)))

    def normalized(self) -> Quaternion:
        """Return a unit quaternion, or identity when the norm is degenerate."""
        norm_sq: float = float(np.dot(self.wxyz, self.wxyz))
        if not math.isfinite(norm_sq) or norm_sq < NumericConstants.NORM_SQ_EPS:
            return Quaternion.identity()
        return Quaternion(self.wxyz * (1.0 / math.sqrt(norm_sq)))

    def conjugate(self) -> Quaternion:
        """Return the conjugate quaternion."""
        return Quaternion.from_wxyz(self.w, -self.x, -self.y, -self.z)

    def scaled(self, scale: float) -> Quaternion:
        """Return the quaternion multiplied by a scalar."""
        return Quaternion(self.wxyz * scale)

    def __add__(self, other: Quaternion) -> Quaternion:
        """Add two quaternions component-wise."""
        return Quaternion(self.wxyz + other.wxyz)

    def __mul__(self, other: Quaternion) -> Quaternion:
        """Multiply two quaternions using the Hamilton product."""
        w1, x1, y1, z1 = self.w, self.x, self.y, self.z
        w2, x2, y2, z2 = other.w, other.x, other.y, other.z
        return Quaternion.from_wxyz(
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        )

    def multiply_vector(self, v: Vector3) -> Quaternion:
        """Return q ⊗ (0, v)."""
        w, x, y, z = self.w, self.x, self.y, self.z
        vx: float = float(v[0])
        vy: float = float(v[1])
        vz: float = float(v[2])
        return Quaternion.from_wxyz(
            -x * vx - y * vy - z * vz,
            w * vx + y * vz - z * vy,
            w * vy - x * vz + z * vx,
            w * vz + x * vy - y * vx,
        )

    def rotate(self, v: Vector3) -> Vector3:
        """Return the vector part of q ⊗ (0, v) ⊗ q*."""
        rotated: Quaternion = self.multiply_vector(v) * self.conjugate()
        return rotated.vector

    def as_matrix(self) -> Matrix3:
        """Return the rotation matrix equivalent of rotate()."""
        w, x, y, z = self.w, self.x, self.y, self.z
        ww: float = w * w
        # The 0.5 offsets assume a unit quaternion, as in the fusion engine
        return np.array(
            [
                [
                    2.0 * (ww - 0.5 + x * x),
                    2.0 * (x * y - w * z),
                    2.0 * (x * z + w * y),
                ],
                [
                    2.0 * (x * y + w * z),
                    2.0 * (ww - 0.5 + y * y),
                    2.0 * (y * z - w * x),
                ],
                [
                    2.0 * (x * z - w * y),
                    2.0 * (y * z + w * x),
                    2.0 * (ww - 0.5 + z * z),
                ],
            ],
            dtype=np.float64,
        )
