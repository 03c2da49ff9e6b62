################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Euler angle representation of an orientation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EulerAngles:
    """ZYX Euler angles.

    Attributes:
        roll: Rotation about the x axis in degrees
        pitch: Rotation about the y axis in degrees, within [-90, 90]
        yaw: Rotation about the z axis in degrees
    """

    roll: float
    pitch: float
    yaw: float

    def as_tuple(self) -> tuple[float, float, float]:
        """Return (roll, pitch, yaw) in degrees."""
        return (self.roll, self.pitch, self.yaw)

    def to_dict(self) -> dict[str, float]:
        """Return a dictionary representation of the angles."""
        return {"roll": self.roll, "pitch": self.pitch, "yaw": self.yaw}
