################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Status values reported by the AHRS fusion engine."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import fields


@dataclass(frozen=True)
class AhrsFlags:
    """Independent status flags of the fusion engine.

    Each flag is a separate outcome; several may be set at once.

    Attributes:
        initialising: The engine is ramping its gain down after a reset
        angular_rate_recovery: The gyroscope range was exceeded and the engine
            is re-initialising around the held orientation
        angular_rate_overflow: The most recent gyroscope sample exceeded the
            gyroscope range
        acceleration_recovery: The accelerometer is being force-admitted after
            a persistent rejection
        magnetic_recovery: The magnetometer is being force-admitted after a
            persistent rejection
    """

    initialising: bool = False
    angular_rate_recovery: bool = False
    angular_rate_overflow: bool = False
    acceleration_recovery: bool = False
    magnetic_recovery: bool = False

    def active(self) -> tuple[str, ...]:
        """Return the names of the set flags."""
        return tuple(f.name for f in fields(self) if getattr(self, f.name))


@dataclass(frozen=True)
class AhrsInternalStates:
    """Snapshot of the engine's rejection and recovery state.

    Attributes:
        acceleration_error: Angle between the measured and the predicted
            gravity direction in degrees
        accelerometer_ignored: The accelerometer was ignored by the last update
        acceleration_recovery_trigger: Recovery trigger as a fraction of the
            recovery trigger period, within [0, 1]
        magnetic_error: Angle between the measured and the predicted magnetic
            field direction in degrees
        magnetometer_ignored: The magnetometer was ignored by the last update
        magnetic_recovery_trigger: Recovery trigger as a fraction of the
            recovery trigger period, within [0, 1]
    """

    acceleration_error: float
    accelerometer_ignored: bool
    acceleration_recovery_trigger: float
    magnetic_error: float
    magnetometer_ignored: bool
    magnetic_recovery_trigger: float

    def to_dict(self) -> dict[str, object]:
        """Return a dictionary representation of the states."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
