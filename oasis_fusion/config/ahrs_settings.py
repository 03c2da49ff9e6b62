################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from __future__ import annotations

import math
from dataclasses import dataclass
from dataclasses import replace
from enum import Enum
from typing import Any
from typing import Mapping


class AhrsSettingsError(Exception):
    """Raised when AHRS settings are invalid."""


class Convention(Enum):
    """Earth axes convention of the orientation estimate.

    The first letter names the earth x axis, the second the earth y axis and
    the third the earth z axis.
    """

    # North-West-Up
    NWU = "nwu"
    # East-North-Up
    ENU = "enu"
    # North-East-Down
    NED = "ned"

    @classmethod
    def parse(cls, value: object) -> Convention:
        """Return the convention named by value, case-insensitive."""
        if isinstance(value, Convention):
            return value
        if not isinstance(value, str):
            raise AhrsSettingsError("convention must be a string")
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            raise AhrsSettingsError(f"unknown convention: {value}") from exc

    @property
    def is_z_up(self) -> bool:
        """Return True if the earth z axis points up."""
        return self is not Convention.NED


@dataclass(frozen=True)
class AhrsSettings:
    """User-facing tuning of the AHRS fusion engine.

    Responsibility:
        Hold the parameters an application tunes for its sensors and motion
        profile. Settings are immutable; applying a new settings object to the
        engine replaces them wholesale and resets rejection/recovery state.

    Data contract:
        - convention: earth axes convention.
        - gain: blend weight of the reference corrections, unitless. 0 makes
          the engine integrate the gyroscope only and disables rejection.
        - gyroscope_range: sensor range in °/s. Angular rates near this value
          trigger angular-rate recovery. 0 disables the check.
        - acceleration_rejection: accelerometer error threshold in degrees
          beyond which the accelerometer is ignored. 0 disables rejection.
        - magnetic_rejection: magnetometer error threshold in degrees beyond
          which the magnetometer is ignored. 0 disables rejection.
        - recovery_trigger_period: number of samples a source may be rejected
          before it is force-admitted. 0 disables rejection.
    """

    convention: Convention = Convention.NWU
    gain: float = 0.5
    gyroscope_range: float = 0.0
    acceleration_rejection: float = 90.0
    magnetic_rejection: float = 90.0
    recovery_trigger_period: int = 0

    @staticmethod
    def defaults() -> AhrsSettings:
        """Return the default settings."""
        settings: AhrsSettings = AhrsSettings()
        settings.validate()
        return settings

    @classmethod
    def from_dict(cls, params: Mapping[str, object]) -> AhrsSettings:
        """Construct settings from a mapping, rejecting unknown keys."""
        if not isinstance(params, Mapping):
            raise AhrsSettingsError("settings must be a mapping")
        unknown_keys: list[str] = sorted(set(params.keys()) - set(cls._field_order()))
        if unknown_keys:
            raise AhrsSettingsError(f"unknown setting: {unknown_keys[0]}")
        defaults: AhrsSettings = cls.defaults()
        settings: AhrsSettings = cls(
            convention=Convention.parse(
                params.get("convention", defaults.convention)
            ),
            gain=cls._as_float("gain", params.get("gain", defaults.gain)),
            gyroscope_range=cls._as_float(
                "gyroscope_range",
                params.get("gyroscope_range", defaults.gyroscope_range),
            ),
            acceleration_rejection=cls._as_float(
                "acceleration_rejection",
                params.get("acceleration_rejection", defaults.acceleration_rejection),
            ),
            magnetic_rejection=cls._as_float(
                "magnetic_rejection",
                params.get("magnetic_rejection", defaults.magnetic_rejection),
            ),
            recovery_trigger_period=cls._as_int(
                "recovery_trigger_period",
                params.get(
                    "recovery_trigger_period", defaults.recovery_trigger_period
                ),
            ),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """Validate settings and raise AhrsSettingsError on failure."""
        if not isinstance(self.convention, Convention):
            raise AhrsSettingsError("convention must be a Convention")
        self._validate_non_negative("gain", self.gain)
        self._validate_non_negative("gyroscope_range", self.gyroscope_range)
        self._validate_angle("acceleration_rejection", self.acceleration_rejection)
        self._validate_angle("magnetic_rejection", self.magnetic_rejection)
        if (
            isinstance(self.recovery_trigger_period, bool)
            or not isinstance(self.recovery_trigger_period, int)
            or self.recovery_trigger_period < 0
        ):
            raise AhrsSettingsError("recovery_trigger_period must be an int >= 0")

    def replace(self, **overrides: Any) -> AhrsSettings:
        """Return a modified copy of the settings."""
        return replace(self, **overrides)

    def as_dict(self) -> dict[str, object]:
        """Return a YAML-serializable dict representation."""
        return {
            "convention": self.convention.value,
            "gain": self.gain,
            "gyroscope_range": self.gyroscope_range,
            "acceleration_rejection": self.acceleration_rejection,
            "magnetic_rejection": self.magnetic_rejection,
            "recovery_trigger_period": self.recovery_trigger_period,
        }

    @staticmethod
    def _as_float(name: str, value: object) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise AhrsSettingsError(f"{name} must be a float")
        return float(value)

    @staticmethod
    def _as_int(name: str, value: object) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise AhrsSettingsError(f"{name} must be an int")
        return int(value)

    @staticmethod
    def _validate_non_negative(name: str, value: float) -> None:
        if not math.isfinite(value) or value < 0.0:
            raise AhrsSettingsError(f"{name} must be finite and >= 0")

    @staticmethod
    def _validate_angle(name: str, value: float) -> None:
        if not math.isfinite(value) or not (0.0 <= value <= 180.0):
            raise AhrsSettingsError(f"{name} must be in [0, 180] degrees")

    @staticmethod
    def _field_order() -> list[str]:
        return [
            "convention",
            "gain",
            "gyroscope_range",
            "acceleration_rejection",
            "magnetic_rejection",
            "recovery_trigger_period",
        ]
