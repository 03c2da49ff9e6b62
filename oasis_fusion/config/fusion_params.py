################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Algorithm constants for the fusion engine and gyroscope offset estimator.

These values are fixed by the algorithm design rather than tuned per
application (see AhrsSettings for tuning). They are still passed explicitly to
each engine so independently configured sessions can coexist.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from typing import Any
from typing import Mapping


# Gain applied at the start of initialisation, unitless
AHRS_INITIAL_GAIN: float = 10.0
# Time for the ramped gain to decay to the configured gain, in seconds
AHRS_INITIALISATION_PERIOD_SEC: float = 3.0
# Fraction of the gyroscope range treated as angular-rate overflow
AHRS_GYROSCOPE_RANGE_MARGIN: float = 0.98
# Recovery trigger decrement for each sample a source is admitted
AHRS_RECOVERY_TRIGGER_DECREMENT: int = 9
# Restart initialisation around the held orientation on angular-rate overflow
AHRS_REINITIALISE_ON_OVERFLOW: bool = False

# Time the gyroscope must be stationary before offset tracking, in seconds
OFFSET_TIMEOUT_SEC: float = 5.0
# Cutoff frequency of the offset low-pass filter, in Hz
OFFSET_CUTOFF_FREQUENCY_HZ: float = 0.02
# Angular rate below which the gyroscope is considered stationary, in °/s
OFFSET_THRESHOLD_DPS: float = 3.0


class FusionParamsError(Exception):
    """Raised when fusion parameter validation fails."""


def _as_float(name: str, value: object) -> float:
    """Coerce a numeric value to float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FusionParamsError(f"{name} must be a float")
    return float(value)


def _as_bool(name: str, value: object) -> bool:
    """Require a boolean value."""
    if not isinstance(value, bool):
        raise FusionParamsError(f"{name} must be a bool")
    return value


def _as_int(name: str, value: object) -> int:
    """Coerce an integral value to int."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise FusionParamsError(f"{name} must be an int")
    return int(value)


def _require_positive(value: float, name: str) -> None:
    """Require a finite positive value."""
    if not math.isfinite(value) or value <= 0.0:
        raise FusionParamsError(f"{name} must be positive")


def _reject_unknown(params: Mapping[str, object], names: list[str]) -> None:
    """Raise if params contains keys outside names."""
    if not isinstance(params, Mapping):
        raise FusionParamsError("params must be a mapping")
    unknown_keys: list[str] = sorted(set(params.keys()) - set(names))
    if unknown_keys:
        raise FusionParamsError(f"unknown parameter: {unknown_keys[0]}")


@dataclass(frozen=True)
class AhrsParams:
    """Algorithm constants of the AHRS fusion engine."""

    # Gain applied at the start of initialisation
    initial_gain: float = AHRS_INITIAL_GAIN
    # Initialisation ramp duration in seconds
    initialisation_period_sec: float = AHRS_INITIALISATION_PERIOD_SEC
    # Fraction of the gyroscope range treated as overflow
    gyroscope_range_margin: float = AHRS_GYROSCOPE_RANGE_MARGIN
    # Recovery trigger decrement per admitted sample
    recovery_trigger_decrement: int = AHRS_RECOVERY_TRIGGER_DECREMENT
    # Reset the engine, keeping the orientation, when the gyroscope overflows
    reinitialise_on_overflow: bool = AHRS_REINITIALISE_ON_OVERFLOW

    @classmethod
    def defaults(cls) -> AhrsParams:
        """Return the default engine constants."""
        return cls()

    @classmethod
    def from_dict(cls, params: Mapping[str, object]) -> AhrsParams:
        """Construct parameters from a mapping, rejecting unknown keys."""
        _reject_unknown(params, [f.name for f in fields(cls)])
        defaults: AhrsParams = cls.defaults()
        result: AhrsParams = cls(
            initial_gain=_as_float(
                "initial_gain", params.get("initial_gain", defaults.initial_gain)
            ),
            initialisation_period_sec=_as_float(
                "initialisation_period_sec",
                params.get(
                    "initialisation_period_sec", defaults.initialisation_period_sec
                ),
            ),
            gyroscope_range_margin=_as_float(
                "gyroscope_range_margin",
                params.get("gyroscope_range_margin", defaults.gyroscope_range_margin),
            ),
            recovery_trigger_decrement=_as_int(
                "recovery_trigger_decrement",
                params.get(
                    "recovery_trigger_decrement", defaults.recovery_trigger_decrement
                ),
            ),
            reinitialise_on_overflow=_as_bool(
                "reinitialise_on_overflow",
                params.get(
                    "reinitialise_on_overflow", defaults.reinitialise_on_overflow
                ),
            ),
        )
        result.validate()
        return result

    def validate(self) -> None:
        """Validate parameter invariants."""
        _require_positive(self.initial_gain, "initial_gain")
        _require_positive(self.initialisation_period_sec, "initialisation_period_sec")
        _require_positive(self.gyroscope_range_margin, "gyroscope_range_margin")
        if self.gyroscope_range_margin > 1.0:
            raise FusionParamsError("gyroscope_range_margin must not exceed 1")
        if self.recovery_trigger_decrement <= 0:
            raise FusionParamsError("recovery_trigger_decrement must be positive")

    def replace(self, **overrides: Any) -> AhrsParams:
        """Return a modified copy of the parameters."""
        return replace(self, **overrides)

    def as_dict(self) -> dict[str, object]:
        """Return a YAML-serializable dict representation."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class OffsetParams:
    """Algorithm constants of the gyroscope offset estimator."""

    # Stationary time required before tracking the offset, in seconds
    timeout_sec: float = OFFSET_TIMEOUT_SEC
    # Offset low-pass filter cutoff in Hz
    cutoff_frequency_hz: float = OFFSET_CUTOFF_FREQUENCY_HZ
    # Stationary angular-rate threshold in °/s
    threshold_dps: float = OFFSET_THRESHOLD_DPS

    @classmethod
    def defaults(cls) -> OffsetParams:
        """Return the default offset estimator constants."""
        return cls()

    @classmethod
    def from_dict(cls, params: Mapping[str, object]) -> OffsetParams:
        """Construct parameters from a mapping, rejecting unknown keys."""
        _reject_unknown(params, [f.name for f in fields(cls)])
        defaults: OffsetParams = cls.defaults()
        result: OffsetParams = cls(
            timeout_sec=_as_float(
                "timeout_sec", params.get("timeout_sec", defaults.timeout_sec)
            ),
            cutoff_frequency_hz=_as_float(
                "cutoff_frequency_hz",
                params.get("cutoff_frequency_hz", defaults.cutoff_frequency_hz),
            ),
            threshold_dps=_as_float(
                "threshold_dps", params.get("threshold_dps", defaults.threshold_dps)
            ),
        )
        result.validate()
        return result

    def validate(self) -> None:
        """Validate parameter invariants."""
        _require_positive(self.timeout_sec, "timeout_sec")
        _require_positive(self.cutoff_frequency_hz, "cutoff_frequency_hz")
        _require_positive(self.threshold_dps, "threshold_dps")

    def replace(self, **overrides: Any) -> OffsetParams:
        """Return a modified copy of the parameters."""
        return replace(self, **overrides)

    def as_dict(self) -> dict[str, object]:
        """Return a YAML-serializable dict representation."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
