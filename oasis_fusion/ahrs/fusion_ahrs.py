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

import logging
import math
from typing import Optional

import numpy as np

from oasis_fusion.ahrs.ahrs_state import AhrsState
from oasis_fusion.config.ahrs_settings import AhrsSettings
from oasis_fusion.config.ahrs_settings import Convention
from oasis_fusion.config.fusion_params import AhrsParams
from oasis_fusion.fusion_types.ahrs_status import AhrsFlags
from oasis_fusion.fusion_types.ahrs_status import AhrsInternalStates
from oasis_fusion.math_utils.matrix import matvec3
from oasis_fusion.math_utils.quat import Quaternion
from oasis_fusion.math_utils.units import NumericConstants
from oasis_fusion.math_utils.units import asin_safe
from oasis_fusion.math_utils.vector import Vector3
from oasis_fusion.math_utils.vector import VectorLike
from oasis_fusion.math_utils.vector import as_vector3
from oasis_fusion.math_utils.vector import cross
from oasis_fusion.math_utils.vector import dot
from oasis_fusion.math_utils.vector import is_zero
from oasis_fusion.math_utils.vector import magnitude
from oasis_fusion.math_utils.vector import magnitude_squared
from oasis_fusion.math_utils.vector import normalize
from oasis_fusion.math_utils.vector import vec3
from oasis_fusion.math_utils.vector import zero3


_LOG: logging.Logger = logging.getLogger(__name__)


class FusionAhrs:
    """Complementary-filter AHRS with adaptive measurement rejection.

    Responsibility:
        Integrate gyroscope angular rate into an orientation quaternion and
        steer the integration towards the gravity and magnetic field
        directions measured by the accelerometer and magnetometer.

    Inputs/outputs:
        - Inputs: gyroscope in °/s, accelerometer in g, magnetometer in any
          consistent unit, elapsed time in seconds.
        - Outputs: orientation quaternion, earth-frame and sensor-frame
          gravity-free acceleration, flags and internal states.

    Frames and units:
        - The quaternion maps sensor vectors into the earth frame whose axes
          follow AhrsSettings.convention.
        - An accelerometer at rest reads +1 g along earth "up".

    Equations:
        Reference directions in the sensor frame, scaled by 0.5:
            ĝ/2 = R(q)ᵀ * up / 2
            m̂/2 = R(q)ᵀ * west / 2        (NWU, other conventions analogous)

        Feedback for a measured direction s and reference r:
            e = s × r, normalized when s · r < 0

        Integration with feedback:
            ω' = ω * π/360 + (e_a + e_m) * gain
            q ← normalize(q + q ⊗ (ω' * dt))

    Rejection and recovery:
        A source whose squared feedback magnitude exceeds its threshold is
        ignored and its recovery trigger is incremented; admitted samples
        decrement the trigger by params.recovery_trigger_decrement. Once the
        trigger exceeds the recovery timeout the source is force-admitted
        until the trigger drains back to zero. The trigger is clamped to
        [0, recovery_trigger_period].

    Determinism and edge cases:
        - update() never raises for well-shaped inputs.
        - A zero accelerometer or magnetometer vector skips that correction.
        - A magnetometer parallel to gravity skips the magnetic correction.
        - A non-finite delta time integrates nothing.
        - Angular-rate overflow only raises a flag unless
          params.reinitialise_on_overflow restarts initialisation.
    """

    def __init__(
        self,
        params: Optional[AhrsParams] = None,
        settings: Optional[AhrsSettings] = None,
    ) -> None:
        """Create an engine in its initial (initialising) state."""
        self._params: AhrsParams = params or AhrsParams.defaults()
        self._params.validate()

        self._settings: AhrsSettings = AhrsSettings.defaults()
        self._gyroscope_range_limit: float = math.inf
        self._acceleration_rejection: float = math.inf
        self._magnetic_rejection: float = math.inf

        self._state: AhrsState = AhrsState.initial(
            initial_gain=self._params.initial_gain,
            ramped_gain_step=self._ramped_gain_step(self._settings),
            recovery_trigger_period=self._settings.recovery_trigger_period,
        )
        self.update_settings(settings or AhrsSettings.defaults())

    @property
    def params(self) -> AhrsParams:
        return self._params

    @property
    def settings(self) -> AhrsSettings:
        return self._settings

    def update_settings(self, settings: AhrsSettings) -> None:
        """Apply new settings, resetting rejection and recovery counters."""
        settings.validate()
        self._settings = settings

        period: int = settings.recovery_trigger_period
        self._gyroscope_range_limit = (
            math.inf
            if settings.gyroscope_range == 0.0
            else self._params.gyroscope_range_margin * settings.gyroscope_range
        )
        self._acceleration_rejection = self._rejection_threshold(
            settings.acceleration_rejection
        )
        self._magnetic_rejection = self._rejection_threshold(
            settings.magnetic_rejection
        )
        if settings.gain == 0.0 or period == 0:
            # Rejection requires feedback and a recovery path
            self._acceleration_rejection = math.inf
            self._magnetic_rejection = math.inf

        state: AhrsState = self._state
        state.acceleration_recovery_trigger = 0
        state.acceleration_recovery_timeout = period
        state.magnetic_recovery_trigger = 0
        state.magnetic_recovery_timeout = period
        if not state.initialising:
            state.ramped_gain = settings.gain
        state.ramped_gain_step = self._ramped_gain_step(settings)

        _LOG.debug(
            "Applied AHRS settings: convention=%s gain=%.3f gyroscope_range=%.1f "
            "acceleration_rejection=%.1f magnetic_rejection=%.1f "
            "recovery_trigger_period=%d",
            settings.convention.name,
            settings.gain,
            settings.gyroscope_range,
            settings.acceleration_rejection,
            settings.magnetic_rejection,
            period,
        )

    def reset(self) -> None:
        """Return the engine to its initial state, keeping the settings."""
        self._state.reset(
            initial_gain=self._params.initial_gain,
            recovery_trigger_period=self._settings.recovery_trigger_period,
        )

    def update(
        self,
        gyroscope: VectorLike,
        accelerometer: VectorLike,
        magnetometer: VectorLike,
        delta_time_sec: float,
    ) -> None:
        """Fuse one sample set into the orientation estimate."""
        gyr: Vector3 = as_vector3(gyroscope, "gyroscope")
        acc: Vector3 = as_vector3(accelerometer, "accelerometer")
        mag: Vector3 = as_vector3(magnetometer, "magnetometer")
        dt: float = float(delta_time_sec) if math.isfinite(delta_time_sec) else 0.0

        state: AhrsState = self._state

        overflow: bool = bool(np.any(np.abs(gyr) > self._gyroscope_range_limit))
        if overflow and not state.angular_rate_overflow:
            _LOG.info(
                "Angular rate exceeded %.1f deg/s", self._gyroscope_range_limit
            )
        if overflow and self._params.reinitialise_on_overflow:
            # Re-initialise around the held orientation
            quaternion: Quaternion = state.quaternion
            self.reset()
            state.quaternion = quaternion
            state.angular_rate_recovery = True
        state.angular_rate_overflow = overflow
        state.accelerometer = acc.copy()

        # Ramp down the gain during initialisation
        if state.initialising:
            state.ramped_gain -= state.ramped_gain_step * dt
            if state.ramped_gain < self._settings.gain or self._settings.gain == 0.0:
                state.ramped_gain = self._settings.gain
                state.initialising = False
                state.angular_rate_recovery = False
                _LOG.debug("AHRS initialisation complete")

        half_gravity: Vector3 = self._half_gravity()

        was_acceleration_recovery: bool = state.acceleration_recovery
        half_accelerometer_feedback: Vector3 = zero3()
        state.accelerometer_ignored = True
        state.half_accelerometer_feedback = zero3()
        if not is_zero(acc):
            state.half_accelerometer_feedback = self._feedback(
                normalize(acc), half_gravity
            )
            (
                state.accelerometer_ignored,
                state.acceleration_recovery_trigger,
                state.acceleration_recovery_timeout,
            ) = self._admit(
                magnitude_squared(state.half_accelerometer_feedback),
                self._acceleration_rejection,
                state.acceleration_recovery_trigger,
                state.acceleration_recovery_timeout,
            )
            if not state.accelerometer_ignored:
                half_accelerometer_feedback = state.half_accelerometer_feedback
        self._log_recovery(
            "Acceleration", was_acceleration_recovery, state.acceleration_recovery
        )

        was_magnetic_recovery: bool = state.magnetic_recovery
        half_magnetometer_feedback: Vector3 = zero3()
        state.magnetometer_ignored = True
        state.half_magnetometer_feedback = zero3()
        horizontal: Vector3 = cross(half_gravity, mag)
        if (
            not is_zero(mag)
            and magnitude_squared(horizontal) >= NumericConstants.NORM_SQ_EPS
        ):
            state.half_magnetometer_feedback = self._feedback(
                normalize(horizontal), self._half_magnetic()
            )
            (
                state.magnetometer_ignored,
                state.magnetic_recovery_trigger,
                state.magnetic_recovery_timeout,
            ) = self._admit(
                magnitude_squared(state.half_magnetometer_feedback),
                self._magnetic_rejection,
                state.magnetic_recovery_trigger,
                state.magnetic_recovery_timeout,
            )
            if not state.magnetometer_ignored:
                half_magnetometer_feedback = state.half_magnetometer_feedback
        self._log_recovery("Magnetic", was_magnetic_recovery, state.magnetic_recovery)

        # Gyroscope in rad/s scaled by 0.5, with feedback applied
        half_gyroscope: Vector3 = gyr * math.radians(0.5)
        adjusted_half_gyroscope: Vector3 = half_gyroscope + (
            half_accelerometer_feedback + half_magnetometer_feedback
        ) * state.ramped_gain

        q: Quaternion = state.quaternion
        state.quaternion = (
            q + q.multiply_vector(adjusted_half_gyroscope * dt)
        ).normalized()

        state.earth_acceleration = self._compute_earth_acceleration()

    def update_no_magnetometer(
        self,
        gyroscope: VectorLike,
        accelerometer: VectorLike,
        delta_time_sec: float,
    ) -> None:
        """Fuse a sample set without a magnetometer.

        Heading is held at zero while initialising.
        """
        self.update(gyroscope, accelerometer, zero3(), delta_time_sec)
        if self._state.initialising:
            self.set_heading(0.0)

    def update_external_heading(
        self,
        gyroscope: VectorLike,
        accelerometer: VectorLike,
        heading_deg: float,
        delta_time_sec: float,
    ) -> None:
        """Fuse a sample set using an external heading instead of a magnetometer."""
        q: Quaternion = self._state.quaternion
        roll: float = math.atan2(q.w * q.x + q.y * q.z, 0.5 - q.y * q.y - q.x * q.x)

        heading: float = math.radians(heading_deg)
        sin_heading: float = math.sin(heading)
        magnetometer: Vector3 = vec3(
            math.cos(heading),
            -math.cos(roll) * sin_heading,
            sin_heading * math.sin(roll),
        )
        self.update(gyroscope, accelerometer, magnetometer, delta_time_sec)

    def set_heading(self, heading_deg: float) -> None:
        """Rotate the estimate about earth z so that yaw equals heading_deg."""
        q: Quaternion = self._state.quaternion
        yaw: float = math.atan2(q.w * q.z + q.x * q.y, 0.5 - q.y * q.y - q.z * q.z)
        half_yaw_minus_heading: float = 0.5 * (yaw - math.radians(heading_deg))
        rotation: Quaternion = Quaternion.from_wxyz(
            math.cos(half_yaw_minus_heading),
            0.0,
            0.0,
            -math.sin(half_yaw_minus_heading),
        )
        self._state.quaternion = (rotation * q).normalized()

    def set_quaternion(self, quaternion: Quaternion) -> None:
        """Overwrite the orientation estimate."""
        self._state.quaternion = quaternion.normalized()

    @property
    def quaternion(self) -> Quaternion:
        return Quaternion(self._state.quaternion.wxyz.copy())

    @property
    def earth_acceleration(self) -> Vector3:
        """Return the gravity-free acceleration in the earth frame, in g."""
        return self._state.earth_acceleration.copy()

    @property
    def linear_acceleration(self) -> Vector3:
        """Return the gravity-free acceleration in the sensor frame, in g."""
        gravity: Vector3 = self._half_gravity() * 2.0
        return self._state.accelerometer - gravity

    @property
    def internal_states(self) -> AhrsInternalStates:
        state: AhrsState = self._state
        period: int = self._settings.recovery_trigger_period
        return AhrsInternalStates(
            acceleration_error=math.degrees(
                asin_safe(2.0 * magnitude(state.half_accelerometer_feedback))
            ),
            accelerometer_ignored=state.accelerometer_ignored,
            acceleration_recovery_trigger=self._trigger_ratio(
                state.acceleration_recovery_trigger, period
            ),
            magnetic_error=math.degrees(
                asin_safe(2.0 * magnitude(state.half_magnetometer_feedback))
            ),
            magnetometer_ignored=state.magnetometer_ignored,
            magnetic_recovery_trigger=self._trigger_ratio(
                state.magnetic_recovery_trigger, period
            ),
        )

    @property
    def flags(self) -> AhrsFlags:
        state: AhrsState = self._state
        return AhrsFlags(
            initialising=state.initialising,
            angular_rate_recovery=state.angular_rate_recovery,
            angular_rate_overflow=state.angular_rate_overflow,
            acceleration_recovery=state.acceleration_recovery,
            magnetic_recovery=state.magnetic_recovery,
        )

    def _admit(
        self,
        error_sq: float,
        rejection: float,
        trigger: int,
        timeout: int,
    ) -> tuple[bool, int, int]:
        """Return (ignored, trigger, timeout) after one feedback sample."""
        period: int = self._settings.recovery_trigger_period
        ignored: bool = True
        if self._state.initialising or error_sq <= rejection:
            ignored = False
            trigger -= self._params.recovery_trigger_decrement
        else:
            trigger += 1

        # Force-admit the source while recovering
        if trigger > timeout:
            timeout = 0
            ignored = False
        else:
            timeout = period

        trigger = min(max(trigger, 0), period)
        return ignored, trigger, timeout

    def _half_gravity(self) -> Vector3:
        """Return the gravity direction in the sensor frame, scaled by 0.5."""
        q: Quaternion = self._state.quaternion
        w, x, y, z = q.w, q.x, q.y, q.z
        if self._settings.convention is Convention.NED:
            return vec3(w * y - x * z, -(y * z + w * x), 0.5 - w * w - z * z)
        return vec3(x * z - w * y, y * z + w * x, w * w - 0.5 + z * z)

    def _half_magnetic(self) -> Vector3:
        """Return the magnetic field direction in the sensor frame, scaled by 0.5."""
        q: Quaternion = self._state.quaternion
        w, x, y, z = q.w, q.x, q.y, q.z
        convention: Convention = self._settings.convention
        if convention is Convention.ENU:
            return vec3(0.5 - w * w - x * x, w * z - x * y, -(x * z + w * y))
        if convention is Convention.NED:
            return vec3(-(x * y + w * z), 0.5 - w * w - y * y, w * x - y * z)
        return vec3(x * y + w * z, w * w - 0.5 + y * y, y * z - w * x)

    def _compute_earth_acceleration(self) -> Vector3:
        """Rotate the accelerometer into the earth frame and remove gravity."""
        state: AhrsState = self._state
        earth: Vector3 = matvec3(state.quaternion.as_matrix(), state.accelerometer)
        if self._settings.convention.is_z_up:
            earth[2] -= 1.0
        else:
            earth[2] += 1.0
        return earth

    @staticmethod
    def _log_recovery(source: str, was_recovering: bool, recovering: bool) -> None:
        if recovering and not was_recovering:
            _LOG.info("%s recovery started, forcing correction", source)
        elif was_recovering and not recovering:
            _LOG.info("%s recovery complete", source)

    @staticmethod
    def _feedback(sensor: Vector3, reference: Vector3) -> Vector3:
        if dot(sensor, reference) < 0.0:
            # Error exceeds 90 degrees
            return normalize(cross(sensor, reference))
        return cross(sensor, reference)

    @staticmethod
    def _rejection_threshold(rejection_deg: float) -> float:
        if rejection_deg == 0.0:
            return math.inf
        half_sin: float = 0.5 * math.sin(math.radians(rejection_deg))
        return half_sin * half_sin

    @staticmethod
    def _trigger_ratio(trigger: int, period: int) -> float:
        if period == 0:
            return 0.0
        return float(trigger) / float(period)

    def _ramped_gain_step(self, settings: AhrsSettings) -> float:
        return (
            self._params.initial_gain - settings.gain
        ) / self._params.initialisation_period_sec
