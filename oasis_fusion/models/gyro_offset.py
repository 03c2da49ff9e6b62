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

from oasis_fusion.config.fusion_params import OffsetParams
from oasis_fusion.math_utils.vector import Vector3
from oasis_fusion.math_utils.vector import VectorLike
from oasis_fusion.math_utils.vector import as_vector3
from oasis_fusion.math_utils.vector import magnitude
from oasis_fusion.math_utils.vector import zero3
from oasis_fusion.timing.ring_buffer import ScalarRingBuffer


_LOG: logging.Logger = logging.getLogger(__name__)


class GyroOffsetEstimator:
    """Run-time gyroscope offset (bias) correction.

    Responsibility:
        Track slowly varying gyroscope bias while the sensor is stationary and
        remove it from every sample so stationary periods read zero.

    Inputs/outputs:
        - Input: gyroscope sample in °/s, shape (3,).
        - Output: offset-corrected gyroscope sample in °/s.

    Stationary detection:
        The magnitude of every corrected sample is pushed into a ring buffer
        spanning params.timeout_sec. The sensor is stationary while the buffer
        is full and its mean magnitude is below params.threshold_dps, so a
        brief spike only raises the mean.

    Equations:
        Bias update while stationary (one-pole low-pass):
            k = 2π * f_c / f_s
            b ← b + k * (ω - b)

    Determinism and edge cases:
        - update() never raises for a well-shaped sample.
        - The bias is left unchanged while not stationary.
    """

    def __init__(
        self, sample_rate_hz: float, params: Optional[OffsetParams] = None
    ) -> None:
        """Create an estimator for the nominal sample rate in Hz."""
        if not math.isfinite(sample_rate_hz) or sample_rate_hz <= 0.0:
            raise ValueError("sample_rate_hz must be positive")
        self._params: OffsetParams = params or OffsetParams.defaults()
        self._params.validate()

        self._sample_rate_hz: float = float(sample_rate_hz)
        self._sample_period_sec: float = 1.0 / self._sample_rate_hz
        self._filter_coefficient: float = (
            2.0 * math.pi * self._params.cutoff_frequency_hz * self._sample_period_sec
        )
        timeout_samples: int = max(
            1, int(round(self._params.timeout_sec * self._sample_rate_hz))
        )
        self._window: ScalarRingBuffer = ScalarRingBuffer(capacity=timeout_samples)
        self._offset: Vector3 = zero3()
        self._stationary: bool = False

    @property
    def params(self) -> OffsetParams:
        return self._params

    @property
    def sample_period_sec(self) -> float:
        return self._sample_period_sec

    @property
    def filter_coefficient(self) -> float:
        return self._filter_coefficient

    @property
    def timeout_samples(self) -> int:
        """Return the number of stationary samples required before tracking."""
        return self._window.capacity

    @property
    def offset(self) -> Vector3:
        """Return a copy of the current bias estimate in °/s."""
        return self._offset.copy()

    @property
    def is_stationary(self) -> bool:
        return self._stationary

    def reset(self) -> None:
        """Forget the bias estimate and the stationary history."""
        self._offset = zero3()
        self._window.clear()
        self._stationary = False

    def update(self, angular_rate: VectorLike) -> Vector3:
        """Return the offset-corrected angular rate in °/s."""
        gyroscope: Vector3 = as_vector3(angular_rate, "angular_rate") - self._offset

        self._window.push(magnitude(gyroscope))
        if (
            not self._window.is_full()
            or not self._window.mean() < self._params.threshold_dps
        ):
            self._set_stationary(False)
            return gyroscope

        self._set_stationary(True)
        self._offset = self._offset + gyroscope * self._filter_coefficient
        return gyroscope

    def _set_stationary(self, stationary: bool) -> None:
        if stationary == self._stationary:
            return
        self._stationary = stationary
        if stationary:
            _LOG.debug(
                "Gyroscope stationary for %d samples, tracking offset",
                self._window.capacity,
            )
        else:
            _LOG.debug(
                "Gyroscope moving, holding offset [%.4f, %.4f, %.4f] deg/s",
                float(self._offset[0]),
                float(self._offset[1]),
                float(self._offset[2]),
            )
