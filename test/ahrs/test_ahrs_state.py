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

import numpy as np

from oasis_fusion.ahrs.ahrs_state import AhrsState
from oasis_fusion.math_utils.quat import Quaternion


def test_initial_state_counters() -> None:
    """Recovery timeouts start at the recovery period."""
    state: AhrsState = AhrsState.initial(
        initial_gain=10.0, ramped_gain_step=3.0, recovery_trigger_period=20
    )
    assert state.initialising
    assert state.ramped_gain == 10.0
    assert state.acceleration_recovery_timeout == 20
    assert state.magnetic_recovery_timeout == 20
    assert not state.acceleration_recovery
    assert not state.magnetic_recovery


def test_recovery_properties_compare_trigger_and_timeout() -> None:
    """Recovery is active while the trigger exceeds the timeout."""
    state: AhrsState = AhrsState.initial(
        initial_gain=10.0, ramped_gain_step=3.0, recovery_trigger_period=20
    )
    state.acceleration_recovery_trigger = 20
    state.acceleration_recovery_timeout = 0
    assert state.acceleration_recovery
    assert not state.magnetic_recovery


def test_reset_keeps_ramped_gain_step() -> None:
    """reset() restores every field except the gain step."""
    state: AhrsState = AhrsState.initial(
        initial_gain=10.0, ramped_gain_step=3.0, recovery_trigger_period=20
    )
    state.quaternion = Quaternion.from_wxyz(0.0, 1.0, 0.0, 0.0)
    state.initialising = False
    state.ramped_gain = 0.5
    state.magnetic_recovery_trigger = 7

    state.reset(initial_gain=8.0, recovery_trigger_period=5)
    np.testing.assert_array_equal(state.quaternion.wxyz, [1.0, 0.0, 0.0, 0.0])
    assert state.initialising
    assert state.ramped_gain == 8.0
    assert state.ramped_gain_step == 3.0
    assert state.magnetic_recovery_trigger == 0
    assert state.magnetic_recovery_timeout == 5
