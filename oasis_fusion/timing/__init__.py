################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Timing and windowing helpers."""

from oasis_fusion.timing.ring_buffer import RingBufferError
from oasis_fusion.timing.ring_buffer import ScalarRingBuffer


__all__ = ["RingBufferError", "ScalarRingBuffer"]
