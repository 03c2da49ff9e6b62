################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Fixed-capacity ring buffer of scalar samples."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


class RingBufferError(Exception):
    """Raised when ring buffer operations fail."""


class ScalarRingBuffer:
    """Store the most recent scalar samples with a running sum.

    Storage is allocated once at construction. push() overwrites the oldest
    sample once the buffer is full, and the running sum keeps mean() O(1).
    """

    def __init__(self, *, capacity: int) -> None:
        """Initialize the ring buffer."""
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise RingBufferError("Capacity must be an int")
        if capacity <= 0:
            raise RingBufferError("Capacity must be positive")
        self._capacity: int = capacity
        self._values: NDArray[np.float64] = np.zeros(capacity, dtype=np.float64)
        self._head: int = 0
        self._count: int = 0
        self._sum: float = 0.0

    def __len__(self) -> int:
        """Return the number of samples stored."""
        return self._count

    @property
    def capacity(self) -> int:
        """Return the maximum number of samples."""
        return self._capacity

    def is_full(self) -> bool:
        """Return True once capacity samples are stored."""
        return self._count == self._capacity

    def clear(self) -> None:
        """Remove all samples from the buffer."""
        self._values.fill(0.0)
        self._head = 0
        self._count = 0
        self._sum = 0.0

    def push(self, value: float) -> None:
        """Append a sample, evicting the oldest one when full."""
        if self._count == self._capacity:
            self._sum -= float(self._values[self._head])
        else:
            self._count += 1
        self._values[self._head] = value
        self._sum += value
        self._head = (self._head + 1) % self._capacity
        if self._head == 0:
            # Re-sum once per lap to bound accumulated rounding error
            self._sum = float(np.sum(self._values))

    def mean(self) -> float:
        """Return the mean of the stored samples, or 0 when empty."""
        if self._count == 0:
            return 0.0
        return self._sum / float(self._count)
