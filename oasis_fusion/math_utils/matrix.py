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

from typing import Sequence
from typing import Union

import numpy as np
from numpy.typing import NDArray

from .vector import Vector3


Matrix3 = NDArray[np.float64]
MatrixLike = Union[Sequence[Sequence[float]], Sequence[float], NDArray[np.float64]]


def as_matrix3(value: MatrixLike, name: str = "matrix") -> Matrix3:
    """Coerce a nested or row-major flat value to a (3, 3) float64 array"""
    array: NDArray[np.float64] = np.asarray(value, dtype=np.float64)
    if array.shape == (9,):
        array = array.reshape((3, 3))
    if array.shape != (3, 3):
        raise ValueError(f"{name} must have shape (3, 3) or (9,)")
    return array


def identity3() -> Matrix3:
    """Return a 3x3 identity matrix"""
    return np.eye(3, dtype=np.float64)


def matvec3(A: Matrix3, v: Vector3) -> Vector3:
    """Return A * v for 3x3 A and 3x1 v"""
    return np.array(
        [
            A[0][0] * v[0] + A[0][1] * v[1] + A[0][2] * v[2],
            A[1][0] * v[0] + A[1][1] * v[1] + A[1][2] * v[2],
            A[2][0] * v[0] + A[2][1] * v[1] + A[2][2] * v[2],
        ],
        dtype=np.float64,
    )
