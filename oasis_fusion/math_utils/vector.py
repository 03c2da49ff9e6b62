################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""3-vector helpers for the fusion math layer.

Vectors are float64 numpy arrays of shape (3,). Helpers return new arrays and
never modify their inputs.
"""

from __future__ import annotations

import math
from typing import Optional
from typing import Sequence
from typing import Union

import numpy as np
from numpy.typing import NDArray

from .units import NumericConstants


Vector3 = NDArray[np.float64]
VectorLike = Union[Sequence[float], NDArray[np.float64]]


def as_vector3(value: VectorLike, name: str = "vector") -> Vector3:
    """Coerce a value to a float64 array with shape (3,)."""
    array: Vector3 = np.asarray(value, dtype=np.float64)
    if array.shape != (3,):
        raise ValueError(f"{name} must have shape (3,)")
    return array


def vec3(x: float, y: float, z: float) -> Vector3:
    """Create a vector from components."""
    return np.array([x, y, z], dtype=np.float64)


def zero3() -> Vector3:
    """Return the zero vector."""
    return np.zeros(3, dtype=np.float64)


def ones3() -> Vector3:
    """Return a vector of ones."""
    return np.ones(3, dtype=np.float64)


def is_zero(v: Vector3) -> bool:
    """Return True if every component is exactly zero."""
    return bool(v[0] == 0.0 and v[1] == 0.0 and v[2] == 0.0)


def dot(a: Vector3, b: Vector3) -> float:
    """Return dot product of two vectors"""
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def cross(a: Vector3, b: Vector3) -> Vector3:
    """Return the cross product a × b"""
    return np.array(
        [
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        ],
        dtype=np.float64,
    )


def hadamard(a: Vector3, b: Vector3) -> Vector3:
    """Return the element-wise product of two vectors"""
    return np.array([a[0] * b[0], a[1] * b[1], a[2] * b[2]], dtype=np.float64)


def magnitude_squared(v: Vector3) -> float:
    """Return the squared Euclidean norm"""
    return dot(v, v)


def magnitude(v: Vector3) -> float:
    """Return the Euclidean norm"""
    return math.sqrt(magnitude_squared(v))


def normalize(v: Vector3, fallback: Optional[Vector3] = None) -> Vector3:
    """Return v scaled to unit length.

    A vector whose squared norm is below NORM_SQ_EPS cannot be normalized; the
    fallback is returned instead (the zero vector when no fallback is given).
    """
    norm_sq: float = magnitude_squared(v)
    if norm_sq < NumericConstants.NORM_SQ_EPS:
        if fallback is None:
            return zero3()
        return np.array(fallback, dtype=np.float64)
    return np.asarray(v, dtype=np.float64) * (1.0 / math.sqrt(norm_sq))
