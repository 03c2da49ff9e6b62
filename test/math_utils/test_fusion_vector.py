################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for vector, matrix and unit helpers."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_fusion.math_utils.matrix import as_matrix3
from oasis_fusion.math_utils.matrix import matvec3
from oasis_fusion.math_utils.units import asin_safe
from oasis_fusion.math_utils.vector import as_vector3
from oasis_fusion.math_utils.vector import cross
from oasis_fusion.math_utils.vector import dot
from oasis_fusion.math_utils.vector import hadamard
from oasis_fusion.math_utils.vector import is_zero
from oasis_fusion.math_utils.vector import magnitude
from oasis_fusion.math_utils.vector import normalize
from oasis_fusion.math_utils.vector import vec3
from oasis_fusion.math_utils.vector import zero3


def test_as_vector3_rejects_wrong_shape() -> None:
    """Vectors must have exactly three components."""
    with pytest.raises(ValueError):
        as_vector3([1.0, 2.0], "short")


def test_cross_right_handed() -> None:
    """x × y = z."""
    result: NDArray[np.float64] = cross(vec3(1.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0))
    np.testing.assert_array_equal(result, [0.0, 0.0, 1.0])


def test_dot_and_hadamard() -> None:
    """Checks dot and element-wise products."""
    a: NDArray[np.float64] = vec3(1.0, 2.0, 3.0)
    b: NDArray[np.float64] = vec3(-1.0, 0.5, 2.0)
    assert dot(a, b) == pytest.approx(6.0)
    np.testing.assert_allclose(hadamard(a, b), [-1.0, 1.0, 6.0])


def test_normalize_unit_length() -> None:
    """normalize() yields a unit vector."""
    v: NDArray[np.float64] = normalize(vec3(3.0, 0.0, 4.0))
    assert magnitude(v) == pytest.approx(1.0)
    np.testing.assert_allclose(v, [0.6, 0.0, 0.8])


def test_normalize_degenerate_uses_fallback() -> None:
    """Near-zero vectors return the fallback instead of NaN."""
    assert is_zero(normalize(zero3()))
    fallback: NDArray[np.float64] = vec3(0.0, 0.0, 1.0)
    np.testing.assert_array_equal(normalize(vec3(1e-14, 0.0, 0.0), fallback), fallback)


def test_matrix_helpers() -> None:
    """Checks flat matrix coercion and matvec."""
    A: NDArray[np.float64] = as_matrix3([1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0])
    assert A.shape == (3, 3)
    np.testing.assert_allclose(matvec3(A, vec3(1.0, 0.0, 0.0)), [1.0, 4.0, 7.0])
    with pytest.raises(ValueError):
        as_matrix3([1.0, 2.0, 3.0], "bad")


def test_asin_safe_clamps() -> None:
    """Out-of-range arguments clamp to ±90 degrees."""
    assert asin_safe(1.0 + 1e-9) == pytest.approx(0.5 * math.pi)
    assert asin_safe(-2.0) == pytest.approx(-0.5 * math.pi)
    assert asin_safe(0.5) == pytest.approx(math.asin(0.5))
