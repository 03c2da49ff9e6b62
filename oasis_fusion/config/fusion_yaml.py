################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""YAML schema utilities for sensor fusion configuration files.

Every section is optional and falls back to its defaults:

    ahrs_settings:
      convention: nwu
      gain: 0.5
      ...
    ahrs_params: {...}
    offset_params: {...}
    calibration:
      gyroscope:
        misalignment: [[1, 0, 0], [0, 1, 0], [0, 0, 1]]
        sensitivity: [1, 1, 1]
        offset: [0, 0, 0]
      accelerometer: {...}
      magnetometer:
        soft_iron_matrix: [[1, 0, 0], [0, 1, 0], [0, 0, 1]]
        hard_iron_offset: [0, 0, 0]
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Mapping

import numpy as np
import yaml

from oasis_fusion.calibration.sensor_calibration import InertialCalibration
from oasis_fusion.calibration.sensor_calibration import MagneticCalibration
from oasis_fusion.config.ahrs_settings import AhrsSettings
from oasis_fusion.config.ahrs_settings import AhrsSettingsError
from oasis_fusion.config.fusion_params import AhrsParams
from oasis_fusion.config.fusion_params import FusionParamsError
from oasis_fusion.config.fusion_params import OffsetParams


class FusionYamlError(Exception):
    """Raised when a fusion YAML document is invalid."""


@dataclass(frozen=True)
class FusionConfig:
    """Complete configuration of one FusionSession.

    Attributes:
        ahrs_settings: Run-time AHRS settings
        ahrs_params: AHRS engine constants
        offset_params: Gyroscope offset estimator constants
        gyroscope_calibration: Gyroscope inertial calibration
        accelerometer_calibration: Accelerometer inertial calibration
        magnetometer_calibration: Magnetometer soft/hard-iron calibration
    """

    ahrs_settings: AhrsSettings = field(default_factory=AhrsSettings.defaults)
    ahrs_params: AhrsParams = field(default_factory=AhrsParams.defaults)
    offset_params: OffsetParams = field(default_factory=OffsetParams.defaults)
    gyroscope_calibration: InertialCalibration = field(
        default_factory=InertialCalibration
    )
    accelerometer_calibration: InertialCalibration = field(
        default_factory=InertialCalibration
    )
    magnetometer_calibration: MagneticCalibration = field(
        default_factory=MagneticCalibration
    )


def config_from_dict(data: Mapping[str, object]) -> FusionConfig:
    """Parse a YAML mapping into a FusionConfig."""
    if not isinstance(data, Mapping):
        raise FusionYamlError("YAML root must be a mapping")
    _require_known_keys(
        "root",
        data,
        {"ahrs_settings", "ahrs_params", "offset_params", "calibration"},
    )

    try:
        ahrs_settings: AhrsSettings = AhrsSettings.from_dict(
            _optional_mapping(data, "ahrs_settings")
        )
        ahrs_params: AhrsParams = AhrsParams.from_dict(
            _optional_mapping(data, "ahrs_params")
        )
        offset_params: OffsetParams = OffsetParams.from_dict(
            _optional_mapping(data, "offset_params")
        )
    except (AhrsSettingsError, FusionParamsError) as exc:
        raise FusionYamlError(str(exc)) from exc

    calibration: Mapping[str, object] = _optional_mapping(data, "calibration")
    _require_known_keys(
        "calibration", calibration, {"gyroscope", "accelerometer", "magnetometer"}
    )

    return FusionConfig(
        ahrs_settings=ahrs_settings,
        ahrs_params=ahrs_params,
        offset_params=offset_params,
        gyroscope_calibration=_inertial_from_dict(
            _optional_mapping(calibration, "gyroscope", "calibration"),
            "calibration.gyroscope",
        ),
        accelerometer_calibration=_inertial_from_dict(
            _optional_mapping(calibration, "accelerometer", "calibration"),
            "calibration.accelerometer",
        ),
        magnetometer_calibration=_magnetic_from_dict(
            _optional_mapping(calibration, "magnetometer", "calibration"),
            "calibration.magnetometer",
        ),
    )


def config_to_dict(config: FusionConfig) -> dict[str, object]:
    """Convert a FusionConfig to a YAML-safe dictionary."""
    return {
        "ahrs_settings": config.ahrs_settings.as_dict(),
        "ahrs_params": config.ahrs_params.as_dict(),
        "offset_params": config.offset_params.as_dict(),
        "calibration": {
            "gyroscope": _inertial_to_dict(config.gyroscope_calibration),
            "accelerometer": _inertial_to_dict(config.accelerometer_calibration),
            "magnetometer": {
                "soft_iron_matrix": config.magnetometer_calibration.soft_iron_matrix.tolist(),
                "hard_iron_offset": config.magnetometer_calibration.hard_iron_offset.tolist(),
            },
        },
    }


def load_fusion_config(text: str) -> FusionConfig:
    """Parse a FusionConfig from YAML text."""
    try:
        loaded: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise FusionYamlError(f"Invalid YAML: {exc}") from exc
    if loaded is None:
        return FusionConfig()
    return config_from_dict(loaded)


def load_fusion_config_file(path: str) -> FusionConfig:
    """Parse a FusionConfig from a YAML file."""
    with open(path, "r", encoding="utf-8") as stream:
        return load_fusion_config(stream.read())


def dump_fusion_config(config: FusionConfig) -> str:
    """Serialize a FusionConfig to deterministic YAML."""
    return yaml.safe_dump(
        config_to_dict(config),
        sort_keys=False,
        indent=2,
        default_flow_style=False,
    )


def _require_known_keys(
    scope: str, data: Mapping[str, object], allowed: set[str]
) -> None:
    """Ensure a mapping has no keys outside the allowed set."""
    unknown: set[str] = {str(key) for key in data.keys() if key not in allowed}
    if unknown:
        raise FusionYamlError(
            f"Unexpected keys in {scope}: {', '.join(sorted(unknown))}"
        )


def _optional_mapping(
    data: Mapping[str, object], key: str, scope: str = ""
) -> Mapping[str, object]:
    """Return data[key] as a mapping, or an empty mapping when absent."""
    value: object = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        name: str = f"{scope}.{key}" if scope else key
        raise FusionYamlError(f"{name} must be a mapping")
    return value


def _coerce_array(value: object, name: str, shape: tuple[int, ...]) -> np.ndarray:
    """Convert an input to a numpy array with the required shape."""
    try:
        array: np.ndarray = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise FusionYamlError(f"{name} must be numeric") from exc
    if array.shape != shape:
        raise FusionYamlError(f"{name} must have shape {shape}")
    if not np.all(np.isfinite(array)):
        raise FusionYamlError(f"{name} must be finite")
    return array


def _inertial_from_dict(data: Mapping[str, object], scope: str) -> InertialCalibration:
    """Parse an inertial calibration block."""
    _require_known_keys(scope, data, {"misalignment", "sensitivity", "offset"})
    defaults: InertialCalibration = InertialCalibration()
    return InertialCalibration(
        misalignment=_coerce_array(
            data.get("misalignment", defaults.misalignment),
            f"{scope}.misalignment",
            (3, 3),
        ),
        sensitivity=_coerce_array(
            data.get("sensitivity", defaults.sensitivity),
            f"{scope}.sensitivity",
            (3,),
        ),
        offset=_coerce_array(
            data.get("offset", defaults.offset), f"{scope}.offset", (3,)
        ),
    )


def _magnetic_from_dict(data: Mapping[str, object], scope: str) -> MagneticCalibration:
    """Parse a magnetic calibration block."""
    _require_known_keys(scope, data, {"soft_iron_matrix", "hard_iron_offset"})
    defaults: MagneticCalibration = MagneticCalibration()
    return MagneticCalibration(
        soft_iron_matrix=_coerce_array(
            data.get("soft_iron_matrix", defaults.soft_iron_matrix),
            f"{scope}.soft_iron_matrix",
            (3, 3),
        ),
        hard_iron_offset=_coerce_array(
            data.get("hard_iron_offset", defaults.hard_iron_offset),
            f"{scope}.hard_iron_offset",
            (3,),
        ),
    )


def _inertial_to_dict(calibration: InertialCalibration) -> dict[str, object]:
    """Convert an inertial calibration to a YAML-safe dictionary."""
    return {
        "misalignment": calibration.misalignment.tolist(),
        "sensitivity": calibration.sensitivity.tolist(),
        "offset": calibration.offset.tolist(),
    }
