# -*- coding: utf-8 -*-
"""
cnval - Control Network Measure Validation.

Judges whether a measured point on an image is acceptable for a control
network: viewing geometry, pixel value, ground resolution, distance from
the image edge in pixels and in ground meters, and residuals left by a
prior adjustment.

Dependencies
------------
numpy

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

__version__ = "0.1.0"

from cnval.exceptions import (
    CnvalError,
    ConfigError,
    CameraError,
)
from cnval.vocabulary import (
    ValidationCheck,
    Comparison,
    Direction,
)
from cnval.config import ToleranceConfig, load_definition, validate_config
from cnval.measure import Measure
from cnval.validation import (
    EdgeDistanceEvaluator,
    Failure,
    MeasureValidator,
    Observation,
    ValidationResult,
)

__all__ = [
    'CnvalError',
    'ConfigError',
    'CameraError',
    'ValidationCheck',
    'Comparison',
    'Direction',
    'ToleranceConfig',
    'load_definition',
    'validate_config',
    'Measure',
    'EdgeDistanceEvaluator',
    'Failure',
    'MeasureValidator',
    'Observation',
    'ValidationResult',
]
