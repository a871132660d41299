# -*- coding: utf-8 -*-
"""
Validation Module - Per-measure evaluation against configured tolerances.

Key Classes
-----------
- MeasureValidator: Runs the standard checks for one point
- ValidationResult: Ordered failures of one evaluation
- EdgeDistanceEvaluator: Ground-distance-from-edge walk

Author
------
cnval developers

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

from cnval.validation.edge import (
    EdgeDistanceEvaluator,
    EdgeWalk,
    pixel_edge_distance,
    pixels_from_edge,
)
from cnval.validation.results import Failure, Observation, ValidationResult
from cnval.validation.validator import MeasureValidator

__all__ = [
    'EdgeDistanceEvaluator',
    'EdgeWalk',
    'pixel_edge_distance',
    'pixels_from_edge',
    'Failure',
    'Observation',
    'ValidationResult',
    'MeasureValidator',
]
