# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for measure validation.

Defines the controlled vocabularies shared by the configuration, the
validator and the result model: the named checks (declared in evaluation
order), the comparison recorded with tolerance failures, and the cardinal
walk directions used by the meters-from-edge check.

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

from enum import Enum


class ValidationCheck(Enum):
    """Named measure checks.

    Members are declared in the order the validator runs them, which is
    also the order failures appear in a ``ValidationResult``.
    """

    EMISSION_ANGLE = "Emission Angle"
    INCIDENCE_ANGLE = "Incidence Angle"
    DN_VALUE = "DN Value"
    RESOLUTION = "Resolution"
    PIXELS_FROM_EDGE = "Pixels From Edge"
    METERS_FROM_EDGE = "Meters From Edge"
    SAMPLE_RESIDUAL = "Sample Residual"
    LINE_RESIDUAL = "Line Residual"
    RESIDUAL_MAGNITUDE = "Residual Magnitude"

    @property
    def order(self) -> int:
        """Position of the check in the evaluation order."""
        return _CHECK_ORDER[self]


_CHECK_ORDER = {check: i for i, check in enumerate(ValidationCheck)}


class Comparison(Enum):
    """How a measured value violated a single-sided tolerance."""

    GREATER = "greater"
    LESS = "less"


class Direction(Enum):
    """Cardinal image directions as ``(d_sample, d_line)`` steps.

    Declared in the order the meters-from-edge walk visits them.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def d_sample(self) -> int:
        return self.value[0]

    @property
    def d_line(self) -> int:
        return self.value[1]
