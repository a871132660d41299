# -*- coding: utf-8 -*-
"""
Control Measure - Input record for a measured point on an image.

A ``Measure`` is the sample/line location of a control point on one image,
optionally carrying the residuals left by a prior bundle adjustment.

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

# Standard library
import math
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Measure:
    """A located point on an image participating in a control network.

    Parameters
    ----------
    sample : float
        1-based sample (column) coordinate.
    line : float
        1-based line (row) coordinate.
    serial_number : str, optional
        Serial number of the image the measure lies on.
    sample_residual : float, default=0.0
        Sample residual from a prior adjustment (pixels).
    line_residual : float, default=0.0
        Line residual from a prior adjustment (pixels).
    residual_magnitude : float, optional
        Combined residual. Defaults to the Euclidean norm of the sample
        and line residuals.
    """

    sample: float
    line: float
    serial_number: Optional[str] = None
    sample_residual: float = 0.0
    line_residual: float = 0.0
    residual_magnitude: Optional[float] = field(default=None)

    def __post_init__(self) -> None:
        if self.residual_magnitude is None:
            object.__setattr__(
                self, 'residual_magnitude',
                math.hypot(self.sample_residual, self.line_residual),
            )
