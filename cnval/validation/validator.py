# -*- coding: utf-8 -*-
"""
Measure Validator - Evaluate a measured point against a tolerance configuration.

``MeasureValidator`` queries the camera for the viewing geometry and DN at
a point, runs every standard check in a fixed order without
short-circuiting, and returns a frozen ``ValidationResult`` listing each
violated constraint.

Checks, in order: emission angle, incidence angle, DN value, resolution,
pixels from edge, meters from edge, and (when a prior measure is given)
sample residual, line residual and residual magnitude.

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
import logging
from typing import Optional

# cnval internal
from cnval.config import ToleranceConfig
from cnval.geometry.base import GeometryProvider, ImageHandle
from cnval.measure import Measure
from cnval.validation.edge import (
    EdgeDistanceEvaluator,
    pixel_edge_distance,
    pixels_from_edge,
)
from cnval.validation.results import Observation, ValidationResult
from cnval.vocabulary import Comparison, ValidationCheck

logger = logging.getLogger(__name__)


class MeasureValidator:
    """Per-point evaluation of the standard measure checks.

    The validator holds only the immutable configuration and the geometry
    provider; every evaluation keeps its state in locals, so one validator
    can be shared between threads as long as the provider allows
    concurrent access.

    Parameters
    ----------
    config : ToleranceConfig
        Validated thresholds.
    provider : GeometryProvider
        Resolves images to cameras.

    Examples
    --------
    >>> import numpy as np
    >>> from cnval import MeasureValidator, ToleranceConfig
    >>> from cnval.geometry import GridImage, GridGeometryProvider
    >>> image = GridImage(np.full((100, 100), 50.0), emission=60.0,
    ...                   incidence=30.0, resolution=10.0)
    >>> validator = MeasureValidator(
    ...     ToleranceConfig(min_emission=10, max_emission=50),
    ...     GridGeometryProvider(),
    ... )
    >>> result = validator.evaluate(50, 50, image)
    >>> result.failed_checks
    (<ValidationCheck.EMISSION_ANGLE: 'Emission Angle'>,)
    """

    def __init__(self, config: ToleranceConfig, provider: GeometryProvider) -> None:
        self.config = config
        self.provider = provider

    def evaluate(
        self,
        sample: float,
        line: float,
        image: ImageHandle,
        prior: Optional[Measure] = None,
    ) -> ValidationResult:
        """
        Validate the point ``(sample, line)`` on *image*.

        Parameters
        ----------
        sample : float
            1-based sample coordinate.
        line : float
            1-based line coordinate.
        image : ImageHandle
            Image the point lies on.
        prior : Measure, optional
            Measure carrying residuals from a prior adjustment. When
            given, the residual tolerances are checked.

        Returns
        -------
        ValidationResult
            Frozen result; passes iff no check failed.

        Raises
        ------
        CameraError
            If no camera can be established for *image* or a geometry
            query resolves off the image.
        """
        cfg = self.config
        camera = self.provider.resolve_camera(image)
        geometry = camera.point_at(sample, line)
        dn = camera.pixel_value(sample, line)

        observation = Observation(
            emission_angle=geometry.emission,
            incidence_angle=geometry.incidence,
            dn_value=dn,
            resolution=geometry.resolution,
            sample_residual=prior.sample_residual if prior is not None else None,
            line_residual=prior.line_residual if prior is not None else None,
            residual_magnitude=prior.residual_magnitude if prior is not None else None,
        )
        result = ValidationResult(observation)

        if not cfg.valid_emission(geometry.emission):
            result.add_failure(
                ValidationCheck.EMISSION_ANGLE, geometry.emission,
                minimum=cfg.min_emission, maximum=cfg.max_emission,
            )

        if not cfg.valid_incidence(geometry.incidence):
            result.add_failure(
                ValidationCheck.INCIDENCE_ANGLE, geometry.incidence,
                minimum=cfg.min_incidence, maximum=cfg.max_incidence,
            )

        if not cfg.valid_dn(dn):
            result.add_failure(
                ValidationCheck.DN_VALUE, dn,
                minimum=cfg.min_dn, maximum=cfg.max_dn,
            )

        if not cfg.valid_resolution(geometry.resolution):
            result.add_failure(
                ValidationCheck.RESOLUTION, geometry.resolution,
                minimum=cfg.min_resolution, maximum=cfg.max_resolution,
            )

        isample, iline = int(sample), int(line)
        dimensions = image.dimensions()

        if not pixels_from_edge(isample, iline, dimensions, cfg.pixels_from_edge):
            result.add_failure(
                ValidationCheck.PIXELS_FROM_EDGE,
                pixel_edge_distance(isample, iline, dimensions),
                tolerance=cfg.pixels_from_edge, comparison=Comparison.LESS,
            )

        shortfall = EdgeDistanceEvaluator(camera, dimensions).shortfall(
            isample, iline, cfg.meters_from_edge
        )
        if shortfall is not None:
            result.add_failure(
                ValidationCheck.METERS_FROM_EDGE, shortfall.distance,
                tolerance=cfg.meters_from_edge, comparison=Comparison.LESS,
            )

        if prior is not None:
            self.check_residuals(prior, result)

        for failure in result.failures:
            logger.debug("%s (%s, %s): %s", image.name, sample, line, failure)
        logger.debug("%s (%s, %s): %s", image.name, sample, line,
                     'valid' if result.passed else 'invalid')

        return result.freeze()

    def evaluate_measure(self, measure: Measure, image: ImageHandle) -> ValidationResult:
        """Validate a measure at its own location, including its residuals."""
        return self.evaluate(measure.sample, measure.line, image, prior=measure)

    def check_residuals(self, measure: Measure, result: ValidationResult) -> bool:
        """
        Check a measure's residuals against the residual tolerances.

        Each residual is checked and recorded independently.

        Parameters
        ----------
        measure : Measure
            Measure carrying the residuals.
        result : ValidationResult
            Result to record failures into.

        Returns
        -------
        bool
            True if all three residuals are within tolerance.
        """
        cfg = self.config
        valid = True

        if measure.sample_residual > cfg.sample_residual:
            valid = False
            result.add_failure(
                ValidationCheck.SAMPLE_RESIDUAL, measure.sample_residual,
                tolerance=cfg.sample_residual, comparison=Comparison.GREATER,
            )
        if measure.line_residual > cfg.line_residual:
            valid = False
            result.add_failure(
                ValidationCheck.LINE_RESIDUAL, measure.line_residual,
                tolerance=cfg.line_residual, comparison=Comparison.GREATER,
            )
        if measure.residual_magnitude > cfg.residual_magnitude:
            valid = False
            result.add_failure(
                ValidationCheck.RESIDUAL_MAGNITUDE, measure.residual_magnitude,
                tolerance=cfg.residual_magnitude, comparison=Comparison.GREATER,
            )

        return valid
