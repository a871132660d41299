# -*- coding: utf-8 -*-
"""
Measure Validator Tests - End-to-end checks against a raster-backed camera.

Tests each standard check in isolation, the fixed failure order when
every check fails, residual tolerances, coordinate truncation for the
edge checks, CameraError propagation, and that evaluation is
deterministic and safe to run concurrently.

Dependencies
------------
pytest

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

from concurrent.futures import ThreadPoolExecutor

import pytest
import numpy as np

from cnval import (
    CameraError,
    Measure,
    MeasureValidator,
    ToleranceConfig,
    ValidationCheck,
    ValidationResult,
)
from cnval.geometry import GridGeometryProvider, GridImage
from cnval.special_pixel import NULL
from cnval.vocabulary import Comparison


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def image():
    """100 x 100 image, DN 100, emission 30, incidence 40, 10 m/pixel."""
    return GridImage(
        np.full((100, 100), 100.0),
        emission=30.0,
        incidence=40.0,
        resolution=10.0,
        name='flat.cub',
    )


@pytest.fixture
def provider():
    return GridGeometryProvider()


def make_validator(provider, **thresholds):
    return MeasureValidator(ToleranceConfig(**thresholds), provider)


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------

class TestSingleChecks:
    """Each check fails alone when only its threshold is violated."""

    def test_defaults_pass(self, image, provider):
        result = make_validator(provider).evaluate(50, 50, image)
        assert result.passed
        assert result.failures == ()
        assert result.observation.emission_angle == 30.0
        assert result.observation.dn_value == 100.0

    def test_emission(self, image, provider):
        result = make_validator(
            provider, min_emission=10, max_emission=25
        ).evaluate(50, 50, image)
        assert result.failed_checks == (ValidationCheck.EMISSION_ANGLE,)
        failure = result.failures[0]
        assert failure.measured == 30.0
        assert failure.minimum == 10.0
        assert failure.maximum == 25.0

    def test_incidence_reports_incidence_bounds(self, image, provider):
        result = make_validator(
            provider, min_emission=0, max_emission=90,
            min_incidence=45, max_incidence=80,
        ).evaluate(50, 50, image)
        failure = result.failure_for(ValidationCheck.INCIDENCE_ANGLE)
        assert result.failed_checks == (ValidationCheck.INCIDENCE_ANGLE,)
        assert failure.minimum == 45.0
        assert failure.maximum == 80.0

    def test_dn_range(self, image, provider):
        result = make_validator(provider, min_dn=0, max_dn=50).evaluate(50, 50, image)
        assert result.failed_checks == (ValidationCheck.DN_VALUE,)

    def test_special_dn_fails_with_default_range(self, provider):
        pixels = np.full((100, 100), 100.0)
        pixels[49, 49] = NULL
        img = GridImage(pixels, emission=30.0, incidence=40.0, resolution=10.0)
        validator = make_validator(provider)
        result = validator.evaluate(50, 50, img)
        assert result.failed_checks == (ValidationCheck.DN_VALUE,)
        assert 'DN Value Null' in str(result)
        assert validator.evaluate(51, 50, img).passed

    def test_resolution(self, image, provider):
        result = make_validator(
            provider, min_resolution=2, max_resolution=5
        ).evaluate(50, 50, image)
        assert result.failed_checks == (ValidationCheck.RESOLUTION,)
        assert result.failures[0].measured == 10.0

    def test_pixels_from_edge(self, image, provider):
        validator = make_validator(provider, pixels_from_edge=5)
        assert validator.evaluate(6, 50, image).passed
        result = validator.evaluate(5, 50, image)
        assert result.failed_checks == (ValidationCheck.PIXELS_FROM_EDGE,)
        failure = result.failures[0]
        assert failure.measured == 4
        assert failure.tolerance == 5
        assert failure.comparison is Comparison.LESS

    def test_meters_from_edge(self, image, provider):
        validator = make_validator(provider, meters_from_edge=25.0)
        assert validator.evaluate(50, 4, image).passed
        result = validator.evaluate(50, 3, image)
        assert result.failed_checks == (ValidationCheck.METERS_FROM_EDGE,)
        assert result.failures[0].measured == pytest.approx(20.0)
        assert result.failures[0].tolerance == 25.0

    @pytest.mark.parametrize('sample, line', [(1, 1), (100, 1), (1, 100), (100, 100)])
    def test_zero_margins_pass_at_corners(self, image, provider, sample, line):
        assert make_validator(provider).evaluate(sample, line, image).passed


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------

class TestFailureOrder:
    """Test that every check runs without short-circuiting."""

    def test_all_checks_fail_in_order(self, image, provider):
        validator = make_validator(
            provider,
            min_emission=40, max_emission=50,
            min_incidence=50, max_incidence=60,
            min_dn=0, max_dn=50,
            min_resolution=20,
            pixels_from_edge=5,
            meters_from_edge=100.0,
            sample_residual=0.5,
            line_residual=0.5,
        )
        prior = Measure(3, 3, sample_residual=1.0, line_residual=1.0)
        result = validator.evaluate(3, 3, image, prior=prior)
        assert result.failed_checks == (
            ValidationCheck.EMISSION_ANGLE,
            ValidationCheck.INCIDENCE_ANGLE,
            ValidationCheck.DN_VALUE,
            ValidationCheck.RESOLUTION,
            ValidationCheck.PIXELS_FROM_EDGE,
            ValidationCheck.METERS_FROM_EDGE,
            ValidationCheck.SAMPLE_RESIDUAL,
            ValidationCheck.LINE_RESIDUAL,
        )
        assert result.failure_for(ValidationCheck.PIXELS_FROM_EDGE).measured == 2
        assert result.failure_for(ValidationCheck.METERS_FROM_EDGE).measured == (
            pytest.approx(20.0)
        )
        assert result.to_dict()['SampleResidual'] == 1.0

    def test_residuals_ignored_without_prior(self, image, provider):
        validator = make_validator(provider, sample_residual=0.0)
        result = validator.evaluate(50, 50, image)
        assert result.passed
        assert 'SampleResidual' not in result.to_dict()


# ---------------------------------------------------------------------------
# Residuals
# ---------------------------------------------------------------------------

class TestResiduals:
    """Test residual tolerances."""

    def test_magnitude(self, image, provider):
        validator = make_validator(provider, residual_magnitude=4.0)
        measure = Measure(50, 50, sample_residual=3.0, line_residual=4.0)
        result = validator.evaluate_measure(measure, image)
        assert result.failed_checks == (ValidationCheck.RESIDUAL_MAGNITUDE,)
        failure = result.failures[0]
        assert failure.measured == pytest.approx(5.0)
        assert failure.comparison is Comparison.GREATER

    def test_equal_to_tolerance_passes(self, image, provider):
        validator = make_validator(provider, sample_residual=1.0, line_residual=1.0)
        measure = Measure(50, 50, sample_residual=1.0, line_residual=1.0)
        assert validator.evaluate_measure(measure, image).passed

    def test_check_residuals_records_each_independently(self, provider):
        validator = make_validator(provider, sample_residual=0.5, line_residual=0.5)
        result = ValidationResult()
        valid = validator.check_residuals(
            Measure(1, 1, sample_residual=0.2, line_residual=0.9), result
        )
        assert valid is False
        assert result.failed_checks == (ValidationCheck.LINE_RESIDUAL,)

        assert validator.check_residuals(Measure(1, 1), ValidationResult())


# ---------------------------------------------------------------------------
# Coordinates and errors
# ---------------------------------------------------------------------------

class TestCoordinates:
    """Test coordinate handling and camera failures."""

    def test_edge_checks_truncate(self, image, provider):
        validator = make_validator(provider, pixels_from_edge=5)
        # 5.9 truncates to 5, which is too close to the left edge
        result = validator.evaluate(5.9, 50.0, image)
        assert result.failed_checks == (ValidationCheck.PIXELS_FROM_EDGE,)

    @pytest.mark.parametrize('sample, line', [(0.6, 10), (10, 0.7), (0.5, 0.5)])
    def test_first_pixel_fraction_records_edge_failure(self, provider, sample, line):
        img = GridImage(np.zeros((20, 20)), emission=0.0, incidence=0.0,
                        resolution=10.0, name='small.cub')
        validator = make_validator(provider, meters_from_edge=25.0)
        result = validator.evaluate(sample, line, img)
        assert result.failed_checks == (ValidationCheck.METERS_FROM_EDGE,)
        assert result.failures[0].measured == 0.0

    def test_no_camera(self, provider):
        img = GridImage(np.zeros((10, 10)), name='raw.cub')
        with pytest.raises(CameraError, match="raw.cub"):
            make_validator(provider).evaluate(5, 5, img)

    def test_off_image(self, image, provider):
        with pytest.raises(CameraError, match="off the image"):
            make_validator(provider).evaluate(0, 50, image)

    def test_geometry_gap_on_walk_raises(self, provider):
        resolution = np.full((20, 20), 10.0)
        resolution[0, 9] = np.nan   # sample 10, line 1
        img = GridImage(np.zeros((20, 20)), emission=0.0, incidence=0.0,
                        resolution=resolution)
        validator = make_validator(provider, meters_from_edge=50.0)
        with pytest.raises(CameraError):
            validator.evaluate(10, 5, img)


# ---------------------------------------------------------------------------
# Determinism and concurrency
# ---------------------------------------------------------------------------

class TestDeterminism:
    """Test repeatability, immutability and shared use across threads."""

    def test_idempotent(self, image, provider):
        validator = make_validator(provider, min_emission=40, pixels_from_edge=10)
        first = validator.evaluate(7, 7, image)
        second = validator.evaluate(7, 7, image)
        assert first == second
        assert str(first) == str(second)

    def test_result_is_frozen(self, image, provider):
        result = make_validator(provider).evaluate(50, 50, image)
        with pytest.raises(RuntimeError, match="frozen"):
            result.add_failure(ValidationCheck.RESOLUTION, 1.0)

    def test_concurrent_matches_sequential(self, provider):
        rng = np.random.default_rng(7)
        img = GridImage(
            rng.uniform(0, 255, (60, 60)),
            emission=rng.uniform(0, 90, (60, 60)),
            incidence=rng.uniform(0, 90, (60, 60)),
            resolution=rng.uniform(5, 15, (60, 60)),
        )
        validator = make_validator(
            provider, min_emission=10, max_emission=70, min_dn=20, max_dn=230,
            pixels_from_edge=3, meters_from_edge=40.0,
        )
        points = [(s, l) for s in range(1, 61, 3) for l in range(1, 61, 4)]

        sequential = [validator.evaluate(s, l, img) for s, l in points]
        with ThreadPoolExecutor(max_workers=4) as pool:
            concurrent = list(pool.map(lambda p: validator.evaluate(*p, img), points))

        assert concurrent == sequential

    def test_debug_logging(self, image, provider, caplog):
        validator = make_validator(provider, max_emission=20)
        with caplog.at_level('DEBUG', logger='cnval.validation.validator'):
            validator.evaluate(50, 50, image)
        assert 'flat.cub' in caplog.text
        assert 'invalid' in caplog.text
