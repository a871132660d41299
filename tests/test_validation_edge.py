# -*- coding: utf-8 -*-
"""
Edge Distance Tests - Pixel margin boundaries and the ground-distance walk.

Tests the exact off-by-one behaviour of ``pixels_from_edge``, the step
count, direction order and short-circuiting of ``EdgeDistanceEvaluator``
with constant and non-uniform resolution, and CameraError propagation.

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

import math

import pytest
import numpy as np

from cnval.exceptions import CameraError
from cnval.geometry.base import Camera, PointGeometry
from cnval.geometry.grid import GridCamera, GridImage
from cnval.validation.edge import (
    EdgeDistanceEvaluator,
    pixel_edge_distance,
    pixels_from_edge,
)
from cnval.vocabulary import Direction


class RecordingCamera(Camera):
    """Constant-resolution camera that records every resolution query."""

    def __init__(self, resolution=10.0):
        self.resolution = resolution
        self.queries = []

    def point_at(self, sample, line):
        self.queries.append((sample, line))
        return PointGeometry(0.0, 0.0, self.resolution)

    def pixel_value(self, sample, line):
        return 0.0


# ---------------------------------------------------------------------------
# Pixels from edge
# ---------------------------------------------------------------------------

class TestPixelsFromEdge:
    """Test the asymmetric pixel margin."""

    DIMS = (100, 100)

    @pytest.mark.parametrize('sample, expected', [
        (5, False),   # 5 - 5 <= 0
        (6, True),
        (94, True),   # 100 - 94 = 6
        (95, True),   # 100 - 95 = 5, not < 5
        (96, False),  # 100 - 96 = 4 < 5
    ])
    def test_sample_boundaries(self, sample, expected):
        assert pixels_from_edge(sample, 50, self.DIMS, 5) is expected

    @pytest.mark.parametrize('line, expected', [
        (5, False), (6, True), (95, True), (96, False),
    ])
    def test_line_boundaries(self, line, expected):
        assert pixels_from_edge(50, line, self.DIMS, 5) is expected

    @pytest.mark.parametrize('margin', [0, -4])
    @pytest.mark.parametrize('sample, line', [(1, 1), (100, 100), (1, 100), (50, 50)])
    def test_disabled_margin_always_passes(self, margin, sample, line):
        assert pixels_from_edge(sample, line, self.DIMS, margin)

    def test_non_square_image(self):
        assert pixels_from_edge(195, 45, (200, 50), 5)
        assert not pixels_from_edge(195, 46, (200, 50), 5)

    def test_distance_matches_check(self):
        dims = (20, 15)
        for margin in range(1, 7):
            for sample in range(1, dims[0] + 1):
                for line in range(1, dims[1] + 1):
                    fails = pixel_edge_distance(sample, line, dims) < margin
                    assert fails is not pixels_from_edge(sample, line, dims, margin)


# ---------------------------------------------------------------------------
# Meters from edge, constant resolution
# ---------------------------------------------------------------------------

class TestConstantResolutionWalk:
    """r = 10 m, margin = 25 m: three steps are needed in each direction."""

    DIMS = (20, 20)

    @pytest.fixture
    def evaluator(self):
        return EdgeDistanceEvaluator(RecordingCamera(10.0), self.DIMS)

    def test_three_steps_needed(self, evaluator):
        walk = evaluator.walk(10, 4, Direction.UP, 25.0)
        assert walk.satisfied
        assert walk.steps == 3
        assert walk.distance == pytest.approx(30.0)

    def test_interior_point_passes(self, evaluator):
        assert evaluator.meters_from_edge(10, 10, 25.0)
        assert evaluator.shortfall(10, 10, 25.0) is None

    @pytest.mark.parametrize('sample, line, passes', [
        (10, 4, True), (10, 3, False),     # up: lines 3, 2, 1 needed
        (10, 17, True), (10, 18, False),   # down: lines 18, 19, 20 needed
        (4, 10, True), (3, 10, False),     # left
        (17, 10, True), (18, 10, False),   # right
    ])
    def test_boundaries(self, evaluator, sample, line, passes):
        assert evaluator.meters_from_edge(sample, line, 25.0) is passes

    @pytest.mark.parametrize('margin, steps', [
        (10.0, 1), (10.5, 2), (30.0, 3), (30.1, 4),
    ])
    def test_steps_are_ceil_of_margin_over_resolution(self, evaluator, margin, steps):
        walk = evaluator.walk(10, 10, Direction.RIGHT, margin)
        assert walk.steps == steps == math.ceil(margin / 10.0)

    def test_shortfall_reports_direction_and_distance(self, evaluator):
        walk = evaluator.shortfall(10, 3, 25.0)
        assert walk.direction is Direction.UP
        assert not walk.satisfied
        assert walk.steps == 2
        assert walk.distance == pytest.approx(20.0)

    def test_point_on_edge_covers_nothing(self, evaluator):
        walk = evaluator.shortfall(1, 10, 5.0)
        assert walk.direction is Direction.LEFT
        assert walk.steps == 0
        assert walk.distance == 0.0

    def test_distance_to_edge(self, evaluator):
        assert evaluator.distance_to_edge(10, 4, Direction.UP) == pytest.approx(30.0)
        assert evaluator.distance_to_edge(10, 4, Direction.DOWN) == pytest.approx(160.0)


# ---------------------------------------------------------------------------
# Direction order and short-circuiting
# ---------------------------------------------------------------------------

class TestWalkOrder:
    """Test up, down, left, right order and early exit."""

    def test_visit_order(self):
        camera = RecordingCamera(10.0)
        EdgeDistanceEvaluator(camera, (20, 20)).shortfall(10, 10, 10.0)
        assert camera.queries == [(10, 9), (10, 11), (9, 10), (11, 10)]

    def test_stops_at_first_unsatisfied_direction(self):
        camera = RecordingCamera(10.0)
        walk = EdgeDistanceEvaluator(camera, (20, 20)).shortfall(10, 19, 25.0)
        assert walk.direction is Direction.DOWN
        # up: 3 steps, down: 1 step, then stop
        assert camera.queries == [(10, 18), (10, 17), (10, 16), (10, 20)]

    def test_first_failing_direction_reported(self):
        # fails both down and left; down is visited first
        walk = EdgeDistanceEvaluator(RecordingCamera(10.0), (20, 20)).shortfall(
            2, 19, 25.0
        )
        assert walk.direction is Direction.DOWN

    @pytest.mark.parametrize('margin', [0.0, -5.0])
    def test_disabled_margin_makes_no_queries(self, margin):
        camera = RecordingCamera(10.0)
        evaluator = EdgeDistanceEvaluator(camera, (20, 20))
        assert evaluator.meters_from_edge(1, 1, margin)
        assert camera.queries == []

    @pytest.mark.parametrize('sample, line, direction', [
        (0, 10, Direction.UP),
        (0, 10, Direction.DOWN),
        (10, 0, Direction.LEFT),
        (10, 21, Direction.RIGHT),
    ])
    def test_off_image_start_covers_nothing(self, sample, line, direction):
        camera = RecordingCamera(10.0)
        walk = EdgeDistanceEvaluator(camera, (20, 20)).walk(
            sample, line, direction, 25.0
        )
        assert not walk.satisfied
        assert walk.steps == 0
        assert camera.queries == []


# ---------------------------------------------------------------------------
# Non-uniform resolution
# ---------------------------------------------------------------------------

class TestNonUniformResolution:
    """Resolution varies per pixel, so pixel counts are not enough."""

    @pytest.fixture
    def camera(self):
        # resolution equals the line number
        lines = np.mgrid[1:31, 1:31][0].astype(np.float64)
        image = GridImage(np.zeros((30, 30)), emission=0.0, incidence=0.0,
                          resolution=lines)
        return GridCamera(image)

    def test_up_walk_accumulates_local_resolution(self, camera):
        walk = EdgeDistanceEvaluator(camera, (30, 30)).walk(15, 10, Direction.UP, 15.0)
        # line 9 (9 m) then line 8 (17 m)
        assert walk.steps == 2
        assert walk.distance == pytest.approx(17.0)

    def test_same_pixel_margin_different_outcome(self, camera):
        evaluator = EdgeDistanceEvaluator(camera, (30, 30))
        # 4 pixels above line 5 cover 4+3+2+1 = 10 m
        assert not evaluator.walk(15, 5, Direction.UP, 12.0).satisfied
        # 4 pixels below line 26 cover 27+28+29+30 m
        assert evaluator.walk(15, 26, Direction.DOWN, 12.0).steps == 1

    def test_camera_error_propagates(self):
        resolution = np.full((10, 10), 5.0)
        resolution[1, 4] = np.nan   # sample 5, line 2
        image = GridImage(np.zeros((10, 10)), emission=0.0, incidence=0.0,
                          resolution=resolution)
        evaluator = EdgeDistanceEvaluator(GridCamera(image), (10, 10))
        with pytest.raises(CameraError):
            evaluator.meters_from_edge(5, 5, 20.0)
