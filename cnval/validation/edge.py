# -*- coding: utf-8 -*-
"""
Edge Distance Checks - Pixel and ground distance from the image edge.

``pixels_from_edge`` applies a fixed pixel margin. ``EdgeDistanceEvaluator``
applies a ground-distance margin: pixels are not of uniform ground size
(map projection, oblique viewing), so it walks outward from the point in
each cardinal direction, summing the camera's ground resolution at every
stepped-to pixel until the margin is reached or the image runs out.

Both checks take integer, 1-based sample/line coordinates.

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
import math
from dataclasses import dataclass
from typing import Optional, Tuple

# cnval internal
from cnval.geometry.base import Camera
from cnval.vocabulary import Direction

logger = logging.getLogger(__name__)


def pixels_from_edge(
    sample: int,
    line: int,
    dimensions: Tuple[int, int],
    margin: int,
) -> bool:
    """
    Test whether a pixel is at least *margin* pixels from the image edge.

    The far side uses a strict ``<`` and the near side ``<= 0``, so a
    pixel needs ``margin`` pixels after it and ``margin + 1`` before it
    along each axis.

    Parameters
    ----------
    sample : int
        Sample coordinate.
    line : int
        Line coordinate.
    dimensions : Tuple[int, int]
        Image size ``(num_samples, num_lines)``.
    margin : int
        Required margin. ``<= 0`` disables the check.

    Returns
    -------
    bool
        True if the pixel is far enough from every edge.
    """
    if margin <= 0:
        return True

    num_samples, num_lines = dimensions

    # right
    if (num_samples - sample) < margin:
        return False
    # left
    if (sample - margin) <= 0:
        return False
    # down
    if (num_lines - line) < margin:
        return False
    # up
    if (line - margin) <= 0:
        return False

    return True


def pixel_edge_distance(sample: int, line: int, dimensions: Tuple[int, int]) -> int:
    """Smallest pixel distance to an edge, as counted by ``pixels_from_edge``.

    ``pixels_from_edge`` fails exactly when this is below the margin.
    """
    num_samples, num_lines = dimensions
    return min(num_samples - sample, sample - 1, num_lines - line, line - 1)


@dataclass(frozen=True)
class EdgeWalk:
    """Outcome of walking from a point toward one image edge.

    Attributes
    ----------
    direction : Direction
        Direction walked.
    distance : float
        Ground distance accumulated, in meters.
    steps : int
        Number of pixels stepped onto.
    satisfied : bool
        True if ``distance`` reached the margin before the edge.
    """

    direction: Direction
    distance: float
    steps: int
    satisfied: bool


class EdgeDistanceEvaluator:
    """Ground-distance-from-edge check for one image.

    Parameters
    ----------
    camera : Camera
        Camera for the image; queried for ground resolution at each step.
    dimensions : Tuple[int, int]
        Image size ``(num_samples, num_lines)``.

    Notes
    -----
    Walks visit up, down, left, right in that order and stop at the first
    unsatisfied direction. A ``CameraError`` raised by the camera at a
    stepped-to pixel propagates.
    """

    def __init__(self, camera: Camera, dimensions: Tuple[int, int]) -> None:
        self.camera = camera
        self.dimensions = dimensions

    def walk(
        self,
        sample: int,
        line: int,
        direction: Direction,
        margin: float,
    ) -> EdgeWalk:
        """
        Walk from ``(sample, line)`` toward one edge until *margin* is covered.

        The point's own pixel is not counted. Steps stay within
        ``[1, num_samples]`` / ``[1, num_lines]`` along the walked axis.
        A starting column (or row) outside the image on the fixed axis
        covers nothing, and the camera is not queried.

        Parameters
        ----------
        sample, line : int
            Starting pixel.
        direction : Direction
            Direction to walk.
        margin : float
            Ground distance in meters to cover. ``math.inf`` walks to the
            edge.

        Returns
        -------
        EdgeWalk
        """
        num_samples, num_lines = self.dimensions
        if direction.d_sample:
            position, limit, step = sample, num_samples, direction.d_sample
            fixed, fixed_limit = line, num_lines
        else:
            position, limit, step = line, num_lines, direction.d_line
            fixed, fixed_limit = sample, num_samples

        if not 1 <= fixed <= fixed_limit:
            return EdgeWalk(direction, 0.0, 0, False)

        total = 0.0
        steps = 0
        position += step
        while 1 <= position <= limit:
            if direction.d_sample:
                total += self.camera.resolution_at(position, line)
            else:
                total += self.camera.resolution_at(sample, position)
            steps += 1
            if total >= margin:
                return EdgeWalk(direction, total, steps, True)
            position += step

        return EdgeWalk(direction, total, steps, False)

    def shortfall(
        self,
        sample: int,
        line: int,
        margin: float,
    ) -> Optional[EdgeWalk]:
        """
        Return the first direction that does not cover *margin*, if any.

        Parameters
        ----------
        sample, line : int
            Point to test.
        margin : float
            Required ground distance in meters. ``<= 0`` disables the check.

        Returns
        -------
        EdgeWalk or None
            The unsatisfied walk, or None when every direction is satisfied.
        """
        if margin <= 0:
            return None

        for direction in Direction:
            walk = self.walk(sample, line, direction, margin)
            if not walk.satisfied:
                logger.debug(
                    "Meters from edge: %s from (%d, %d) covers %.3f m of %.3f m",
                    direction.name, sample, line, walk.distance, margin,
                )
                return walk
        return None

    def meters_from_edge(self, sample: int, line: int, margin: float) -> bool:
        """True if the point is at least *margin* meters from every edge."""
        return self.shortfall(sample, line, margin) is None

    def distance_to_edge(self, sample: int, line: int, direction: Direction) -> float:
        """Total ground distance from the point to the edge in *direction*."""
        return self.walk(sample, line, direction, math.inf).distance
