# -*- coding: utf-8 -*-
"""
Geometry Utilities - Helper functions for raster-backed camera geometry.

Utility functions for locating pixels from 1-based sample/line coordinates
and deriving per-pixel ground resolution from latitude/longitude rasters.

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

from typing import Optional, Tuple

import numpy as np

from cnval.exceptions import CameraError

# Mean Earth radius in meters
EARTH_RADIUS = 6371000.0


def check_pixel_bounds(
    sample: float,
    line: float,
    dimensions: Tuple[int, int],
    image: Optional[str] = None,
) -> None:
    """
    Check that a 1-based sample/line lies on the image.

    A pixel ``(s, l)`` covers ``[s - 0.5, s + 0.5)``, so the image spans
    ``[0.5, num_samples + 0.5)`` by ``[0.5, num_lines + 0.5)``.

    Parameters
    ----------
    sample : float
        Sample coordinate.
    line : float
        Line coordinate.
    dimensions : Tuple[int, int]
        Image size ``(num_samples, num_lines)``.
    image : str, optional
        Image name for the error message.

    Raises
    ------
    CameraError
        If the coordinate is off the image.
    """
    num_samples, num_lines = dimensions

    if not 0.5 <= sample < num_samples + 0.5:
        raise CameraError(
            f"Sample {sample} is off the image [1, {num_samples}]", image=image
        )

    if not 0.5 <= line < num_lines + 0.5:
        raise CameraError(
            f"Line {line} is off the image [1, {num_lines}]", image=image
        )


def pixel_index(sample: float, line: float) -> Tuple[int, int]:
    """
    Convert a 1-based sample/line to 0-based ``(row, col)`` array indices.

    Parameters
    ----------
    sample : float
        Sample coordinate.
    line : float
        Line coordinate.

    Returns
    -------
    Tuple[int, int]
        ``(row, col)`` of the pixel containing the coordinate.
    """
    return int(np.floor(line + 0.5)) - 1, int(np.floor(sample + 0.5)) - 1


def haversine_distance(
    lats1: np.ndarray,
    lons1: np.ndarray,
    lats2: np.ndarray,
    lons2: np.ndarray,
) -> np.ndarray:
    """
    Great circle distances between arrays of geographic coordinates.

    Parameters
    ----------
    lats1, lons1 : np.ndarray
        First points (latitude, longitude) in degrees.
    lats2, lons2 : np.ndarray
        Second points (latitude, longitude) in degrees.

    Returns
    -------
    np.ndarray
        Distances in meters, same shape as the inputs.

    Notes
    -----
    Spherical Earth of radius ``EARTH_RADIUS``.
    """
    lats1_rad = np.radians(lats1)
    lats2_rad = np.radians(lats2)
    dlat = lats2_rad - lats1_rad
    dlon = np.radians(lons2) - np.radians(lons1)

    a = np.sin(dlat/2)**2 + np.cos(lats1_rad) * np.cos(lats2_rad) * np.sin(dlon/2)**2
    c = 2 * np.arcsin(np.sqrt(np.clip(a, 0.0, 1.0)))

    return c * EARTH_RADIUS


def _spacing_along(dist: np.ndarray, axis: int) -> np.ndarray:
    """Per-pixel spacing from the spacings between neighbouring pixels.

    Interior pixels average the gaps on either side; edge pixels take
    their single gap.
    """
    n = dist.shape[axis]
    head = np.take(dist, [0], axis=axis)
    tail = np.take(dist, [n - 1], axis=axis)
    inner = (np.take(dist, np.arange(0, n - 1), axis=axis)
             + np.take(dist, np.arange(1, n), axis=axis)) / 2.0
    return np.concatenate([head, inner, tail], axis=axis)


def ground_resolution_grid(lats: np.ndarray, lons: np.ndarray) -> np.ndarray:
    """
    Per-pixel ground resolution from latitude/longitude rasters.

    Each pixel's resolution is the mean of its ground spacing along the
    sample axis and along the line axis, where the spacing along an axis
    is the average distance to the neighbouring pixels on that axis.

    Parameters
    ----------
    lats : np.ndarray
        Latitude of each pixel centre in degrees. Shape ``(lines, samples)``.
    lons : np.ndarray
        Longitude of each pixel centre in degrees. Same shape as *lats*.

    Returns
    -------
    np.ndarray
        Resolution in meters per pixel, shape ``(lines, samples)``.

    Raises
    ------
    ValueError
        If the rasters differ in shape or are smaller than 2x2.
    """
    lats = np.asarray(lats, dtype=np.float64)
    lons = np.asarray(lons, dtype=np.float64)
    if lats.shape != lons.shape:
        raise ValueError(
            f"lats and lons must have the same shape, got {lats.shape} "
            f"and {lons.shape}"
        )
    if lats.ndim != 2 or lats.shape[0] < 2 or lats.shape[1] < 2:
        raise ValueError(f"Expected 2D rasters of at least 2x2, got {lats.shape}")

    d_sample = haversine_distance(
        lats[:, :-1], lons[:, :-1], lats[:, 1:], lons[:, 1:]
    )
    d_line = haversine_distance(
        lats[:-1, :], lons[:-1, :], lats[1:, :], lons[1:, :]
    )

    return (_spacing_along(d_sample, axis=1) + _spacing_along(d_line, axis=0)) / 2.0
