# -*- coding: utf-8 -*-
"""
Grid Geometry - Raster-backed image handle, camera and provider.

``GridImage`` holds a DN raster plus optional emission, incidence and
resolution rasters of the same shape, sampled at pixel centres. It is the
reference ``GeometryProvider`` implementation: useful for pre-computed
backplanes exported by a camera model, for synthetic scenes and for tests.

Coordinates are 1-based sample/line and select the containing pixel;
no interpolation is performed.

Dependencies
------------
numpy

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
from typing import Optional, Tuple

# Third-party
import numpy as np

# cnval internal
from cnval.exceptions import CameraError
from cnval.geometry.base import Camera, GeometryProvider, ImageHandle, PointGeometry
from cnval.geometry.utils import check_pixel_bounds, ground_resolution_grid, pixel_index


class GridImage(ImageHandle):
    """Image backed by in-memory rasters.

    Parameters
    ----------
    pixels : np.ndarray
        DN raster, shape ``(num_lines, num_samples)``.
    emission : np.ndarray, optional
        Emission angle raster in degrees.
    incidence : np.ndarray, optional
        Incidence angle raster in degrees.
    resolution : np.ndarray, optional
        Ground resolution raster in meters per pixel.
    name : str, default='grid'
        Image identifier.

    Raises
    ------
    ValueError
        If *pixels* is not 2D or a geometry raster has a different shape.

    Notes
    -----
    The image has a camera only when all three geometry rasters are
    given; otherwise ``GridGeometryProvider`` raises ``CameraError``.
    """

    def __init__(
        self,
        pixels: np.ndarray,
        emission: Optional[np.ndarray] = None,
        incidence: Optional[np.ndarray] = None,
        resolution: Optional[np.ndarray] = None,
        name: str = 'grid',
    ) -> None:
        pixels = np.asarray(pixels)
        if pixels.ndim != 2:
            raise ValueError(f"pixels must be 2D, got shape {pixels.shape}")

        self.pixels = pixels
        self.emission = self._as_backplane(emission, 'emission')
        self.incidence = self._as_backplane(incidence, 'incidence')
        self.resolution = self._as_backplane(resolution, 'resolution')
        self._name = name

    def _as_backplane(
        self, raster: Optional[np.ndarray], label: str
    ) -> Optional[np.ndarray]:
        if raster is None:
            return None
        raster = np.asarray(raster, dtype=np.float64)
        if np.ndim(raster) == 0:
            return np.full(self.pixels.shape, float(raster))
        if raster.shape != self.pixels.shape:
            raise ValueError(
                f"{label} shape {raster.shape} does not match pixels "
                f"shape {self.pixels.shape}"
            )
        return raster

    @classmethod
    def from_latlon(
        cls,
        pixels: np.ndarray,
        lats: np.ndarray,
        lons: np.ndarray,
        emission: np.ndarray,
        incidence: np.ndarray,
        name: str = 'grid',
    ) -> 'GridImage':
        """Build an image whose resolution is derived from ground coordinates.

        Parameters
        ----------
        pixels : np.ndarray
            DN raster, shape ``(num_lines, num_samples)``.
        lats, lons : np.ndarray
            Pixel-centre latitude/longitude rasters in degrees.
        emission, incidence : np.ndarray
            Angle rasters in degrees (or scalars).
        name : str, default='grid'
            Image identifier.

        Returns
        -------
        GridImage
        """
        return cls(
            pixels,
            emission=emission,
            incidence=incidence,
            resolution=ground_resolution_grid(lats, lons),
            name=name,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def has_geometry(self) -> bool:
        """Whether all geometry rasters are present."""
        return (self.emission is not None
                and self.incidence is not None
                and self.resolution is not None)

    def dimensions(self) -> Tuple[int, int]:
        num_lines, num_samples = self.pixels.shape
        return num_samples, num_lines


class GridCamera(Camera):
    """Camera that reads geometry from a ``GridImage``'s rasters.

    Parameters
    ----------
    image : GridImage
        Image with all three geometry rasters.
    """

    def __init__(self, image: GridImage) -> None:
        if not image.has_geometry:
            raise CameraError(
                f"Cannot create camera for image: {image.name}",
                image=image.name,
            )
        self.image = image

    def _locate(self, sample: float, line: float) -> Tuple[int, int]:
        check_pixel_bounds(sample, line, self.image.dimensions(), self.image.name)
        return pixel_index(sample, line)

    def point_at(self, sample: float, line: float) -> PointGeometry:
        row, col = self._locate(sample, line)
        geometry = PointGeometry(
            emission=float(self.image.emission[row, col]),
            incidence=float(self.image.incidence[row, col]),
            resolution=float(self.image.resolution[row, col]),
        )
        if not np.all(np.isfinite([geometry.emission, geometry.incidence,
                                   geometry.resolution])):
            raise CameraError(
                f"No geometry at sample {sample}, line {line}",
                image=self.image.name,
            )
        return geometry

    def resolution_at(self, sample: float, line: float) -> float:
        row, col = self._locate(sample, line)
        resolution = float(self.image.resolution[row, col])
        if not np.isfinite(resolution):
            raise CameraError(
                f"No geometry at sample {sample}, line {line}",
                image=self.image.name,
            )
        return resolution

    def pixel_value(self, sample: float, line: float) -> float:
        row, col = self._locate(sample, line)
        return float(self.image.pixels[row, col])


class GridGeometryProvider(GeometryProvider):
    """Resolves ``GridImage`` handles to ``GridCamera`` instances."""

    def resolve_camera(self, image: ImageHandle) -> Camera:
        if not isinstance(image, GridImage):
            raise CameraError(
                f"Cannot create camera for image: {image.name}",
                image=image.name,
            )
        return GridCamera(image)
