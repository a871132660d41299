# -*- coding: utf-8 -*-
"""
Geometry Base Classes - Abstract interfaces to the camera and pixel store.

Measure validation does not compute viewing geometry itself. It consumes
it through three small interfaces defined here:

- ``ImageHandle``: an opened image that reports its dimensions.
- ``Camera``: per-pixel emission angle, incidence angle, ground
  resolution and raw DN for one image.
- ``GeometryProvider``: resolves an image handle to its camera.

Coordinate Conventions
----------------------
- **Image coordinates:** (sample, line), 1-based, with the centre of the
  upper-left pixel at (1, 1).
- **Angles:** degrees.
- **Resolution:** meters of ground per pixel.

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
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class PointGeometry:
    """Viewing geometry at one image location.

    Attributes
    ----------
    emission : float
        Emission angle in degrees.
    incidence : float
        Incidence angle in degrees.
    resolution : float
        Ground pixel resolution in meters.
    """

    emission: float
    incidence: float
    resolution: float


class ImageHandle(ABC):
    """An opened image.

    Subclasses report the image size. Pixel access and geometry go
    through the ``Camera`` the image resolves to.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier used in error messages (file name, serial number)."""

    @abstractmethod
    def dimensions(self) -> Tuple[int, int]:
        """Return ``(num_samples, num_lines)``."""

    def __repr__(self) -> str:
        num_samples, num_lines = self.dimensions()
        return f"{type(self).__name__}({self.name!r}, {num_samples}x{num_lines})"


class Camera(ABC):
    """Per-pixel geometry and radiometry for one image.

    Implementations raise ``CameraError`` when a location resolves off the
    image or the model cannot produce geometry there.
    """

    @abstractmethod
    def point_at(self, sample: float, line: float) -> PointGeometry:
        """Viewing geometry at ``(sample, line)``.

        Raises
        ------
        CameraError
            If the location is off the image or has no geometry.
        """

    @abstractmethod
    def pixel_value(self, sample: float, line: float) -> float:
        """Raw DN at ``(sample, line)``.

        Special pixels are returned as their sentinel values
        (see ``cnval.special_pixel``).
        """

    def resolution_at(self, sample: float, line: float) -> float:
        """Ground pixel resolution at ``(sample, line)`` in meters.

        The default delegates to ``point_at``; subclasses with a cheaper
        resolution lookup may override it.
        """
        return self.point_at(sample, line).resolution


class GeometryProvider(ABC):
    """Resolves image handles to cameras."""

    @abstractmethod
    def resolve_camera(self, image: ImageHandle) -> Camera:
        """Return the camera for *image*.

        Raises
        ------
        CameraError
            If no camera model can be established for *image*.
        """
