# -*- coding: utf-8 -*-
"""
Geometry Module - Interfaces to the camera model and pixel store.

Measure validation queries per-pixel viewing geometry and DN values
through the interfaces defined here. Camera models and image storage are
external collaborators; ``grid`` provides a raster-backed implementation.

Key Classes
-----------
- ImageHandle: Opened image reporting its dimensions
- Camera: Per-pixel emission, incidence, resolution and DN
- GeometryProvider: Resolves images to cameras
- GridImage / GridCamera / GridGeometryProvider: Raster-backed implementation

Usage
-----
    >>> import numpy as np
    >>> from cnval.geometry import GridImage, GridGeometryProvider
    >>>
    >>> image = GridImage(np.ones((100, 200)), emission=30.0,
    ...                   incidence=45.0, resolution=10.0)
    >>> camera = GridGeometryProvider().resolve_camera(image)
    >>> camera.point_at(50, 25).resolution
    10.0

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

from cnval.geometry.base import Camera, GeometryProvider, ImageHandle, PointGeometry
from cnval.geometry.grid import GridCamera, GridGeometryProvider, GridImage
from cnval.geometry.utils import ground_resolution_grid

__all__ = [
    'Camera',
    'GeometryProvider',
    'ImageHandle',
    'PointGeometry',
    'GridCamera',
    'GridGeometryProvider',
    'GridImage',
    'ground_resolution_grid',
]
