# -*- coding: utf-8 -*-
"""
cnval Exception Hierarchy - Domain-specific exceptions for measure validation.

Separates the two fatal failure modes of measure validation from ordinary
tolerance violations, which are recorded in a ``ValidationResult`` and
never raised. All cnval exceptions subclass both ``CnvalError`` and the
appropriate built-in exception so callers can catch either.

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

from typing import Optional


class CnvalError(Exception):
    """Base exception for all cnval errors."""


class ConfigError(CnvalError, ValueError):
    """Malformed or contradictory validation thresholds.

    Raised while building a ``ToleranceConfig``. A configuration that
    raises is never partially applied.

    Parameters
    ----------
    message : str
        Human-readable description of the problem.
    key : str, optional
        Configuration keyword that triggered the error.
    rule : str, optional
        Short name of the violated rule (e.g. ``'range'``, ``'order'``).
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        rule: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.rule = rule


class CameraError(CnvalError, RuntimeError):
    """Camera model unavailable or geometry query failed.

    Raised when a camera cannot be established for an image, or when a
    sample/line resolves off the image. This marks the image as unusable,
    which is distinct from a point failing validation.

    Parameters
    ----------
    message : str
        Human-readable description of the problem.
    image : str, optional
        Name of the image the camera was requested for.
    """

    def __init__(self, message: str, image: Optional[str] = None) -> None:
        super().__init__(message)
        self.image = image
