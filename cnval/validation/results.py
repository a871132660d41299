# -*- coding: utf-8 -*-
"""
Validation Results - Per-measure outcome of the standard checks.

Provides ``Failure`` for a single violated check, ``Observation`` for the
values measured at the point, and ``ValidationResult`` which collects the
failures of one evaluation in check order. A result passes iff it holds no
failures.

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
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

# cnval internal
from cnval.special_pixel import special_name
from cnval.vocabulary import Comparison, ValidationCheck


def _fmt(value: Optional[float], dn: bool = False) -> str:
    if value is None:
        return 'None'
    if dn:
        name = special_name(value)
        if name is not None:
            return name
    return f"{value:g}"


@dataclass(frozen=True)
class Failure:
    """A single violated check.

    Range checks carry ``minimum``/``maximum``; edge and residual checks
    carry ``tolerance`` and the ``comparison`` that was violated.

    Attributes
    ----------
    check : ValidationCheck
        The check that failed.
    measured : float or None
        Value measured at the point.
    minimum, maximum : float, optional
        Inclusive range the value should have been in.
    tolerance : float, optional
        Single-sided threshold.
    comparison : Comparison, optional
        ``GREATER`` if the value exceeded ``tolerance``, ``LESS`` if it
        fell short of it.
    """

    check: ValidationCheck
    measured: Optional[float]
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    tolerance: Optional[float] = None
    comparison: Optional[Comparison] = None

    def to_dict(self) -> Dict[str, Any]:
        """Flat projection for structured logging."""
        out: Dict[str, Any] = {
            'check': self.check.value,
            'measured': self.measured,
        }
        if self.minimum is not None or self.maximum is not None:
            out['minimum'] = self.minimum
            out['maximum'] = self.maximum
        if self.tolerance is not None:
            out['tolerance'] = self.tolerance
            out['comparison'] = self.comparison.value if self.comparison else None
        return out

    def __str__(self) -> str:
        label = self.check.value
        is_dn = self.check is ValidationCheck.DN_VALUE
        if self.tolerance is not None:
            relation = self.comparison.value if self.comparison else 'outside'
            if self.measured is None:
                return f"{label} is {relation} than tolerance {_fmt(self.tolerance)}"
            return (
                f"{label} {_fmt(self.measured)} is {relation} than "
                f"tolerance {_fmt(self.tolerance)}"
            )
        return (
            f"{label} {_fmt(self.measured, dn=is_dn)} is not in range "
            f"[{_fmt(self.minimum)}, {_fmt(self.maximum)}]"
        )


@dataclass(frozen=True)
class Observation:
    """Values measured at the evaluated point.

    Residuals are None when no prior measure was supplied.
    """

    emission_angle: float
    incidence_angle: float
    dn_value: float
    resolution: float
    sample_residual: Optional[float] = None
    line_residual: Optional[float] = None
    residual_magnitude: Optional[float] = None

    def to_dict(self) -> Dict[str, float]:
        """Keyword -> value view using the measure log keyword names."""
        out = {
            'EmissionAngle': self.emission_angle,
            'IncidenceAngle': self.incidence_angle,
            'DNValue': self.dn_value,
            'Resolution': self.resolution,
        }
        if self.sample_residual is not None:
            out['SampleResidual'] = self.sample_residual
            out['LineResidual'] = self.line_residual
            out['ResidualMagnitude'] = self.residual_magnitude
        return out


class ValidationResult:
    """Ordered failures from one measure evaluation.

    A result is filled in by the validator and then frozen; after that
    ``add_failure`` raises.

    Parameters
    ----------
    observation : Observation, optional
        Values measured at the point.

    Examples
    --------
    >>> result = ValidationResult()
    >>> _ = result.add_failure(ValidationCheck.EMISSION_ANGLE, 60.0,
    ...                        minimum=10.0, maximum=50.0)
    >>> result.passed
    False
    >>> str(result)
    'Invalid: Emission Angle 60 is not in range [10, 50]'
    """

    def __init__(self, observation: Optional[Observation] = None) -> None:
        self.observation = observation
        self._failures: List[Failure] = []
        self._frozen = False

    def add_failure(
        self,
        check: ValidationCheck,
        measured: Optional[float],
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
        tolerance: Optional[float] = None,
        comparison: Optional[Comparison] = None,
    ) -> Failure:
        """Record a failed check.

        Failures are kept in check order whatever order they are added.

        Raises
        ------
        RuntimeError
            If the result has been frozen.
        ValueError
            If *check* already has a failure recorded.
        """
        if self._frozen:
            raise RuntimeError("ValidationResult is frozen")
        if check in self.failed_checks:
            raise ValueError(f"Failure for {check.value} already recorded")

        failure = Failure(check, measured, minimum, maximum, tolerance, comparison)
        self._failures.append(failure)
        self._failures.sort(key=lambda f: f.check.order)
        return failure

    def freeze(self) -> 'ValidationResult':
        """Make the result read-only. Returns self."""
        self._frozen = True
        return self

    @property
    def passed(self) -> bool:
        """True iff no failure was recorded."""
        return not self._failures

    @property
    def failures(self) -> Tuple[Failure, ...]:
        return tuple(self._failures)

    @property
    def failed_checks(self) -> Tuple[ValidationCheck, ...]:
        return tuple(f.check for f in self._failures)

    def is_check_valid(self, check: ValidationCheck) -> bool:
        """Whether *check* passed (was not recorded as a failure)."""
        return check not in self.failed_checks

    def failure_for(self, check: ValidationCheck) -> Optional[Failure]:
        """The failure recorded for *check*, or None."""
        for failure in self._failures:
            if failure.check is check:
                return failure
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Flat projection for structured logging or a report group."""
        out: Dict[str, Any] = {'valid': self.passed}
        if self.observation is not None:
            out.update(self.observation.to_dict())
        out['failures'] = [f.to_dict() for f in self._failures]
        return out

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationResult):
            return NotImplemented
        return (self._failures == other._failures
                and self.observation == other.observation)

    __hash__ = None

    def __str__(self) -> str:
        if self.passed:
            return 'Valid'
        return 'Invalid: ' + '; '.join(str(f) for f in self._failures)

    def __repr__(self) -> str:
        checks = [c.value for c in self.failed_checks]
        return f"ValidationResult(passed={self.passed!r}, failures={checks!r})"
