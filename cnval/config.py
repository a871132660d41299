# -*- coding: utf-8 -*-
"""
Tolerance Configuration - Validated thresholds for measure validation.

``ToleranceConfig`` holds the DN, emission, incidence and resolution ranges,
the pixel and meter edge margins and the residual tolerances applied to
every measure. Thresholds are declared with ``Annotated`` markers from
``cnval.params``; construction parses every supplied value, applies the
per-field rules, then the cross-field rules, and either yields a complete
immutable configuration or raises ``ConfigError``.

Definitions are hierarchical mappings (for example parsed from a PVL or
JSON definition file) in which the thresholds live in a ``ValidMeasure``
group::

    {'Object': {'ValidMeasure': {'MinEmission': 10, 'MaxEmission': 50}}}

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
import json
import logging
import math
from pathlib import Path
from typing import Annotated, Any, Dict, FrozenSet, Mapping, Optional, Union

# cnval internal
from cnval.exceptions import ConfigError
from cnval.params import Clamp, Desc, Key, ParamSpec, Range, collect_param_specs
from cnval.special_pixel import VALID_MAXIMUM, VALID_MINIMUM, is_valid

logger = logging.getLogger(__name__)

DEFAULT_GROUP = 'ValidMeasure'

MIN_ANGLE = 0.0
MAX_ANGLE = 135.0

# (min field, max field) pairs that must satisfy min <= max
_ORDERED_PAIRS = (
    ('min_dn', 'max_dn'),
    ('min_emission', 'max_emission'),
    ('min_incidence', 'max_incidence'),
    ('min_resolution', 'max_resolution'),
)

# At most one of these keyword families may be configured explicitly
_RESIDUAL_FAMILY = frozenset({'SampleResidual', 'LineResidual'})
_MAGNITUDE_FAMILY = frozenset({'ResidualMagnitude'})


class ToleranceConfig:
    """Immutable, cross-validated set of measure validation thresholds.

    Every threshold has a default, so ``ToleranceConfig()`` is always
    valid and accepts any measure whose DN is not special. Thresholds
    may be given as keyword arguments using the attribute names, or
    read from a definition mapping with ``from_definition``.

    Parameters
    ----------
    **thresholds
        Attribute name to raw value (number or numeric string).

    Raises
    ------
    ConfigError
        On the first violated rule. Nothing is applied in that case.
    TypeError
        If an unknown threshold name is given.

    Examples
    --------
    >>> cfg = ToleranceConfig(min_emission=10, max_emission=50)
    >>> cfg.valid_emission(60.0)
    False
    >>> ToleranceConfig(sample_residual=1.0, residual_magnitude=2.0)
    Traceback (most recent call last):
        ...
    cnval.exceptions.ConfigError: Cannot have both Sample/Line Residuals ...
    """

    min_dn: Annotated[float, Key('MinDN'),
                      Desc('Minimum acceptable DN')] = VALID_MINIMUM
    max_dn: Annotated[float, Key('MaxDN'),
                      Desc('Maximum acceptable DN')] = VALID_MAXIMUM
    min_emission: Annotated[float, Key('MinEmission'),
                            Range(min=MIN_ANGLE, max=MAX_ANGLE),
                            Desc('Minimum emission angle (degrees)')] = MIN_ANGLE
    max_emission: Annotated[float, Key('MaxEmission'),
                            Range(min=MIN_ANGLE, max=MAX_ANGLE),
                            Desc('Maximum emission angle (degrees)')] = MAX_ANGLE
    min_incidence: Annotated[float, Key('MinIncidence'),
                             Range(min=MIN_ANGLE, max=MAX_ANGLE),
                             Desc('Minimum incidence angle (degrees)')] = MIN_ANGLE
    max_incidence: Annotated[float, Key('MaxIncidence'),
                             Range(min=MIN_ANGLE, max=MAX_ANGLE),
                             Desc('Maximum incidence angle (degrees)')] = MAX_ANGLE
    min_resolution: Annotated[float, Key('MinResolution'), Range(min=0.0),
                              Desc('Minimum ground resolution (m/pixel)')] = 0.0
    max_resolution: Annotated[float, Key('MaxResolution'), Range(min=0.0),
                              Desc('Maximum ground resolution (m/pixel)')] = math.inf
    pixels_from_edge: Annotated[int, Key('PixelsFromEdge'), Clamp(min=0),
                                Desc('Minimum distance from edge (pixels)')] = 0
    meters_from_edge: Annotated[float, Key('MetersFromEdge'), Clamp(min=0.0),
                                Desc('Minimum distance from edge (meters)')] = 0.0
    sample_residual: Annotated[float, Key('SampleResidual'), Range(min=0.0),
                               Desc('Sample residual tolerance (pixels)')] = math.inf
    line_residual: Annotated[float, Key('LineResidual'), Range(min=0.0),
                             Desc('Line residual tolerance (pixels)')] = math.inf
    residual_magnitude: Annotated[float, Key('ResidualMagnitude'), Range(min=0.0),
                                  Desc('Residual magnitude tolerance (pixels)')] = math.inf

    def __init__(self, **thresholds: Any) -> None:
        specs = self.param_specs()
        known = {s.name for s in specs}
        unexpected = set(thresholds) - known
        if unexpected:
            raise TypeError(
                f"{type(self).__name__}() got unexpected keyword "
                f"arguments: {', '.join(sorted(unexpected))}"
            )

        values: Dict[str, Union[int, float]] = {}
        configured = set()
        for spec in specs:
            if spec.name in thresholds:
                values[spec.name] = spec.validate(spec.parse(thresholds[spec.name]))
                configured.add(spec.key)
            else:
                values[spec.name] = spec.default

        _check_cross_field(values, configured)

        for name, value in values.items():
            object.__setattr__(self, name, value)
        object.__setattr__(self, '_configured', frozenset(configured))
        logger.debug("ToleranceConfig: %s", self.settings())

    # -----------------------------------------------------------------
    # Construction helpers
    # -----------------------------------------------------------------

    @classmethod
    def param_specs(cls):
        """Threshold specs in declaration order."""
        specs = cls.__dict__.get('_param_specs')
        if specs is None:
            specs = collect_param_specs(cls)
            cls._param_specs = specs
        return specs

    @classmethod
    def from_definition(
        cls,
        definition: Optional[Mapping[str, Any]] = None,
        group: str = DEFAULT_GROUP,
    ) -> 'ToleranceConfig':
        """Build a configuration from a definition mapping.

        Parameters
        ----------
        definition : Mapping, optional
            Either a flat keyword mapping or a hierarchical mapping that
            contains *group* at any depth. ``None`` yields the defaults.
        group : str, default='ValidMeasure'
            Name of the group holding the thresholds.

        Returns
        -------
        ToleranceConfig

        Raises
        ------
        ConfigError
            If the group is missing from a hierarchical definition or is
            not a mapping, a keyword is repeated, or a threshold rule is
            violated.
        """
        if definition is None:
            return cls()

        if not isinstance(definition, Mapping):
            raise ConfigError(
                f"Definition must be a mapping, got {type(definition).__name__}"
            )

        keywords = _find_group(definition, group)
        if keywords is None:
            for key, value in definition.items():
                if str(key).lower() == group.lower():
                    raise ConfigError(
                        f"Group {group!r} must be a mapping, "
                        f"got {type(value).__name__}",
                        rule='group',
                    )
            if any(isinstance(v, Mapping) for v in definition.values()):
                raise ConfigError(
                    f"Unable to find group {group!r} in definition",
                    rule='group',
                )
            keywords = definition

        by_key = {s.key.lower(): s for s in cls.param_specs()}
        thresholds: Dict[str, Any] = {}
        for raw_key, raw_value in keywords.items():
            spec = by_key.get(str(raw_key).lower())
            if spec is None:
                logger.debug("Ignoring keyword %r in group %r", raw_key, group)
                continue
            if spec.name in thresholds:
                raise ConfigError(
                    f"Keyword {spec.key} is given more than once",
                    key=spec.key, rule='duplicate',
                )
            thresholds[spec.name] = raw_value

        return cls(**thresholds)

    # -----------------------------------------------------------------
    # Immutability
    # -----------------------------------------------------------------

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # -----------------------------------------------------------------
    # Projections
    # -----------------------------------------------------------------

    @property
    def configured(self) -> FrozenSet[str]:
        """Keywords that were explicitly supplied."""
        return self._configured

    def settings(self) -> Dict[str, Union[int, float]]:
        """Effective keyword -> value view, in keyword order."""
        return {s.key: getattr(self, s.name) for s in self.param_specs()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ToleranceConfig):
            return NotImplemented
        return self.settings() == other.settings()

    def __hash__(self) -> int:
        return hash(tuple(self.settings().items()))

    def __repr__(self) -> str:
        parts = [
            f"{s.name}={getattr(self, s.name)!r}"
            for s in self.param_specs() if s.key in self._configured
        ]
        return f"ToleranceConfig({', '.join(parts)})"

    # -----------------------------------------------------------------
    # Scalar predicates
    # -----------------------------------------------------------------

    def valid_emission(self, angle: float) -> bool:
        """Whether an emission angle lies in the configured range."""
        return self.min_emission <= angle <= self.max_emission

    def valid_incidence(self, angle: float) -> bool:
        """Whether an incidence angle lies in the configured range."""
        return self.min_incidence <= angle <= self.max_incidence

    def valid_dn(self, dn: float) -> bool:
        """Whether a DN is a real measurement inside the configured range."""
        if not is_valid(dn):
            return False
        return self.min_dn <= dn <= self.max_dn

    def valid_resolution(self, resolution: float) -> bool:
        """Whether a ground resolution lies in the configured range."""
        return self.min_resolution <= resolution <= self.max_resolution


def _check_cross_field(
    values: Mapping[str, Union[int, float]],
    configured: set,
) -> None:
    """Apply rules that span more than one threshold."""
    specs = {s.name: s for s in ToleranceConfig.param_specs()}
    for lo, hi in _ORDERED_PAIRS:
        if values[hi] < values[lo]:
            lo_key, hi_key = specs[lo].key, specs[hi].key
            raise ConfigError(
                f"{lo_key} ({values[lo]!r}) must be less than "
                f"{hi_key} ({values[hi]!r})",
                key=lo_key, rule='order',
            )

    if configured & _RESIDUAL_FAMILY and configured & _MAGNITUDE_FAMILY:
        raise ConfigError(
            "Cannot have both Sample/Line Residuals and Residual Magnitude. "
            "Choose either Sample/Line Residual or Residual Magnitude",
            key='ResidualMagnitude', rule='exclusive',
        )


def _find_group(
    definition: Mapping[str, Any],
    group: str,
) -> Optional[Mapping[str, Any]]:
    """Depth-first, case-insensitive search for a named group."""
    target = group.lower()
    for key, value in definition.items():
        if isinstance(value, Mapping) and str(key).lower() == target:
            return value
    for value in definition.values():
        if isinstance(value, Mapping):
            found = _find_group(value, group)
            if found is not None:
                return found
    return None


def validate_config(
    raw: Optional[Mapping[str, Any]] = None,
    group: str = DEFAULT_GROUP,
) -> ToleranceConfig:
    """Validate a raw definition and return the resulting configuration.

    Shorthand for ``ToleranceConfig.from_definition(raw, group)``.
    """
    return ToleranceConfig.from_definition(raw, group)


def load_definition(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a JSON definition file.

    Parameters
    ----------
    path : str or Path
        Path to a JSON file whose top level is an object.

    Returns
    -------
    Dict[str, Any]
        Parsed definition, suitable for ``ToleranceConfig.from_definition``.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ConfigError
        If the file is not valid JSON or its top level is not an object.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Definition file does not exist: {path}")

    try:
        with path.open('r', encoding='utf-8') as f:
            definition = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Malformed definition file {path}: {e}") from e

    if not isinstance(definition, dict):
        raise ConfigError(
            f"Definition file {path} must contain an object, "
            f"got {type(definition).__name__}"
        )
    return definition
