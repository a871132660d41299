# -*- coding: utf-8 -*-
"""
Threshold Annotations - Declarative threshold constraints via typing.Annotated.

Provides constraint marker types (``Key``, ``Range``, ``Clamp``, ``Desc``)
for use inside ``typing.Annotated`` annotations on configuration classes,
plus the ``ParamSpec`` introspection class and the collection utility
consumed by ``ToleranceConfig``.

Usage
-----
Declare thresholds as class-body annotations::

    from typing import Annotated
    from cnval.params import Key, Range, Clamp, Desc

    class MyConfig:
        min_emission: Annotated[float, Key('MinEmission'), Range(min=0, max=135),
                                Desc('Minimum emission angle')] = 0.0
        pixels_from_edge: Annotated[int, Key('PixelsFromEdge'), Clamp(min=0),
                                    Desc('Edge margin in pixels')] = 0

    specs = collect_param_specs(MyConfig)

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
import numbers
from typing import (
    Annotated,
    Any,
    Optional,
    Tuple,
    Union,
    get_origin,
    get_type_hints,
)

# cnval internal
from cnval.exceptions import ConfigError

logger = logging.getLogger(__name__)


# =====================================================================
# Constraint marker types  (used inside Annotated[...])
# =====================================================================

class ParamMeta:
    """Base marker for threshold metadata in ``Annotated`` types.

    Any ``Annotated`` class-body field whose metadata includes a ``Key``
    is treated as a configurable threshold by ``collect_param_specs``.
    """


class Key(ParamMeta):
    """Configuration keyword the threshold is read from.

    Parameters
    ----------
    name : str
        Keyword as it appears in a definition group (e.g. ``'MinDN'``).
    """

    __slots__ = ('name',)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Key({self.name!r})"


class Range(ParamMeta):
    """Inclusive numeric range constraint. Violations are errors.

    Parameters
    ----------
    min : int or float, optional
        Minimum allowed value (inclusive).
    max : int or float, optional
        Maximum allowed value (inclusive).
    """

    __slots__ = ('min', 'max')

    def __init__(
        self,
        min: Optional[Union[int, float]] = None,
        max: Optional[Union[int, float]] = None,
    ) -> None:
        self.min = min
        self.max = max

    def __repr__(self) -> str:
        parts = []
        if self.min is not None:
            parts.append(f"min={self.min!r}")
        if self.max is not None:
            parts.append(f"max={self.max!r}")
        return f"Range({', '.join(parts)})"


class Clamp(ParamMeta):
    """Lower bound that is enforced by clamping instead of raising.

    Parameters
    ----------
    min : int or float
        Values below this are replaced by it.
    """

    __slots__ = ('min',)

    def __init__(self, min: Union[int, float]) -> None:
        self.min = min

    def __repr__(self) -> str:
        return f"Clamp(min={self.min!r})"


class Desc(ParamMeta):
    """Human-readable threshold description.

    Parameters
    ----------
    text : str
        Description text used in error messages and documentation.
    """

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


# =====================================================================
# ParamSpec - processed introspection data class
# =====================================================================

class ParamSpec:
    """Resolved specification for a single threshold.

    Attributes
    ----------
    name : str
        Attribute name on the configuration class.
    key : str
        Configuration keyword.
    param_type : type
        ``int`` or ``float``.
    default : int or float
        Value used when the keyword is absent.
    description : str
        Human-readable description.
    min_value, max_value : int, float, or None
        Inclusive bounds (from ``Range``).
    clamp_min : int, float, or None
        Clamping lower bound (from ``Clamp``).
    """

    __slots__ = (
        'name', 'key', 'param_type', 'default', 'description',
        'min_value', 'max_value', 'clamp_min',
    )

    def __init__(
        self,
        name: str,
        key: str,
        param_type: type,
        default: Union[int, float],
        description: str,
        min_value: Optional[Union[int, float]],
        max_value: Optional[Union[int, float]],
        clamp_min: Optional[Union[int, float]],
    ) -> None:
        self.name = name
        self.key = key
        self.param_type = param_type
        self.default = default
        self.description = description
        self.min_value = min_value
        self.max_value = max_value
        self.clamp_min = clamp_min

    def parse(self, raw: Any) -> Union[int, float]:
        """Convert a raw configuration value to this spec's type.

        Accepts ints, floats and numeric strings. Booleans, NaN and
        non-numeric values are rejected. ``int`` thresholds must be
        integral.

        Raises
        ------
        ConfigError
            If *raw* cannot be interpreted as a number of the right type.
        """
        if isinstance(raw, bool):
            raise ConfigError(
                f"{self.key} must be numeric, got {raw!r}",
                key=self.key, rule='numeric',
            )
        if isinstance(raw, numbers.Real):
            value = float(raw)
        elif isinstance(raw, str):
            try:
                value = float(raw.strip())
            except ValueError:
                raise ConfigError(
                    f"{self.key} must be numeric, got {raw!r}",
                    key=self.key, rule='numeric',
                ) from None
        else:
            raise ConfigError(
                f"{self.key} must be numeric, got {type(raw).__name__}",
                key=self.key, rule='numeric',
            )

        if math.isnan(value):
            raise ConfigError(
                f"{self.key} must be a number, got NaN",
                key=self.key, rule='numeric',
            )

        if self.param_type is int:
            if not value.is_integer():
                raise ConfigError(
                    f"{self.key} must be an integer, got {raw!r}",
                    key=self.key, rule='integer',
                )
            return int(value)
        return value

    def validate(self, value: Union[int, float]) -> Union[int, float]:
        """Apply clamping and range constraints to a parsed value.

        Returns
        -------
        int or float
            The value, clamped if a ``Clamp`` bound applies.

        Raises
        ------
        ConfigError
            If *value* falls outside the inclusive ``Range``.
        """
        if self.clamp_min is not None and value < self.clamp_min:
            logger.warning(
                "%s=%r is below %r, clamping", self.key, value, self.clamp_min
            )
            value = self.param_type(self.clamp_min)

        below = self.min_value is not None and value < self.min_value
        above = self.max_value is not None and value > self.max_value
        if below or above:
            if self.min_value is not None and self.max_value is not None:
                msg = (
                    f"Invalid {self.key} {value!r}, valid range is "
                    f"[{self.min_value}-{self.max_value}]"
                )
            elif below:
                msg = f"Invalid {self.key} {value!r}, must be >= {self.min_value}"
            else:
                msg = f"Invalid {self.key} {value!r}, must be <= {self.max_value}"
            raise ConfigError(msg, key=self.key, rule='range')
        return value

    def __repr__(self) -> str:
        parts = (
            f"ParamSpec(name={self.name!r}, key={self.key!r}, "
            f"param_type={self.param_type.__name__}, "
            f"default={self.default!r}"
        )
        if self.min_value is not None:
            parts += f", min_value={self.min_value!r}"
        if self.max_value is not None:
            parts += f", max_value={self.max_value!r}"
        if self.clamp_min is not None:
            parts += f", clamp_min={self.clamp_min!r}"
        return parts + ")"


# =====================================================================
# Annotation collection
# =====================================================================

def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Parse ``Annotated`` type hints on *cls* into a tuple of ``ParamSpec``.

    Only fields whose ``Annotated`` metadata includes a ``Key`` are
    collected. Fields keep their declaration order.

    Raises
    ------
    TypeError
        If a threshold has no class-level default, is not ``int`` or
        ``float``, or has both ``Range`` and ``Clamp`` with a clamp below
        the range minimum.
    """
    hints = get_type_hints(cls, include_extras=True)

    specs: list = []
    for name in getattr(cls, '__annotations__', {}):
        hint = hints.get(name)
        if hint is None or get_origin(hint) is not Annotated:
            continue

        base_type = hint.__args__[0]
        metadata = hint.__metadata__

        key_meta: Optional[Key] = None
        range_meta: Optional[Range] = None
        clamp_meta: Optional[Clamp] = None
        desc_meta: Optional[Desc] = None
        for m in metadata:
            if isinstance(m, Key):
                key_meta = m
            elif isinstance(m, Range):
                range_meta = m
            elif isinstance(m, Clamp):
                clamp_meta = m
            elif isinstance(m, Desc):
                desc_meta = m

        if key_meta is None:
            continue

        if base_type not in (int, float):
            raise TypeError(
                f"Threshold '{name}' on {cls.__qualname__} must be int or "
                f"float, got {base_type!r}"
            )
        if not hasattr(cls, name):
            raise TypeError(
                f"Threshold '{name}' on {cls.__qualname__} has no default"
            )
        if (range_meta is not None and clamp_meta is not None
                and range_meta.min is not None
                and clamp_meta.min < range_meta.min):
            raise TypeError(
                f"Threshold '{name}' on {cls.__qualname__}: clamp bound "
                f"{clamp_meta.min!r} is below range minimum {range_meta.min!r}"
            )

        specs.append(ParamSpec(
            name=name,
            key=key_meta.name,
            param_type=base_type,
            default=getattr(cls, name),
            description=desc_meta.text if desc_meta else '',
            min_value=range_meta.min if range_meta else None,
            max_value=range_meta.max if range_meta else None,
            clamp_min=clamp_meta.min if clamp_meta else None,
        ))

    return tuple(specs)
