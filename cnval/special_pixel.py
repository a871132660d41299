# -*- coding: utf-8 -*-
"""
Special Pixels - Sentinel DN values that denote missing or saturated data.

Cube pixel stores reserve the most negative 32-bit float patterns as
sentinels. Anything at or above ``VALID_MINIMUM`` (and finite) is a real
measurement. The sentinels are built from their bit patterns so the
values match those written by the pixel store exactly.

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
from typing import Any, Optional, Union

# Third-party
import numpy as np


def _from_bits(bits: int) -> float:
    """Interpret a 32-bit pattern as float32 and widen to Python float."""
    return float(np.array([bits], dtype=np.uint32).view(np.float32)[0])


VALID_MINIMUM = _from_bits(0xFF7FFFFA)
VALID_MAXIMUM = _from_bits(0x7F7FFFFF)

NULL = _from_bits(0xFF7FFFFB)
LOW_REPR_SAT = _from_bits(0xFF7FFFFC)
LOW_INSTR_SAT = _from_bits(0xFF7FFFFD)
HIGH_INSTR_SAT = _from_bits(0xFF7FFFFE)
HIGH_REPR_SAT = _from_bits(0xFF7FFFFF)

SPECIAL_NAMES = {
    NULL: 'Null',
    LOW_REPR_SAT: 'Lrs',
    LOW_INSTR_SAT: 'Lis',
    HIGH_INSTR_SAT: 'His',
    HIGH_REPR_SAT: 'Hrs',
}


def is_special(value: Any) -> Union[bool, np.ndarray]:
    """Test whether DN value(s) are special pixels.

    NaN and infinities are treated as special alongside the reserved
    sentinels.

    Parameters
    ----------
    value : float or array-like
        DN value or array of DN values.

    Returns
    -------
    bool or np.ndarray
        ``bool`` for scalar input, boolean array otherwise.
    """
    arr = np.asarray(value, dtype=np.float64)
    mask = ~np.isfinite(arr) | (arr < VALID_MINIMUM)
    if mask.ndim == 0:
        return bool(mask)
    return mask


def is_valid(value: Any) -> Union[bool, np.ndarray]:
    """Inverse of ``is_special``."""
    mask = is_special(value)
    if isinstance(mask, np.ndarray):
        return ~mask
    return not mask


def special_name(value: float) -> Optional[str]:
    """Return the sentinel name for a special DN, or None for valid DNs."""
    if not is_special(value):
        return None
    if np.isnan(value):
        return 'NaN'
    return SPECIAL_NAMES.get(float(value), 'Special')
