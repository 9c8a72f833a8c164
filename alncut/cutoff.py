"""
Frequency cutoff handling.

A frequency argument is either an absolute count of deviating rows (a
positive integer) or a relative frequency strictly between 0 and 1. Both are
normalized to a single relative cutoff per alignment record.
"""

import math
from typing import Optional, Union

from .errors import InvalidCutoffArgument


def validate_frequency(value: Union[str, int, float]) -> float:
    """
    Validate a raw frequency argument.

    Args:
        value: Number or numeric string from the command line

    Returns:
        The frequency as a float

    Raises:
        InvalidCutoffArgument: If the value is not a positive integer >= 1
            and not a fraction strictly between 0 and 1
    """
    try:
        frequency = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidCutoffArgument(f"Frequency must be a number, got {value!r}") from e

    if not math.isfinite(frequency):
        raise InvalidCutoffArgument(f"Frequency must be finite, got {value!r}")

    if 0.0 < frequency < 1.0:
        return frequency
    if frequency >= 1.0 and frequency.is_integer():
        return frequency

    raise InvalidCutoffArgument(
        f"Frequency must be a positive integer or a fraction between 0 and 1, got {value!r}"
    )


def resolve_cutoff(frequency: Optional[float], n_rows: int) -> float:
    """
    Convert a frequency argument into a relative cutoff for one alignment.

    An absolute count f >= 1 means "at most f deviating rows" and becomes
    f / n_rows, so the cutoff must be recomputed whenever the row count
    changes between records.

    Args:
        frequency: Validated frequency argument, or None when unset
        n_rows: Number of rows in the current alignment

    Returns:
        Relative frequency cutoff
    """
    if n_rows < 1:
        raise ValueError(f"Alignment must have at least one row, got {n_rows}")

    if not frequency:
        return 0.0
    if frequency >= 1.0:
        return frequency / n_rows
    return float(frequency)
