"""
Per-site classification of alignment columns.

Each column is reduced to a table of character counts and then kept or
discarded according to a classification mode, a relative frequency cutoff
and an optional negation of the result.
"""

from enum import Enum
from typing import Sequence, Tuple

import numpy as np

GAP_CHARACTER = '-'

# Differences smaller than this are treated as equal when comparing a
# frequency to the cutoff, so that an absolute count f admits exactly f rows
CUTOFF_TOLERANCE = 1e-9


class ClassificationMode(Enum):
    """Mutually exclusive site classification modes."""

    INVARIANT = "invariant"
    GAP_FREE = "gap-free"
    ALL_GAP = "all-gap"
    PARSIMONY_INFORMATIVE = "parsimoniously informative"

    @property
    def label(self) -> str:
        """Human-readable name used in selection reports."""
        return self.value

    @property
    def uses_cutoff(self) -> bool:
        """Whether the mode consults the frequency cutoff."""
        return self in (ClassificationMode.INVARIANT, ClassificationMode.GAP_FREE)


def mode_from_flags(gapfree: bool = False, allgap: bool = False,
                    parsinf: bool = False) -> ClassificationMode:
    """
    Pick the classification mode from command-line flags.

    Precedence when several flags are set: parsimony-informative, all-gap,
    gap-free. Invariant is the default.
    """
    if parsinf:
        return ClassificationMode.PARSIMONY_INFORMATIVE
    if allgap:
        return ClassificationMode.ALL_GAP
    if gapfree:
        return ClassificationMode.GAP_FREE
    return ClassificationMode.INVARIANT


def character_counts(column: Sequence[str]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Count occurrences of each distinct character in a column.

    Returns:
        Tuple of (characters, counts), gap character included as a state
    """
    if isinstance(column, str):
        column = list(column)
    states, counts = np.unique(np.asarray(column, dtype='<U1'), return_counts=True)
    return states, counts


def _within_cutoff(frequency: float, cutoff: float) -> bool:
    return frequency <= cutoff + CUTOFF_TOLERANCE


def _is_parsimony_informative(counts: np.ndarray) -> bool:
    # At least two states each shared by two or more rows
    if len(counts) < 2:
        return False
    ordered = np.sort(counts)[::-1]
    return bool(ordered[1] >= 2)


def classify_site(column: Sequence[str], mode: ClassificationMode,
                  cutoff: float = 0.0, negate: bool = False) -> bool:
    """
    Decide whether a single alignment column is kept.

    Args:
        column: Characters of the column, one per row
        mode: Classification mode
        cutoff: Relative frequency cutoff (ignored by all-gap and
            parsimony-informative modes)
        negate: Invert the decision after the mode has been evaluated

    Returns:
        True if the column is selected
    """
    states, counts = character_counts(column)
    n_rows = int(counts.sum())
    if n_rows == 0:
        raise ValueError("Cannot classify an empty column")

    gap_count = int(counts[states == GAP_CHARACTER].sum())

    if mode is ClassificationMode.PARSIMONY_INFORMATIVE:
        base = _is_parsimony_informative(counts)
    elif mode is ClassificationMode.ALL_GAP:
        base = gap_count == n_rows
    elif mode is ClassificationMode.GAP_FREE:
        base = _within_cutoff(gap_count / n_rows, cutoff)
    elif mode is ClassificationMode.INVARIANT:
        majority_frequency = int(counts.max()) / n_rows
        base = _within_cutoff(1.0 - majority_frequency, cutoff)
    else:
        raise ValueError(f"Unknown classification mode: {mode!r}")

    return not base if negate else base


def selection_mask(columns: Sequence[Sequence[str]], mode: ClassificationMode,
                   cutoff: float = 0.0, negate: bool = False) -> np.ndarray:
    """
    Classify every column of an alignment.

    Args:
        columns: Columns as returned by extract_columns
        mode: Classification mode
        cutoff: Relative frequency cutoff
        negate: Invert every decision

    Returns:
        Boolean array with one entry per column
    """
    return np.fromiter(
        (classify_site(column, mode, cutoff, negate) for column in columns),
        dtype=bool,
        count=len(columns)
    )
