"""
Verbose selection reports.

One report block is written per alignment record:

    # alncut matched 3 non-invariant sites.
    # A relative frequency cutoff of 0.2500 gaps or variants was allowed.
    # Matching indices (zero-based):
    0,4,7

The cutoff line is only written for modes that consult a cutoff and when a
non-zero frequency was given. Indices are ascending, zero-based and
comma-separated.
"""

import sys
from typing import List, Optional, Sequence, TextIO

import numpy as np

from .classifier import ClassificationMode

TOOL_NAME = "alncut"


def selected_indices(mask: Sequence[bool]) -> List[int]:
    """Return the ascending zero-based indices of selected columns."""
    return [int(i) for i in np.flatnonzero(np.asarray(mask, dtype=bool))]


def selection_label(mode: ClassificationMode, negate: bool = False) -> str:
    """Label describing the selection criterion, e.g. 'non-gap-free'."""
    return f"non-{mode.label}" if negate else mode.label


def format_selection_report(mask: Sequence[bool],
                            mode: ClassificationMode,
                            negate: bool = False,
                            cutoff: float = 0.0,
                            frequency: Optional[float] = None,
                            tool: str = TOOL_NAME) -> str:
    """
    Format the diagnostic block for one alignment record.

    Args:
        mask: Per-column selection decisions
        mode: Classification mode used
        negate: Whether decisions were negated
        cutoff: Relative cutoff applied to this record
        frequency: Raw frequency argument (None when unset)
        tool: Program name shown in the first line

    Returns:
        Report text, newline-terminated
    """
    indices = selected_indices(mask)
    lines = [f"# {tool} matched {len(indices)} {selection_label(mode, negate)} sites."]
    if mode.uses_cutoff and frequency and cutoff > 0:
        lines.append(f"# A relative frequency cutoff of {cutoff:.4f} gaps or variants was allowed.")
    lines.append("# Matching indices (zero-based):")
    lines.append(",".join(str(i) for i in indices))
    return "\n".join(lines) + "\n"


def write_selection_report(mask: Sequence[bool],
                           mode: ClassificationMode,
                           negate: bool = False,
                           cutoff: float = 0.0,
                           frequency: Optional[float] = None,
                           stream: Optional[TextIO] = None,
                           tool: str = TOOL_NAME) -> None:
    """Write a selection report to a diagnostic stream (stderr by default)."""
    if stream is None:
        stream = sys.stderr
    stream.write(format_selection_report(mask, mode, negate, cutoff, frequency, tool))
    stream.flush()
