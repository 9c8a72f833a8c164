"""
alncut: select alignment columns by variation and gap content

A Python package for filtering multiple sequence alignments site by site,
keeping invariant, gap-free, all-gap or parsimony-informative columns (or
their complement) under an optional frequency cutoff.
"""

__version__ = "1.0.0"

from .errors import (
    AlncutError,
    InvalidCutoffArgument,
    InvalidMoltypeArgument,
    AlignmentLengthMismatch,
    MissingInputFile,
    InputParseError,
    AlignmentWriteError
)
from .cutoff import validate_frequency, resolve_cutoff
from .columns import extract_columns
from .classifier import (
    ClassificationMode,
    GAP_CHARACTER,
    classify_site,
    selection_mask,
    mode_from_flags
)
from .report import (
    selected_indices,
    selection_label,
    format_selection_report,
    write_selection_report
)
from .assembler import assemble_alignment
from .io_utils import read_alignments, write_alignment, format_alignment, validate_moltype
from .config import AlncutConfig
from .pipeline import filter_alignment, process_inputs, SiteFilterResult, RunSummary

__all__ = [
    "AlncutError",
    "InvalidCutoffArgument",
    "InvalidMoltypeArgument",
    "AlignmentLengthMismatch",
    "MissingInputFile",
    "InputParseError",
    "AlignmentWriteError",
    "validate_frequency",
    "resolve_cutoff",
    "extract_columns",
    "ClassificationMode",
    "GAP_CHARACTER",
    "classify_site",
    "selection_mask",
    "mode_from_flags",
    "selected_indices",
    "selection_label",
    "format_selection_report",
    "write_selection_report",
    "assemble_alignment",
    "read_alignments",
    "write_alignment",
    "format_alignment",
    "validate_moltype",
    "AlncutConfig",
    "filter_alignment",
    "process_inputs",
    "SiteFilterResult",
    "RunSummary"
]
