"""Run-level configuration for alncut."""

import argparse
from dataclasses import dataclass
from typing import Optional

from .classifier import ClassificationMode, mode_from_flags
from .cutoff import validate_frequency
from .io_utils import SUPPORTED_FORMATS, WRITABLE_FORMATS, validate_moltype


def _default_output_format(input_format: str) -> str:
    # Read-only formats fall back to FASTA output
    return input_format if input_format in WRITABLE_FORMATS else 'fasta'


@dataclass(frozen=True)
class AlncutConfig:
    """Immutable options shared by every alignment record in a run.

    Attributes:
        mode: Site classification mode
        negate: Invert every per-column decision
        frequency: Raw frequency argument (absolute count or fraction), None when unset
        verbose: Write selection reports to the diagnostic stream
        input_format: Biopython format of the input alignments
        output_format: Biopython format of the filtered alignments
        moltype: Molecule type attached to input rows (dna, rna or protein)
        show_progress: Show a progress bar over input files
    """
    mode: ClassificationMode = ClassificationMode.INVARIANT
    negate: bool = False
    frequency: Optional[float] = None
    verbose: bool = False
    input_format: str = 'fasta'
    output_format: str = 'fasta'
    moltype: Optional[str] = None
    show_progress: bool = False

    def __post_init__(self):
        if self.frequency is not None:
            object.__setattr__(self, 'frequency', validate_frequency(self.frequency))
        if self.moltype is not None:
            object.__setattr__(self, 'moltype', validate_moltype(self.moltype))
        if self.input_format not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported input format: {self.input_format}")
        if self.output_format not in WRITABLE_FORMATS:
            raise ValueError(f"Unsupported output format: {self.output_format}")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "AlncutConfig":
        """Build the configuration from parsed command-line arguments."""
        return cls(
            mode=mode_from_flags(gapfree=args.gapfree, allgap=args.allgap, parsinf=args.parsinf),
            negate=args.negate,
            frequency=args.frequency,
            verbose=args.verbose,
            input_format=args.format,
            output_format=args.outformat or _default_output_format(args.format),
            moltype=args.moltype,
            show_progress=args.progress,
        )
