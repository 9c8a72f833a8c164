"""
Record and file drivers for alignment site filtering.

Each alignment record is read, classified, assembled and written before the
next one is read. Files are processed in the order given; a missing file is
skipped with a warning, and a file that cannot be read, parsed or written,
or that holds ragged rows, is abandoned without affecting the files after it.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterable, List, Optional, Sequence, Union

import numpy as np
from Bio.Align import MultipleSeqAlignment
from tqdm import tqdm

from .assembler import assemble_alignment
from .classifier import selection_mask
from .columns import Row, extract_columns
from .config import AlncutConfig
from .cutoff import resolve_cutoff
from .errors import (
    AlignmentLengthMismatch,
    AlignmentWriteError,
    InputParseError,
    MissingInputFile
)
from .io_utils import Source, read_alignments, write_alignment
from .report import write_selection_report

logger = logging.getLogger(__name__)

STDIN_NAME = '-'


@dataclass
class SiteFilterResult:
    """Outcome of filtering one alignment record."""
    alignment: MultipleSeqAlignment
    mask: np.ndarray
    cutoff: float

    @property
    def kept_columns(self) -> int:
        return int(self.mask.sum())

    @property
    def total_columns(self) -> int:
        return len(self.mask)


@dataclass
class RunSummary:
    """Counters for one invocation over several input files."""
    files_processed: int = 0
    records_written: int = 0
    files_missing: int = 0
    files_failed: int = 0

    @property
    def ok(self) -> bool:
        return self.files_failed == 0


def filter_alignment(rows: Sequence[Row], config: AlncutConfig) -> SiteFilterResult:
    """
    Filter the columns of one alignment record.

    Args:
        rows: Alignment rows
        config: Run configuration

    Returns:
        SiteFilterResult with the assembled alignment, mask and cutoff

    Raises:
        AlignmentLengthMismatch: If rows are empty or of unequal length
    """
    columns = extract_columns(rows)
    cutoff = resolve_cutoff(config.frequency, len(rows))
    mask = selection_mask(columns, config.mode, cutoff, config.negate)
    alignment = assemble_alignment(rows, mask)

    logger.debug(f"Kept {int(mask.sum())} of {len(mask)} columns "
                 f"across {len(rows)} rows (cutoff {cutoff:.4f})")
    return SiteFilterResult(alignment=alignment, mask=mask, cutoff=cutoff)


def process_stream(source: Source, config: AlncutConfig,
                   out: IO[str], err: IO[str]) -> int:
    """
    Filter every alignment record from one source.

    Args:
        source: Path or open handle to read from
        config: Run configuration
        out: Stream for filtered alignments
        err: Stream for selection reports

    Returns:
        Number of alignment records written

    Raises:
        InputParseError: If the source cannot be parsed
        AlignmentLengthMismatch: If a record has ragged rows
        AlignmentWriteError: If a filtered record cannot be written
    """
    written = 0
    for rows in read_alignments(source, config.input_format, config.moltype):
        result = filter_alignment(rows, config)
        if result.kept_columns == 0 and config.output_format != 'fasta':
            # Only FASTA can hold rows with no characters
            logger.warning(f"No columns selected; skipping empty {config.output_format} alignment")
        else:
            write_alignment(result.alignment, out, config.output_format)
            written += 1
        if config.verbose:
            write_selection_report(
                result.mask,
                config.mode,
                negate=config.negate,
                cutoff=result.cutoff,
                frequency=config.frequency,
                stream=err
            )
    return written


def resolve_input(name: Union[str, Path]) -> Path:
    """
    Check that a named input file exists.

    Raises:
        MissingInputFile: If the path does not exist
    """
    path = Path(name)
    if not path.exists():
        raise MissingInputFile(f"Input file not found: {name}")
    return path


def process_inputs(inputs: Iterable[Union[str, Path]], config: AlncutConfig,
                   out: Optional[IO[str]] = None,
                   err: Optional[IO[str]] = None,
                   stdin: Optional[IO[str]] = None) -> RunSummary:
    """
    Filter alignments from several inputs in order.

    Args:
        inputs: File names; '-' or an empty list reads standard input
        config: Run configuration
        out: Stream for filtered alignments (stdout by default)
        err: Stream for selection reports (stderr by default)
        stdin: Stream read for '-' (stdin by default)

    Returns:
        RunSummary with per-run counters
    """
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    stdin = stdin if stdin is not None else sys.stdin

    names: List[Union[str, Path]] = list(inputs) or [STDIN_NAME]
    summary = RunSummary()

    for name in tqdm(names, desc="Filtering alignments", unit=" files",
                     disable=not config.show_progress):
        if str(name) == STDIN_NAME:
            source: Source = stdin
            label = "<stdin>"
        else:
            try:
                source = resolve_input(name)
            except MissingInputFile as e:
                logger.warning(f"{e}, skipping")
                summary.files_missing += 1
                continue
            label = str(name)

        logger.debug(f"Reading {config.input_format} alignments from {label}")
        try:
            summary.records_written += process_stream(source, config, out, err)
        except (InputParseError, AlignmentLengthMismatch, AlignmentWriteError) as e:
            logger.error(f"Error processing {label}: {e}")
            summary.files_failed += 1
            continue
        summary.files_processed += 1

    return summary
