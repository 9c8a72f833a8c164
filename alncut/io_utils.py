"""
Alignment reading and writing.

Thin wrappers around Biopython: FASTA input is read with SeqIO so that
ragged rows reach the length check instead of failing inside the parser;
every other format goes through AlignIO, which may yield several alignment
records per file.
"""

import logging
from io import StringIO
from typing import IO, Iterator, List, Optional, Union
from pathlib import Path

from Bio import AlignIO, SeqIO
from Bio.Align import MultipleSeqAlignment
from Bio.SeqRecord import SeqRecord

from .errors import AlignmentWriteError, InputParseError, InvalidMoltypeArgument

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = [
    'fasta',
    'clustal',
    'emboss',
    'maf',
    'mauve',
    'msf',
    'nexus',
    'phylip',
    'phylip-relaxed',
    'phylip-sequential',
    'stockholm',
]

WRITABLE_FORMATS = [
    'fasta',
    'clustal',
    'maf',
    'mauve',
    'nexus',
    'phylip',
    'phylip-relaxed',
    'phylip-sequential',
    'stockholm',
]

# Command-line molecule types mapped to Biopython molecule_type annotations
MOLECULE_TYPES = {
    'dna': 'DNA',
    'rna': 'RNA',
    'protein': 'protein',
}

ID_MARKER = '>'

Source = Union[str, Path, IO[str]]


def validate_moltype(value: str) -> str:
    """
    Normalize a molecule type argument.

    Raises:
        InvalidMoltypeArgument: If the value is not dna, rna or protein
    """
    moltype = str(value).strip().lower()
    if moltype not in MOLECULE_TYPES:
        raise InvalidMoltypeArgument(
            f"Molecule type must be one of {', '.join(MOLECULE_TYPES)}, got {value!r}"
        )
    return moltype


def _annotate_moltype(rows: List[SeqRecord], moltype: Optional[str]) -> List[SeqRecord]:
    if moltype is not None:
        molecule_type = MOLECULE_TYPES[validate_moltype(moltype)]
        for row in rows:
            row.annotations["molecule_type"] = molecule_type
    return rows


def read_alignments(source: Source, fmt: str = 'fasta',
                    moltype: Optional[str] = None) -> Iterator[List[SeqRecord]]:
    """
    Read alignment records from a file path or open handle.

    Args:
        source: Path to an alignment file, or an open text handle
        fmt: Biopython format name
        moltype: Optional molecule type (dna, rna or protein) attached to
            every row

    Yields:
        One list of SeqRecords per alignment record

    Raises:
        InputParseError: If the source cannot be opened or the data cannot be
            parsed in the given format
    """
    if fmt not in SUPPORTED_FORMATS:
        raise InputParseError(f"Unsupported input format: {fmt}")

    try:
        if fmt == 'fasta':
            records = list(SeqIO.parse(source, 'fasta'))
            if not records:
                logger.warning("No FASTA records found in input")
            batches = iter([records] if records else [])
        else:
            batches = (list(alignment) for alignment in AlignIO.parse(source, fmt))

        for rows in batches:
            logger.debug(f"Read {fmt} alignment record with {len(rows)} rows")
            yield _annotate_moltype(rows, moltype)
    except OSError as e:
        raise InputParseError(f"Could not read input: {e}") from e
    except Exception as e:
        # Biopython parsers raise ValueError, RuntimeError and format-specific errors
        raise InputParseError(f"Could not parse {fmt} alignment: {e}") from e


def strip_marker_padding(text: str, marker: str = ID_MARKER) -> str:
    """
    Remove one space between an identifier-line marker and the identifier.

    Lines of the form '> seq1' become '>seq1'; other lines are untouched.
    """
    padded = marker + ' '
    lines = text.splitlines(keepends=True)
    return "".join(
        marker + line[len(padded):] if line.startswith(padded) else line
        for line in lines
    )


def format_alignment(alignment: MultipleSeqAlignment, fmt: str = 'fasta') -> str:
    """
    Serialize an alignment to text in the given format.

    Raises:
        ValueError: If the format cannot be written
        AlignmentWriteError: If Biopython rejects the alignment for this format
    """
    if fmt not in WRITABLE_FORMATS:
        raise ValueError(f"Unsupported output format: {fmt}")

    handle = StringIO()
    try:
        AlignIO.write(alignment, handle, fmt)
    except (ValueError, TypeError) as e:
        raise AlignmentWriteError(f"Could not write {fmt} alignment: {e}") from e
    text = handle.getvalue()
    if fmt == 'fasta':
        text = strip_marker_padding(text)
    return text


def write_alignment(alignment: MultipleSeqAlignment, handle: IO[str],
                    fmt: str = 'fasta') -> None:
    """Write an alignment to an open text handle."""
    handle.write(format_alignment(alignment, fmt))
    handle.flush()
