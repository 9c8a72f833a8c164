"""Transpose alignment rows into columns."""

from typing import Sequence, Union

import numpy as np
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from .errors import AlignmentLengthMismatch

Row = Union[SeqRecord, Seq, str]


def row_string(row: Row) -> str:
    """Return the characters of an alignment row as a plain string."""
    if isinstance(row, SeqRecord):
        return str(row.seq)
    return str(row)


def extract_columns(rows: Sequence[Row]) -> np.ndarray:
    """
    Transpose an alignment into its columns.

    Args:
        rows: Alignment rows (SeqRecords, Seq objects or strings)

    Returns:
        Character array of shape (L, N); entry [j] is column j with one
        character per row, in row order

    Raises:
        AlignmentLengthMismatch: If there are no rows or row lengths differ
    """
    sequences = [row_string(row) for row in rows]
    if not sequences:
        raise AlignmentLengthMismatch("Alignment has no rows")

    lengths = sorted({len(seq) for seq in sequences})
    if len(lengths) > 1:
        raise AlignmentLengthMismatch(
            f"Alignment rows have unequal lengths: {', '.join(str(n) for n in lengths)}"
        )

    matrix = np.array([list(seq) for seq in sequences], dtype='<U1')
    matrix = matrix.reshape(len(sequences), lengths[0])
    return matrix.T
