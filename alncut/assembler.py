"""Build filtered alignments from a column selection mask."""

from itertools import compress
from typing import Sequence

import numpy as np
from Bio.Align import MultipleSeqAlignment
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from .columns import Row, row_string


def _filter_letter_annotations(record: SeqRecord, mask: Sequence[bool]) -> dict:
    filtered = {}
    for key, values in record.letter_annotations.items():
        kept = list(compress(values, mask))
        filtered[key] = "".join(kept) if isinstance(values, str) else kept
    return filtered


def assemble_alignment(rows: Sequence[Row], mask: Sequence[bool]) -> MultipleSeqAlignment:
    """
    Keep only the selected columns of an alignment.

    Rows are never dropped or reordered; identifiers, names, descriptions
    and annotations are carried over unchanged.

    Args:
        rows: Alignment rows (SeqRecords, Seq objects or strings)
        mask: One boolean per column

    Returns:
        MultipleSeqAlignment with the selected columns in original order

    Raises:
        ValueError: If the mask length differs from a row length
    """
    mask = [bool(keep) for keep in np.asarray(mask, dtype=bool)]
    records = []

    for i, row in enumerate(rows):
        sequence = row_string(row)
        if len(sequence) != len(mask):
            raise ValueError(
                f"Selection mask covers {len(mask)} columns but row {i + 1} has {len(sequence)}"
            )
        filtered = Seq("".join(compress(sequence, mask)))

        if isinstance(row, SeqRecord):
            record = SeqRecord(
                filtered,
                id=row.id,
                name=row.name,
                description=row.description,
                annotations=dict(row.annotations),
                letter_annotations=_filter_letter_annotations(row, mask)
            )
        else:
            record = SeqRecord(filtered, id=f"seq_{i}", description="")
        records.append(record)

    return MultipleSeqAlignment(records)
