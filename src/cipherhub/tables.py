"""Fold a per-disease CIPHER rank artifact into a deduplicated ranked table."""

from __future__ import annotations

from cipherhub.artifacts import iter_tsv_lines, leading_int
from cipherhub.indexes.gene import GeneIndex
from cipherhub.models import RankedTable, RankedTableBuilder, RowStats

ROW_REFERENCE_COLUMN = 0
SCORE_COLUMN = 1


def build_ranked_table(text: str, gene_index: GeneIndex) -> tuple[RankedTable, RowStats]:
    """Build a ranked table from ``gene_row<TAB>score`` lines.

    The 1-based line position is the rank. Rows whose gene cannot be resolved
    are skipped, and a symbol seen again keeps its smallest rank.
    """

    builder = RankedTableBuilder()
    stats = RowStats()

    for line_no, fields in iter_tsv_lines(text):
        stats.lines += 1
        row = leading_int(fields[ROW_REFERENCE_COLUMN]) if fields else None
        symbol = gene_index.symbol_for(row)
        if symbol is None:
            stats.unresolved += 1
            continue

        score = fields[SCORE_COLUMN] if len(fields) > SCORE_COLUMN else ""
        if builder.add(symbol, line_no, score):
            stats.kept += 1
        else:
            stats.duplicates += 1

    return builder.build(), stats
