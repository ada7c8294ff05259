"""Gene list: CIPHER row number to HGNC approved symbol."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Optional

from cipherhub.artifacts import ArtifactParseError, clean_field, iter_tsv_lines
from cipherhub.config import GENE_LIST_FILENAME
from cipherhub.directory import IdentifierDirectory

Lookup = Callable[[str], Optional[str]]

GENE_LIST_FIELD_COUNT = 5
PROTEIN_ACCESSION_COLUMN = 2
TRANSCRIPT_ACCESSION_COLUMN = 3
DISPLAY_NAME_COLUMN = 4


def first_resolved(attempts: Iterable[tuple[Lookup, str | None]]) -> str | None:
    """Return the first non-empty result of ``lookup(value)``, in order.

    Attempts whose value is missing are skipped without calling the lookup.
    """

    for lookup, value in attempts:
        if value is None:
            continue
        resolved = lookup(value)
        if resolved:
            return resolved
    return None


def resolve_gene_row(fields: Sequence[str], directory: IdentifierDirectory) -> str | None:
    """Resolve one gene list row to an approved symbol.

    Display name is tried first, then UniProt accession, then RefSeq
    accession.
    """

    record = first_resolved(
        (
            (directory.record_for_symbol, clean_field(fields[DISPLAY_NAME_COLUMN])),
            (directory.record_for_uniprot, clean_field(fields[PROTEIN_ACCESSION_COLUMN])),
            (directory.record_for_refseq, clean_field(fields[TRANSCRIPT_ACCESSION_COLUMN])),
        )
    )
    return directory.symbol_for_record(record) if record is not None else None


class GeneIndex:
    """Row-number lookup of resolved symbols; row 0 is always empty."""

    def __init__(self, symbols: Sequence[str | None]) -> None:
        self._symbols: tuple[str | None, ...] = (None, *symbols)

    def __len__(self) -> int:
        """Number of gene rows, excluding the row-0 sentinel."""

        return len(self._symbols) - 1

    def __repr__(self) -> str:
        return f"GeneIndex(rows={len(self)}, resolved={self.resolved_count})"

    @property
    def resolved_count(self) -> int:
        return sum(1 for symbol in self._symbols if symbol is not None)

    def symbol_for(self, row: int | None) -> str | None:
        if row is None or row <= 0 or row >= len(self._symbols):
            return None
        return self._symbols[row]

    @classmethod
    def from_text(
        cls,
        text: str,
        directory: IdentifierDirectory,
        *,
        artifact: str = GENE_LIST_FILENAME,
    ) -> "GeneIndex":
        symbols: list[str | None] = []
        for line_no, fields in iter_tsv_lines(text):
            if not fields:
                symbols.append(None)
                continue
            if len(fields) < GENE_LIST_FIELD_COUNT:
                raise ArtifactParseError(
                    artifact,
                    line_no,
                    f"expected {GENE_LIST_FIELD_COUNT} tab-separated fields, found {len(fields)}",
                )
            symbols.append(resolve_gene_row(fields, directory))

        return cls(symbols)
