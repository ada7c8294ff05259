"""Gene identifier directory backed by the HGNC complete set."""

from __future__ import annotations

import io
import logging
import re
from typing import TYPE_CHECKING, Protocol

import pandas as pd

from cipherhub.artifacts import ArtifactParseError

if TYPE_CHECKING:
    from cipherhub.config import CipherConfig
    from cipherhub.fetch import Fetcher

logger = logging.getLogger(__name__)

HGNC_REQUIRED_COLUMNS: tuple[str, ...] = ("hgnc_id", "symbol")
HGNC_ARTIFACT_NAME = "hgnc_complete_set.txt"

# Separator used by HGNC for list-like fields.
_MULTI_VALUE_SEP = "|"
_REFSEQ_VERSION = re.compile(r"\.[0-9]+$")


class IdentifierDirectory(Protocol):
    """Resolve alternate gene identifiers to a canonical record and back."""

    def record_for_symbol(self, symbol: str) -> str | None:
        ...

    def record_for_uniprot(self, accession: str) -> str | None:
        ...

    def record_for_refseq(self, accession: str) -> str | None:
        ...

    def symbol_for_record(self, record: str) -> str | None:
        ...


def _split_values(value: object) -> list[str]:
    if value is None or pd.isna(value):
        return []
    return [item.strip() for item in str(value).split(_MULTI_VALUE_SEP) if item.strip()]


def _unversioned(accession: str) -> str:
    return _REFSEQ_VERSION.sub("", accession.strip())


class HGNCDirectory:
    """In-memory HGNC lookups keyed by symbol, UniProt and RefSeq accession.

    Records are HGNC IDs (``HGNC:5``). Only entries with ``Approved`` status
    are indexed when the source carries a ``status`` column. ``refseq2hgncid``
    is keyed by unversioned accessions; lookups drop the version suffix of the
    query.
    """

    def __init__(
        self,
        *,
        symbol2hgncid: dict[str, str],
        uniprot2hgncid: dict[str, str],
        refseq2hgncid: dict[str, str],
        hgncid2symbol: dict[str, str],
    ) -> None:
        self.symbol2hgncid = symbol2hgncid
        self.uniprot2hgncid = uniprot2hgncid
        self.refseq2hgncid = refseq2hgncid
        self.hgncid2symbol = hgncid2symbol

    def __len__(self) -> int:
        return len(self.hgncid2symbol)

    def __repr__(self) -> str:
        return f"HGNCDirectory(records={len(self)})"

    def record_for_symbol(self, symbol: str) -> str | None:
        return self.symbol2hgncid.get(symbol.strip()) if symbol else None

    def record_for_uniprot(self, accession: str) -> str | None:
        return self.uniprot2hgncid.get(accession.strip()) if accession else None

    def record_for_refseq(self, accession: str) -> str | None:
        return self.refseq2hgncid.get(_unversioned(accession)) if accession else None

    def symbol_for_record(self, record: str) -> str | None:
        return self.hgncid2symbol.get(record)

    @classmethod
    def from_frame(cls, frame: pd.DataFrame) -> "HGNCDirectory":
        """Build lookups from an HGNC complete-set DataFrame.

        When an accession is shared by several genes, the first row in the
        file claims it.
        """

        missing = [column for column in HGNC_REQUIRED_COLUMNS if column not in frame.columns]
        if missing:
            raise ArtifactParseError(
                HGNC_ARTIFACT_NAME, 1, f"missing required columns: {', '.join(missing)}"
            )

        if "status" in frame.columns:
            status = frame["status"].fillna("").astype(str).str.strip().str.lower()
            frame = frame[(status == "") | (status == "approved")]

        symbol2hgncid: dict[str, str] = {}
        uniprot2hgncid: dict[str, str] = {}
        refseq2hgncid: dict[str, str] = {}
        hgncid2symbol: dict[str, str] = {}

        for row in frame.to_dict(orient="records"):
            hgnc_id = _split_values(row.get("hgnc_id"))
            symbol = _split_values(row.get("symbol"))
            if not hgnc_id or not symbol:
                continue
            record = hgnc_id[0]

            hgncid2symbol[record] = symbol[0]
            symbol2hgncid.setdefault(symbol[0], record)
            for accession in _split_values(row.get("uniprot_ids")):
                uniprot2hgncid.setdefault(accession, record)
            for accession in _split_values(row.get("refseq_accession")):
                refseq2hgncid.setdefault(_unversioned(accession), record)

        logger.info(
            "Loaded HGNC directory: %d symbols, %d UniProt, %d RefSeq accessions",
            len(symbol2hgncid),
            len(uniprot2hgncid),
            len(refseq2hgncid),
        )
        return cls(
            symbol2hgncid=symbol2hgncid,
            uniprot2hgncid=uniprot2hgncid,
            refseq2hgncid=refseq2hgncid,
            hgncid2symbol=hgncid2symbol,
        )

    @classmethod
    def from_text(cls, text: str) -> "HGNCDirectory":
        """Parse the tab-separated HGNC complete set."""

        frame = pd.read_csv(
            io.StringIO(text),
            sep="\t",
            dtype=str,
            keep_default_na=False,
            usecols=lambda column: column
            in {"hgnc_id", "symbol", "status", "uniprot_ids", "refseq_accession"},
        )
        return cls.from_frame(frame)

    @classmethod
    def from_fetcher(cls, fetcher: "Fetcher", config: "CipherConfig") -> "HGNCDirectory":
        """Download (or reuse the cached copy of) the HGNC complete set."""

        return cls.from_text(fetcher.fetch(config.hgnc_url, HGNC_ARTIFACT_NAME))
