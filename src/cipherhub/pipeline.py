"""Build CIPHER gene rankings for a batch of OMIM IDs."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

import pandas as pd

from cipherhub.artifacts import first_digit_run
from cipherhub.config import (
    DISEASE_LIST_FILENAME,
    GENE_LIST_FILENAME,
    CipherConfig,
    ConfigurationError,
    rank_table_filename,
)
from cipherhub.directory import HGNCDirectory, IdentifierDirectory
from cipherhub.fetch import CachedFetcher, Fetcher
from cipherhub.indexes import DiseaseIndex, GeneIndex
from cipherhub.models import RANKED_TABLE_COLUMNS, RankedTable, RowStats
from cipherhub.tables import build_ranked_table

logger = logging.getLogger(__name__)

RANKINGS_FRAME_COLUMNS: tuple[str, ...] = ("disease_code", "omim_id", *RANKED_TABLE_COLUMNS)


@dataclass(frozen=True)
class DiscardedIdentifier:
    """A requested identifier that produced no table, and why."""

    requested: str
    reason: str


@dataclass
class CipherRunReport:
    """Execution summary for one batch build."""

    requested: int
    built: int
    gene_rows: int
    resolved_gene_rows: int
    discarded: list[DiscardedIdentifier] = field(default_factory=list)
    row_stats: dict[str, RowStats] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return {
            "requested": self.requested,
            "built": self.built,
            "discarded": [item.requested for item in self.discarded],
            "gene_rows": self.gene_rows,
            "resolved_gene_rows": self.resolved_gene_rows,
            "unresolved_rows": sum(stats.unresolved for stats in self.row_stats.values()),
            "duplicate_rows": sum(stats.duplicates for stats in self.row_stats.values()),
        }


def _requested_ids(omim_ids: str | int | Iterable[str | int]) -> list[str]:
    if isinstance(omim_ids, (str, int)):
        items: list[str | int] = [omim_ids]
    elif isinstance(omim_ids, Iterable):
        items = list(omim_ids)
    else:
        raise TypeError(
            f"omim_ids must be a string, an int or an iterable of them, not {type(omim_ids).__name__}"
        )
    return list(dict.fromkeys(str(item) for item in items))


class CipherRankings(Mapping[str, RankedTable]):
    """Ranked candidate genes per disease, built once from CIPHER.

    Construction downloads the disease and gene lists, resolves CIPHER gene
    rows to HGNC approved symbols and builds one :class:`RankedTable` per
    requested OMIM ID. Tables are keyed by CIPHER's internal disease code.
    Identifiers missing from the disease list are logged and left out.
    """

    def __init__(
        self,
        omim_ids: str | int | Iterable[str | int],
        *,
        config: CipherConfig,
        directory: IdentifierDirectory | None,
        fetcher: Fetcher | None = None,
    ) -> None:
        requested = _requested_ids(omim_ids)
        config.require_base_url()
        if directory is None:
            raise ConfigurationError("An identifier directory is required to resolve CIPHER genes.")

        self.config = config
        fetcher = fetcher or CachedFetcher(config.cache_dir, timeout=config.timeout)

        self._diseases = DiseaseIndex.from_text(
            fetcher.fetch(config.disease_list_url(), DISEASE_LIST_FILENAME)
        )
        gene_index = GeneIndex.from_text(
            fetcher.fetch(config.gene_list_url(), GENE_LIST_FILENAME),
            directory,
        )

        self._tables: dict[str, RankedTable] = {}
        self._omim_ids: dict[str, str] = {}
        self.report = CipherRunReport(
            requested=len(requested),
            built=0,
            gene_rows=len(gene_index),
            resolved_gene_rows=gene_index.resolved_count,
        )

        for original_id in requested:
            omim_id = first_digit_run(original_id)
            code = self._diseases.code_for(omim_id) if omim_id else None
            if code is None:
                logger.warning(
                    "OMIM ID %r discarded, since it doesn't exist in the disease list of CIPHER",
                    original_id,
                )
                self.report.discarded.append(
                    DiscardedIdentifier(
                        requested=original_id,
                        reason="no digits" if omim_id is None else "not in disease list",
                    )
                )
                continue
            if code in self._tables:
                continue

            text = fetcher.fetch(config.rank_table_url(code), rank_table_filename(code))
            table, stats = build_ranked_table(text, gene_index)
            self._tables[code] = table
            self._omim_ids[code] = omim_id
            self.report.row_stats[code] = stats
            logger.info("Built CIPHER table for OMIM %s (%s): %d genes", omim_id, code, len(table))

        self.report.built = len(self._tables)
        logger.debug("New object %r", self)

    @classmethod
    def from_config(
        cls,
        omim_ids: str | int | Iterable[str | int],
        config: CipherConfig,
        *,
        fetcher: Fetcher | None = None,
    ) -> "CipherRankings":
        """Build rankings, loading the HGNC directory through the same fetcher."""

        config.require_base_url()
        fetcher = fetcher or CachedFetcher(config.cache_dir, timeout=config.timeout)
        directory = HGNCDirectory.from_fetcher(fetcher, config)
        return cls(omim_ids, config=config, directory=directory, fetcher=fetcher)

    def __getitem__(self, disease_code: str) -> RankedTable:
        return self._tables[disease_code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    def __repr__(self) -> str:
        return f"CipherRankings(omim_ids={self.omim_ids()})"

    def disease_ids(self) -> list[str]:
        """Return the internal disease codes with a table, in build order."""

        return list(self._tables)

    def omim_ids(self) -> list[str]:
        """Return the requested OMIM ID behind each table, in build order."""

        return [self._omim_ids[code] for code in self._tables]

    def table(self, disease_id: str | int) -> RankedTable | None:
        """Return the table for an internal code, or for an OMIM ID as fallback.

        A known internal code that was never built returns ``None``.
        """

        key = str(disease_id)
        if key in self._tables:
            return self._tables[key]
        if self._diseases.external_id_for(key) is not None:
            return None

        omim_id = first_digit_run(key)
        code = self._diseases.code_for(omim_id) if omim_id else None
        return self._tables.get(code) if code is not None else None

    def to_frame(self) -> pd.DataFrame:
        """Return every table as one long DataFrame."""

        frames = []
        for code, table in self._tables.items():
            frame = table.to_frame()
            frame.insert(0, "omim_id", self._omim_ids[code])
            frame.insert(0, "disease_code", code)
            frames.append(frame)

        if not frames:
            return pd.DataFrame(columns=list(RANKINGS_FRAME_COLUMNS))
        return pd.concat(frames, ignore_index=True)
