"""Canonical in-memory data models used by CipherHub."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

import pandas as pd

RANKED_TABLE_COLUMNS: tuple[str, ...] = ("symbol", "rank", "score")


@dataclass(frozen=True)
class GeneRank:
    """Position of one gene in a disease's CIPHER ranking.

    ``score`` is carried through exactly as it appears in the source artifact.
    """

    rank: int
    score: str

    def to_row(self, symbol: str) -> dict[str, Any]:
        return {"symbol": symbol, "rank": self.rank, "score": self.score}


class RankedTable(Mapping[str, GeneRank]):
    """Read-only mapping of approved gene symbol to its best CIPHER rank.

    Symbols are unique. Iteration yields symbols in ascending rank order.
    """

    def __init__(self, entries: Mapping[str, GeneRank] | None = None) -> None:
        ordered = sorted((entries or {}).items(), key=lambda item: item[1].rank)
        self._entries: dict[str, GeneRank] = dict(ordered)

    def __getitem__(self, symbol: str) -> GeneRank:
        return self._entries[symbol]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RankedTable(genes={len(self)})"

    def symbols(self) -> list[str]:
        """Return symbols ordered by rank."""

        return list(self._entries)

    def rank_of(self, symbol: str) -> int | None:
        entry = self._entries.get(symbol)
        return entry.rank if entry is not None else None

    def score_of(self, symbol: str) -> str | None:
        entry = self._entries.get(symbol)
        return entry.score if entry is not None else None

    def top(self, count: int) -> list[tuple[str, GeneRank]]:
        """Return the ``count`` best-ranked ``(symbol, GeneRank)`` pairs."""

        if count < 0:
            raise ValueError("count must be >= 0")
        return list(self._entries.items())[:count]

    def to_rows(self) -> list[dict[str, Any]]:
        return [entry.to_row(symbol) for symbol, entry in self._entries.items()]

    def to_frame(self) -> pd.DataFrame:
        """Return the table as a ``symbol, rank, score`` DataFrame in rank order."""

        return pd.DataFrame(self.to_rows(), columns=list(RANKED_TABLE_COLUMNS))


class RankedTableBuilder:
    """Accumulate ranked rows into a :class:`RankedTable`.

    When a symbol is added more than once the entry with the smallest rank is
    kept, independent of the order in which rows arrive.
    """

    def __init__(self) -> None:
        self._entries: dict[str, GeneRank] = {}

    def add(self, symbol: str, rank: int, score: str) -> bool:
        """Record a row; return ``False`` when an equal or better rank already exists."""

        current = self._entries.get(symbol)
        if current is not None and current.rank <= rank:
            return False
        self._entries[symbol] = GeneRank(rank=rank, score=score)
        return True

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._entries

    def build(self) -> RankedTable:
        return RankedTable(self._entries)


@dataclass
class RowStats:
    """Per-disease counts of rank artifact lines and what happened to them."""

    lines: int = 0
    kept: int = 0
    unresolved: int = 0
    duplicates: int = 0
