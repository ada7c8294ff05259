"""Per-disease JSON publisher for CIPHER rankings."""

from __future__ import annotations

import json
import re
from pathlib import Path

from cipherhub.pipeline import CipherRankings
from cipherhub.publishers.base import Publisher


class JsonRankingPublisher(Publisher):
    """Write ``<disease_code>.json`` ranking files and an ``index.json``.

    Each ranking file is a list of ``{"symbol", "rank", "score"}`` objects in
    rank order. ``top`` limits how many genes are written per disease.
    """

    def __init__(self, *, output_root: str | Path, top: int | None = None) -> None:
        if top is not None and top < 0:
            raise ValueError("top must be >= 0")
        self.output_root = Path(output_root)
        self.top = top

    def publish(self, rankings: CipherRankings) -> None:
        self.output_root.mkdir(parents=True, exist_ok=True)

        index: dict[str, str] = {}
        for omim_id, code in zip(rankings.omim_ids(), rankings.disease_ids()):
            table = rankings[code]
            entries = table.top(self.top) if self.top is not None else list(table.items())
            payload = [entry.to_row(symbol) for symbol, entry in entries]

            path = self.output_root / f"{self._safe_name(code)}.json"
            with path.open("w") as stream:
                json.dump(payload, stream, indent=4)
            index[omim_id] = code

        with (self.output_root / "index.json").open("w") as stream:
            json.dump(index, stream, indent=4, sort_keys=True)

    @staticmethod
    def _safe_name(value: str) -> str:
        return re.sub(r"[^A-Za-z0-9_.-]+", "_", value)
