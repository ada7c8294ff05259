"""DuckDB + Parquet storage backend for CIPHER rankings."""

from __future__ import annotations

import re
from pathlib import Path

import duckdb

from cipherhub.pipeline import CipherRankings
from cipherhub.storage.base import RankingStorage


_TABLE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DuckDBParquetStorage(RankingStorage):
    """Persist rankings as one long table in DuckDB and a portable Parquet file."""

    def __init__(
        self,
        *,
        db_path: str | Path,
        parquet_path: str | Path | None = None,
        table_name: str = "cipher_rankings",
    ) -> None:
        if not _TABLE_RE.match(table_name):
            raise ValueError(f"Unsafe table name: {table_name}")

        self.db_path = Path(db_path)
        self.parquet_path = Path(parquet_path) if parquet_path is not None else None
        self.table_name = table_name

    def persist(self, rankings: CipherRankings) -> None:
        frame = rankings.to_frame()
        frame["rank"] = frame["rank"].astype("int64")

        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        connection = duckdb.connect(str(self.db_path))
        try:
            connection.register("rankings_frame", frame)
            connection.execute(
                f"CREATE OR REPLACE TABLE {self.table_name} AS "
                "SELECT * FROM rankings_frame ORDER BY disease_code, rank"
            )

            if self.parquet_path is not None:
                self.parquet_path.parent.mkdir(parents=True, exist_ok=True)
                if self.parquet_path.exists():
                    self.parquet_path.unlink()

                parquet_target = self.parquet_path.as_posix().replace("'", "''")
                connection.execute(
                    f"COPY {self.table_name} TO '{parquet_target}' (FORMAT PARQUET)"
                )
        finally:
            connection.close()
