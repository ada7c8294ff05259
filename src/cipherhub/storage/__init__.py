"""Storage backends for built CIPHER rankings."""

from .base import RankingStorage
from .duckdb_parquet import DuckDBParquetStorage

__all__ = ["RankingStorage", "DuckDBParquetStorage"]
