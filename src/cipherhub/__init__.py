"""Core CipherHub primitives.

CipherHub turns the precomputed CIPHER disease-gene predictions into
per-disease rankings keyed by HGNC approved symbols.
"""

from .artifacts import ArtifactParseError
from .config import CipherConfig, ConfigurationError
from .directory import HGNCDirectory, IdentifierDirectory
from .fetch import CachedFetcher, Fetcher
from .indexes import DiseaseIndex, GeneIndex, first_resolved
from .models import GeneRank, RankedTable, RankedTableBuilder, RowStats
from .pipeline import CipherRankings, CipherRunReport, DiscardedIdentifier
from .sources import SourceManifest, SourceManifestLoader
from .tables import build_ranked_table

__version__ = "0.2.0"

__all__ = [
    "ArtifactParseError",
    "CachedFetcher",
    "CipherConfig",
    "CipherRankings",
    "CipherRunReport",
    "ConfigurationError",
    "DiscardedIdentifier",
    "DiseaseIndex",
    "Fetcher",
    "GeneIndex",
    "GeneRank",
    "HGNCDirectory",
    "IdentifierDirectory",
    "RankedTable",
    "RankedTableBuilder",
    "RowStats",
    "SourceManifest",
    "SourceManifestLoader",
    "build_ranked_table",
    "first_resolved",
]
