"""Lookups built from the shared CIPHER disease and gene list artifacts."""

from .disease import DiseaseIndex
from .gene import GeneIndex, first_resolved

__all__ = [
    "DiseaseIndex",
    "GeneIndex",
    "first_resolved",
]
