"""CipherHub output publishers."""

from .base import Publisher
from .json_rankings import JsonRankingPublisher

__all__ = ["Publisher", "JsonRankingPublisher"]
