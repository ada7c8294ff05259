"""Base class for ranking storage backends."""

from __future__ import annotations

from abc import ABC, abstractmethod

from cipherhub.pipeline import CipherRankings


class RankingStorage(ABC):
    """Persists built rankings for downstream queries."""

    @abstractmethod
    def persist(self, rankings: CipherRankings) -> None:
        """Persist rankings in backend-specific format."""
