"""Publisher interface for CipherHub outputs."""

from __future__ import annotations

from abc import ABC, abstractmethod

from cipherhub.pipeline import CipherRankings


class Publisher(ABC):
    """Publishes built rankings into consumer-facing artifacts."""

    @abstractmethod
    def publish(self, rankings: CipherRankings) -> None:
        """Publish rankings into output targets."""
