"""Source manifest definitions for CipherHub artifact sources."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class SourceManifest:
    """Immutable download location of a source.

    Manifest files may carry descriptive keys (homepage, license, citation);
    only the fields below are loaded.
    """

    source_id: str
    bulk_download_url: str | None = None


class SourceManifestLoader:
    """Load source manifests from ``config/sources`` JSON files."""

    def __init__(self, manifests_dir: str | Path | None = None) -> None:
        if manifests_dir is None:
            manifests_dir = Path(__file__).resolve().parents[3] / "config" / "sources"
        self.manifests_dir = Path(manifests_dir)

    def list_sources(self) -> list[str]:
        """List available source manifest IDs."""

        return sorted(path.stem for path in self.manifests_dir.glob("*.json"))

    def load(self, source_id_or_path: str | Path) -> SourceManifest:
        """Load one source manifest by ID or explicit path."""

        path = self._resolve_path(source_id_or_path)
        payload = json.loads(path.read_text())
        return self._parse(payload)

    def _resolve_path(self, source_id_or_path: str | Path) -> Path:
        requested = Path(source_id_or_path)

        if requested.suffix == ".json" and requested.exists():
            return requested

        candidate = self.manifests_dir / f"{requested}.json"
        if candidate.exists():
            return candidate

        raise FileNotFoundError(
            f"Source manifest not found: {source_id_or_path}. "
            f"Available: {', '.join(self.list_sources())}"
        )

    def _parse(self, payload: dict[str, Any]) -> SourceManifest:
        source_id = str(payload["source_id"]).strip().lower()
        if not source_id:
            raise ValueError("Manifest source_id cannot be empty")

        return SourceManifest(
            source_id=source_id,
            bulk_download_url=self._clean_optional(payload.get("bulk_download_url")),
        )

    @staticmethod
    def _clean_optional(value: Any) -> str | None:
        if value is None:
            return None
        cleaned = str(value).strip()
        return cleaned or None
