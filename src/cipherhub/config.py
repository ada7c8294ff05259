"""Run configuration for CipherHub pipelines."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from cipherhub.sources.manifest import SourceManifestLoader

BASE_URL_ENV = "CIPHER_WEBSITE_URL"
CACHE_DIR_ENV = "CIPHERHUB_CACHE_DIR"
HGNC_URL_ENV = "CIPHERHUB_HGNC_URL"

DEFAULT_CACHE_DIR = Path.home() / ".cipherhub" / "cache"
DEFAULT_HGNC_URL = (
    "https://storage.googleapis.com/public-download-files/hgnc/tsv/tsv/hgnc_complete_set.txt"
)

DISEASE_LIST_FILENAME = "landscape_phenotype.txt"
GENE_LIST_FILENAME = "landscape_extended_id.txt"
RANK_TABLE_DIRNAME = "top1000data"


class ConfigurationError(ValueError):
    """Raised when a run cannot start because required settings are missing."""


@dataclass(frozen=True)
class CipherConfig:
    """Settings shared by every component of one CipherHub run."""

    base_url: str | None = None
    cache_dir: Path = DEFAULT_CACHE_DIR
    hgnc_url: str = DEFAULT_HGNC_URL
    timeout: float = 120.0

    def require_base_url(self) -> str:
        """Return the CIPHER base URL without a trailing slash."""

        cleaned = (self.base_url or "").strip().rstrip("/")
        if not cleaned:
            raise ConfigurationError(
                f"CIPHER base URL is not configured. Set {BASE_URL_ENV} or pass base_url."
            )
        return cleaned

    def disease_list_url(self) -> str:
        return f"{self.require_base_url()}/{DISEASE_LIST_FILENAME}"

    def gene_list_url(self) -> str:
        return f"{self.require_base_url()}/{GENE_LIST_FILENAME}"

    def rank_table_url(self, disease_code: str) -> str:
        return f"{self.require_base_url()}/{rank_table_filename(disease_code)}"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "CipherConfig":
        """Build a config from ``CIPHER_WEBSITE_URL`` and related variables."""

        env = os.environ if environ is None else environ
        cache_dir = env.get(CACHE_DIR_ENV)
        return cls(
            base_url=env.get(BASE_URL_ENV) or None,
            cache_dir=Path(os.path.expanduser(cache_dir)) if cache_dir else DEFAULT_CACHE_DIR,
            hgnc_url=env.get(HGNC_URL_ENV) or DEFAULT_HGNC_URL,
        )

    @classmethod
    def from_manifest(
        cls,
        loader: SourceManifestLoader | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        cache_dir: str | Path | None = None,
    ) -> "CipherConfig":
        """Build a config from the ``cipher`` and ``hgnc`` source manifests.

        Environment variables take precedence over manifest URLs so a mirror
        can be selected without editing the manifests.
        """

        loader = loader or SourceManifestLoader()
        from_env = cls.from_env(environ)
        cipher = loader.load("cipher")
        hgnc = loader.load("hgnc")

        return cls(
            base_url=from_env.base_url or cipher.bulk_download_url,
            cache_dir=Path(cache_dir) if cache_dir is not None else from_env.cache_dir,
            hgnc_url=(
                from_env.hgnc_url
                if from_env.hgnc_url != DEFAULT_HGNC_URL
                else hgnc.bulk_download_url or DEFAULT_HGNC_URL
            ),
        )


def rank_table_filename(disease_code: str) -> str:
    """Relative path of a per-disease rank artifact, used for both URL and cache."""

    return f"{RANK_TABLE_DIRNAME}/{disease_code}.txt"
