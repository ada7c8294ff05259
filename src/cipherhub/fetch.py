"""Download and cache raw CIPHER and HGNC artifacts."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Protocol
from urllib.parse import urlparse

import requests

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Anything that can turn a URL into text.

    Repeated calls with the same URL during one run must return the same text.
    """

    def fetch(self, url: str, filename: str | None = None) -> str:
        ...


def filename_from_url(url: str) -> str:
    """Derive a cache file name from the last path segment of ``url``."""

    name = PurePosixPath(urlparse(url).path).name
    if not name:
        raise ValueError(f"Cannot derive a cache file name from URL: {url}")
    return name


class CachedFetcher:
    """Fetch text over HTTP, keeping a copy under ``cache_dir``.

    A cached file is returned as-is on later calls; nothing is re-downloaded
    unless ``force`` is set.
    """

    def __init__(
        self,
        cache_dir: str | Path,
        *,
        session: requests.Session | None = None,
        timeout: float = 120.0,
        force: bool = False,
        encoding: str = "utf-8",
    ) -> None:
        self.cache_dir = Path(cache_dir)
        self.session = session or requests.Session()
        self.timeout = timeout
        self.force = force
        self.encoding = encoding

    def cache_path(self, filename: str) -> Path:
        relative = PurePosixPath(filename)
        if relative.is_absolute() or ".." in relative.parts:
            raise ValueError(f"Unsafe cache file name: {filename}")
        return self.cache_dir.joinpath(*relative.parts)

    def fetch(self, url: str, filename: str | None = None) -> str:
        path = self.cache_path(filename or filename_from_url(url))

        if path.exists() and not self.force:
            logger.debug("Using cached %s", path)
            return path.read_text(encoding=self.encoding)

        logger.info("Downloading %s", url)
        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()
        response.encoding = response.encoding or self.encoding
        text = response.text

        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(path.name + ".part")
        tmp_path.write_text(text, encoding=self.encoding)
        tmp_path.replace(path)
        logger.info("Saved %s (%d bytes)", path, len(text))
        return text
