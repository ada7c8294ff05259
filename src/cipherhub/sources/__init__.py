"""Source manifests describing where CipherHub artifacts come from."""

from .manifest import SourceManifest, SourceManifestLoader

__all__ = [
    "SourceManifest",
    "SourceManifestLoader",
]
