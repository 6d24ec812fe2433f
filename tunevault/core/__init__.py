"""Core services: folder naming, library index, mapping cache, key resolution, streaming."""
from tunevault.core.folder_cache import FolderMappingCache
from tunevault.core.object_store import ObjectStore, S3ObjectStore

__all__ = ["FolderMappingCache", "ObjectStore", "S3ObjectStore"]
