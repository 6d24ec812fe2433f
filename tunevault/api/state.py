"""Shared application state (injected into routes)."""
from typing import Optional

from tunevault.config import (
    AWS_ACCESS_KEY_ID,
    AWS_BUCKET_NAME,
    AWS_ENDPOINT_URL,
    AWS_REGION,
    AWS_SECRET_ACCESS_KEY,
    LIBRARY_PREFIX,
    LIST_PAGE_SIZE,
    MAPPING_TTL_SEC,
)
from tunevault.core.folder_cache import FolderMappingCache
from tunevault.core.object_store import ObjectStore, S3ObjectStore


class AppState:
    def __init__(self, store: Optional[ObjectStore] = None) -> None:
        self._store = store
        self._folder_cache: FolderMappingCache | None = None

    @property
    def store(self) -> ObjectStore:
        if self._store is None:
            self._store = S3ObjectStore(
                AWS_BUCKET_NAME,
                region=AWS_REGION,
                access_key_id=AWS_ACCESS_KEY_ID,
                secret_access_key=AWS_SECRET_ACCESS_KEY,
                endpoint_url=AWS_ENDPOINT_URL,
                page_size=LIST_PAGE_SIZE,
            )
        return self._store

    @property
    def folder_cache(self) -> FolderMappingCache:
        if self._folder_cache is None:
            self._folder_cache = FolderMappingCache(
                self.store, prefix=LIBRARY_PREFIX, ttl_sec=MAPPING_TTL_SEC
            )
        return self._folder_cache


_state = AppState()


def get_state() -> AppState:
    return _state
