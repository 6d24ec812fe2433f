"""Time-bounded cache of (artist, album) -> original folder name.

The mapping is rebuilt from a full listing, never patched. Readers always get
a complete immutable snapshot; concurrent stale readers share one rebuild.
"""
import logging
import threading
import time
from concurrent.futures import Future
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional

from tunevault.core.indexer import build_folder_mapping
from tunevault.core.object_store import ObjectStore
from tunevault.models.library import MappingKey

logger = logging.getLogger(__name__)

FolderMapping = Mapping[MappingKey, str]


class FolderMappingCache:
    """Owns the folder mapping snapshot and its refresh time."""

    def __init__(
        self,
        store: ObjectStore,
        prefix: str,
        ttl_sec: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store = store
        self._prefix = prefix
        self._ttl_sec = ttl_sec
        self._clock = clock
        self._lock = threading.Lock()
        self._mapping: Optional[FolderMapping] = None
        self._refreshed_at = 0.0
        # Bumped on invalidate so a rebuild started earlier cannot reinstall old data
        self._generation = 0
        self._inflight: Optional[Future] = None

    def _is_fresh(self, now: float) -> bool:
        return (
            self._mapping is not None
            and len(self._mapping) > 0
            and now - self._refreshed_at <= self._ttl_sec
        )

    def get_mapping(self) -> FolderMapping:
        """Return the current mapping, rebuilding first if empty or stale.

        Raises ListingIncomplete if the rebuild fails; the previous snapshot is kept.
        """
        with self._lock:
            if self._is_fresh(self._clock()):
                return self._mapping
            future = self._inflight
            leader = future is None
            if leader:
                future = Future()
                self._inflight = future
                generation = self._generation
        if not leader:
            return future.result()

        # Listing runs outside the lock; followers wait on the future
        try:
            logger.info("Refreshing folder mappings cache...")
            objects = self._store.list_all(self._prefix)
            mapping = self._install(build_folder_mapping(o.key for o in objects), generation)
        except BaseException as e:
            with self._lock:
                self._inflight = None
            future.set_exception(e)
            raise
        with self._lock:
            self._inflight = None
        future.set_result(mapping)
        return mapping

    def refresh_from(self, keys: Iterable[str]) -> FolderMapping:
        """Replace the snapshot from a listing the caller already holds."""
        with self._lock:
            generation = self._generation
        return self._install(build_folder_mapping(keys), generation)

    def _install(self, mapping: dict, generation: int) -> FolderMapping:
        snapshot = MappingProxyType(mapping)
        with self._lock:
            if generation == self._generation:
                self._mapping = snapshot
                self._refreshed_at = self._clock()
        logger.info("Cache updated with %d unique artist|album mappings", len(snapshot))
        return snapshot

    def invalidate(self) -> None:
        """Drop the snapshot; the next get_mapping() lists the bucket again."""
        with self._lock:
            self._mapping = None
            self._refreshed_at = 0.0
            self._generation += 1
        logger.info("Folder mappings cache cleared manually")

    @property
    def last_refreshed(self) -> Optional[float]:
        with self._lock:
            return self._refreshed_at if self._mapping is not None else None
