"""Turn a client key (Artist/Album/File) into storage keys to try, best guess first.

Tiers, first non-empty one wins:
    1. exact mapping hit
    2. case-insensitive (artist, album) match
    3. same artist, one album name contains the other
    4. same artist, or folder name contains the artist
Constructed "Artist - Album" style keys are always appended after the winner,
since a mapping hit can itself point at a stale or wrong folder.

Tiers 3 and 4 can pick an existing file from a different album. That is kept
for compatibility with existing clients; it is logged as a warning.
"""
import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional

from tunevault.core.indexer import LIBRARY_ROOT
from tunevault.models.library import MappingKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetrievalRequest:
    artist: str
    album: str
    file: str

    @classmethod
    def from_key(cls, key: str) -> Optional["RetrievalRequest"]:
        """Parse Artist/Album/File; None if the key has another shape."""
        parts = key.split("/")
        if len(parts) != 3:
            return None
        return cls(*parts)


def _storage_key(folder: str, filename: str) -> str:
    return f"{LIBRARY_ROOT}/{folder}/{filename}"


def _verbatim_key(key: str) -> str:
    prefix = f"{LIBRARY_ROOT}/"
    return key if key.startswith(prefix) else prefix + key


def match_folders(request: RetrievalRequest, mapping: Mapping[MappingKey, str]) -> List[str]:
    """Folders from the best matching tier, in mapping order."""
    folder = mapping.get((request.artist, request.album))
    if folder is not None:
        logger.debug("Exact mapping hit %r -> %s", (request.artist, request.album), folder)
        return [folder]

    artist = request.artist.lower()
    album = request.album.lower()
    exact, partial, artist_only = [], [], []
    for (mapped_artist, mapped_album), folder in mapping.items():
        same_artist = mapped_artist.lower() == artist
        mapped_album = mapped_album.lower()
        if same_artist and mapped_album == album:
            exact.append(folder)
        if same_artist and album and (album in mapped_album or mapped_album in album):
            partial.append(folder)
        if artist and (same_artist or artist in folder.lower()):
            artist_only.append(folder)

    if exact:
        logger.info("Found exact match folder: %s", exact[0])
        return exact
    if partial:
        logger.info("Found partial album match folder: %s", partial[0])
        return partial
    if artist_only:
        logger.warning(
            "Found artist-only match folder: %s (may be wrong album)", artist_only[0]
        )
        return artist_only
    logger.info("No mapping found for artist %r among %d mappings", request.artist, len(mapping))
    return []


def constructed_keys(request: RetrievalRequest) -> List[str]:
    """Guessed folder layouts when the mapping is no help."""
    artist, album, filename = request.artist, request.album, request.file
    folders = []
    if artist == album:
        folders.append(artist)
    folders += [f"{artist} - {album}", f"{artist}-{album}"]
    return [_storage_key(f, filename) for f in folders]


def resolve(request: RetrievalRequest, mapping: Mapping[MappingKey, str]) -> List[str]:
    """Ordered, de-duplicated candidate keys; never empty."""
    candidates = [_storage_key(f, request.file) for f in match_folders(request, mapping)]
    candidates += constructed_keys(request)
    return list(dict.fromkeys(candidates))


def resolve_key(key: str, mapping: Mapping[MappingKey, str]) -> List[str]:
    """Candidates for a raw client key; other shapes are used verbatim under albums/."""
    request = RetrievalRequest.from_key(key)
    if request is None:
        candidate = _verbatim_key(key)
        logger.warning("Invalid key format, using: %s", candidate)
        return [candidate]
    candidates = resolve(request, mapping)
    logger.info("Will try %d path(s) for %s: %s", len(candidates), key, candidates)
    return candidates
