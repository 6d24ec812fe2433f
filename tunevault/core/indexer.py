"""Group a bucket listing into artist -> album -> tracks/images."""
import logging
import re
from typing import Dict, Iterable, Iterator, Optional, Tuple

from tunevault.core.naming import parse_folder_name
from tunevault.models.library import LibraryEntry, MappingKey, ParsedIdentity

logger = logging.getLogger(__name__)

LIBRARY_ROOT = "albums"

_TRACK_RE = re.compile(r"\.(mp3|wav|flac|m4a|ogg)$", re.IGNORECASE)
_IMAGE_RE = re.compile(r"\.(jpg|jpeg|png|gif|webp)$", re.IGNORECASE)
_PLAYLIST_MARKER = ".m3u"  # also covers .m3u8

Library = Dict[str, Dict[str, LibraryEntry]]


def split_object_key(key: str) -> Optional[Tuple[str, str]]:
    """Return (folder, filename) for albums/<folder>/<file> keys that hold media.

    Folder placeholders, extensionless names and playlists are skipped.
    """
    parts = key.split("/")
    if len(parts) != 3 or parts[0] != LIBRARY_ROOT:
        return None
    _, folder, filename = parts
    if not folder.strip() or "." not in filename:
        return None
    if _PLAYLIST_MARKER in filename.lower():
        return None
    return folder, filename


def classify_file(filename: str) -> Optional[str]:
    """Return 'track', 'image' or None for anything else."""
    if _TRACK_RE.search(filename):
        return "track"
    if _IMAGE_RE.search(filename):
        return "image"
    return None


def iter_library_objects(keys: Iterable[str]) -> Iterator[Tuple[ParsedIdentity, str, str]]:
    """Yield (identity, folder, filename) for every qualifying key, in listing order."""
    for key in keys:
        split = split_object_key(key)
        if split is None:
            continue
        folder, filename = split
        yield parse_folder_name(folder), folder, filename


def index_library(keys: Iterable[str]) -> Library:
    """Build the nested library. Insertion order is kept everywhere."""
    library: Library = {}
    for identity, folder, filename in iter_library_objects(keys):
        albums = library.setdefault(identity.artist, {})
        entry = albums.get(identity.album)
        if entry is None:
            # First folder seen for this (artist, album) owns the entry
            entry = LibraryEntry(original_folder=folder)
            albums[identity.album] = entry
        kind = classify_file(filename)
        if kind == "track":
            entry.tracks.append(filename)
        elif kind == "image":
            entry.images.append(filename)
    total_albums = sum(len(albums) for albums in library.values())
    logger.info("Found %d artists with %d total albums", len(library), total_albums)
    return library


def build_folder_mapping(keys: Iterable[str]) -> Dict[MappingKey, str]:
    """Map (artist, album) to the first folder name that parsed to it."""
    mapping: Dict[MappingKey, str] = {}
    for identity, folder, _ in iter_library_objects(keys):
        mapping.setdefault(identity.mapping_key, folder)
    return mapping


def library_to_dict(library: Library) -> dict:
    return {
        artist: {album: entry.to_dict() for album, entry in albums.items()}
        for artist, albums in library.items()
    }
