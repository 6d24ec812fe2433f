"""Library objects: storage keys, parsed folder identities, album entries."""
from dataclasses import dataclass, field
from typing import List, Tuple

# (artist, album); the folder mapping cache is keyed by this pair
MappingKey = Tuple[str, str]


@dataclass(frozen=True)
class StoredObject:
    """One object from a bucket listing."""
    key: str
    size: int = 0


@dataclass(frozen=True)
class ParsedIdentity:
    """Best-effort (artist, album) read from a folder name."""
    artist: str
    album: str

    @property
    def mapping_key(self) -> MappingKey:
        return (self.artist, self.album)


@dataclass
class LibraryEntry:
    """Tracks and images of one album, plus the folder they live in."""
    original_folder: str
    tracks: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "tracks": list(self.tracks),
            "images": list(self.images),
            "originalFolder": self.original_folder,
        }
