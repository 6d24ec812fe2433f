"""Folder-name heuristics: "Artist - Album" -> (artist, album)."""
from tunevault.models.library import ParsedIdentity

SPACED_DELIMITER = " - "
BARE_DELIMITER = "-"


def _split_on_last(folder_name: str, delimiter: str) -> ParsedIdentity | None:
    idx = folder_name.rfind(delimiter)
    if idx <= 0:
        return None
    artist = folder_name[:idx].strip()
    if not artist:
        return None
    album = folder_name[idx + len(delimiter):].strip()
    return ParsedIdentity(artist=artist, album=album)


def parse_folder_name(folder_name: str) -> ParsedIdentity:
    """Split a folder name into artist and album.

    The last " - " wins, then the last bare "-". Without a usable separator
    the whole name is both artist and album (self-titled records).
    """
    if not folder_name or not folder_name.strip():
        raise ValueError("Folder name must not be empty")
    for delimiter in (SPACED_DELIMITER, BARE_DELIMITER):
        parsed = _split_on_last(folder_name, delimiter)
        if parsed is not None:
            return parsed
    name = folder_name.strip()
    return ParsedIdentity(artist=name, album=name)
