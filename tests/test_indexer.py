"""Tests for grouping a listing into the album library."""

from __future__ import annotations

from tunevault.core.indexer import (
    build_folder_mapping,
    classify_file,
    index_library,
    library_to_dict,
    split_object_key,
)

WALL = "albums/Pink Floyd - The Wall"


class TestSplitObjectKey:
    def test_regular_key(self):
        assert split_object_key(f"{WALL}/01 - Song.mp3") == ("Pink Floyd - The Wall", "01 - Song.mp3")

    def test_wrong_depth_or_root(self):
        assert split_object_key("albums/loose.mp3") is None
        assert split_object_key("albums/A - B/disc1/01.mp3") is None
        assert split_object_key("singles/A - B/01.mp3") is None

    def test_folder_marker_and_extensionless(self):
        assert split_object_key(f"{WALL}/") is None
        assert split_object_key(f"{WALL}/README") is None

    def test_playlists_skipped(self):
        assert split_object_key(f"{WALL}/playlist.m3u") is None
        assert split_object_key(f"{WALL}/playlist.M3U8") is None


class TestClassifyFile:
    def test_tracks_case_insensitive(self):
        for name in ("a.mp3", "b.WAV", "c.flac", "d.m4a", "e.Ogg"):
            assert classify_file(name) == "track"

    def test_images(self):
        for name in ("cover.jpg", "x.JPEG", "y.png", "z.gif", "w.webp"):
            assert classify_file(name) == "image"

    def test_other(self):
        assert classify_file("notes.txt") is None
        assert classify_file("mp3.txt") is None


class TestIndexLibrary:
    def test_classification_and_playlist_excluded(self):
        library = index_library([
            f"{WALL}/01 - Song.mp3",
            f"{WALL}/cover.jpg",
            f"{WALL}/playlist.m3u",
        ])
        entry = library["Pink Floyd"]["The Wall"]
        assert entry.tracks == ["01 - Song.mp3"]
        assert entry.images == ["cover.jpg"]
        assert entry.original_folder == "Pink Floyd - The Wall"

    def test_insertion_order_preserved(self):
        library = index_library([
            "albums/Zappa - Apostrophe/02.mp3",
            "albums/ABBA - Arrival/01.mp3",
            "albums/Zappa - Apostrophe/01.mp3",
            "albums/Zappa - Hot Rats/01.mp3",
        ])
        assert list(library) == ["Zappa", "ABBA"]
        assert list(library["Zappa"]) == ["Apostrophe", "Hot Rats"]
        assert library["Zappa"]["Apostrophe"].tracks == ["02.mp3", "01.mp3"]

    def test_first_folder_owns_entry_on_collision(self):
        library = index_library([
            "albums/Muse - Drones/01.mp3",
            "albums/Muse-Drones/02.mp3",
        ])
        entry = library["Muse"]["Drones"]
        assert entry.original_folder == "Muse - Drones"
        assert entry.tracks == ["01.mp3", "02.mp3"]

    def test_unknown_extension_creates_empty_entry(self):
        library = index_library(["albums/Boston/liner.pdf"])
        entry = library["Boston"]["Boston"]
        assert entry.tracks == [] and entry.images == []

    def test_json_shape(self):
        data = library_to_dict(index_library([f"{WALL}/01.mp3"]))
        assert data == {
            "Pink Floyd": {
                "The Wall": {
                    "tracks": ["01.mp3"],
                    "images": [],
                    "originalFolder": "Pink Floyd - The Wall",
                }
            }
        }


class TestBuildFolderMapping:
    def test_first_write_wins(self):
        mapping = build_folder_mapping([
            "albums/Muse - Drones/01.mp3",
            "albums/Muse-Drones/01.mp3",
        ])
        assert mapping == {("Muse", "Drones"): "Muse - Drones"}

    def test_skips_unqualified_keys(self):
        mapping = build_folder_mapping([
            "albums/Muse - Drones/playlist.m3u",
            "albums/Muse - Drones/",
            "other/Muse - Drones/01.mp3",
        ])
        assert mapping == {}
