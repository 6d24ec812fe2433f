"""Data models for library listings and object streaming."""
from tunevault.models.library import LibraryEntry, MappingKey, ParsedIdentity, StoredObject
from tunevault.models.stream import ByteRange, ObjectBody, ObjectInfo

__all__ = [
    "ByteRange",
    "LibraryEntry",
    "MappingKey",
    "ObjectBody",
    "ObjectInfo",
    "ParsedIdentity",
    "StoredObject",
]
