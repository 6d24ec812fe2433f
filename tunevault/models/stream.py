"""Object metadata, opened object bodies and byte ranges."""
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ObjectInfo:
    """Metadata-only view of a stored object (HEAD)."""
    key: str
    size: int
    content_type: Optional[str] = None


@dataclass(frozen=True)
class ByteRange:
    """Inclusive byte span, as in `Range: bytes=start-end`."""
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def header_value(self) -> str:
        return f"bytes={self.start}-{self.end}"


@dataclass
class ObjectBody:
    """Opened object: headers known, bytes not yet read.

    ``body`` is a botocore ``StreamingBody`` (``iter_chunks``/``close``).
    """
    key: str
    content_type: Optional[str]
    content_length: int
    body: Any
