"""Try candidate keys in order and open the first one that exists.

Candidates are tried one at a time: the first success wins and later keys are
never touched. Missing objects and transient failures move on to the next
candidate; only a bad Range header stops the loop.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from tunevault.config import CACHE_CONTROL, STREAM_CHUNK_SIZE
from tunevault.core.errors import (
    CandidatesExhausted,
    MalformedRequest,
    ObjectNotFound,
    RangeNotSatisfiable,
    UpstreamTransient,
)
from tunevault.core.object_store import ObjectStore
from tunevault.models.stream import ByteRange, ObjectBody, ObjectInfo

logger = logging.getLogger(__name__)

_RANGE_RE = re.compile(r"^bytes=(\d*)-(\d*)$")

RangeSpec = Tuple[Optional[int], Optional[int]]


def parse_range_header(header: str) -> RangeSpec:
    """Parse `bytes=start-end`, `bytes=start-` or `bytes=-suffix`.

    Multiple ranges and anything else raise MalformedRequest.
    """
    match = _RANGE_RE.match(header.strip())
    if not match or not (match.group(1) or match.group(2)):
        raise MalformedRequest(f"Malformed Range header: {header!r}")
    start = int(match.group(1)) if match.group(1) else None
    end = int(match.group(2)) if match.group(2) else None
    if start is not None and end is not None and end < start:
        raise MalformedRequest(f"Range end before start: {header!r}")
    return start, end


def resolve_range(header: str, spec: RangeSpec, size: int) -> ByteRange:
    """Pin a parsed range to an object of `size` bytes; the end is clamped."""
    start, end = spec
    if start is None:
        # Suffix form: last `end` bytes
        if not end or size == 0:
            raise RangeNotSatisfiable(header, size)
        return ByteRange(max(size - end, 0), size - 1)
    if start >= size:
        raise RangeNotSatisfiable(header, size)
    return ByteRange(start, size - 1 if end is None else min(end, size - 1))


@dataclass
class StreamResult:
    """Opened object plus the response status and headers to send with it."""
    key: str
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    obj: Optional[ObjectBody] = None

    def iter_bytes(self, chunk_size: int = STREAM_CHUNK_SIZE) -> Iterator[bytes]:
        """Yield the body in chunks; the object-store body is closed even if the client goes away."""
        body = self.obj.body
        try:
            for chunk in body.iter_chunks(chunk_size):
                yield chunk
        finally:
            body.close()


def _open_ranged(
    store: ObjectStore, key: str, header: str, spec: RangeSpec, default_content_type: str
) -> StreamResult:
    info = store.head_object(key)
    byte_range = resolve_range(header, spec, info.size)
    obj = store.get_object(key, byte_range)
    return StreamResult(
        key=obj.key,
        status_code=206,
        headers={
            "Content-Range": f"bytes {byte_range.start}-{byte_range.end}/{info.size}",
            "Accept-Ranges": "bytes",
            "Content-Length": str(byte_range.length),
            "Content-Type": obj.content_type or info.content_type or default_content_type,
            "Cache-Control": CACHE_CONTROL,
        },
        obj=obj,
    )


def _open_full(store: ObjectStore, key: str, default_content_type: str) -> StreamResult:
    obj = store.get_object(key)
    return StreamResult(
        key=obj.key,
        status_code=200,
        headers={
            "Content-Type": obj.content_type or default_content_type,
            "Content-Length": str(obj.content_length),
            "Accept-Ranges": "bytes",
            "Cache-Control": CACHE_CONTROL,
        },
        obj=obj,
    )


def open_stream(
    store: ObjectStore,
    candidates: Sequence[str],
    requested_key: str,
    range_header: Optional[str] = None,
    default_content_type: str = "application/octet-stream",
    range_spec: Optional[RangeSpec] = None,
) -> StreamResult:
    """Open the first candidate that succeeds.

    Raises MalformedRequest/RangeNotSatisfiable for bad ranges and
    CandidatesExhausted (carrying requested_key) when nothing could be opened.
    """
    spec = range_spec
    if spec is None and range_header:
        spec = parse_range_header(range_header)
    last_error: Optional[Exception] = None
    for key in candidates:
        try:
            if spec is not None:
                result = _open_ranged(store, key, range_header, spec, default_content_type)
            else:
                result = _open_full(store, key, default_content_type)
        except (ObjectNotFound, UpstreamTransient) as e:
            logger.info("Path failed: %s - %s", key, e)
            last_error = e
            continue
        logger.info("Successfully loaded from: %s", key)
        return result
    raise CandidatesExhausted(requested_key, last_error)


def locate(store: ObjectStore, candidates: List[str], requested_key: str) -> ObjectInfo:
    """First candidate that exists (metadata lookup only)."""
    last_error: Optional[Exception] = None
    for key in candidates:
        try:
            return store.head_object(key)
        except (ObjectNotFound, UpstreamTransient) as e:
            logger.info("Path failed: %s - %s", key, e)
            last_error = e
    raise CandidatesExhausted(requested_key, last_error)
