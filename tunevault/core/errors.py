"""Error taxonomy shared by the resolver, the object store adapter and the routes."""
from typing import Optional


class TuneVaultError(Exception):
    """Base class for library and streaming errors."""


class ObjectNotFound(TuneVaultError):
    """The object store has no object under this key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"No such object: {key}")
        self.key = key


class MalformedRequest(TuneVaultError):
    """Client sent something we cannot interpret (range header, key shape)."""


class RangeNotSatisfiable(MalformedRequest):
    """Range start lies at or past the end of the object."""

    def __init__(self, range_header: str, size: int) -> None:
        super().__init__(f"Range {range_header!r} not satisfiable for {size} bytes")
        self.range_header = range_header
        self.size = size


class UpstreamTransient(TuneVaultError):
    """Object-store call failed for a reason other than a missing object."""


class ListingIncomplete(TuneVaultError):
    """A paginated listing stopped before its last page."""


class CandidatesExhausted(TuneVaultError):
    """Every candidate key failed. Carries the client's key, not a storage key."""

    def __init__(self, requested_key: str, last_error: Optional[Exception]) -> None:
        super().__init__(f"All candidate keys failed for {requested_key!r}")
        self.requested_key = requested_key
        self.last_error = last_error

    @property
    def not_found(self) -> bool:
        """True when the terminal failure was a missing object (or nothing was tried)."""
        return self.last_error is None or isinstance(self.last_error, ObjectNotFound)
