"""Shared fixtures: in-memory object store and an API client wired to it."""
from __future__ import annotations

import io
from typing import Dict, List, Optional, Tuple

import pytest
from botocore.response import StreamingBody
from fastapi.testclient import TestClient

from tunevault.api.app import app
from tunevault.api.state import AppState, get_state
from tunevault.core.errors import ObjectNotFound
from tunevault.core.object_store import ObjectStore
from tunevault.models.library import StoredObject
from tunevault.models.stream import ByteRange, ObjectBody, ObjectInfo


class InMemoryObjectStore(ObjectStore):
    """Dict-backed bucket that records every call."""

    def __init__(self, objects: Optional[Dict[str, bytes]] = None) -> None:
        self.objects: Dict[str, bytes] = dict(objects or {})
        self.content_types: Dict[str, str] = {}
        self.failures: Dict[str, Exception] = {}
        self.list_error: Optional[Exception] = None
        self.list_calls = 0
        self.head_calls: List[str] = []
        self.get_calls: List[Tuple[str, Optional[ByteRange]]] = []
        self.opened: List[StreamingBody] = []

    def list_all(self, prefix: str) -> List[StoredObject]:
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return [
            StoredObject(key=k, size=len(v))
            for k, v in self.objects.items()
            if k.startswith(prefix)
        ]

    def _lookup(self, key: str) -> bytes:
        if key in self.failures:
            raise self.failures[key]
        if key not in self.objects:
            raise ObjectNotFound(key)
        return self.objects[key]

    def head_object(self, key: str) -> ObjectInfo:
        self.head_calls.append(key)
        data = self._lookup(key)
        return ObjectInfo(key=key, size=len(data), content_type=self.content_types.get(key))

    def get_object(self, key: str, byte_range: Optional[ByteRange] = None) -> ObjectBody:
        self.get_calls.append((key, byte_range))
        data = self._lookup(key)
        if byte_range is not None:
            data = data[byte_range.start:byte_range.end + 1]
        body = StreamingBody(io.BytesIO(data), len(data))
        self.opened.append(body)
        return ObjectBody(
            key=key,
            content_type=self.content_types.get(key),
            content_length=len(data),
            body=body,
        )

    def presign(self, key: str, expires_in: int) -> str:
        return f"https://signed.example/{key}?expires={expires_in}"


@pytest.fixture
def store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture
def state(store: InMemoryObjectStore) -> AppState:
    return AppState(store=store)


@pytest.fixture
def client(state: AppState):
    app.dependency_overrides[get_state] = lambda: state
    yield TestClient(app)
    app.dependency_overrides.clear()
