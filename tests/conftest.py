"""Shared pytest fixtures: in-memory collaborators wired into the app."""

import struct
import zlib

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_blob_store, get_face_detector
from app.core.errors import DetectionProviderError, ObjectNotFoundError, StorageError
from app.main import app


class FakeDetector:
    def __init__(self, annotations=None, error=None):
        self.annotations = annotations or []
        self.error = error
        self.calls = []

    def detect(self, image_bytes):
        self.calls.append(image_bytes)
        if self.error:
            raise DetectionProviderError(self.error)
        return self.annotations


class FakeBlobStore:
    def __init__(self):
        self.objects = {}
        self.content_types = {}
        self.fail_writes = False
        self.fail_reads = False

    def put(self, key, data, content_type="application/octet-stream"):
        if self.fail_writes:
            raise StorageError("write refused")
        self.objects[key] = data
        self.content_types[key] = content_type

    def get(self, key):
        if self.fail_reads:
            raise StorageError("read refused")
        if key not in self.objects:
            raise ObjectNotFoundError(key)
        return self.objects[key]


@pytest.fixture
def detector():
    return FakeDetector()


@pytest.fixture
def store():
    return FakeBlobStore()


@pytest.fixture
def client(detector, store):
    app.dependency_overrides[get_face_detector] = lambda: detector
    app.dependency_overrides[get_blob_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def oversized_png():
    """A PNG declaring a 40000x40000 image: header and end chunks, no pixel data."""

    def chunk(kind, data):
        crc = zlib.crc32(kind + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)

    ihdr = struct.pack(">IIBBBBB", 40000, 40000, 8, 2, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", ihdr) + chunk(b"IEND", b"")
