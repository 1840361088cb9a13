import json

import pytest
from httpx import ASGITransport, AsyncClient

from wedding_api.main import app
from wedding_api.services.blob_store import InMemoryBlobStore
from wedding_api.services.kv_store import InMemoryKVStore, PHOTOS_KEY
from wedding_api.utils.response import error_response

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 100


class FlakyBlobStore(InMemoryBlobStore):
    """Accepts the first write, fails every later one."""

    async def put(self, key, data, content_type=None):
        if self.objects:
            raise RuntimeError("blob store unavailable")
        await super().put(key, data, content_type=content_type)


class UndeletableBlobStore(InMemoryBlobStore):
    async def delete(self, key):
        raise RuntimeError("delete refused")


class BrokenKVStore(InMemoryKVStore):
    async def get(self, key):
        raise RuntimeError("kv unavailable")


def _image_parts(count):
    return [("photos", (f"guest-{i}.jpg", JPEG_BYTES, "image/jpeg")) for i in range(count)]


@pytest.mark.asyncio
async def test_blob_write_failure_keeps_earlier_blobs(bindings):
    bindings.blobs = FlakyBlobStore()

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/api/photos/upload", files=_image_parts(3))

    assert response.status_code == 500
    assert response.json() == error_response("Internal server error")
    assert response.headers["access-control-allow-origin"] == "*"
    assert len(bindings.blobs.objects) == 1
    assert PHOTOS_KEY not in bindings.kv.entries


@pytest.mark.asyncio
async def test_kv_read_failure_during_upload(bindings):
    bindings.kv = BrokenKVStore()

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/api/photos/upload", files=_image_parts(2))

    assert response.status_code == 500
    assert response.json()["message"] == "Internal server error"
    # no rollback of blobs already written
    assert len(bindings.blobs.objects) == 2
    assert PHOTOS_KEY not in bindings.kv.entries


@pytest.mark.asyncio
async def test_kv_read_failure_on_listing(bindings):
    bindings.kv = BrokenKVStore()

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/photos")

    assert response.status_code == 500
    assert response.headers["content-type"] == "application/json; charset=utf-8"
    assert response.headers["access-control-allow-methods"] == "GET,POST,OPTIONS"


@pytest.mark.asyncio
async def test_evicted_blob_delete_failure_does_not_fail_upload(bindings, test_settings):
    test_settings.max_index_size = 1
    bindings.blobs = UndeletableBlobStore()
    old = {"id": "old", "key": "1700000000000_old_old.jpg", "url": "/api/photos/file/1700000000000_old_old.jpg",
           "name": "old.jpg", "uploadedAt": "2026-01-01T00:00:00.000Z"}
    await bindings.kv.put(PHOTOS_KEY, json.dumps([old]))
    await bindings.blobs.put(old["key"], b"old", content_type="image/jpeg")

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/api/photos/upload", files=_image_parts(1))

    assert response.status_code == 200
    photos = response.json()["photos"]
    assert [p["name"] for p in photos] == ["guest-0.jpg"]
    assert json.loads(bindings.kv.entries[PHOTOS_KEY]) == photos
    assert old["key"] in bindings.blobs.objects
