"""Byte storage for guest photos, addressed by opaque string keys."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from wedding_api.models.blob import BlobObject

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class StoredBlob:
    data: bytes
    content_type: str | None = None


class BlobStore(Protocol):
    async def get(self, key: str) -> StoredBlob | None:
        ...

    async def put(self, key: str, data: bytes, content_type: str | None = None) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...


@dataclass
class InMemoryBlobStore:
    """Test double for blob storage."""

    objects: dict[str, StoredBlob] = field(default_factory=dict)

    async def get(self, key: str) -> StoredBlob | None:
        return self.objects.get(key)

    async def put(self, key: str, data: bytes, content_type: str | None = None) -> None:
        self.objects[key] = StoredBlob(data=bytes(data), content_type=content_type)

    async def delete(self, key: str) -> None:
        self.objects.pop(key, None)


class SqlBlobStore:
    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def get(self, key: str) -> StoredBlob | None:
        async with self._session_maker() as session:
            obj = await session.get(BlobObject, key)
            if obj is None:
                return None
            return StoredBlob(data=obj.data, content_type=obj.content_type)

    async def put(self, key: str, data: bytes, content_type: str | None = None) -> None:
        async with self._session_maker() as session:
            await session.merge(BlobObject(
                key=key,
                data=data,
                content_type=content_type,
                size=len(data),
                created_at=datetime.now(timezone.utc).isoformat(),
            ))
            await session.commit()

    async def delete(self, key: str) -> None:
        async with self._session_maker() as session:
            obj = await session.get(BlobObject, key)
            if obj is not None:
                await session.delete(obj)
                await session.commit()
