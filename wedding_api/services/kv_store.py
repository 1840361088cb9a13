"""Key-value store holding the site's small JSON documents."""
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from wedding_api.models.kv_entry import KVEntry

logger = logging.getLogger(__name__)

PHOTOS_KEY = "photos"
SUGGESTIONS_KEY = "suggestions"


class KVStore(Protocol):
    async def get(self, key: str) -> str | None:
        ...

    async def put(self, key: str, value: str) -> None:
        ...


@dataclass
class InMemoryKVStore:
    """Dict-backed store for tests and offline development."""

    entries: dict[str, str] = field(default_factory=dict)

    async def get(self, key: str) -> str | None:
        return self.entries.get(key)

    async def put(self, key: str, value: str) -> None:
        self.entries[key] = value


class SqlKVStore:
    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def get(self, key: str) -> str | None:
        async with self._session_maker() as session:
            entry = await session.get(KVEntry, key)
            return entry.value if entry else None

    async def put(self, key: str, value: str) -> None:
        async with self._session_maker() as session:
            await session.merge(KVEntry(
                key=key,
                value=value,
                updated_at=datetime.now(timezone.utc).isoformat(),
            ))
            await session.commit()


async def read_json_list(kv: KVStore, key: str) -> list[Any]:
    """Read a JSON array document, treating absent or corrupt documents as empty."""
    raw = await kv.get(key)
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except ValueError:
        logger.warning("Stored document '%s' is not valid JSON, treating as empty", key)
        return []
    if not isinstance(value, list):
        logger.warning("Stored document '%s' is not a list, treating as empty", key)
        return []
    return value


async def write_json_list(kv: KVStore, key: str, items: list[Any]) -> None:
    await kv.put(key, json.dumps(items, ensure_ascii=False))
