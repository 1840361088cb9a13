import os
from functools import lru_cache

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase


def normalize_database_url(url: str) -> str:
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _ensure_sqlite_dir(url: str) -> None:
    # sqlite+aiosqlite:///./data/db.sqlite3 -> ./data
    _, _, path = url.partition(":///")
    if not path or path.startswith(":memory:"):
        return
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)


@lru_cache(maxsize=None)
def get_engine(url: str) -> AsyncEngine:
    """Return one engine per distinct URL so stores sharing a database share a pool."""
    database_url = normalize_database_url(url)

    engine_kwargs: dict = {"echo": False}
    if _is_sqlite(database_url):
        _ensure_sqlite_dir(database_url)
    else:
        engine_kwargs.update(pool_size=5, max_overflow=10, pool_pre_ping=True)

    engine = create_async_engine(database_url, **engine_kwargs)

    if _is_sqlite(database_url):
        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def get_sessionmaker(url: str) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(get_engine(url), class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def create_tables(url: str) -> None:
    async with get_engine(url).begin() as conn:
        from wedding_api.models import kv_entry, blob  # noqa: F401
        await conn.run_sync(Base.metadata.create_all)
