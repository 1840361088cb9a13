import logging
from dataclasses import dataclass
from functools import lru_cache

from fastapi import Depends, Header

from wedding_api.config import settings
from wedding_api.database import get_sessionmaker
from wedding_api.services.admin_session import is_admin_credential
from wedding_api.services.blob_store import BlobStore, SqlBlobStore
from wedding_api.services.kv_store import KVStore, SqlKVStore
from wedding_api.utils.exceptions import ServiceUnavailable, Unauthorized

logger = logging.getLogger(__name__)


@dataclass
class Bindings:
    """Stores configured for this deployment. ``None`` means not bound."""

    kv: KVStore | None = None
    blobs: BlobStore | None = None


@lru_cache(maxsize=1)
def get_bindings() -> Bindings:
    kv = SqlKVStore(get_sessionmaker(settings.kv_database_url)) if settings.kv_database_url else None
    blobs = SqlBlobStore(get_sessionmaker(settings.blob_database_url)) if settings.blob_database_url else None
    if kv is None:
        logger.warning("No KV binding configured, photo index and suggestions are read-only and empty")
    if blobs is None:
        logger.warning("No blob store binding configured, uploads are disabled")
    return Bindings(kv=kv, blobs=blobs)


async def get_kv_store(bindings: Bindings = Depends(get_bindings)) -> KVStore | None:
    return bindings.kv


async def get_blob_store(bindings: Bindings = Depends(get_bindings)) -> BlobStore | None:
    return bindings.blobs


async def require_kv_store(bindings: Bindings = Depends(get_bindings)) -> KVStore:
    if bindings.kv is None:
        raise ServiceUnavailable("Missing KV binding")
    return bindings.kv


async def require_blob_store(bindings: Bindings = Depends(get_bindings)) -> BlobStore:
    if bindings.blobs is None:
        raise ServiceUnavailable("Missing blob store binding")
    return bindings.blobs


async def verify_admin(x_admin_passcode: str = Header(default="")) -> None:
    if not is_admin_credential(x_admin_passcode):
        logger.warning("Rejected admin credential")
        raise Unauthorized()
