import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from starlette.datastructures import UploadFile

from wedding_api.config import settings
from wedding_api.dependencies import Bindings, get_bindings, get_kv_store, require_blob_store
from wedding_api.services.blob_store import BlobStore, DEFAULT_CONTENT_TYPE
from wedding_api.services.kv_store import KVStore, PHOTOS_KEY, read_json_list, write_json_list
from wedding_api.services.photo_index import merge_index, new_photo_record
from wedding_api.utils.exceptions import BadRequest, NotFound, ServiceUnavailable

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/photos", tags=["photos"])

UPLOAD_FIELD = "photos"
IMMUTABLE_CACHE_CONTROL = "public, max-age=31536000, immutable"


async def require_upload_bindings(bindings: Bindings = Depends(get_bindings)) -> Bindings:
    missing = []
    if bindings.blobs is None:
        missing.append("blob store")
    if bindings.kv is None:
        missing.append("KV")
    if missing:
        raise ServiceUnavailable(f"Missing {' and '.join(missing)} binding")
    return bindings


@router.get("")
async def list_photos(kv: KVStore | None = Depends(get_kv_store)):
    if kv is None:
        return {"photos": []}
    return {"photos": await read_json_list(kv, PHOTOS_KEY)}


@router.post("/upload")
async def upload_photos(request: Request, bindings: Bindings = Depends(require_upload_bindings)):
    content_type = request.headers.get("content-type", "")
    if "multipart/form-data" not in content_type:
        raise BadRequest("Expected multipart/form-data")

    max_files = settings.max_files_per_upload
    async with request.form() as form:
        parts = [part for part in form.getlist(UPLOAD_FIELD) if part]
        if len(parts) > max_files:
            raise BadRequest(f"Too many files (max {max_files} per upload)")

        uploaded = []
        for part in parts:
            if not isinstance(part, UploadFile):
                continue
            part_type = part.content_type or ""
            if not part_type.startswith("image/"):
                logger.info("Skipping non-image upload %r (%s)", part.filename, part_type or "no type")
                continue

            record = new_photo_record(part.filename)
            data = await part.read()
            await bindings.blobs.put(record.key, data, content_type=part_type)
            uploaded.append(record.model_dump(by_alias=True))
            logger.info("Stored photo %s (%d bytes)", record.key, len(data))

    if not uploaded:
        return {"ok": True, "uploaded": 0, "photos": []}

    existing = await read_json_list(bindings.kv, PHOTOS_KEY)
    photos, evicted = merge_index(uploaded, existing, settings.max_index_size)
    await write_json_list(bindings.kv, PHOTOS_KEY, photos)
    logger.info("Photo index updated: %d new, %d total", len(uploaded), len(photos))

    if evicted and settings.prune_evicted_blobs:
        await _delete_evicted_blobs(bindings.blobs, evicted)

    return {"ok": True, "uploaded": len(uploaded), "photos": photos}


async def _delete_evicted_blobs(blobs: BlobStore, evicted: list) -> None:
    keys = [r.get("key") for r in evicted if isinstance(r, dict) and r.get("key")]
    deleted = 0
    for key in keys:
        # the index is already written, a leftover blob only costs storage
        try:
            await blobs.delete(key)
        except Exception:
            logger.exception("Failed to delete evicted photo %s", key)
            continue
        deleted += 1
    logger.info("Deleted %d of %d photos evicted from the index", deleted, len(keys))


@router.get("/file/{key:path}")
async def get_photo_file(key: str, blobs: BlobStore = Depends(require_blob_store)):
    blob = await blobs.get(key)
    if blob is None:
        raise NotFound()

    return Response(
        content=blob.data,
        media_type=blob.content_type or DEFAULT_CONTENT_TYPE,
        headers={"Cache-Control": IMMUTABLE_CACHE_CONTROL},
    )
