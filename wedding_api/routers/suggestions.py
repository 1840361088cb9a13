import logging

from fastapi import APIRouter, Depends, Request

from wedding_api.dependencies import get_kv_store, require_kv_store, verify_admin
from wedding_api.services.kv_store import KVStore, SUGGESTIONS_KEY, read_json_list, write_json_list
from wedding_api.utils.exceptions import BadRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/suggestions", tags=["suggestions"])


@router.get("")
async def get_suggestions(kv: KVStore | None = Depends(get_kv_store)):
    if kv is None:
        return {"suggestions": []}
    return {"suggestions": await read_json_list(kv, SUGGESTIONS_KEY)}


@router.post("")
async def save_suggestions(
    request: Request,
    kv: KVStore = Depends(require_kv_store),
    _admin: None = Depends(verify_admin),
):
    try:
        body = await request.json()
    except ValueError:
        body = {}

    suggestions = body.get("suggestions") if isinstance(body, dict) else None
    if not isinstance(suggestions, list):
        raise BadRequest("Invalid payload")

    # whole document replaced, concurrent editors overwrite each other
    await write_json_list(kv, SUGGESTIONS_KEY, suggestions)
    logger.info("Saved %d suggestion categories", len(suggestions))
    return {"ok": True}
