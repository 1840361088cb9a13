"""Storage keys and index bookkeeping for guest photos."""
import re
import uuid
from datetime import datetime, timezone
from urllib.parse import quote

from wedding_api.schemas.photo import PhotoRecord

MAX_SAFE_NAME_LENGTH = 120
FILE_URL_PREFIX = "/api/photos/file/"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9._-]+")


def sanitize_filename(name: str | None) -> str:
    """Replace each run of unsafe characters with '_' and cap the length."""
    return _UNSAFE_CHARS.sub("_", name or "photo")[:MAX_SAFE_NAME_LENGTH]


def build_storage_key(timestamp_ms: int, photo_id: str, safe_name: str) -> str:
    return f"{timestamp_ms}_{photo_id}_{safe_name}"


def photo_url(key: str) -> str:
    # same reserved set as encodeURIComponent, so clients can build urls either way
    return FILE_URL_PREFIX + quote(key, safe="!*'()")


def format_timestamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_photo_record(filename: str | None, now: datetime | None = None) -> PhotoRecord:
    now = now or datetime.now(timezone.utc)
    photo_id = str(uuid.uuid4())
    safe_name = sanitize_filename(filename)
    key = build_storage_key(int(now.timestamp() * 1000), photo_id, safe_name)
    return PhotoRecord(
        id=photo_id,
        key=key,
        url=photo_url(key),
        name=filename or safe_name,
        uploaded_at=format_timestamp(now),
    )


def merge_index(new: list[dict], existing: list, cap: int) -> tuple[list, list]:
    """Prepend new records and truncate to ``cap``.

    Returns the kept index (newest first) and the records that fell off the end.
    """
    merged = [*new, *existing]
    return merged[:cap], merged[cap:]
