from wedding_api.models.kv_entry import KVEntry
from wedding_api.models.blob import BlobObject

__all__ = ["KVEntry", "BlobObject"]
