from pydantic_settings import BaseSettings

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./data/db.sqlite3"


class Settings(BaseSettings):
    # empty url = store not bound, read paths degrade to empty results
    kv_database_url: str = DEFAULT_DATABASE_URL
    blob_database_url: str = DEFAULT_DATABASE_URL

    admin_passcode: str = ""
    allow_session_sentinel: bool = True
    session_secret_key: str = ""  # empty = derived from admin_passcode
    session_ttl_minutes: int = 12 * 60

    max_files_per_upload: int = 20
    max_index_size: int = 500
    prune_evicted_blobs: bool = True
    seed_default_suggestions: bool = False

    cors_allow_origin: str = "*"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
