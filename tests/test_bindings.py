import pytest

from wedding_api.dependencies import get_bindings
from wedding_api.services.kv_store import SqlKVStore


@pytest.fixture
def fresh_bindings():
    get_bindings.cache_clear()
    yield
    get_bindings.cache_clear()


def test_unconfigured_stores_are_unbound(fresh_bindings, test_settings):
    test_settings.kv_database_url = ""
    test_settings.blob_database_url = ""

    bindings = get_bindings()

    assert bindings.kv is None
    assert bindings.blobs is None


def test_configured_stores_are_bound(fresh_bindings, test_settings, tmp_path):
    test_settings.kv_database_url = f"sqlite+aiosqlite:///{tmp_path}/kv.sqlite3"
    test_settings.blob_database_url = ""

    bindings = get_bindings()

    assert isinstance(bindings.kv, SqlKVStore)
    assert bindings.blobs is None


def test_bindings_are_built_once(fresh_bindings, test_settings):
    test_settings.kv_database_url = ""
    test_settings.blob_database_url = ""

    assert get_bindings() is get_bindings()
