import pytest

from wedding_api.config import settings
from wedding_api.dependencies import Bindings, get_bindings
from wedding_api.main import app
from wedding_api.services.blob_store import InMemoryBlobStore
from wedding_api.services.kv_store import InMemoryKVStore

ADMIN_PASSCODE = "forever-2027"


@pytest.fixture
def kv():
    return InMemoryKVStore()


@pytest.fixture
def blobs():
    return InMemoryBlobStore()


@pytest.fixture(autouse=True)
def bindings(kv, blobs):
    """Route every request to fresh in-memory stores."""
    test_bindings = Bindings(kv=kv, blobs=blobs)
    app.dependency_overrides[get_bindings] = lambda: test_bindings
    yield test_bindings
    app.dependency_overrides.pop(get_bindings, None)


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    monkeypatch.setattr(settings, "kv_database_url", settings.kv_database_url)
    monkeypatch.setattr(settings, "blob_database_url", settings.blob_database_url)
    monkeypatch.setattr(settings, "admin_passcode", ADMIN_PASSCODE)
    monkeypatch.setattr(settings, "session_secret_key", "")
    monkeypatch.setattr(settings, "allow_session_sentinel", True)
    monkeypatch.setattr(settings, "max_files_per_upload", 20)
    monkeypatch.setattr(settings, "max_index_size", 500)
    monkeypatch.setattr(settings, "prune_evicted_blobs", True)
    return settings


@pytest.fixture
def unbound():
    """Simulate a deployment with neither store configured."""
    app.dependency_overrides[get_bindings] = lambda: Bindings()
    yield
    app.dependency_overrides.pop(get_bindings, None)


@pytest.fixture
def admin_headers():
    return {"x-admin-passcode": ADMIN_PASSCODE}
