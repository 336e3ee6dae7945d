import sys
from pathlib import Path

import pytest

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from repositories import BooksRepository  # noqa: E402
from settings import settings  # noqa: E402
from storage.json_document import JsonDocumentStorage  # noqa: E402


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "db.json"


@pytest.fixture
def repo(db_path):
    return BooksRepository(JsonDocumentStorage(db_path))


@pytest.fixture
def strict_repo(db_path):
    return BooksRepository(JsonDocumentStorage(db_path), strict=True)


def _client(db_path):
    from api.main import create_app

    return TestClient(create_app(db_path), raise_server_exceptions=False)


@pytest.fixture
def client(db_path, monkeypatch):
    monkeypatch.setattr(settings, "STRICT_LOOKUPS", False)
    return _client(db_path)


@pytest.fixture
def strict_client(db_path, monkeypatch):
    monkeypatch.setattr(settings, "STRICT_LOOKUPS", True)
    return _client(db_path)
