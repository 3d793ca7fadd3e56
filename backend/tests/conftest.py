import sys
from pathlib import Path
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from utils.data_store import DirectoryDatasetStore, MemoryDatasetStore


@pytest.fixture
def memory_store():
    return MemoryDatasetStore()


@pytest.fixture
def dir_store(tmp_path):
    store = DirectoryDatasetStore(tmp_path / "data")
    store.ensure()
    return store


@pytest.fixture
def settings(tmp_path):
    index = tmp_path / "index.html"
    index.write_text("<html><body>scatter</body></html>")
    return Settings(data_dir=tmp_path / "data", max_upload_bytes=1024, index_path=index)


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c
