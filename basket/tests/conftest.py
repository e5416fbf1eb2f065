import pytest
from fastapi.testclient import TestClient

from basket.api.api_run import app
from basket.api.deps import get_fridge_checks, get_storage
from basket.infra.storage import Storage
from basket.logic.fridge.sessions import FridgeCheckSessions


@pytest.fixture
def storage(tmp_path):
    return Storage(tmp_path, backup_on_save=False)


@pytest.fixture
def client(storage):
    # fresh session store per test; real storage on a temp dir
    checks = FridgeCheckSessions(max_sessions=5)
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_fridge_checks] = lambda: checks
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
