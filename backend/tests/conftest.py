import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root (1 level up from tests/) to sys.path so tests can import 'polyglot'
root = Path(__file__).resolve().parents[1]
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

# Point the app's global history file at a throwaway location before settings
# are created at import time, so no test touches a real history file.
_history_dir = tempfile.mkdtemp(prefix="polyglot-tests-")
os.environ["HISTORY_BACKEND"] = "file"
os.environ["HISTORY_FILE"] = os.path.join(_history_dir, "translation_history.json")

from fastapi.testclient import TestClient

from polyglot.main import app
from polyglot.api.deps import get_history, get_provider_client, get_ws_provider_client
from polyglot.services.history.store import HistoryStore
from tests.helpers import MemoryHistoryStorage, make_genai_client


@pytest.fixture
def storage():
    return MemoryHistoryStorage()


@pytest.fixture
def history_store(storage):
    return HistoryStore(storage)


@pytest.fixture
def genai_client():
    """Fake Gemini client translating everything to "Hola"."""
    return make_genai_client(fragments=["Hol", "a"])


@pytest.fixture
def client(history_store, genai_client):
    """
    TestClient with the history store and the Gemini client swapped for
    in-memory fakes.
    """
    async def _get_ws_client():
        return genai_client

    app.dependency_overrides[get_history] = lambda: history_store
    app.dependency_overrides[get_provider_client] = lambda: genai_client
    app.dependency_overrides[get_ws_provider_client] = _get_ws_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
