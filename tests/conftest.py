import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from mazegen.server import create_app  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app({"TESTING": True})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture(autouse=True)
def _clear_dungeon_cache():
    """Generated dungeons must not leak between tests through the API cache."""
    from mazegen.routes.dungeon_api import _dungeon_cache, _dungeon_cache_lock

    with _dungeon_cache_lock:
        _dungeon_cache.clear()
    yield
