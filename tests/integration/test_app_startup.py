"""
Integration test: App startup.

Runs the FastAPI startup hook (the ``TestClient`` context manager
triggers it) and checks that the configured store is built and,
when asked, seeded.
"""

import pytest
from fastapi.testclient import TestClient

from venture_connect_api.app.core.config import Settings
from venture_connect_api.app.core.seed import SAMPLE_PASSWORD, SAMPLE_USERS
from venture_connect_api.app.main import create_app
from venture_connect_api.app.storage import MemoryStore, SQLiteStore, build_store

pytestmark = pytest.mark.integration


def startup_settings(**overrides):
    values = {"secret_key": "startup-secret", "log_level": "WARNING", "storage_backend": "memory"}
    values.update(overrides)
    return Settings(**values)


class TestAppStartup:
    """Verify the app builds its store on startup."""

    def test_module_app_has_routes(self):
        """Module-level app imports with the v1 routes mounted."""
        from venture_connect_api.app import app

        paths = {route.path for route in app.routes}
        assert "/api/v1/auth/login" in paths
        assert "/api/v1/connections/check/{other_user_id}" in paths

    def test_startup_builds_and_seeds_memory_store(self):
        app = create_app(startup_settings(seed_on_startup=True))

        with TestClient(app) as client:
            response = client.post(
                "/api/v1/auth/login",
                json={"email": "sarah.kim@example.com", "password": SAMPLE_PASSWORD},
            )

            assert response.status_code == 200
            assert isinstance(app.state.store, MemoryStore)
            assert app.state.store.count_users() == len(SAMPLE_USERS)

    def test_startup_without_seed_leaves_store_empty(self):
        app = create_app(startup_settings())

        with TestClient(app) as client:
            response = client.post(
                "/api/v1/auth/login",
                json={"email": "sarah.kim@example.com", "password": SAMPLE_PASSWORD},
            )

            assert response.status_code == 401
            assert app.state.store.count_users() == 0

    def test_startup_seeds_sqlite_file(self, db_path):
        app = create_app(startup_settings(storage_backend="sqlite", database_url=db_path, seed_on_startup=True))

        with TestClient(app) as client:
            response = client.post(
                "/api/v1/auth/login",
                json={"email": "alex.chen@example.com", "password": SAMPLE_PASSWORD},
            )
            assert response.status_code == 200

        assert SQLiteStore(db_path).count_users() == len(SAMPLE_USERS)

    def test_injected_store_is_kept(self):
        store = MemoryStore()
        app = create_app(startup_settings(seed_on_startup=True), store=store)

        with TestClient(app):
            assert app.state.store is store
            assert store.count_users() == len(SAMPLE_USERS)


class TestBuildStore:

    def test_memory_backend(self):
        assert isinstance(build_store(startup_settings(storage_backend="memory")), MemoryStore)

    def test_backend_name_is_case_insensitive(self):
        assert isinstance(build_store(startup_settings(storage_backend="Memory")), MemoryStore)

    def test_sqlite_backend(self, db_path):
        store = build_store(startup_settings(storage_backend="sqlite", database_url=db_path))

        assert isinstance(store, SQLiteStore)
        assert store.db_path == db_path

    def test_unknown_backend_is_refused(self):
        with pytest.raises(ValueError, match="Unknown storage backend"):
            build_store(startup_settings(storage_backend="postgres"))
