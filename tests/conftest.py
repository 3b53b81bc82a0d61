"""
Pytest configuration and shared fixtures for user-api tests
"""
import pytest
from fastapi.testclient import TestClient

from user_api.core.config import Settings
from user_api.core.security import hash_password
from user_api.core.user_store import UserStore
from user_api.main import create_app
from user_api.models import Base

TEST_PASSWORD = "secret123"


@pytest.fixture(scope="session")
def db_path(tmp_path_factory):
    return tmp_path_factory.mktemp("db") / "user-api-test.db"


@pytest.fixture(scope="session")
def settings(db_path):
    """Settings built from a plain dict so local env files never leak into tests"""
    return Settings(
        cfg={
            "APP_NAME": "user-api-test",
            "ENV": "local",
            "DATABASE_URL": f"sqlite:///{db_path}",
            "JWT_SECRET": "test-secret-key",
            # bcrypt minimum, keeps the suite fast
            "BCRYPT_ROUNDS": "4",
            "FRONTEND_URL": "http://localhost:3000",
        }
    )


@pytest.fixture(scope="session")
def store(settings):
    store = UserStore.from_settings(settings)
    yield store
    store.close()


@pytest.fixture(autouse=True)
def _schema(store):
    """Fresh tables for every test to avoid UNIQUE constraint collisions."""
    Base.metadata.create_all(store.engine)
    yield
    Base.metadata.drop_all(store.engine)


@pytest.fixture
def app(settings, store):
    return create_app(settings, store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def user(store, settings):
    """A stored user whose password is TEST_PASSWORD"""
    return store.create("test@example.com", hash_password(TEST_PASSWORD, settings))


class UntouchableStore:
    """Fails the test if any store method is reached."""

    def __getattr__(self, name):
        raise AssertionError(f"store.{name} must not be called")


@pytest.fixture
def offline_client(settings):
    return TestClient(create_app(settings, UntouchableStore()))
