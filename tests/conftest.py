import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from db.database import Base, get_db
from hooks import HookRegistry
from webhooks import WebhookCatalog
import dependencies
from main import app

# Use a throwaway SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class RecordingStore:
    """In-memory option store that remembers every write."""

    def __init__(self, initial=None):
        self.data = dict(initial or {})
        self.writes = []

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.writes.append((key, value))
        self.data[key] = value


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def catalog():
    catalog = WebhookCatalog()
    catalog.register_trigger("post_create", name="Post created")
    catalog.register_trigger("user_login", name="User logged in")
    catalog.register_action("create_user", name="Create user")
    catalog.register_action("delete_post", name="Delete post")
    return catalog


@pytest.fixture
def test_db():
    Base.metadata.create_all(bind=engine)
    yield  # Run the tests
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(test_db):
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(test_db, catalog, monkeypatch):
    monkeypatch.setattr(dependencies, "webhook_catalog", catalog)
    monkeypatch.setattr(dependencies, "hooks", HookRegistry())

    def override_get_db():
        db = None
        try:
            db = TestingSessionLocal()
            yield db
        finally:
            if db:
                db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
