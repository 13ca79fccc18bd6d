import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

import uuid
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Engine SQLite pour tests AVANT d'importer l'app
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"
test_engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# PATCH: remplacer engine et SessionLocal AVANT d'importer l'app
import kanban.core.database
kanban.core.database.engine = test_engine
kanban.core.database.SessionLocal = TestingSessionLocal

from kanban.core.database import Base, get_db
from kanban.core.security import create_access_token
from kanban.main import app
from kanban.models.user import User


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client():
    """Client de test FastAPI"""
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def db():
    """Session DB pour les tests"""
    db = TestingSessionLocal()
    yield db
    db.close()


@pytest.fixture
def user_factory():
    """Crée un utilisateur en base et retourne (user_id, token)"""
    def make(name: str = None):
        unique_id = str(uuid.uuid4())[:8]
        session = TestingSessionLocal()
        user = User(name=name or f"user {unique_id}", email=f"user_{unique_id}@example.com")
        user.set_password("password123")
        session.add(user)
        session.commit()
        user_id = user.id
        email = user.email
        session.close()
        return user_id, create_access_token(user_id, email)
    return make


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


class RecordingBroadcaster:
    """Remplace le broadcaster dans les tests de services"""

    def __init__(self):
        self.events = []

    def emit(self, board_id, event, data):
        self.events.append((board_id, event, data))
        return 1

    def names(self):
        return [event for _, event, _ in self.events]


@pytest.fixture
def broadcaster():
    return RecordingBroadcaster()
