import os
import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

# Base SQLite pour les tests AVANT d'importer l'app (l'engine est créé à l'import)
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

import uuid
import pytest
from fastapi.testclient import TestClient

from coursepages.core.database import Base, engine, SessionLocal
from coursepages.core.security import create_access_token
from coursepages.main import app
from coursepages.models.author import Author


@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """Client de test FastAPI"""
    return TestClient(app)


@pytest.fixture
def db():
    """Session DB pour les tests"""
    db = SessionLocal()
    yield db
    db.close()


def create_author(username=None):
    """Crée un auteur directement en BD"""
    username = username or f"author{str(uuid.uuid4())[:8]}"
    db = SessionLocal()
    author = Author(email=f"{username}@test.com", username=username)
    author.set_password("password123")
    db.add(author)
    db.commit()
    db.refresh(author)
    db.close()
    return author


@pytest.fixture
def author():
    return create_author("jane")


@pytest.fixture
def auth_headers(author):
    token = create_access_token(author.id, author.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_headers():
    other = create_author("mallory")
    token = create_access_token(other.id, other.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def course(client, auth_headers):
    """Cours 'phoenix' vide, appartenant à l'auteur de test"""
    response = client.post(
        "/courses",
        headers=auth_headers,
        json={"slug": "phoenix", "title": "Phoenix course", "description": "Web dev with Phoenix"}
    )
    assert response.status_code == 201
    return response.json()
