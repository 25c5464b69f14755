"""
Configuration partagée pour tous les tests.
Override la dépendance get_db pour éviter toute connexion réelle à PostgreSQL.
"""

import os
import tempfile

# Avant tout import de cncclass : Settings est instancié à l'import
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SCHEDULER_ENABLED", "false")
os.environ.setdefault("STORAGE_DIR", tempfile.mkdtemp(prefix="cncclass-storage-"))

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cncclass.database import Base, get_db
from cncclass.main import app
from cncclass.services.storage_service import LocalObjectStore, get_object_store


@pytest.fixture
def storage(tmp_path):
    """Stockage objet isolé dans un dossier temporaire."""
    return LocalObjectStore(str(tmp_path / "storage"), "http://test/storage")


@pytest.fixture
def client(storage):
    """Client HTTP de test avec la BDD mockée."""
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_object_store] = lambda: storage
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Session sur une base SQLite en mémoire, tables créées à partir des modèles."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
