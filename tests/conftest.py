import os
import tempfile

# must be set before docscan.config is imported
_TMP_DIR = tempfile.mkdtemp(prefix="docscan-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["RATE_LIMIT_MAX_CALLS"] = "1000"

import pytest
from fastapi.testclient import TestClient

from docscan.config import settings
from docscan.db.session import Base, SessionLocal, engine, init_db
from docscan.main import create_app
from docscan.models.user import User


@pytest.fixture(autouse=True)
def corpus_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "corpus_dir", str(path))
    return path


@pytest.fixture
def db():
    init_db()
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    with TestClient(create_app()) as c:
        yield c


def register(client, username, password):
    return client.post("/auth/register", json={"username": username, "password": password})


def login(client, username, password):
    return client.post("/auth/login", json={"username": username, "password": password})


def signup_and_login(client, username="alice", password="pw1"):
    assert register(client, username, password).status_code == 200
    assert login(client, username, password).status_code == 200


def login_admin(client):
    assert login(client, settings.admin_username, settings.admin_password).status_code == 200


def upload(client, filename, content):
    return client.post("/scanUpload", json={"filename": filename, "documentContent": content})


def fresh_user(db, username) -> User:
    db.expire_all()
    return db.query(User).filter(User.username == username).one()
