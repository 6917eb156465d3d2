import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure predictable environment variables for tests before importing the app.
BASE_DIR = Path(__file__).resolve().parents[1]
TEST_DB_PATH = BASE_DIR / "test.db"

if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

os.environ.setdefault("DATABASE_URL", f"sqlite:///{TEST_DB_PATH}")
os.environ.setdefault("SESSION_SECRET", "test-secret")
os.environ.setdefault("SEED_ON_STARTUP", "false")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("UPLOAD_DIR", str(BASE_DIR / "test_uploads"))

import app.main as main  # noqa: E402  (import after env vars are set)
from app.database import Base, SessionLocal, engine  # noqa: E402
from app.models.user import User  # noqa: E402
from app.services import otp_service, spaces_service  # noqa: E402
from app.services.auth_service import hash_password  # noqa: E402

DEFAULT_PASSWORD = "pedal-secret"


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def sent_otps(monkeypatch):
    """Capture outbound OTP emails instead of talking to SMTP."""
    outbox = []

    def _capture(to_email: str, otp: str):
        outbox.append((to_email, otp))

    monkeypatch.setattr(otp_service, "send_email_otp", _capture)
    return outbox


@pytest.fixture(autouse=True)
def uploaded_images(monkeypatch):
    """Record image uploads and hand back deterministic URLs."""
    uploads = []

    def _upload(data: bytes, filename: str, folder: str, content_type: str | None = None) -> str:
        url = f"https://cdn.test/{folder}/{filename}"
        uploads.append({"url": url, "folder": folder, "size": len(data), "content_type": content_type})
        return url

    monkeypatch.setattr(spaces_service, "upload_image", _upload)
    return uploads


@pytest.fixture()
def make_user(db_session):
    def _make_user(username: str = "rider@example.com", password: str = DEFAULT_PASSWORD, is_admin: bool = False):
        user = User(
            username=username,
            password=hash_password(password),
            first_name="Asha",
            last_name="Rao",
            email=username,
            mobile="9876543210",
            city="Pune",
            sub_city="Kothrud",
            cycling_proficiency="occasional",
            type="user",
            is_admin=is_admin,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def client(monkeypatch):
    """Provide a TestClient with startup seeding patched out for isolation."""
    monkeypatch.setattr(main, "run_seed", lambda: None)

    with TestClient(main.app) as test_client:
        yield test_client


def login(client: TestClient, username: str, password: str = DEFAULT_PASSWORD):
    response = client.post("/api/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response


@pytest.fixture()
def user_client(client, make_user):
    user = make_user()
    login(client, user.username)
    client.user = user
    return client


@pytest.fixture()
def admin_client(client, make_user):
    admin = make_user(username="admin@example.com", is_admin=True)
    login(client, admin.username)
    client.user = admin
    return client


@pytest.fixture()
def login_as(client):
    def _login(username: str, password: str = DEFAULT_PASSWORD):
        return login(client, username, password)

    return _login
