import os
import sys
from pathlib import Path
import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path so 'src' is importable during tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("SUPABASE_DISABLED", "1")
os.environ.setdefault("SESSION_SECRET_KEY", "test-secret")

VALID_PASSWORD = "Secret#123"


@pytest.fixture(autouse=True)
def reset_local_stores():
    from src.infrastructure.database.repositories.profile_repository import reset_memory_profiles
    from src.infrastructure.database.supabase_client import reset_fake_auth_store

    reset_fake_auth_store()
    reset_memory_profiles()
    yield
    reset_fake_auth_store()
    reset_memory_profiles()


@pytest.fixture()
def client() -> TestClient:
    # lazy import after env configured; a fresh client per test keeps cookies isolated
    from src.main import create_app

    app = create_app()
    return TestClient(app)


@pytest.fixture()
def registration() -> dict[str, str]:
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "nickname": "Countess",
        "username": "ada",
        "email": "ada@example.com",
        "password": VALID_PASSWORD,
        "confirm_password": VALID_PASSWORD,
    }


@pytest.fixture()
def signed_in_client(client, registration) -> TestClient:
    r = client.post("/register", data=registration, follow_redirects=False)
    assert r.status_code == 303, r.text
    return client
