import pytest
from beanie import init_beanie
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

import app.main as main_module
from app.errors import Unauthenticated
from app.main import app
from app.models import DOCUMENT_MODELS
from app.services.token_verifier import IdentityClaim, extract_bearer_token, get_token_verifier


class FakeVerifier:
    """Stands in for Firebase: maps known tokens to identity claims."""

    def __init__(self):
        self.identities = {}
        self.calls = 0

    def register(self, token, uid, email=None, name=None, picture=None):
        self.identities[token] = IdentityClaim(uid=uid, email=email, name=name, picture=picture)

    async def verify_header(self, header):
        self.calls += 1
        token = extract_bearer_token(header)
        claim = self.identities.get(token)
        if claim is None:
            raise Unauthenticated()
        return claim


@pytest.fixture
def verifier():
    fake = FakeVerifier()
    app.dependency_overrides[get_token_verifier] = lambda: fake
    yield fake
    app.dependency_overrides.clear()


@pytest.fixture
def mock_db(monkeypatch):
    """Replace the lifespan's Mongo connection with a fresh in-memory database."""

    async def connect():
        client = AsyncMongoMockClient()
        await init_beanie(database=client["boibritto_test"], document_models=DOCUMENT_MODELS)

    async def close():
        return None

    monkeypatch.setattr(main_module, "connect_to_mongo", connect)
    monkeypatch.setattr(main_module, "close_mongo_connection", close)


@pytest.fixture
def client(mock_db, verifier):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def lenient_client(mock_db, verifier):
    """Client that returns 500 responses instead of re-raising server errors."""
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


def register_user(client, verifier, name="alice", genres=None):
    """Sign a new identity in and complete signup. Returns (headers, user json)."""
    token = f"token-{name}"
    verifier.register(token, uid=f"uid-{name}", email=f"{name}@example.com", name=name.title())
    headers = auth_headers(token)
    r = client.post(
        "/api/auth/signup",
        json={"username": name, "bio": f"{name} reads", "interestedGenres": genres or ["fantasy"]},
        headers=headers,
    )
    assert r.status_code == 201, r.json()
    return headers, r.json()["data"]["user"]


@pytest.fixture
def alice(client, verifier):
    return register_user(client, verifier, "alice")


@pytest.fixture
def bob(client, verifier):
    return register_user(client, verifier, "bob")
