import time
from types import SimpleNamespace

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from app.errors import Unauthenticated
from app.services.token_verifier import FirebaseTokenVerifier, extract_bearer_token

PROJECT = "boibritto-test"
PRIVATE_KEY = rsa.generate_private_key(public_exponent=65537, key_size=2048)
OTHER_KEY = rsa.generate_private_key(public_exponent=65537, key_size=2048)


class StubJWKClient:
    def __init__(self, public_key=None, error=None):
        self.public_key = public_key
        self.error = error

    def get_signing_key_from_jwt(self, token):
        if self.error:
            raise self.error
        return SimpleNamespace(key=self.public_key)


def make_token(key=PRIVATE_KEY, **overrides):
    now = int(time.time())
    payload = {
        "iss": f"https://securetoken.google.com/{PROJECT}",
        "aud": PROJECT,
        "sub": "firebase-uid-1",
        "user_id": "firebase-uid-1",
        "email": "reader@example.com",
        "name": "Avid Reader",
        "picture": "https://example.com/a.png",
        "iat": now,
        "exp": now + 3600,
    }
    payload.update(overrides)
    return jwt.encode(payload, key, algorithm="RS256", headers={"kid": "k1"})


def make_verifier(jwk_client=None, project_id=PROJECT, emulator=False):
    return FirebaseTokenVerifier(
        project_id=project_id,
        jwks_url="https://example.invalid/jwks",
        emulator=emulator,
        jwk_client=jwk_client or StubJWKClient(PRIVATE_KEY.public_key()),
    )


@pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "Basic abc", "Token abc", "Bearer a b"])
def test_non_bearer_headers_are_rejected(header):
    with pytest.raises(Unauthenticated):
        extract_bearer_token(header)


def test_bearer_scheme_is_case_insensitive():
    assert extract_bearer_token("bearer abc.def") == "abc.def"


async def test_valid_token_yields_claim():
    claim = await make_verifier().verify_header(f"Bearer {make_token()}")
    assert claim.uid == "firebase-uid-1"
    assert claim.email == "reader@example.com"
    assert claim.name == "Avid Reader"
    assert claim.picture == "https://example.com/a.png"


@pytest.mark.parametrize(
    "token_kwargs",
    [
        {"exp": int(time.time()) - 10},
        {"aud": "some-other-project"},
        {"iss": "https://accounts.example.com"},
        {"key": OTHER_KEY},
        {"sub": "", "user_id": ""},
    ],
)
async def test_invalid_tokens_collapse_to_unauthenticated(token_kwargs):
    with pytest.raises(Unauthenticated) as exc:
        await make_verifier().verify_header(f"Bearer {make_token(**token_kwargs)}")
    # the reason stays in the logs
    assert exc.value.message == "unauthorized"


async def test_garbage_token_is_unauthenticated():
    with pytest.raises(Unauthenticated):
        await make_verifier().verify_header("Bearer not-a-jwt")


async def test_unreachable_key_server_is_unauthenticated():
    broken = StubJWKClient(error=jwt.exceptions.PyJWKClientError("Fail to fetch data from the url"))
    with pytest.raises(Unauthenticated):
        await make_verifier(jwk_client=broken).verify_header(f"Bearer {make_token()}")


async def test_missing_project_id_rejects_everything():
    with pytest.raises(Unauthenticated):
        await make_verifier(project_id=None).verify_header(f"Bearer {make_token()}")


async def test_emulator_tokens_are_decoded_without_signature():
    token = jwt.encode({"sub": "emulated-uid", "email": "e@example.com"}, None, algorithm="none")
    claim = await make_verifier(emulator=True).verify_header(f"Bearer {token}")
    assert claim.uid == "emulated-uid"
