"""
Firebase ID token verification.

Firebase ID tokens are RS256 JWTs signed by Google's securetoken service.
We verify them with PyJWT against the published JWKS, checking audience
(project id) and issuer. When the Firebase Auth emulator is configured the
tokens are unsigned, so we only decode them.

Every failure is collapsed to Unauthenticated; the concrete reason is logged
and never returned to the caller.
"""

import asyncio
import logging
from functools import lru_cache
from typing import Any, Optional

import jwt
from jwt import PyJWKClient
from pydantic import BaseModel

from app.config import get_settings
from app.errors import Unauthenticated

logger = logging.getLogger(__name__)

ISSUER_PREFIX = "https://securetoken.google.com/"


class IdentityClaim(BaseModel):
    """Decoded identity for the duration of one request. Never persisted."""

    uid: str
    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None


def extract_bearer_token(header: Optional[str]) -> str:
    """Return the credential from an `Authorization: Bearer <token>` header."""
    if not header:
        logger.info("Request without Authorization header")
        raise Unauthenticated()
    scheme, _, token = header.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token or " " in token:
        logger.info("Authorization header is not a bearer credential")
        raise Unauthenticated()
    return token


class FirebaseTokenVerifier:
    """Verifies bearer credentials against Firebase and yields IdentityClaim."""

    def __init__(
        self,
        project_id: Optional[str],
        jwks_url: str,
        emulator: bool = False,
        timeout: int = 5,
        jwk_client: Optional[PyJWKClient] = None,
    ) -> None:
        self.project_id = project_id
        self.emulator = emulator
        self._jwk_client = jwk_client or PyJWKClient(jwks_url, cache_keys=True, timeout=timeout)

    def decode(self, token: str) -> dict[str, Any]:
        """Blocking: may fetch signing keys over HTTP. Raises jwt.PyJWTError."""
        if self.emulator:
            return jwt.decode(token, options={"verify_signature": False})

        if not self.project_id:
            raise jwt.InvalidTokenError("FIREBASE_PROJECT_ID is not configured")

        signing_key = self._jwk_client.get_signing_key_from_jwt(token)
        return jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            audience=self.project_id,
            issuer=f"{ISSUER_PREFIX}{self.project_id}",
            options={"require": ["exp", "iat", "sub"]},
        )

    async def verify_token(self, token: str) -> IdentityClaim:
        try:
            # JWKS fetch is blocking urllib; keep it off the event loop
            payload = await asyncio.to_thread(self.decode, token)
        except jwt.ExpiredSignatureError:
            logger.warning("Firebase ID token has expired")
            raise Unauthenticated()
        except jwt.PyJWTError as e:
            logger.warning("Firebase ID token verification failed: %s", e)
            raise Unauthenticated()

        uid = payload.get("sub") or payload.get("user_id")
        if not uid:
            logger.warning("Firebase ID token has no subject")
            raise Unauthenticated()

        return IdentityClaim(
            uid=uid,
            email=payload.get("email"),
            name=payload.get("name"),
            picture=payload.get("picture"),
        )

    async def verify_header(self, header: Optional[str]) -> IdentityClaim:
        return await self.verify_token(extract_bearer_token(header))


@lru_cache
def get_token_verifier() -> FirebaseTokenVerifier:
    """FastAPI dependency. One verifier per process so the JWKS cache is shared."""
    settings = get_settings()
    return FirebaseTokenVerifier(
        project_id=settings.firebase_project_id,
        jwks_url=settings.firebase_jwks_url,
        emulator=bool(settings.firebase_auth_emulator_host),
        timeout=settings.token_verify_timeout_seconds,
    )
