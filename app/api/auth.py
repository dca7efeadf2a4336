"""
Authentication: Firebase bearer token validation and current-user dependencies.

Two policies share one interface:

- IdentityOnlyPolicy (``attach_user``): verify the token and expose the raw
  claim. Only the signup/login boundary uses it, because a first-time
  identity has no application user yet.
- FullPolicy (``verify_user``): verify the token, then resolve the
  application user. Every route that touches owned resources uses it.

Both fail with 401 before the route body runs. A body that is not valid JSON
is rejected by FastAPI before any dependency runs, so the validation error
handler calls authorize_before_validation to keep 401 ahead of 400.
"""

import logging
from abc import ABC, abstractmethod
from typing import Annotated, Any, Optional

from fastapi import Depends, Request

from app.models.user import User
from app.services.token_verifier import FirebaseTokenVerifier, IdentityClaim, get_token_verifier
from app.services.user_resolver import resolve_user

logger = logging.getLogger(__name__)


class AuthPolicy(ABC):
    """Strategy that turns an inbound request into an authenticated principal."""

    name: str
    state_key: str

    @abstractmethod
    async def authorize(self, request: Request, verifier: FirebaseTokenVerifier) -> Any:
        ...


class IdentityOnlyPolicy(AuthPolicy):
    name = "attach_user"
    state_key = "identity"

    async def authorize(self, request: Request, verifier: FirebaseTokenVerifier) -> IdentityClaim:
        claim = await verifier.verify_header(request.headers.get("Authorization"))
        request.state.identity = claim
        return claim


class FullPolicy(AuthPolicy):
    name = "verify_user"
    state_key = "user"

    async def authorize(self, request: Request, verifier: FirebaseTokenVerifier) -> User:
        claim = await verifier.verify_header(request.headers.get("Authorization"))
        user = await resolve_user(claim.uid)
        request.state.user = user
        return user


identity_only_policy = IdentityOnlyPolicy()
full_policy = FullPolicy()


async def attach_user(
    request: Request,
    verifier: Annotated[FirebaseTokenVerifier, Depends(get_token_verifier)],
) -> IdentityClaim:
    """Dependency: verified identity claim, no database lookup."""
    return await identity_only_policy.authorize(request, verifier)


async def verify_user(
    request: Request,
    verifier: Annotated[FirebaseTokenVerifier, Depends(get_token_verifier)],
) -> User:
    """Dependency: verified identity resolved to the registered User."""
    return await full_policy.authorize(request, verifier)


CurrentIdentity = Annotated[IdentityClaim, Depends(attach_user)]
CurrentUser = Annotated[User, Depends(verify_user)]

ROUTE_POLICIES = {attach_user: identity_only_policy, verify_user: full_policy}


def route_policy(request: Request) -> Optional[AuthPolicy]:
    """The policy guarding the matched route, found among its dependencies."""
    dependant = getattr(request.scope.get("route"), "dependant", None)
    pending = [dependant] if dependant is not None else []
    while pending:
        for dependency in pending.pop().dependencies:
            if dependency.call in ROUTE_POLICIES:
                return ROUTE_POLICIES[dependency.call]
            pending.append(dependency)
    return None


async def authorize_before_validation(request: Request) -> None:
    """Run the route's policy if request decoding failed before it could."""
    policy = route_policy(request)
    if policy is None or hasattr(request.state, policy.state_key):
        return
    provider = request.app.dependency_overrides.get(get_token_verifier, get_token_verifier)
    await policy.authorize(request, provider())
