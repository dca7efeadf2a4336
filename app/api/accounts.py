"""
Sign-in boundary.

GET /api/auth/login: tell the client whether this Firebase identity already
has a profile (newUser=false) or must complete signup (newUser=true).
POST /api/auth/signup: create the profile, exactly once per identity.

Both use the identity-only policy; every other router uses verify_user.
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError

from app.api.auth import CurrentIdentity
from app.api.responses import send_success
from app.errors import ValidationFailed
from app.models.user import User
from app.schemas.user import SignupRequest, UserOut
from app.services.user_resolver import find_user

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/login", summary="Check whether the identity is registered")
async def login(identity: CurrentIdentity) -> JSONResponse:
    user = await find_user(identity.uid)
    return send_success(
        "User login successful",
        {
            "newUser": user is None,
            "user": UserOut.model_validate(user) if user else None,
        },
    )


@router.post("/signup", status_code=status.HTTP_201_CREATED, summary="Create the application profile")
async def signup(payload: SignupRequest, identity: CurrentIdentity) -> JSONResponse:
    if await find_user(identity.uid):
        raise ValidationFailed("User already exists")
    if await User.find_one(User.username == payload.username):
        raise ValidationFailed("Username already taken")
    if identity.email and await User.find_one(User.email == identity.email):
        raise ValidationFailed("Email already in use")

    user = User(
        uid=identity.uid,
        email=identity.email,
        username=payload.username,
        display_name=payload.display_name or identity.name or payload.username,
        avatar=identity.picture,
        bio=payload.bio,
        interested_genres=payload.interested_genres,
    )
    try:
        await user.insert()
    except DuplicateKeyError:
        # Lost a race against a concurrent signup; the unique indexes decide
        logger.warning("Duplicate signup for uid=%s username=%s", identity.uid, payload.username)
        if await find_user(identity.uid):
            raise ValidationFailed("User already exists")
        if await User.find_one(User.username == payload.username):
            raise ValidationFailed("Username already taken")
        raise ValidationFailed("Email already in use")

    logger.info("Created user %s for uid=%s", user.id, identity.uid)
    return send_success(
        "User account created successfully",
        {"user": UserOut.model_validate(user)},
        status_code=status.HTTP_201_CREATED,
    )
