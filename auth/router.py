"""Auth API router: sign-up, sign-in, sign-out and session lookup.

Sign-up and sign-in are separate endpoints with the same outcomes as the
credentials flow they replace:
- signing up with a known email → 409 "User already exists! Please signin"
- signing in with an unknown email → 404 "User not found! Please signup"
- signing in with a wrong password → 401 "Invalid credentials!"
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from auth.dependencies import CurrentUser, get_current_user
from auth.repository import (
    SessionRepository,
    UserRepository,
    get_session_repository,
    get_user_repository,
)
from auth.schemas import (
    AuthResponse,
    ExistsResponse,
    SignInRequest,
    SignUpRequest,
    UserResponse,
)
from auth.security import hash_password, verify_password
from core.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/exists", response_model=ExistsResponse)
async def user_exists(
    email: str = Query(..., min_length=3),
    users: UserRepository = Depends(get_user_repository),
):
    """Tell the sign-in form whether an account exists for an email."""
    user = await users.get_by_email(email.strip())
    return ExistsResponse(exists=user is not None)


@router.post("/signup", status_code=201, response_model=AuthResponse)
async def sign_up(
    request: SignUpRequest,
    users: UserRepository = Depends(get_user_repository),
    sessions: SessionRepository = Depends(get_session_repository),
):
    """Register a new account and start a session."""
    if await users.get_by_email(request.email):
        raise HTTPException(status_code=409, detail="User already exists! Please signin")

    user = await users.create(
        {
            "name": request.name,
            "email": request.email,
            "password_hash": hash_password(
                request.password, settings.auth.password_iterations
            ),
        }
    )
    token = await sessions.issue(user["id"], settings.auth.session_ttl_hours)
    logger.info("User %s signed up", user["id"])
    return AuthResponse(token=token, user=UserResponse(**user))


@router.post("/signin", response_model=AuthResponse)
async def sign_in(
    request: SignInRequest,
    users: UserRepository = Depends(get_user_repository),
    sessions: SessionRepository = Depends(get_session_repository),
):
    """Verify credentials and start a session."""
    user = await users.get_by_email(request.email)
    if user is None:
        logger.info("Sign-in for unknown email")
        raise HTTPException(status_code=404, detail="User not found! Please signup")

    if not verify_password(request.password, user.password_hash):
        logger.info("Sign-in with wrong password for user %s", user.id)
        raise HTTPException(status_code=401, detail="Invalid credentials!")

    token = await sessions.issue(user.id, settings.auth.session_ttl_hours)
    return AuthResponse(token=token, user=UserResponse(**user.to_dict()))


@router.post("/signout", status_code=204)
async def sign_out(
    user: CurrentUser = Depends(get_current_user),
    sessions: SessionRepository = Depends(get_session_repository),
):
    """Revoke the current session token."""
    await sessions.revoke(user.token)
    return Response(status_code=204)


@router.get("/me", response_model=UserResponse)
async def me(user: CurrentUser = Depends(get_current_user)):
    """The signed-in user's profile."""
    return UserResponse(id=user.id, name=user.name, email=user.email)
