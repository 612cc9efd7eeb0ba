"""FastAPI dependencies that gate routes behind a valid session."""

from dataclasses import dataclass

from fastapi import Depends, HTTPException

from api.middleware import get_session_token
from auth.repository import SessionRepository, get_session_repository


@dataclass(frozen=True)
class CurrentUser:
    """The signed-in user attached to the current request."""

    id: str
    name: str
    email: str
    token: str


async def get_current_user(
    sessions: SessionRepository = Depends(get_session_repository),
) -> CurrentUser:
    """Resolve the request's bearer token or fail with 401.

    Usage::

        @router.get("/tasks")
        async def list_tasks(user: CurrentUser = Depends(get_current_user)):
            ...
    """
    token = get_session_token()
    if not token:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await sessions.resolve(token)
    if user is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return CurrentUser(id=user.id, name=user.name, email=user.email, token=token)
