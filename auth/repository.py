"""User and session repositories."""

from datetime import timedelta

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from auth.models import AuthSession, User
from auth.security import generate_token, is_expired
from core.database import get_session
from core.models.base import utcnow
from core.repository import BaseRepository


# ---------------------------------------------------------------------------
# User repository
# ---------------------------------------------------------------------------

class UserRepository(BaseRepository[User]):
    """Repository for registered users."""

    model = User

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_names(self) -> list[str]:
        stmt = select(User.name).order_by(User.pk)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


# ---------------------------------------------------------------------------
# Session repository
# ---------------------------------------------------------------------------

class SessionRepository(BaseRepository[AuthSession]):
    """Repository for bearer-token sessions."""

    model = AuthSession

    async def issue(self, user_id: str, ttl_hours: int) -> str:
        """Create a session for the user and return its token."""
        token = generate_token()
        await self.create(
            {
                "token": token,
                "user_id": user_id,
                "expires_at": utcnow() + timedelta(hours=ttl_hours),
            }
        )
        return token

    async def resolve(self, token: str) -> User | None:
        """Return the session's user, or None for unknown/expired tokens."""
        stmt = (
            select(AuthSession, User)
            .join(User, User.id == AuthSession.user_id)
            .where(AuthSession.token == token)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            return None

        auth_session, user = row
        if is_expired(auth_session.expires_at):
            await self.session.delete(auth_session)
            await self.session.flush()
            return None
        return user

    async def revoke(self, token: str) -> bool:
        stmt = select(AuthSession).where(AuthSession.token == token)
        result = await self.session.execute(stmt)
        auth_session = result.scalar_one_or_none()
        if not auth_session:
            return False
        await self.session.delete(auth_session)
        await self.session.flush()
        return True


# ---------------------------------------------------------------------------
# FastAPI dependency factories
# ---------------------------------------------------------------------------

def get_user_repository(
    session: AsyncSession = Depends(get_session),
) -> UserRepository:
    """FastAPI dependency for UserRepository."""
    return UserRepository(session)


def get_session_repository(
    session: AsyncSession = Depends(get_session),
) -> SessionRepository:
    """FastAPI dependency for SessionRepository."""
    return SessionRepository(session)
