"""Session token middleware using ContextVar.

Extracts the bearer token from the Authorization header (or falls back to
the session cookie). The token is stored in a ContextVar so that any
downstream code can call get_session_token() without explicit parameter
passing; resolving it to a user is done by auth.dependencies.
"""

from contextvars import ContextVar
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

SESSION_COOKIE = "taskdesk_session"

# ---------------------------------------------------------------------------
# Context variable holding the per-request token
# ---------------------------------------------------------------------------

_session_token: ContextVar[str | None] = ContextVar("session_token", default=None)


def get_session_token() -> str | None:
    """Return the session token presented with the current request, if any."""
    return _session_token.get()


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

class SessionTokenMiddleware(BaseHTTPMiddleware):
    """Extract the session token from request headers or cookies.

    Priority:
    1. Authorization: Bearer <token>
    2. taskdesk_session cookie
    3. None (unauthenticated)
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        token = None

        auth = request.headers.get("Authorization", "")
        scheme, _, credentials = auth.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            token = credentials.strip()

        if not token:
            token = request.cookies.get(SESSION_COOKIE) or None

        ctx_token = _session_token.set(token)
        try:
            response = await call_next(request)
            return response
        finally:
            _session_token.reset(ctx_token)
