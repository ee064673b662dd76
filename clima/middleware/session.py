"""FastAPI middleware that tags every request with a session ID."""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Optional
import uuid

SESSION_HEADER = "X-Session-ID"


class SessionMiddleware(BaseHTTPMiddleware):
    """Reads the session ID from a cookie or header, minting one if absent"""

    def __init__(
        self,
        app,
        session_cookie_name: str = "clima_session_id",
        max_age_seconds: int = 3600 * 24,
    ):
        super().__init__(app)
        self.session_cookie_name = session_cookie_name
        self.max_age_seconds = max_age_seconds

    async def dispatch(self, request: Request, call_next):
        session_id = self._get_session_id(request)
        new_session = session_id is None
        if new_session:
            session_id = str(uuid.uuid4())

        request.state.session_id = session_id
        response = await call_next(request)

        # Echo the ID so header-based clients can keep using it
        response.headers[SESSION_HEADER] = session_id
        if new_session and response.status_code < 400:
            response.set_cookie(
                key=self.session_cookie_name,
                value=session_id,
                max_age=self.max_age_seconds,
                httponly=True,
                samesite="lax",
            )

        return response

    def _get_session_id(self, request: Request) -> Optional[str]:
        return request.cookies.get(self.session_cookie_name) or request.headers.get(
            SESSION_HEADER
        )
