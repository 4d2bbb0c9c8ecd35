"""
Route Protection Middleware

Admin pages require a live session: a request under /admin without a
valid session_token cookie is redirected to the login page. Public menu
pages, auth pages and the API are let through untouched; the API checks
the session itself on every protected operation.
"""

import logging

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.services.auth import resolve_session

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"
ADMIN_PREFIX = "/admin"
PUBLIC_PREFIXES = ("/menu/", "/auth/", "/api/")


def is_protected_path(path: str) -> bool:
    if path.startswith(PUBLIC_PREFIXES):
        return False
    return path == ADMIN_PREFIX or path.startswith(ADMIN_PREFIX + "/")


class RouteProtectionMiddleware(BaseHTTPMiddleware):
    """
    Redirect unauthenticated admin requests to LOGIN_PATH.

    Sessions are resolved through ``request.app.state.session_maker`` so
    the middleware shares the application's database configuration.
    """

    def __init__(self, app, cookie_name: str = "session_token", login_path: str = LOGIN_PATH):
        super().__init__(app)
        self.cookie_name = cookie_name
        self.login_path = login_path

    async def dispatch(self, request: Request, call_next):
        if not is_protected_path(request.url.path):
            return await call_next(request)

        token = request.cookies.get(self.cookie_name)
        session = None
        if token:
            async with request.app.state.session_maker() as db:
                session = await resolve_session(db, token)

        if session is None:
            logger.debug(f"Redirecting unauthenticated request for {request.url.path}")
            return RedirectResponse(url=self.login_path, status_code=307)

        return await call_next(request)
