"""
FastAPI Dependencies

Wires the database session, email service and injected AuthConfig into
the services, and resolves the caller's session from the session_token
cookie (or an Authorization: Bearer header).
"""

from typing import Optional

from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.exceptions import UnauthorizedError
from app.database import get_db
from app.models import User, UserSession
from app.services.auth import AuthConfig, AuthService, SESSION_TTL
from app.services.menu import MenuService
from app.services.notifications import BaseEmailService, get_email_service

SESSION_COOKIE_NAME = "session_token"
SESSION_COOKIE_MAX_AGE = int(SESSION_TTL.total_seconds())


def get_auth_config() -> AuthConfig:
    return AuthConfig.from_settings(get_settings())


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    email_service: BaseEmailService = Depends(get_email_service),
    config: AuthConfig = Depends(get_auth_config),
) -> AuthService:
    return AuthService(db, email_service, config)


def get_menu_service(db: AsyncSession = Depends(get_db)) -> MenuService:
    return MenuService(db)


def get_session_token(request: Request) -> Optional[str]:
    """Session token from the cookie, falling back to a Bearer header."""
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if token:
        return token

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.lower().startswith("bearer "):
        return auth_header[7:].strip() or None

    return None


async def get_optional_session(
    token: Optional[str] = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> Optional[UserSession]:
    return await auth_service.get_session(token)


async def get_current_session(
    session: Optional[UserSession] = Depends(get_optional_session),
) -> UserSession:
    if session is None:
        raise UnauthorizedError("You must be logged in to access this resource")
    return session


async def get_current_user(session: UserSession = Depends(get_current_session)) -> User:
    return session.user


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=SESSION_COOKIE_MAX_AGE,
        path="/",
        httponly=True,
        samesite="lax",
        secure=get_settings().session_cookie_secure,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=get_settings().session_cookie_secure,
    )
