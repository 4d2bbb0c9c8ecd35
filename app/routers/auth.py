"""
Authentication Endpoints

    POST /api/auth/send-code   email a 6-digit verification code
    POST /api/auth/verify      exchange a code for a session cookie
    GET  /api/auth/session     current user, or null
    POST /api/auth/logout      delete the session and clear the cookie
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response

from app.dependencies import (
    clear_session_cookie,
    get_auth_service,
    get_optional_session,
    get_session_token,
    set_session_cookie,
)
from app.models import UserSession
from app.schemas import (
    AuthResponse,
    ErrorResponse,
    SendCodeRequest,
    SessionResponse,
    SuccessResponse,
    UserResponse,
    VerifyCodeRequest,
)
from app.services.auth import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/send-code",
    response_model=SuccessResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Send Verification Code",
)
async def send_verification_code(
    data: SendCodeRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse:
    """
    Email a fresh code to the address. Name and country register a new
    owner (or fill in an existing owner's empty profile).
    """
    await auth_service.send_verification_code(data.email, name=data.name, country=data.country)
    return SuccessResponse()


@router.post(
    "/verify",
    response_model=AuthResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Verify Code",
)
async def verify_code(
    data: VerifyCodeRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    result = await auth_service.verify_code(data.email, data.code)
    set_session_cookie(response, result.token)
    return AuthResponse(user=UserResponse.model_validate(result.user), token=result.token)


@router.get("/session", response_model=Optional[SessionResponse], summary="Current Session")
async def get_session(
    session: Optional[UserSession] = Depends(get_optional_session),
) -> Optional[SessionResponse]:
    if session is None:
        return None
    return SessionResponse(user=UserResponse.model_validate(session.user))


@router.post("/logout", response_model=SuccessResponse, summary="Logout")
async def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse:
    if token:
        await auth_service.delete_session(token)
    clear_session_cookie(response)
    return SuccessResponse()
