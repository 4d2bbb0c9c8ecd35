"""
Authentication & Session Service

Email one-time-code login for restaurant owners:

    send_verification_code()  ->  email a 6-digit code (10 minute lifetime)
    verify_code()             ->  consume the code (or a master code), open a session
    get_session()             ->  resolve a session token, never raises
    delete_session()          ->  logout
    purge_expired_records()   ->  maintenance, deletes stale sessions and codes

Configuration (master code, lifetimes) is passed in as an AuthConfig
rather than read from process-wide settings, and the clock is injectable
so expiry can be exercised deterministically.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.core.config import Settings
from app.core.exceptions import BadRequestError, InternalServiceError, UnauthorizedError
from app.models import EmailVerificationCode, User, UserSession, utcnow
from app.services.notifications.base import BaseEmailService

logger = logging.getLogger(__name__)

CODE_LENGTH = 6
CODE_TTL = timedelta(minutes=10)
SESSION_TTL = timedelta(days=30)

DEFAULT_USER_NAME = "User"
DEFAULT_COUNTRY = "Unknown"

Clock = Callable[[], datetime]


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything is stored as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def generate_verification_code() -> str:
    """Uniform 6-digit code in 100000..999999."""
    return str(100000 + secrets.randbelow(900000))


def generate_session_token() -> str:
    return secrets.token_urlsafe(32)


@dataclass(frozen=True)
class AuthConfig:
    """Authentication settings injected into AuthService at startup."""
    master_code: Optional[str] = None
    code_ttl: timedelta = CODE_TTL
    session_ttl: timedelta = SESSION_TTL

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthConfig":
        return cls(master_code=settings.master_code or None)

    @property
    def master_code_enabled(self) -> bool:
        return bool(self.master_code)


@dataclass
class AuthResult:
    user: User
    token: str


async def resolve_session(
    db: AsyncSession,
    token: Optional[str],
    now: Optional[datetime] = None,
) -> Optional[UserSession]:
    """
    Return the live session for ``token`` with its user loaded, or None.

    Expired sessions are ignored but left in place. Persistence errors are
    logged and reported as "no session" because this gates every request.
    """
    if not token:
        return None

    now = now or utcnow()
    try:
        result = await db.execute(
            select(UserSession)
            .options(joinedload(UserSession.user))
            .where(UserSession.token == token)
        )
        session = result.scalar_one_or_none()
    except Exception as e:
        logger.error(f"Session lookup failed: {e}")
        try:
            await db.rollback()
        except Exception as rollback_error:
            logger.error(f"Rollback after session lookup failed: {rollback_error}")
        return None

    if session is None:
        return None

    if as_utc(session.expires_at) <= now:
        logger.debug(f"Session for user {session.user_id} expired at {session.expires_at}")
        return None

    return session


class AuthService:
    """Email OTP authentication bound to one database session."""

    def __init__(
        self,
        db: AsyncSession,
        email_service: BaseEmailService,
        config: AuthConfig,
        clock: Optional[Clock] = None,
    ):
        self.db = db
        self.email_service = email_service
        self.config = config
        self.clock = clock or utcnow

    # =========================================================================
    # USERS
    # =========================================================================

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    # =========================================================================
    # CODE ISSUANCE
    # =========================================================================

    async def send_verification_code(
        self,
        email: str,
        name: Optional[str] = None,
        country: Optional[str] = None,
    ) -> EmailVerificationCode:
        """
        Issue a fresh code for ``email`` and hand it to the email service.

        Previous codes for the email are deleted first. A user is created on
        demand; name and country are stored when given, and backfilled onto
        an existing user whose fields are still empty.

        The code is only committed after the email service accepted it. If
        delivery fails everything is rolled back and InternalServiceError is
        raised, so no usable but undelivered code is left behind.
        """
        code = generate_verification_code()
        expires_at = self.clock() + self.config.code_ttl

        try:
            await self.db.execute(
                delete(EmailVerificationCode).where(EmailVerificationCode.email == email)
            )

            user = await self.get_user_by_email(email)
            if user is None:
                user = User(email=email, name=name, country=country, email_verified=False)
                self.db.add(user)
                logger.info(f"Registered new user for {email}")
            else:
                if name and not user.name:
                    user.name = name
                if country and not user.country:
                    user.country = country

            await self.db.flush()

            verification_code = EmailVerificationCode(
                email=email,
                code=code,
                expires_at=expires_at,
                user_id=user.id,
            )
            self.db.add(verification_code)
            await self.db.flush()
        except Exception as e:
            await self.db.rollback()
            logger.exception(f"Failed to store verification code for {email}: {e}")
            raise InternalServiceError("Failed to send verification code")

        ttl_minutes = int(self.config.code_ttl.total_seconds() // 60)
        try:
            result = await self.email_service.send_verification_code(email, code, ttl_minutes)
        except Exception as e:
            logger.exception(f"Email service raised while sending code to {email}: {e}")
            result = None

        if result is None or not result.success:
            await self.db.rollback()
            reason = result.error_message if result else "exception"
            logger.error(f"Failed to send verification code to {email}: {reason}")
            raise InternalServiceError("Failed to send verification code")

        await self.db.commit()
        logger.info(f"Verification code sent to {email} via {result.provider}")
        return verification_code

    # =========================================================================
    # VERIFICATION
    # =========================================================================

    async def verify_code(self, email: str, code: str) -> AuthResult:
        """
        Authenticate ``email`` with ``code`` and open a new session.

        The master code, when configured and matched exactly, wins first.
        Otherwise the code must be a live, 6-character code issued for
        this email; it is deleted once used.
        """
        if self.config.master_code_enabled and code == self.config.master_code:
            user = await self._authenticate_with_master_code(email)
        else:
            user = await self._authenticate_with_email_code(email, code)

        token = await self.create_session(user.id)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info(f"User {user.id} authenticated")
        return AuthResult(user=user, token=token)

    async def _authenticate_with_master_code(self, email: str) -> User:
        user = await self.get_user_by_email(email)

        if user is None:
            user = User(
                email=email,
                name=email.split("@")[0] or DEFAULT_USER_NAME,
                country=DEFAULT_COUNTRY,
                email_verified=True,
            )
            self.db.add(user)
            await self.db.flush()
            logger.info(f"Master code created user for {email}")
        else:
            user.email_verified = True

        logger.warning(f"Master code login for {email}")
        return user

    async def _authenticate_with_email_code(self, email: str, code: str) -> User:
        master_configured = self.config.master_code_enabled

        if len(code) != CODE_LENGTH:
            hint = " Or use the master code if configured." if master_configured else ""
            raise BadRequestError(f"Verification code must be {CODE_LENGTH} digits.{hint}")

        now = self.clock()
        result = await self.db.execute(
            select(EmailVerificationCode)
            .options(joinedload(EmailVerificationCode.user))
            .where(
                EmailVerificationCode.email == email,
                EmailVerificationCode.code == code,
            )
        )
        candidates = [c for c in result.scalars().all() if as_utc(c.expires_at) >= now]

        if not candidates:
            existing_user = await self.get_user_by_email(email)
            logger.info(f"Rejected verification code for {email}")
            raise UnauthorizedError(self._invalid_code_message(existing_user is not None))

        verification_code = candidates[0]

        # Consume before anything else; a concurrent verify that got here
        # first leaves nothing to delete.
        consumed = await self.db.execute(
            delete(EmailVerificationCode)
            .where(EmailVerificationCode.id == verification_code.id)
            .execution_options(synchronize_session=False)
        )
        if consumed.rowcount != 1:
            logger.info(f"Verification code for {email} already consumed")
            raise UnauthorizedError(self._invalid_code_message(True))
        self.db.expunge(verification_code)

        user = verification_code.user
        if user is None:
            user = await self.get_user_by_email(email)
            if user is None:
                raise BadRequestError(
                    "User not found. Please send a verification code with your "
                    "name and country to register first."
                )

        user.email_verified = True
        await self.db.flush()
        return user

    def _invalid_code_message(self, user_exists: bool) -> str:
        message = "Invalid or expired verification code."
        if user_exists:
            message += " Please request a new code."
            if self.config.master_code_enabled:
                message += (
                    " Or if you have a master code configured, "
                    "make sure you're using it correctly."
                )
        else:
            message += (
                " Please send a verification code first and ensure you've "
                "provided your name and country during registration."
            )
        return message

    # =========================================================================
    # SESSIONS
    # =========================================================================

    async def create_session(self, user_id: str) -> str:
        """Add a session row for ``user_id``; the caller commits."""
        token = generate_session_token()
        self.db.add(
            UserSession(
                token=token,
                user_id=user_id,
                expires_at=self.clock() + self.config.session_ttl,
            )
        )
        await self.db.flush()
        return token

    async def get_session(self, token: Optional[str]) -> Optional[UserSession]:
        return await resolve_session(self.db, token, now=self.clock())

    async def delete_session(self, token: str) -> None:
        await self.db.execute(delete(UserSession).where(UserSession.token == token))
        await self.db.commit()

    # =========================================================================
    # MAINTENANCE
    # =========================================================================

    async def purge_expired_records(self) -> dict[str, int]:
        return await purge_expired_records(self.db, now=self.clock())


async def purge_expired_records(
    db: AsyncSession,
    now: Optional[datetime] = None,
) -> dict[str, int]:
    """
    Delete sessions at or past expiry and codes past expiry.

    Reads never depend on this; it only keeps the tables small.
    """
    now = now or utcnow()

    sessions = await db.execute(
        delete(UserSession)
        .where(UserSession.expires_at <= now)
        .execution_options(synchronize_session=False)
    )
    codes = await db.execute(
        delete(EmailVerificationCode)
        .where(EmailVerificationCode.expires_at < now)
        .execution_options(synchronize_session=False)
    )
    await db.commit()

    purged = {"sessions": sessions.rowcount or 0, "codes": codes.rowcount or 0}
    logger.info(f"Purged {purged['sessions']} sessions and {purged['codes']} codes")
    return purged
