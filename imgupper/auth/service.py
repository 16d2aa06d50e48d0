import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncSession

from imgupper.auth.models import User
from imgupper.core.exceptions import AuthError, ValidationError
from imgupper.core.security import hash_password, issue_token, verify_password
from imgupper.users import service as user_service

logger = logging.getLogger(__name__)


@lru_cache
def _unknown_user_hash() -> str:
    """Stand-in hash checked when no account matches the email."""
    return hash_password("imgupper-unknown-user")


@dataclass(frozen=True)
class AuthResult:
    token: str
    expires_at: datetime
    user: User


async def register_user(
    db: AsyncSession,
    name: str,
    email: str,
    password: str,
    *,
    secret: str,
    ttl: timedelta,
    algorithm: str = "HS256",
) -> AuthResult:
    user = await user_service.add_user(db, name, email, password)
    token, expires_at = issue_token(user.id, user.email, secret, ttl, algorithm)
    logger.info("registered user id=%s", user.id)
    return AuthResult(token=token, expires_at=expires_at, user=user)


async def authenticate_user(
    db: AsyncSession,
    email: str,
    password: str,
    *,
    secret: str,
    ttl: timedelta,
    algorithm: str = "HS256",
) -> AuthResult:
    """Returns a fresh token for valid credentials or raises AuthError.

    Unknown email and wrong password raise the same error.
    """
    if not email:
        raise ValidationError("email is required")
    if not password:
        raise ValidationError("password is required")

    user = await user_service.get_user_by_email(db, email)
    stored_hash = user.password if user is not None else _unknown_user_hash()
    if not verify_password(password, stored_hash) or user is None:
        logger.info("failed login attempt")
        raise AuthError()

    token, expires_at = issue_token(user.id, user.email, secret, ttl, algorithm)
    return AuthResult(token=token, expires_at=expires_at, user=user)
