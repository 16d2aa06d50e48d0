from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import jwt
from jose.exceptions import JOSEError

from imgupper.core.exceptions import InternalError, InvalidTokenError, SigningError


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    email: str
    issued_at: datetime
    not_before: datetime
    expires_at: datetime


def hash_password(password: str) -> str:
    try:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()
    except ValueError as exc:
        raise InternalError() from exc


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode(), hashed.encode())
    except ValueError:
        # Malformed stored hash or over-long input never matches
        return False


def issue_token(
    user_id: int,
    email: str,
    secret: str,
    ttl: timedelta,
    algorithm: str = "HS256",
) -> tuple[str, datetime]:
    """Sign a token for the user. Returns the token and its expiry."""
    now = datetime.now(timezone.utc)
    expires_at = now + ttl
    payload = {
        "user_id": user_id,
        "email": email,
        "iat": now,
        "nbf": now,
        "exp": expires_at,
    }
    try:
        token = jwt.encode(payload, secret, algorithm=algorithm)
    except JOSEError as exc:
        raise SigningError() from exc
    return token, expires_at


def _timestamp(payload: dict, claim: str) -> datetime:
    value = payload.get(claim)
    if not isinstance(value, (int, float)):
        raise InvalidTokenError()
    return datetime.fromtimestamp(value, tz=timezone.utc)


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> TokenClaims:
    """Verify signature and time bounds. Every failure is InvalidTokenError."""
    try:
        header = jwt.get_unverified_header(token)
        if not str(header.get("alg", "")).startswith("HS"):
            raise InvalidTokenError()
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JOSEError as exc:
        raise InvalidTokenError() from exc

    user_id = payload.get("user_id")
    email = payload.get("email")
    if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(email, str):
        raise InvalidTokenError()

    return TokenClaims(
        user_id=user_id,
        email=email,
        issued_at=_timestamp(payload, "iat"),
        not_before=_timestamp(payload, "nbf"),
        expires_at=_timestamp(payload, "exp"),
    )
