from dataclasses import dataclass
from typing import Annotated, AsyncIterator

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from imgupper.config import Settings
from imgupper.core.exceptions import AuthError, InternalError
from imgupper.core.security import verify_token
from imgupper.storage.client import ObjectStorage


@dataclass(frozen=True)
class Identity:
    user_id: int
    email: str


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.session_factory() as session:
        yield session


def get_storage(request: Request) -> ObjectStorage:
    return request.app.state.storage


AppSettings = Annotated[Settings, Depends(get_settings)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
Storage = Annotated[ObjectStorage, Depends(get_storage)]


def parse_bearer(authorization: str | None) -> str:
    if not authorization:
        raise AuthError("authorization header required")
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise AuthError("authorization header format must be Bearer {token}")
    return parts[1]


async def require_bearer(
    request: Request,
    settings: AppSettings,
    authorization: Annotated[str | None, Header()] = None,
) -> None:
    """Router-level guard: verifies the token and records the caller."""
    token = parse_bearer(authorization)
    claims = verify_token(token, settings.secret_key, settings.algorithm)
    request.state.identity = Identity(user_id=claims.user_id, email=claims.email)


def get_identity(request: Request) -> Identity:
    identity = getattr(request.state, "identity", None)
    if not isinstance(identity, Identity):
        # Route was mounted without require_bearer
        raise InternalError("user not found in request context")
    return identity


CurrentIdentity = Annotated[Identity, Depends(get_identity)]
