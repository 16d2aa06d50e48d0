from datetime import timedelta

from fastapi import APIRouter

from imgupper.auth import service
from imgupper.auth.schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from imgupper.core.dependencies import AppSettings, DbSession

router = APIRouter(prefix="/auth", tags=["auth"])


def _to_response(result: service.AuthResult) -> AuthResponse:
    return AuthResponse(
        token=result.token,
        expires_at=result.expires_at,
        user=UserResponse.model_validate(result.user),
    )


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(body: RegisterRequest, db: DbSession, settings: AppSettings) -> AuthResponse:
    result = await service.register_user(
        db,
        body.name,
        body.email,
        body.password,
        secret=settings.secret_key,
        ttl=timedelta(minutes=settings.access_token_expire_minutes),
        algorithm=settings.algorithm,
    )
    return _to_response(result)


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, db: DbSession, settings: AppSettings) -> AuthResponse:
    result = await service.authenticate_user(
        db,
        body.email,
        body.password,
        secret=settings.secret_key,
        ttl=timedelta(minutes=settings.access_token_expire_minutes),
        algorithm=settings.algorithm,
    )
    return _to_response(result)
