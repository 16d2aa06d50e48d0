"""User store and profile validation."""
import logging
import re

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from imgupper.auth.models import User
from imgupper.core.exceptions import ConflictError, NotFoundError, PersistenceError, ValidationError
from imgupper.core.security import hash_password

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}")
DUPLICATE_EMAIL = "user with this email already exists"


def validate_profile(name: str, email: str) -> None:
    if not name:
        raise ValidationError("name is required")
    if len(name) < 3:
        raise ValidationError("name must be at least 3 characters")
    if not email:
        raise ValidationError("email is required")
    if EMAIL_PATTERN.fullmatch(email) is None:
        raise ValidationError("invalid email format")


def validate_password(password: str) -> None:
    if not password:
        raise ValidationError("password is required")
    if len(password) < 6:
        raise ValidationError("password must be at least 6 characters")


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def email_exists(db: AsyncSession, email: str) -> bool:
    result = await db.execute(select(exists().where(User.email == email)))
    return bool(result.scalar())


async def user_exists(db: AsyncSession, user_id: int) -> bool:
    result = await db.execute(select(exists().where(User.id == user_id)))
    return bool(result.scalar())


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.id))
    return list(result.scalars().all())


async def create_user(db: AsyncSession, name: str, email: str, hashed_password: str) -> User:
    """Insert a user whose password is already hashed."""
    user = User(name=name, email=email, password=hashed_password)
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent registration for the same email
        await db.rollback()
        raise ConflictError(DUPLICATE_EMAIL) from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("failed to create user email=%s: %s", email, exc)
        raise PersistenceError("failed to create user", detail=str(exc)) from exc
    await db.refresh(user)
    return user


async def add_user(db: AsyncSession, name: str, email: str, password: str) -> User:
    """Validate, hash and insert a new user."""
    validate_profile(name, email)
    validate_password(password)
    if await email_exists(db, email):
        raise ConflictError(DUPLICATE_EMAIL)
    return await create_user(db, name, email, hash_password(password))


async def update_user(db: AsyncSession, user_id: int, name: str, email: str) -> User:
    validate_profile(name, email)
    user = await get_user(db, user_id)
    if user is None:
        raise NotFoundError("user not found")

    user.name = name
    user.email = email
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError(DUPLICATE_EMAIL) from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("failed to update user id=%s: %s", user_id, exc)
        raise PersistenceError("failed to update user", detail=str(exc)) from exc
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user_id: int) -> None:
    user = await get_user(db, user_id)
    if user is None:
        raise NotFoundError("user not found")
    await db.delete(user)
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("failed to delete user id=%s: %s", user_id, exc)
        raise PersistenceError("failed to delete user", detail=str(exc)) from exc
