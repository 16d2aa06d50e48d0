from fastapi import APIRouter, Depends

from imgupper.auth.schemas import UserResponse
from imgupper.core.dependencies import DbSession, require_bearer
from imgupper.core.exceptions import NotFoundError
from imgupper.users import service as user_service
from imgupper.users.schemas import MessageResponse, UserCreate, UserUpdate

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(require_bearer)])


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(body: UserCreate, db: DbSession):
    return await user_service.add_user(db, body.name, body.email, body.password)


@router.get("", response_model=list[UserResponse])
async def list_users(db: DbSession):
    return await user_service.list_users(db)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: DbSession):
    user = await user_service.get_user(db, user_id)
    if user is None:
        raise NotFoundError("user not found")
    return user


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(user_id: int, body: UserUpdate, db: DbSession):
    return await user_service.update_user(db, user_id, body.name, body.email)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: int, db: DbSession) -> MessageResponse:
    await user_service.delete_user(db, user_id)
    return MessageResponse(message="User deleted successfully")
