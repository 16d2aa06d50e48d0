from datetime import datetime

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    # Rules are checked by the service so the first failing one is reported
    name: str = ""
    email: str = ""
    password: str = ""


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class UserResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    # Never expose password


class AuthResponse(BaseModel):
    token: str
    expires_at: datetime
    user: UserResponse
