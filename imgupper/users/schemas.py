from pydantic import BaseModel


class UserCreate(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""


class UserUpdate(BaseModel):
    name: str = ""
    email: str = ""


class MessageResponse(BaseModel):
    message: str
