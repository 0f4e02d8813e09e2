from pydantic import BaseModel, EmailStr, ConfigDict, Field
from typing import Optional

from user.models import UserRole
from user.schemas import UserDetailSchema


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    model_config = ConfigDict(extra="forbid")


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserDetailSchema


class RegisterPayload(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.EMPLOYEE
    manager_id: Optional[int] = None
    model_config = ConfigDict(extra="forbid")
