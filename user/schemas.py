from __future__ import annotations
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, ConfigDict, Field

from .models import UserRole


class UserBrief(BaseModel):
    id: int
    name: str
    email: EmailStr
    model_config = ConfigDict(from_attributes=True)


class DepartmentBrief(BaseModel):
    id: int
    name: str
    model_config = ConfigDict(from_attributes=True)


class UserSchema(BaseModel):
    id: int
    name: str
    email: EmailStr
    role: UserRole
    is_active: bool = True
    manager_id: Optional[int] = None
    department_id: Optional[int] = None
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class UserDetailSchema(UserSchema):
    manager: Optional[UserBrief] = None
    department: Optional[DepartmentBrief] = None
    subordinates: list[UserBrief] = []


# INTERNAL DTO for the service
class UserCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.EMPLOYEE
    manager_id: Optional[int] = None
    department_id: Optional[int] = None
