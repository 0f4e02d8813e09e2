from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional

from user.schemas import UserDetailSchema


class EmployeeSchema(UserDetailSchema):
    pass


# PUBLIC payload, what clients send
class EmployeeCreatePayload(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    manager_id: Optional[int] = None
    department_id: Optional[int] = None
    model_config = ConfigDict(extra="forbid")


# Fields left out are untouched; an explicit null clears manager/department
class EmployeeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    manager_id: Optional[int] = None
    department_id: Optional[int] = None
    model_config = ConfigDict(extra="forbid")


class EmployeeResetResult(BaseModel):
    message: str
    employees_deleted: int
    assignments_deleted: int = 0
    feedback_deleted: int = 0
    review_cycles_deleted: int = 0
