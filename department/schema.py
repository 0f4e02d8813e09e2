from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class DepartmentSchema(BaseModel):
    id: int
    name: str
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class DepartmentCreate(BaseModel):
    name: str = Field(..., min_length=1)
    model_config = ConfigDict(extra="forbid")


class DepartmentUpdate(BaseModel):
    name: str = Field(..., min_length=1)
