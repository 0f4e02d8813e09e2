from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class CategoryQuestion(BaseModel):
    id: int
    text: str
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class CategorySchema(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class CategoryWithQuestions(CategorySchema):
    questions: list[CategoryQuestion] = []


# PUBLIC payload
class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    model_config = ConfigDict(extra="forbid")


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
