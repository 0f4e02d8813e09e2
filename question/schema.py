from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class QuestionCategory(BaseModel):
    id: int
    name: str
    model_config = ConfigDict(from_attributes=True)


class QuestionSchema(BaseModel):
    id: int
    category_id: int
    text: str
    category: Optional[QuestionCategory] = None
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class QuestionCreate(BaseModel):
    category_id: int
    text: str = Field(..., min_length=1)
    model_config = ConfigDict(extra="forbid")


class QuestionUpdate(BaseModel):
    category_id: Optional[int] = None
    text: Optional[str] = Field(None, min_length=1)
