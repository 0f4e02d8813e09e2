from __future__ import annotations
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from assignment.schema import AssignmentDetailSchema
from .models import MIN_SCORE, MAX_SCORE


class FeedbackQuestion(BaseModel):
    id: int
    text: str
    category_id: int
    model_config = ConfigDict(from_attributes=True)


class FeedbackSchema(BaseModel):
    id: int
    review_assignment_id: int
    question_id: int
    score: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class FeedbackDetailSchema(FeedbackSchema):
    question: Optional[FeedbackQuestion] = None
    review_assignment: Optional[AssignmentDetailSchema] = None


# PUBLIC payload, one answer to one question
class FeedbackSubmitPayload(BaseModel):
    review_assignment_id: int
    question_id: int
    score: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE)
    comment: Optional[str] = None
    model_config = ConfigDict(extra="forbid")


class FeedbackUpdate(BaseModel):
    score: Optional[int] = Field(None, ge=MIN_SCORE, le=MAX_SCORE)
    comment: Optional[str] = None
    model_config = ConfigDict(extra="forbid")


class FeedbackResetResult(BaseModel):
    message: str
    deleted: int
