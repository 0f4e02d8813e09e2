from __future__ import annotations
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from assignment.schema import RelationConfig, ProposedAssignmentPayload, AssignmentDetailSchema
from .models import CycleStatus


def _check_window(start: date, end: date) -> None:
    if end <= start:
        raise ValueError("end_date must be after start_date")


def _check_config(config: RelationConfig) -> None:
    if not config.any_enabled():
        raise ValueError("at least one relation type must be enabled")


class ReviewCycleSchema(BaseModel):
    id: int
    name: str
    start_date: date
    end_date: date
    config: dict = {}
    status: CycleStatus
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class ReviewCycleListItem(ReviewCycleSchema):
    assignment_count: int = 0


class ReviewCycleDetailSchema(ReviewCycleSchema):
    assignments: list[AssignmentDetailSchema] = []


class PreviewRequest(BaseModel):
    start_date: date
    end_date: date
    config: RelationConfig
    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _validate(self):
        _check_window(self.start_date, self.end_date)
        _check_config(self.config)
        return self


# PUBLIC payload: create a cycle and its assignments in one call
class ReviewCycleCreatePayload(BaseModel):
    name: str = Field(..., min_length=1)
    start_date: date
    end_date: date
    config: RelationConfig
    assignments: Optional[list[ProposedAssignmentPayload]] = None
    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _validate(self):
        _check_window(self.start_date, self.end_date)
        _check_config(self.config)
        return self


class GenerateRequest(BaseModel):
    config: Optional[RelationConfig] = None
    assignments: Optional[list[ProposedAssignmentPayload]] = None
    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _validate(self):
        if self.config is not None:
            _check_config(self.config)
        return self


class ReviewCycleUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    config: Optional[RelationConfig] = None
    model_config = ConfigDict(extra="forbid")


class CycleCommitResponse(BaseModel):
    cycle_id: int
    assignments_requested: int
    assignments_created: int
    assignments_skipped: int
    aborted: bool = False
    config: RelationConfig
