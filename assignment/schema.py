from __future__ import annotations
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from user.schemas import UserBrief
from .models import RelationType


class RelationConfig(BaseModel):
    """Which relation types the generator emits. Serialized with the key ``self``."""
    self_review: bool = Field(False, alias="self")
    manager: bool = False
    subordinate: bool = False
    peer: bool = False
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def any_enabled(self) -> bool:
        return self.self_review or self.manager or self.subordinate or self.peer

    def as_flags(self) -> dict:
        return self.model_dump(by_alias=True)


class CycleBrief(BaseModel):
    id: int
    name: str
    start_date: date
    end_date: date
    model_config = ConfigDict(from_attributes=True)


class AssignmentSchema(BaseModel):
    id: int
    review_cycle_id: int
    reviewer_id: int
    reviewee_id: int
    relation_type: RelationType
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class AssignmentDetailSchema(AssignmentSchema):
    reviewer: Optional[UserBrief] = None
    reviewee: Optional[UserBrief] = None
    review_cycle: Optional[CycleBrief] = None


class MyAssignmentSchema(AssignmentDetailSchema):
    answered: int = 0
    total_questions: int = 0
    is_complete: bool = False


# PUBLIC payload from clients
class AssignmentCreatePayload(BaseModel):
    review_cycle_id: int
    reviewer_id: int
    reviewee_id: int
    relation_type: RelationType
    model_config = ConfigDict(extra="forbid")


class AssignmentUpdate(BaseModel):
    relation_type: Optional[RelationType] = None
    model_config = ConfigDict(extra="forbid")


# A tuple sent back from a preview; display fields are tolerated and ignored
class ProposedAssignmentPayload(BaseModel):
    reviewer_id: int
    reviewee_id: int
    relation_type: RelationType
    enabled: bool = True
    model_config = ConfigDict(extra="ignore")


class PreviewAssignment(BaseModel):
    reviewer_id: int
    reviewer_name: str
    reviewer_email: str
    reviewee_id: int
    reviewee_name: str
    reviewee_email: str
    relation_type: RelationType
    enabled: bool = True


class PreviewResponse(BaseModel):
    config: RelationConfig
    total: int
    assignments: list[PreviewAssignment]

