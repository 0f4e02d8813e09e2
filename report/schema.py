from __future__ import annotations
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from user.schemas import UserBrief
from assignment.models import RelationType
from assignment.schema import CycleBrief


class CategoryScore(BaseModel):
    category_id: int
    category_name: str
    average: float
    total_responses: int


class ReportResponse(BaseModel):
    question_id: int
    question_text: str
    score: int
    comment: Optional[str] = None
    reviewer: UserBrief
    created_at: Optional[datetime] = None


class RelationReport(BaseModel):
    relation_type: RelationType
    average_score: float
    total_responses: int
    feedbacks: list[ReportResponse] = []


class CategoryReport(BaseModel):
    category_id: int
    category_name: str
    relations: list[RelationReport] = []


class DetailedReport(BaseModel):
    reviewee: Optional[UserBrief] = None
    review_cycle: Optional[CycleBrief] = None
    categories: list[CategoryReport] = []


class RelationTypeCount(BaseModel):
    relation_type: RelationType
    count: int


class OverallStats(BaseModel):
    total_employees: int
    total_review_cycles: int
    total_categories: int
    total_questions: int


class SummaryReport(BaseModel):
    total_assignments: int
    completed_assignments: int
    total_feedbacks: int
    average_score: float
    completion_rate: float
    relation_type_stats: list[RelationTypeCount] = []
    overall_stats: OverallStats


class PairScore(BaseModel):
    reviewer_id: int
    reviewer_name: str
    reviewee_id: int
    reviewee_name: str
    average: float
    total_responses: int
