from __future__ import annotations
import logging
from datetime import date
from typing import Optional, List

from fastapi import HTTPException
from sqlalchemy import select, delete
from sqlalchemy.orm import Session, selectinload

from assignment.models import ReviewAssignment
from question.models import Question
from .models import Feedback
from .schema import FeedbackSubmitPayload, FeedbackUpdate

logger = logging.getLogger(__name__)


def _ensure_cycle_open(assignment: ReviewAssignment, today: Optional[date] = None) -> None:
    if not assignment.review_cycle.is_open(today):
        raise HTTPException(status_code=400, detail="review cycle is not active")


def submit_feedback(
    db: Session,
    reviewer_id: int,
    payload: FeedbackSubmitPayload,
    *,
    today: Optional[date] = None,
) -> Feedback:
    """Create or overwrite the reviewer's answer for (assignment, question)."""
    assignment = db.scalars(
        select(ReviewAssignment).where(
            ReviewAssignment.id == payload.review_assignment_id,
            ReviewAssignment.reviewer_id == reviewer_id,
        )
    ).first()
    if not assignment:
        raise HTTPException(status_code=404, detail="assignment not found or not assigned to you")

    if not db.get(Question, payload.question_id):
        raise HTTPException(status_code=404, detail="question not found")

    _ensure_cycle_open(assignment, today)

    row = db.scalars(
        select(Feedback).where(
            Feedback.review_assignment_id == payload.review_assignment_id,
            Feedback.question_id == payload.question_id,
        )
    ).first()
    if row:
        row.score = payload.score
        row.comment = payload.comment
    else:
        row = Feedback(
            review_assignment_id=payload.review_assignment_id,
            question_id=payload.question_id,
            score=payload.score,
            comment=payload.comment,
        )
        db.add(row)

    db.commit()
    db.refresh(row)
    return row


def get_feedback_for_assignment(db: Session, assignment_id: int) -> List[Feedback]:
    stmt = (
        select(Feedback)
        .where(Feedback.review_assignment_id == assignment_id)
        .options(selectinload(Feedback.question))
        .order_by(Feedback.question_id.asc())
    )
    return list(db.scalars(stmt))


def list_feedbacks(db: Session, *, limit: Optional[int] = None) -> List[Feedback]:
    stmt = (
        select(Feedback)
        .options(
            selectinload(Feedback.question),
            selectinload(Feedback.review_assignment).selectinload(ReviewAssignment.reviewer),
            selectinload(Feedback.review_assignment).selectinload(ReviewAssignment.reviewee),
        )
        .order_by(Feedback.created_at.desc(), Feedback.id.desc())
    )
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(db.scalars(stmt))


def get_feedback(db: Session, feedback_id: int) -> Optional[Feedback]:
    return db.get(Feedback, feedback_id)


def update_feedback(db: Session, feedback_id: int, patch: FeedbackUpdate) -> Feedback:
    row = db.get(Feedback, feedback_id)
    if not row:
        raise HTTPException(status_code=404, detail="feedback not found")

    data = patch.model_dump(exclude_unset=True)
    if data.get("score") is not None:
        row.score = data["score"]
    if "comment" in data:
        row.comment = data["comment"]

    db.commit()
    db.refresh(row)
    return row


def delete_feedback(db: Session, feedback_id: int) -> bool:
    row = db.get(Feedback, feedback_id)
    if not row:
        return False
    db.delete(row)
    db.commit()
    return True


def reset_feedback(db: Session, *, review_cycle_id: Optional[int] = None) -> int:
    stmt = delete(Feedback)
    if review_cycle_id is not None:
        stmt = stmt.where(
            Feedback.review_assignment_id.in_(
                select(ReviewAssignment.id).where(ReviewAssignment.review_cycle_id == review_cycle_id)
            )
        )
    deleted = db.execute(stmt).rowcount or 0
    db.commit()
    logger.warning("feedback reset", extra={"review_cycle_id": review_cycle_id, "deleted": deleted})
    return deleted
