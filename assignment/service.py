from __future__ import annotations
from typing import Optional, List

from fastapi import HTTPException
from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from .models import ReviewAssignment
from .schema import AssignmentCreatePayload, AssignmentUpdate
from reviewcycle.models import ReviewCycle
from user.models import User
from question.models import Question
from feedback.models import Feedback


def _with_people(stmt):
    return stmt.options(
        selectinload(ReviewAssignment.reviewer),
        selectinload(ReviewAssignment.reviewee),
        selectinload(ReviewAssignment.review_cycle),
    )


# LIST with optional filters
def get_assignments(
    db: Session,
    *,
    review_cycle_id: Optional[int] = None,
    reviewer_id: Optional[int] = None,
    reviewee_id: Optional[int] = None,
) -> List[ReviewAssignment]:
    stmt = select(ReviewAssignment)
    if review_cycle_id is not None:
        stmt = stmt.where(ReviewAssignment.review_cycle_id == review_cycle_id)
    if reviewer_id is not None:
        stmt = stmt.where(ReviewAssignment.reviewer_id == reviewer_id)
    if reviewee_id is not None:
        stmt = stmt.where(ReviewAssignment.reviewee_id == reviewee_id)

    stmt = stmt.order_by(ReviewAssignment.created_at.desc(), ReviewAssignment.id.desc())
    return list(db.scalars(_with_people(stmt)))


def get_assignment(db: Session, assignment_id: int) -> ReviewAssignment | None:
    return db.get(ReviewAssignment, assignment_id)


def get_my_assignments(db: Session, reviewer_id: int) -> list[dict]:
    """Assignments where the user is reviewer, with how many questions they answered."""
    rows = list(db.scalars(_with_people(
        select(ReviewAssignment)
        .where(ReviewAssignment.reviewer_id == reviewer_id)
        .order_by(ReviewAssignment.created_at.desc(), ReviewAssignment.id.desc())
    )))
    total_questions = db.scalar(select(func.count(Question.id))) or 0

    answered_by_id = {}
    if rows:
        answered_by_id = dict(db.execute(
            select(Feedback.review_assignment_id, func.count(Feedback.id))
            .where(Feedback.review_assignment_id.in_([r.id for r in rows]))
            .group_by(Feedback.review_assignment_id)
        ).all())

    out = []
    for r in rows:
        answered = answered_by_id.get(r.id, 0)
        out.append({
            "id": r.id,
            "review_cycle_id": r.review_cycle_id,
            "reviewer_id": r.reviewer_id,
            "reviewee_id": r.reviewee_id,
            "relation_type": r.relation_type,
            "created_at": r.created_at,
            "reviewer": r.reviewer,
            "reviewee": r.reviewee,
            "review_cycle": r.review_cycle,
            "answered": answered,
            "total_questions": total_questions,
            "is_complete": total_questions > 0 and answered >= total_questions,
        })
    return out


def create_assignment(db: Session, dto: AssignmentCreatePayload) -> ReviewAssignment:
    if not db.get(ReviewCycle, dto.review_cycle_id):
        raise HTTPException(status_code=404, detail="review cycle not found")
    if not db.get(User, dto.reviewer_id):
        raise HTTPException(status_code=404, detail="reviewer not found")
    if not db.get(User, dto.reviewee_id):
        raise HTTPException(status_code=404, detail="reviewee not found")

    row = ReviewAssignment(
        review_cycle_id=dto.review_cycle_id,
        reviewer_id=dto.reviewer_id,
        reviewee_id=dto.reviewee_id,
        relation_type=dto.relation_type,
    )
    db.add(row)
    # Let IntegrityError bubble; router maps to 409 on duplicate
    db.commit()
    db.refresh(row)
    return row


def update_assignment(db: Session, assignment_id: int, patch: AssignmentUpdate) -> ReviewAssignment:
    row = db.get(ReviewAssignment, assignment_id)
    if not row:
        raise HTTPException(status_code=404, detail="assignment not found")

    data = patch.model_dump(exclude_unset=True, exclude_none=True)
    for k, v in data.items():
        setattr(row, k, v)

    db.commit()
    db.refresh(row)
    return row


def delete_assignment(db: Session, assignment_id: int) -> bool:
    row = db.get(ReviewAssignment, assignment_id)
    if not row:
        return False
    db.delete(row)
    db.commit()
    return True
