from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import require_admin, is_admin
from assignment.models import ReviewAssignment
from .schema import (
    FeedbackSchema,
    FeedbackDetailSchema,
    FeedbackSubmitPayload,
    FeedbackUpdate,
    FeedbackResetResult,
    )
from . import service

feedback_router = APIRouter(prefix="/feedbacks", tags=["Feedback"])


def _owned_or_admin(row, user, action: str):
    if row.review_assignment.reviewer_id != user.id and not is_admin(user):
        raise HTTPException(status_code=403, detail=f"not allowed to {action} this feedback")


# Submit or overwrite an answer
@feedback_router.post("", response_model=FeedbackSchema)
def submit(payload: FeedbackSubmitPayload, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    return service.submit_feedback(db, user.id, payload)

# Wipe feedback, optionally for one cycle
@feedback_router.post("/reset", response_model=FeedbackResetResult)
def feedback_reset(
    review_cycle_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    deleted = service.reset_feedback(db, review_cycle_id=review_cycle_id)
    return {"message": "feedback reset", "deleted": deleted}

# Answers for one assignment
@feedback_router.get("/assignment/{assignment_id}", response_model=list[FeedbackDetailSchema])
def for_assignment(assignment_id: int, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    assignment = db.get(ReviewAssignment, assignment_id)
    if not assignment:
        raise HTTPException(status_code=404, detail="assignment not found")
    if assignment.reviewer_id != user.id and not is_admin(user):
        raise HTTPException(status_code=403, detail="not allowed to view this feedback")
    return service.get_feedback_for_assignment(db, assignment_id)

# All feedback, newest first (admin)
@feedback_router.get("", response_model=list[FeedbackDetailSchema])
def list_feedbacks(
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    return service.list_feedbacks(db, limit=limit)

# Single feedback
@feedback_router.get("/{feedback_id}", response_model=FeedbackDetailSchema)
def feedback_detail(feedback_id: int, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    obj = service.get_feedback(db, feedback_id)
    if not obj:
        raise HTTPException(status_code=404, detail="feedback not found")
    _owned_or_admin(obj, user, "view")
    return obj

# Update feedback
@feedback_router.patch("/{feedback_id}", response_model=FeedbackSchema)
def feedback_patch(
    feedback_id: int,
    payload: FeedbackUpdate,
    db: Session = Depends(get_db),
    user = Depends(get_current_active_user),
    ):
    obj = service.get_feedback(db, feedback_id)
    if not obj:
        raise HTTPException(status_code=404, detail="feedback not found")
    _owned_or_admin(obj, user, "update")
    return service.update_feedback(db, feedback_id, payload)

# Delete feedback
@feedback_router.delete("/{feedback_id}")
def feedback_delete(feedback_id: int, db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    obj = service.get_feedback(db, feedback_id)
    if not obj:
        raise HTTPException(status_code=404, detail="feedback not found")
    _owned_or_admin(obj, user, "delete")
    service.delete_feedback(db, feedback_id)
    return {"message": "feedback deleted"}
