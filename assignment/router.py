from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import require_admin, is_admin

from .schema import (
    AssignmentSchema,
    AssignmentDetailSchema,
    MyAssignmentSchema,
    AssignmentCreatePayload,
    AssignmentUpdate,
    )
from . import service


assignment_router = APIRouter(prefix="/assignments", tags=["Assignments"])

# List assignments (admin). Optional filters.
@assignment_router.get("", response_model=list[AssignmentDetailSchema])
def list_assignments(
    review_cycle_id: Optional[int] = Query(None),
    reviewer_id: Optional[int] = Query(None),
    reviewee_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    return service.get_assignments(
        db,
        review_cycle_id=review_cycle_id,
        reviewer_id=reviewer_id,
        reviewee_id=reviewee_id,
    )

# Assignments the caller has to fill in
@assignment_router.get("/my-assignments", response_model=list[MyAssignmentSchema])
def my_assignments(db: Session = Depends(get_db), user = Depends(get_current_active_user)):
    return service.get_my_assignments(db, user.id)

# Single assignment, reviewer or admin
@assignment_router.get("/{assignment_id}", response_model=AssignmentDetailSchema)
def get_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    user = Depends(get_current_active_user),
    ):
    obj = service.get_assignment(db, assignment_id)
    if not obj:
        raise HTTPException(status_code=404, detail="assignment not found")
    if obj.reviewer_id != user.id and not is_admin(user):
        raise HTTPException(status_code=403, detail="not allowed to view this assignment")
    return obj

# Manual create (admin only)
@assignment_router.post("", response_model=AssignmentSchema, status_code=status.HTTP_201_CREATED)
def create_assignment(
    payload: AssignmentCreatePayload,
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    try:
        return service.create_assignment(db, payload)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="assignment already exists")

# Change relation type (admin only)
@assignment_router.patch("/{assignment_id}", response_model=AssignmentSchema)
def update_assignment(
    assignment_id: int,
    payload: AssignmentUpdate,
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    if not service.get_assignment(db, assignment_id):
        raise HTTPException(status_code=404, detail="assignment not found")
    try:
        return service.update_assignment(db, assignment_id, payload)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="assignment already exists")

# Delete assignment (admin only)
@assignment_router.delete("/{assignment_id}")
def delete_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    if not service.get_assignment(db, assignment_id):
        raise HTTPException(status_code=404, detail="assignment not found")
    service.delete_assignment(db, assignment_id)
    return {"message": "assignment deleted"}
