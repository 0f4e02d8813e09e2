from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import require_admin
from assignment.schema import PreviewResponse
from assignment.auto_assign_service import preview_assignments
from .schema import (
    ReviewCycleSchema,
    ReviewCycleListItem,
    ReviewCycleDetailSchema,
    ReviewCycleCreatePayload,
    ReviewCycleUpdate,
    PreviewRequest,
    GenerateRequest,
    CycleCommitResponse,
    )
from . import service

reviewcycle_router = APIRouter(prefix="/review-cycles", tags=["Review Cycles"])

# Dry run: what the generator would create, nothing is written
@reviewcycle_router.post("/preview", response_model=PreviewResponse)
def preview(payload: PreviewRequest, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    return preview_assignments(db, payload.config)

# List cycles
@reviewcycle_router.get("", response_model=list[ReviewCycleListItem])
def list_review_cycles(db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    return service.get_review_cycles(db)

# Get cycle with its assignments
@reviewcycle_router.get("/{cycle_id}", response_model=ReviewCycleDetailSchema)
def review_cycle_detail(cycle_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    obj = service.get_review_cycle(db, cycle_id)
    if not obj:
        raise HTTPException(status_code=404, detail="review cycle not found")
    return obj

# Create cycle and commit assignments
@reviewcycle_router.post("", response_model=CycleCommitResponse, status_code=status.HTTP_201_CREATED)
def review_cycle_post(
    payload: ReviewCycleCreatePayload,
    db: Session = Depends(get_db),
    admin = Depends(require_admin),
    ):
    return service.create_review_cycle(db, payload, created_by=admin.id)

# Generate (again) for an existing cycle
@reviewcycle_router.post("/{cycle_id}/generate", response_model=CycleCommitResponse)
def review_cycle_generate(
    cycle_id: int,
    payload: GenerateRequest,
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    return service.generate_for_cycle(db, cycle_id, payload)

# Update cycle
@reviewcycle_router.patch("/{cycle_id}", response_model=ReviewCycleSchema)
def review_cycle_patch(
    cycle_id: int,
    payload: ReviewCycleUpdate,
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    obj = service.update_review_cycle(db, cycle_id, payload)
    if not obj:
        raise HTTPException(status_code=404, detail="review cycle not found")
    return obj

# Delete cycle, its assignments and feedback go with it
@reviewcycle_router.delete("/{cycle_id}")
def review_cycle_delete(cycle_id: int, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    if not service.delete_review_cycle(db, cycle_id):
        raise HTTPException(status_code=404, detail="review cycle not found")
    return {"message": "review cycle deleted"}
