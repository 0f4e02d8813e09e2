from __future__ import annotations
import logging
from typing import Optional, List

from fastapi import HTTPException
from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from assignment.models import ReviewAssignment
from assignment.schema import RelationConfig
from assignment.auto_assign_service import commit_assignments
from .models import ReviewCycle
from .schema import ReviewCycleCreatePayload, ReviewCycleUpdate, GenerateRequest

logger = logging.getLogger(__name__)


def get_review_cycles(db: Session) -> List[dict]:
    counts = (
        select(ReviewAssignment.review_cycle_id, func.count(ReviewAssignment.id).label("n"))
        .group_by(ReviewAssignment.review_cycle_id)
        .subquery()
    )
    rows = db.execute(
        select(ReviewCycle, func.coalesce(counts.c.n, 0))
        .outerjoin(counts, counts.c.review_cycle_id == ReviewCycle.id)
        .order_by(ReviewCycle.created_at.desc(), ReviewCycle.id.desc())
    ).all()

    out = []
    for cycle, n in rows:
        out.append({
            "id": cycle.id,
            "name": cycle.name,
            "start_date": cycle.start_date,
            "end_date": cycle.end_date,
            "config": cycle.config or {},
            "status": cycle.status,
            "created_by": cycle.created_by,
            "created_at": cycle.created_at,
            "assignment_count": n,
        })
    return out


def get_review_cycle(db: Session, cycle_id: int) -> Optional[ReviewCycle]:
    stmt = (
        select(ReviewCycle)
        .where(ReviewCycle.id == cycle_id)
        .options(
            selectinload(ReviewCycle.assignments).selectinload(ReviewAssignment.reviewer),
            selectinload(ReviewCycle.assignments).selectinload(ReviewAssignment.reviewee),
        )
    )
    return db.scalars(stmt).first()


def create_review_cycle(db: Session, payload: ReviewCycleCreatePayload, *, created_by: Optional[int] = None) -> dict:
    """Insert the cycle, then generate or persist the approved assignment subset."""
    cycle = ReviewCycle(
        name=payload.name,
        start_date=payload.start_date,
        end_date=payload.end_date,
        config=payload.config.as_flags(),
        created_by=created_by,
    )
    db.add(cycle)
    db.commit()
    db.refresh(cycle)
    logger.info("review cycle created", extra={"cycle_id": cycle.id, "cycle_name": cycle.name})

    result = commit_assignments(db, cycle.id, payload.config, payload.assignments)
    return _commit_response(cycle.id, payload.config, result)


def generate_for_cycle(db: Session, cycle_id: int, payload: GenerateRequest) -> dict:
    cycle = db.get(ReviewCycle, cycle_id)
    if not cycle:
        raise HTTPException(status_code=404, detail="review cycle not found")

    config = payload.config or RelationConfig.model_validate(cycle.config or {})
    if not config.any_enabled():
        raise HTTPException(status_code=400, detail="at least one relation type must be enabled")

    result = commit_assignments(db, cycle.id, config, payload.assignments)
    return _commit_response(cycle.id, config, result)


def _commit_response(cycle_id: int, config: RelationConfig, result: dict) -> dict:
    return {
        "cycle_id": cycle_id,
        "assignments_requested": result["requested"],
        "assignments_created": result["created"],
        "assignments_skipped": result["skipped"],
        "aborted": result["aborted"],
        "config": config,
    }


def update_review_cycle(db: Session, cycle_id: int, patch: ReviewCycleUpdate) -> Optional[ReviewCycle]:
    cycle = db.get(ReviewCycle, cycle_id)
    if not cycle:
        return None

    data = patch.model_dump(exclude_unset=True, exclude_none=True)
    start = data.get("start_date", cycle.start_date)
    end = data.get("end_date", cycle.end_date)
    if end <= start:
        raise HTTPException(status_code=400, detail="end date must be after start date")

    if "name" in data:
        cycle.name = data["name"]
    cycle.start_date = start
    cycle.end_date = end
    if patch.config is not None:
        cycle.config = patch.config.as_flags()

    db.commit()
    db.refresh(cycle)
    return cycle


def delete_review_cycle(db: Session, cycle_id: int) -> bool:
    cycle = db.get(ReviewCycle, cycle_id)
    if not cycle:
        return False
    db.delete(cycle)
    db.commit()
    return True
