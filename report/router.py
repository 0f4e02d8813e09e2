from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from core.database import get_db
from authz.deps import require_admin
from assignment.models import RelationType
from .schema import CategoryScore, DetailedReport, SummaryReport, PairScore
from . import service

report_router = APIRouter(prefix="/reports", tags=["Reports"], dependencies=[Depends(require_admin)])


@report_router.get("/scores-by-category", response_model=list[CategoryScore])
def scores_by_category(
    reviewee_id: Optional[int] = Query(None),
    review_cycle_id: Optional[int] = Query(None),
    relation_type: Optional[RelationType] = Query(None),
    db: Session = Depends(get_db),
    ):
    return service.scores_by_category(
        db,
        reviewee_id=reviewee_id,
        review_cycle_id=review_cycle_id,
        relation_type=relation_type,
    )


@report_router.get("/detailed", response_model=DetailedReport)
def detailed(
    reviewee_id: Optional[int] = Query(None),
    review_cycle_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    ):
    if reviewee_id is None or review_cycle_id is None:
        raise HTTPException(status_code=400, detail="reviewee_id and review_cycle_id are required")
    return service.detailed_report(db, reviewee_id=reviewee_id, review_cycle_id=review_cycle_id)


@report_router.get("/summary", response_model=SummaryReport)
def summary(review_cycle_id: Optional[int] = Query(None), db: Session = Depends(get_db)):
    return service.summary(db, review_cycle_id=review_cycle_id)


@report_router.get("/pairs", response_model=list[PairScore])
def pairs(review_cycle_id: Optional[int] = Query(None), db: Session = Depends(get_db)):
    return service.pair_scores(db, review_cycle_id=review_cycle_id)


# Category breakdown for one reviewer -> reviewee pair
@report_router.get("/pair-categories", response_model=list[CategoryScore])
def pair_categories(
    reviewer_id: Optional[int] = Query(None),
    reviewee_id: Optional[int] = Query(None),
    review_cycle_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    ):
    if reviewer_id is None or reviewee_id is None:
        raise HTTPException(status_code=400, detail="reviewer_id and reviewee_id are required")
    return service.scores_by_category(
        db,
        reviewer_id=reviewer_id,
        reviewee_id=reviewee_id,
        review_cycle_id=review_cycle_id,
    )
