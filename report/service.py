from __future__ import annotations
from typing import Optional

from sqlalchemy import select, func, distinct
from sqlalchemy.orm import Session, aliased

from assignment.models import ReviewAssignment, RelationType
from category.models import Category
from feedback.models import Feedback
from question.models import Question
from reviewcycle.models import ReviewCycle
from user.models import User, UserRole


def _avg(value) -> float:
    return float(value) if value is not None else 0.0


def _assignment_filters(stmt, *, review_cycle_id=None, reviewer_id=None, reviewee_id=None, relation_type=None):
    if review_cycle_id is not None:
        stmt = stmt.where(ReviewAssignment.review_cycle_id == review_cycle_id)
    if reviewer_id is not None:
        stmt = stmt.where(ReviewAssignment.reviewer_id == reviewer_id)
    if reviewee_id is not None:
        stmt = stmt.where(ReviewAssignment.reviewee_id == reviewee_id)
    if relation_type is not None:
        stmt = stmt.where(ReviewAssignment.relation_type == relation_type)
    return stmt


def scores_by_category(
    db: Session,
    *,
    reviewee_id: Optional[int] = None,
    review_cycle_id: Optional[int] = None,
    relation_type: Optional[RelationType] = None,
    reviewer_id: Optional[int] = None,
) -> list[dict]:
    stmt = (
        select(
            Category.id,
            Category.name,
            func.avg(Feedback.score),
            func.count(Feedback.id),
        )
        .join(Question, Question.category_id == Category.id)
        .join(Feedback, Feedback.question_id == Question.id)
        .join(ReviewAssignment, ReviewAssignment.id == Feedback.review_assignment_id)
    )
    stmt = _assignment_filters(
        stmt,
        review_cycle_id=review_cycle_id,
        reviewer_id=reviewer_id,
        reviewee_id=reviewee_id,
        relation_type=relation_type,
    )
    stmt = stmt.group_by(Category.id, Category.name).order_by(Category.name.asc())

    return [
        {"category_id": cid, "category_name": name, "average": _avg(avg), "total_responses": n}
        for cid, name, avg, n in db.execute(stmt).all()
    ]


def detailed_report(db: Session, *, reviewee_id: int, review_cycle_id: int) -> dict:
    """
    Every answer a reviewee received in a cycle, grouped by category and then
    by relation type, with per-group averages.
    """
    reviewer = aliased(User)
    stmt = (
        select(Feedback, Question, Category, ReviewAssignment.relation_type, reviewer)
        .join(Question, Question.id == Feedback.question_id)
        .join(Category, Category.id == Question.category_id)
        .join(ReviewAssignment, ReviewAssignment.id == Feedback.review_assignment_id)
        .join(reviewer, reviewer.id == ReviewAssignment.reviewer_id)
        .where(
            ReviewAssignment.reviewee_id == reviewee_id,
            ReviewAssignment.review_cycle_id == review_cycle_id,
        )
        .order_by(Category.name.asc(), ReviewAssignment.relation_type.asc(), Feedback.id.asc())
    )

    categories: dict[int, dict] = {}
    for fb, question, category, relation_type, who in db.execute(stmt).all():
        cat = categories.setdefault(category.id, {
            "category_id": category.id,
            "category_name": category.name,
            "relations": {},
        })
        rel = cat["relations"].setdefault(relation_type, {
            "relation_type": relation_type,
            "feedbacks": [],
        })
        rel["feedbacks"].append({
            "question_id": question.id,
            "question_text": question.text,
            "score": fb.score,
            "comment": fb.comment,
            "reviewer": who,
            "created_at": fb.created_at,
        })

    out = []
    for cat in categories.values():
        relations = []
        for rel in cat["relations"].values():
            scores = [f["score"] for f in rel["feedbacks"]]
            rel["total_responses"] = len(scores)
            rel["average_score"] = sum(scores) / len(scores)
            relations.append(rel)
        out.append({**cat, "relations": relations})

    return {
        "reviewee": db.get(User, reviewee_id),
        "review_cycle": db.get(ReviewCycle, review_cycle_id),
        "categories": out,
    }


def summary(db: Session, *, review_cycle_id: Optional[int] = None) -> dict:
    assignments = _assignment_filters(select(func.count(ReviewAssignment.id)), review_cycle_id=review_cycle_id)
    total_assignments = db.scalar(assignments) or 0

    completed = db.scalar(
        _assignment_filters(
            select(func.count(distinct(ReviewAssignment.id)))
            .select_from(ReviewAssignment)
            .join(Feedback, Feedback.review_assignment_id == ReviewAssignment.id),
            review_cycle_id=review_cycle_id,
        )
    ) or 0

    feedback_stats = _assignment_filters(
        select(func.count(Feedback.id), func.avg(Feedback.score))
        .select_from(Feedback)
        .join(ReviewAssignment, ReviewAssignment.id == Feedback.review_assignment_id),
        review_cycle_id=review_cycle_id,
    )
    total_feedbacks, average = db.execute(feedback_stats).one()

    by_relation = db.execute(
        _assignment_filters(
            select(ReviewAssignment.relation_type, func.count(ReviewAssignment.id)),
            review_cycle_id=review_cycle_id,
        )
        .group_by(ReviewAssignment.relation_type)
        .order_by(ReviewAssignment.relation_type.asc())
    ).all()

    rate = (completed / total_assignments) * 100 if total_assignments else 0.0

    return {
        "total_assignments": total_assignments,
        "completed_assignments": completed,
        "total_feedbacks": total_feedbacks or 0,
        "average_score": _avg(average),
        "completion_rate": round(rate, 2),
        "relation_type_stats": [{"relation_type": t, "count": n} for t, n in by_relation],
        "overall_stats": {
            "total_employees": db.scalar(select(func.count(User.id)).where(User.role == UserRole.EMPLOYEE)) or 0,
            "total_review_cycles": db.scalar(select(func.count(ReviewCycle.id))) or 0,
            "total_categories": db.scalar(select(func.count(Category.id))) or 0,
            "total_questions": db.scalar(select(func.count(Question.id))) or 0,
        },
    }


def pair_scores(db: Session, *, review_cycle_id: Optional[int] = None) -> list[dict]:
    reviewer = aliased(User)
    reviewee = aliased(User)
    stmt = (
        select(
            reviewer.id,
            reviewer.name,
            reviewee.id,
            reviewee.name,
            func.avg(Feedback.score),
            func.count(Feedback.id),
        )
        .select_from(Feedback)
        .join(ReviewAssignment, ReviewAssignment.id == Feedback.review_assignment_id)
        .join(reviewer, reviewer.id == ReviewAssignment.reviewer_id)
        .join(reviewee, reviewee.id == ReviewAssignment.reviewee_id)
    )
    stmt = _assignment_filters(stmt, review_cycle_id=review_cycle_id)
    stmt = stmt.group_by(reviewer.id, reviewer.name, reviewee.id, reviewee.name).order_by(
        reviewee.name.asc(), reviewer.name.asc()
    )

    return [
        {
            "reviewer_id": r_id,
            "reviewer_name": r_name,
            "reviewee_id": e_id,
            "reviewee_name": e_name,
            "average": _avg(avg),
            "total_responses": n,
        }
        for r_id, r_name, e_id, e_name, avg, n in db.execute(stmt).all()
    ]
