from __future__ import annotations
import logging
from collections import defaultdict
from typing import Iterable, NamedTuple, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from assignment.models import ReviewAssignment, RelationType
from assignment.schema import RelationConfig, ProposedAssignmentPayload
from employee.service import list_generator_employees

logger = logging.getLogger(__name__)


class ProposedAssignment(NamedTuple):
    reviewer_id: int
    reviewee_id: int
    relation_type: RelationType


# ---------- helpers ----------

def _flags(config) -> dict:
    if isinstance(config, RelationConfig):
        return config.as_flags()
    return {
        "self": bool(config.get("self", False)),
        "manager": bool(config.get("manager", False)),
        "subordinate": bool(config.get("subordinate", False)),
        "peer": bool(config.get("peer", False)),
    }


def _reports_index(employees: Sequence) -> dict[int, list[int]]:
    reports: dict[int, list[int]] = defaultdict(list)
    for emp in employees:
        if emp.manager_id is not None:
            reports[emp.manager_id].append(emp.id)
    return reports


# ---------- generation ----------

def generate_assignments(employees: Sequence, config) -> list[ProposedAssignment]:
    """
    Expand the org chart into (reviewer, reviewee, relation) tuples.

    ``employees`` are objects with ``id`` and ``manager_id`` and must already
    exclude administrators. For each employee, in list order:
      - self:        (E, E, SELF)
      - manager:     (M, E, MANAGER) when E's manager M is in the list
      - subordinate: (S, E, SUBORDINATE) for each direct report S of E
      - peer:        (P, E, PEER) for each other report P of E's manager
    Manager reference cycles are enumerated as they are.
    """
    flags = _flags(config)
    ids = {emp.id for emp in employees}
    reports = _reports_index(employees)

    out: list[ProposedAssignment] = []
    for emp in employees:
        if flags["self"]:
            out.append(ProposedAssignment(emp.id, emp.id, RelationType.SELF))

        if flags["manager"] and emp.manager_id is not None and emp.manager_id in ids:
            out.append(ProposedAssignment(emp.manager_id, emp.id, RelationType.MANAGER))

        if flags["subordinate"]:
            for sub_id in reports.get(emp.id, []):
                out.append(ProposedAssignment(sub_id, emp.id, RelationType.SUBORDINATE))

        if flags["peer"] and emp.manager_id is not None:
            for peer_id in reports.get(emp.manager_id, []):
                if peer_id != emp.id:
                    out.append(ProposedAssignment(peer_id, emp.id, RelationType.PEER))
    return out


def preview_assignments(db: Session, config: RelationConfig) -> dict:
    """Generated tuples with display names, nothing written."""
    employees = list_generator_employees(db)
    by_id = {e.id: e for e in employees}
    proposed = generate_assignments(employees, config)

    items = []
    for p in proposed:
        reviewer = by_id[p.reviewer_id]
        reviewee = by_id[p.reviewee_id]
        items.append({
            "reviewer_id": reviewer.id,
            "reviewer_name": reviewer.name,
            "reviewer_email": reviewer.email,
            "reviewee_id": reviewee.id,
            "reviewee_name": reviewee.name,
            "reviewee_email": reviewee.email,
            "relation_type": p.relation_type,
            "enabled": True,
        })
    return {"config": config, "total": len(items), "assignments": items}


# ---------- persistence ----------

def _existing_keys(db: Session, cycle_id: int) -> set[tuple]:
    rows = db.execute(
        select(ReviewAssignment.reviewer_id, ReviewAssignment.reviewee_id, ReviewAssignment.relation_type)
        .where(ReviewAssignment.review_cycle_id == cycle_id)
    ).all()
    return {(r, e, RelationType(t)) for r, e, t in rows}


def insert_or_skip(db: Session, cycle_id: int, proposed: Iterable[ProposedAssignment]) -> dict:
    """
    Persist tuples for a cycle, skipping any that already exist.

    Returns ``{requested, created, skipped, aborted}``. A unique-key race
    falls back to row-by-row inserts; a lost connection stops the run and
    reports what was created so far.
    """
    proposed = list(proposed)
    result = {"requested": len(proposed), "created": 0, "skipped": 0, "aborted": False}

    seen = _existing_keys(db, cycle_id)
    fresh: list[ProposedAssignment] = []
    for p in proposed:
        key = (p.reviewer_id, p.reviewee_id, RelationType(p.relation_type))
        if key in seen:
            result["skipped"] += 1
            continue
        seen.add(key)
        fresh.append(p)

    if fresh:
        try:
            db.add_all([_row(cycle_id, p) for p in fresh])
            db.commit()
            result["created"] = len(fresh)
        except IntegrityError:
            db.rollback()
            logger.info("bulk insert hit a duplicate, retrying row by row", extra={"cycle_id": cycle_id})
            _insert_one_by_one(db, cycle_id, fresh, result)
        except OperationalError:
            db.rollback()
            logger.exception("assignment insert aborted", extra={"cycle_id": cycle_id})
            result["aborted"] = True

    logger.info(
        "assignments committed",
        extra={
            "cycle_id": cycle_id,
            "assignments_requested": result["requested"],
            "assignments_created": result["created"],
            "assignments_skipped": result["skipped"],
            "aborted": result["aborted"],
        },
    )
    return result


def _row(cycle_id: int, p: ProposedAssignment) -> ReviewAssignment:
    return ReviewAssignment(
        review_cycle_id=cycle_id,
        reviewer_id=p.reviewer_id,
        reviewee_id=p.reviewee_id,
        relation_type=p.relation_type,
    )


def _insert_one_by_one(db: Session, cycle_id: int, rows: list[ProposedAssignment], result: dict) -> None:
    for p in rows:
        try:
            db.add(_row(cycle_id, p))
            db.commit()
            result["created"] += 1
        except IntegrityError:
            db.rollback()
            result["skipped"] += 1
        except OperationalError:
            db.rollback()
            logger.exception("assignment insert aborted", extra={"cycle_id": cycle_id})
            result["aborted"] = True
            break


def commit_assignments(
    db: Session,
    cycle_id: int,
    config: RelationConfig,
    explicit: Optional[Sequence[ProposedAssignmentPayload]] = None,
) -> dict:
    """
    Generate fresh tuples (``explicit`` is None) or persist the enabled
    subset of a client-approved preview.
    """
    if explicit is None:
        proposed = generate_assignments(list_generator_employees(db), config)
    else:
        employee_ids = {e.id for e in list_generator_employees(db)}
        proposed = []
        unknown = 0
        for item in explicit:
            if not item.enabled:
                continue
            if item.reviewer_id not in employee_ids or item.reviewee_id not in employee_ids:
                logger.warning(
                    "skipping assignment for unknown employee",
                    extra={"reviewer_id": item.reviewer_id, "reviewee_id": item.reviewee_id},
                )
                unknown += 1
                continue
            proposed.append(ProposedAssignment(item.reviewer_id, item.reviewee_id, item.relation_type))

        result = insert_or_skip(db, cycle_id, proposed)
        result["requested"] += unknown
        result["skipped"] += unknown
        return result

    return insert_or_skip(db, cycle_id, proposed)
