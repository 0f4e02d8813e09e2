import logging
from typing import Optional, List

from fastapi import HTTPException
from sqlalchemy import select, delete, update, or_
from sqlalchemy.orm import Session

from auth.utils.auth_utils import get_password_hash
from user.models import User, UserRole
from user.service import get_user_by_email
from department.models import Department
from assignment.models import ReviewAssignment
from feedback.models import Feedback
from reviewcycle.models import ReviewCycle
from .schema import EmployeeCreatePayload, EmployeeUpdate

logger = logging.getLogger(__name__)


# ---------- directory lookups ----------

def get_employees(db: Session) -> List[User]:
    stmt = select(User).where(User.role == UserRole.EMPLOYEE).order_by(User.name.asc())
    return list(db.scalars(stmt))


def list_generator_employees(db: Session) -> List[User]:
    """All non-admin accounts, in a stable order for assignment generation."""
    stmt = select(User).where(User.role == UserRole.EMPLOYEE).order_by(User.id.asc())
    return list(db.scalars(stmt))


def get_direct_reports(db: Session, manager_id: int) -> List[User]:
    stmt = select(User).where(User.manager_id == manager_id).order_by(User.id.asc())
    return list(db.scalars(stmt))


def get_employee(db: Session, employee_id: int) -> Optional[User]:
    return db.get(User, employee_id)


# ---------- validation helpers ----------

def check_manager(db: Session, manager_id: Optional[int]) -> None:
    if manager_id is None:
        return
    manager = db.get(User, manager_id)
    if not manager or manager.role != UserRole.EMPLOYEE:
        raise HTTPException(status_code=400, detail="manager must be an existing employee")


def _check_department(db: Session, department_id: Optional[int]) -> None:
    if department_id is None:
        return
    if not db.get(Department, department_id):
        raise HTTPException(status_code=400, detail="department not found")


# ---------- writes ----------

def create_employee(db: Session, payload: EmployeeCreatePayload) -> User:
    if get_user_by_email(db, str(payload.email)):
        raise HTTPException(status_code=409, detail="user already exists")
    check_manager(db, payload.manager_id)
    _check_department(db, payload.department_id)

    row = User(
        name=payload.name,
        email=str(payload.email),
        password_hash=get_password_hash(payload.password),
        role=UserRole.EMPLOYEE,
        manager_id=payload.manager_id,
        department_id=payload.department_id,
        is_active=True,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def update_employee(db: Session, employee_id: int, patch: EmployeeUpdate) -> Optional[User]:
    row = db.get(User, employee_id)
    if not row:
        return None

    data = patch.model_dump(exclude_unset=True)

    if data.get("email") and data["email"] != row.email:
        taken = db.scalars(
            select(User).where(User.email == str(data["email"]), User.id != employee_id)
        ).first()
        if taken:
            raise HTTPException(status_code=409, detail="email already taken")
        row.email = str(data["email"])
    if data.get("name"):
        row.name = data["name"]
    if "manager_id" in data:
        check_manager(db, data["manager_id"])
        row.manager_id = data["manager_id"]
    if "department_id" in data:
        _check_department(db, data["department_id"])
        row.department_id = data["department_id"]

    db.commit()
    db.refresh(row)
    return row


def _assignments_involving(user_ids):
    return select(ReviewAssignment.id).where(
        or_(ReviewAssignment.reviewer_id.in_(user_ids), ReviewAssignment.reviewee_id.in_(user_ids))
    )


def delete_employee(db: Session, employee_id: int) -> bool:
    row = db.get(User, employee_id)
    if not row:
        return False

    ids = [employee_id]
    db.execute(delete(Feedback).where(Feedback.review_assignment_id.in_(_assignments_involving(ids))))
    db.execute(
        delete(ReviewAssignment).where(
            or_(ReviewAssignment.reviewer_id == employee_id, ReviewAssignment.reviewee_id == employee_id)
        )
    )
    # direct reports lose their manager rather than being deleted
    db.execute(update(User).where(User.manager_id == employee_id).values(manager_id=None))
    db.execute(update(ReviewCycle).where(ReviewCycle.created_by == employee_id).values(created_by=None))
    db.delete(row)
    db.commit()
    return True


def reset_employees(db: Session) -> dict:
    """
    Remove every EMPLOYEE account along with all review cycles, assignments and
    feedback. Admins, departments, categories and questions are preserved.
    """
    employee_ids = list(db.scalars(select(User.id).where(User.role == UserRole.EMPLOYEE)))
    if not employee_ids:
        return {"message": "no employees to reset", "employees_deleted": 0}

    feedback_deleted = db.execute(delete(Feedback)).rowcount or 0
    assignments_deleted = db.execute(delete(ReviewAssignment)).rowcount or 0
    cycles_deleted = db.execute(delete(ReviewCycle)).rowcount or 0
    db.execute(update(User).where(User.manager_id.in_(employee_ids)).values(manager_id=None))
    db.execute(delete(User).where(User.id.in_(employee_ids)))
    db.commit()

    logger.warning(
        "employee data reset",
        extra={
            "employees_deleted": len(employee_ids),
            "assignments_deleted": assignments_deleted,
            "feedback_deleted": feedback_deleted,
        },
    )
    return {
        "message": "all non-admin users and their related data have been reset",
        "employees_deleted": len(employee_ids),
        "assignments_deleted": assignments_deleted,
        "feedback_deleted": feedback_deleted,
        "review_cycles_deleted": cycles_deleted,
    }
