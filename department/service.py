from typing import Optional, List

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from .models import Department
from .schema import DepartmentCreate, DepartmentUpdate
from user.models import User


def list_departments(db: Session) -> List[Department]:
    return list(db.scalars(select(Department).order_by(Department.name.asc())))


def get_department(db: Session, department_id: int) -> Optional[Department]:
    return db.get(Department, department_id)


def create_department(db: Session, dto: DepartmentCreate) -> Department:
    row = Department(name=dto.name)
    db.add(row)
    # IntegrityError on duplicate name is mapped to 409 by the router
    db.commit()
    db.refresh(row)
    return row


def update_department(db: Session, department_id: int, patch: DepartmentUpdate) -> Optional[Department]:
    row = db.get(Department, department_id)
    if not row:
        return None
    row.name = patch.name
    db.commit()
    db.refresh(row)
    return row


def delete_department(db: Session, department_id: int) -> bool:
    row = db.get(Department, department_id)
    if not row:
        return False
    # members stay, just unassigned
    db.execute(update(User).where(User.department_id == department_id).values(department_id=None))
    db.delete(row)
    db.commit()
    return True
