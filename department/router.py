from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import require_admin
from .schema import DepartmentSchema, DepartmentCreate, DepartmentUpdate
from . import service

department_router = APIRouter(prefix="/departments", tags=["Departments"])


@department_router.get("", response_model=list[DepartmentSchema])
def list_departments(db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    return service.list_departments(db)


@department_router.get("/{department_id}", response_model=DepartmentSchema)
def department_detail(department_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    obj = service.get_department(db, department_id)
    if not obj:
        raise HTTPException(status_code=404, detail="department not found")
    return obj


@department_router.post("", response_model=DepartmentSchema, status_code=status.HTTP_201_CREATED)
def department_post(payload: DepartmentCreate, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    try:
        return service.create_department(db, payload)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="department already exists")


@department_router.patch("/{department_id}", response_model=DepartmentSchema)
def department_patch(
    department_id: int,
    payload: DepartmentUpdate,
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    if not service.get_department(db, department_id):
        raise HTTPException(status_code=404, detail="department not found")
    try:
        return service.update_department(db, department_id, payload)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="department name already taken")


@department_router.delete("/{department_id}")
def department_delete(department_id: int, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    if not service.get_department(db, department_id):
        raise HTTPException(status_code=404, detail="department not found")
    service.delete_department(db, department_id)
    return {"message": "department deleted"}
