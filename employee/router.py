from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import require_admin
from .schema import EmployeeSchema, EmployeeCreatePayload, EmployeeUpdate, EmployeeResetResult
from . import service

employee_router = APIRouter(prefix="/employees", tags=["Employees"])

# List all employees (admins excluded)
@employee_router.get("", response_model=list[EmployeeSchema])
def list_employees(db: Session = Depends(get_db), _admin = Depends(require_admin)):
    return service.get_employees(db)

# Wipe employees, cycles, assignments and feedback
@employee_router.post("/reset", response_model=EmployeeResetResult)
def employees_reset(db: Session = Depends(get_db), _admin = Depends(require_admin)):
    return service.reset_employees(db)

# Get employee by id
@employee_router.get("/{employee_id}", response_model=EmployeeSchema)
def employee_detail(employee_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    obj = service.get_employee(db, employee_id)
    if not obj:
        raise HTTPException(status_code=404, detail="employee not found")
    return obj

# Create employee
@employee_router.post("", response_model=EmployeeSchema, status_code=status.HTTP_201_CREATED)
def employee_post(payload: EmployeeCreatePayload, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    try:
        return service.create_employee(db, payload)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="user already exists")

# Update employee
@employee_router.patch("/{employee_id}", response_model=EmployeeSchema)
def employee_patch(
    employee_id: int,
    payload: EmployeeUpdate,
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    obj = service.get_employee(db, employee_id)
    if not obj:
        raise HTTPException(status_code=404, detail="employee not found")
    try:
        return service.update_employee(db, employee_id, payload)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="email already taken")

# Delete employee
@employee_router.delete("/{employee_id}")
def employee_delete(employee_id: int, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    obj = service.get_employee(db, employee_id)
    if not obj:
        raise HTTPException(status_code=404, detail="employee not found")
    service.delete_employee(db, employee_id)
    return {"message": "employee deleted"}
