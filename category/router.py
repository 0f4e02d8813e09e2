from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import require_admin
from .schema import CategorySchema, CategoryWithQuestions, CategoryCreate, CategoryUpdate
from . import service

category_router = APIRouter(prefix="/categories", tags=["Categories"])


@category_router.get("", response_model=list[CategoryWithQuestions])
def list_categories(db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    return service.list_categories(db)


@category_router.get("/{category_id}", response_model=CategoryWithQuestions)
def category_detail(category_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    obj = service.get_category(db, category_id)
    if not obj:
        raise HTTPException(status_code=404, detail="category not found")
    return obj


@category_router.post("", response_model=CategorySchema, status_code=status.HTTP_201_CREATED)
def category_post(payload: CategoryCreate, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    return service.create_category(db, payload)


@category_router.patch("/{category_id}", response_model=CategorySchema)
def category_patch(
    category_id: int,
    payload: CategoryUpdate,
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    return service.update_category(db, category_id, payload)


@category_router.delete("/{category_id}")
def category_delete(category_id: int, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    service.delete_category(db, category_id)
    return {"message": "category deleted"}
