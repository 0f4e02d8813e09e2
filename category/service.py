from typing import Optional, List

from fastapi import HTTPException
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from .models import Category
from .schema import CategoryCreate, CategoryUpdate
from question.models import Question


def list_categories(db: Session) -> List[Category]:
    return list(db.scalars(select(Category).order_by(Category.name.asc())))


def get_category(db: Session, category_id: int) -> Optional[Category]:
    return db.get(Category, category_id)


def create_category(db: Session, dto: CategoryCreate) -> Category:
    row = Category(name=dto.name, description=dto.description or None)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def update_category(db: Session, category_id: int, patch: CategoryUpdate) -> Category:
    row = db.get(Category, category_id)
    if not row:
        raise HTTPException(status_code=404, detail="category not found")

    data = patch.model_dump(exclude_unset=True)
    if data.get("name"):
        row.name = data["name"]
    if "description" in data:
        # empty string clears the description
        row.description = data["description"] or None
    db.commit()
    db.refresh(row)
    return row


def count_questions(db: Session, category_id: int) -> int:
    return db.scalar(select(func.count(Question.id)).where(Question.category_id == category_id)) or 0


def delete_category(db: Session, category_id: int) -> None:
    row = db.get(Category, category_id)
    if not row:
        raise HTTPException(status_code=404, detail="category not found")
    if count_questions(db, category_id) > 0:
        raise HTTPException(
            status_code=400,
            detail="cannot delete category with existing questions, delete its questions first",
        )
    db.delete(row)
    db.commit()
