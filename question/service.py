from typing import Optional, List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import Question
from .schema import QuestionCreate, QuestionUpdate
from category.models import Category


def list_questions(db: Session, *, category_id: Optional[int] = None) -> List[Question]:
    stmt = select(Question).join(Category, Category.id == Question.category_id)
    if category_id is not None:
        stmt = stmt.where(Question.category_id == category_id)
    stmt = stmt.order_by(Category.name.asc(), Question.created_at.asc(), Question.id.asc())
    return list(db.scalars(stmt))


def get_question(db: Session, question_id: int) -> Optional[Question]:
    return db.get(Question, question_id)


def create_question(db: Session, dto: QuestionCreate) -> Question:
    if not db.get(Category, dto.category_id):
        raise HTTPException(status_code=404, detail="category not found")
    row = Question(category_id=dto.category_id, text=dto.text)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def update_question(db: Session, question_id: int, patch: QuestionUpdate) -> Question:
    row = db.get(Question, question_id)
    if not row:
        raise HTTPException(status_code=404, detail="question not found")

    data = patch.model_dump(exclude_unset=True, exclude_none=True)
    if "category_id" in data and data["category_id"] != row.category_id:
        if not db.get(Category, data["category_id"]):
            raise HTTPException(status_code=404, detail="category not found")
    for k, v in data.items():
        setattr(row, k, v)
    db.commit()
    db.refresh(row)
    return row


def delete_question(db: Session, question_id: int) -> None:
    row = db.get(Question, question_id)
    if row:
        db.delete(row)
        db.commit()
