from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.database import get_db
from auth.services.auth_service import get_current_active_user
from authz.deps import require_admin
from .schema import QuestionSchema, QuestionCreate, QuestionUpdate
from . import service

question_router = APIRouter(prefix="/questions", tags=["Questions"])


@question_router.get("", response_model=list[QuestionSchema])
def list_questions(db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    return service.list_questions(db)


@question_router.get("/category/{category_id}", response_model=list[QuestionSchema])
def list_questions_by_category(category_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    return service.list_questions(db, category_id=category_id)


@question_router.get("/{question_id}", response_model=QuestionSchema)
def question_detail(question_id: int, db: Session = Depends(get_db), _user = Depends(get_current_active_user)):
    obj = service.get_question(db, question_id)
    if not obj:
        raise HTTPException(status_code=404, detail="question not found")
    return obj


@question_router.post("", response_model=QuestionSchema, status_code=status.HTTP_201_CREATED)
def question_post(payload: QuestionCreate, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    return service.create_question(db, payload)


@question_router.patch("/{question_id}", response_model=QuestionSchema)
def question_patch(
    question_id: int,
    payload: QuestionUpdate,
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    return service.update_question(db, question_id, payload)


# Delete question, its feedback goes with it
@question_router.delete("/{question_id}")
def question_delete(question_id: int, db: Session = Depends(get_db), _admin = Depends(require_admin)):
    if not service.get_question(db, question_id):
        raise HTTPException(status_code=404, detail="question not found")
    service.delete_question(db, question_id)
    return {"message": "question deleted"}
