import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from auth.schemas import LoginRequest, TokenResponse, RegisterPayload
from auth.services.auth_service import authenticate_user, issue_token, get_current_active_user
from authz.deps import require_admin
from user.models import User
from user.schemas import UserSchema, UserDetailSchema, UserCreate
from user.service import create_user, get_user_by_email
from employee.service import check_manager

logger = logging.getLogger(__name__)

auth_router = APIRouter(prefix="/auth", tags=["Auth"])


@auth_router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = authenticate_user(db, str(payload.email), payload.password)
    if not user:
        logger.info("failed login", extra={"email": str(payload.email)})
        raise HTTPException(status_code=401, detail="invalid credentials")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="inactive user")
    return {"access_token": issue_token(user), "token_type": "bearer", "user": user}


@auth_router.get("/me", response_model=UserDetailSchema)
def me(current_user: User = Depends(get_current_active_user)):
    return current_user


# Create an account of either role (admin only)
@auth_router.post("/register", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterPayload,
    db: Session = Depends(get_db),
    _admin = Depends(require_admin),
    ):
    if get_user_by_email(db, str(payload.email)):
        raise HTTPException(status_code=409, detail="user already exists")
    check_manager(db, payload.manager_id)
    try:
        return create_user(db, UserCreate(**payload.model_dump()))
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="user already exists")
