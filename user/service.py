from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from auth.utils.auth_utils import get_password_hash
from user.models import User
from user.schemas import UserCreate


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.scalars(select(User).where(User.email == email)).first()


def create_user(db: Session, user: UserCreate) -> User:
    # IntegrityError on duplicate email bubbles up; routers map it to 409
    db_user = User(
        name=user.name,
        email=str(user.email),
        password_hash=get_password_hash(user.password),
        role=user.role,
        manager_id=user.manager_id,
        department_id=user.department_id,
        is_active=True,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user

