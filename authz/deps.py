from fastapi import Depends, HTTPException
from auth.services.auth_service import get_current_active_user
from user.models import User, UserRole


def require_admin(user: User = Depends(get_current_active_user)) -> User:
    if user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="Admin role required")
    return user


def is_admin(user) -> bool:
    return getattr(user, "role", None) == UserRole.ADMIN
