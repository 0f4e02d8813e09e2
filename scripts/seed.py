"""
Seed an admin, a small org chart and the default question catalogue.

    python -m scripts.seed

Safe to run repeatedly: users are matched by email, categories by name.
"""
import logging

from sqlalchemy import select

from core.database import Base, engine, SessionLocal
from core.logging_config import setup_logging
from auth.utils.auth_utils import get_password_hash
from user.models import User, UserRole
from department.models import Department
from category.models import Category
from question.models import Question
import models_bootstrap  # noqa: F401

logger = logging.getLogger("scripts.seed")

ADMIN = ("Admin User", "admin@company.com", "admin123")
EMPLOYEE_PASSWORD = "employee123"

# name, email, manager email, department
EMPLOYEES = [
    ("John Employee", "employee@company.com", None, "Engineering"),
    ("Jane Smith", "jane@company.com", "employee@company.com", "Engineering"),
    ("Bob Johnson", "bob@company.com", "employee@company.com", "Engineering"),
    ("Alice Chen", "alice@company.com", "jane@company.com", "Product"),
]

CATALOGUE = {
    "Leadership": (
        "Leadership and management capabilities",
        [
            "This person demonstrates strong leadership skills and inspires others to perform at their best.",
            "This person effectively delegates tasks and responsibilities to team members.",
            "This person provides clear direction and vision for the team.",
        ],
    ),
    "Communication": (
        "Communication skills and effectiveness",
        [
            "This person communicates clearly and effectively in both written and verbal forms.",
            "This person actively listens to others and responds appropriately to feedback.",
            "This person provides constructive feedback and handles difficult conversations well.",
        ],
    ),
    "Teamwork": (
        "Collaboration and team working abilities",
        [
            "This person collaborates well with team members and contributes positively to group dynamics.",
            "This person supports and helps colleagues when needed.",
            "This person shares knowledge and resources freely with team members.",
        ],
    ),
    "Problem Solving": (
        "Analytical thinking and problem-solving skills",
        [
            "This person analyzes problems thoroughly before proposing solutions.",
            "This person comes up with creative and practical solutions.",
            "This person stays calm and effective under pressure.",
        ],
    ),
}


def _department(db, name):
    row = db.scalars(select(Department).where(Department.name == name)).first()
    if not row:
        row = Department(name=name)
        db.add(row)
        db.flush()
    return row


def _user(db, name, email, password, role, *, manager=None, department=None):
    row = db.scalars(select(User).where(User.email == email)).first()
    if row:
        logger.info("user exists, skipping", extra={"email": email})
        return row
    row = User(
        name=name,
        email=email,
        password_hash=get_password_hash(password),
        role=role,
        manager_id=manager.id if manager else None,
        department_id=department.id if department else None,
        is_active=True,
    )
    db.add(row)
    db.flush()
    logger.info("user created", extra={"email": email, "role": role.value})
    return row


def seed(db) -> None:
    _user(db, *ADMIN, UserRole.ADMIN)

    by_email = {}
    for name, email, manager_email, dept in EMPLOYEES:
        by_email[email] = _user(
            db, name, email, EMPLOYEE_PASSWORD, UserRole.EMPLOYEE,
            manager=by_email.get(manager_email),
            department=_department(db, dept),
        )

    for name, (description, questions) in CATALOGUE.items():
        if db.scalars(select(Category).where(Category.name == name)).first():
            continue
        category = Category(name=name, description=description)
        category.questions = [Question(text=text) for text in questions]
        db.add(category)
        logger.info("category created", extra={"category": name, "questions": len(questions)})

    db.commit()


def main() -> None:
    setup_logging()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
