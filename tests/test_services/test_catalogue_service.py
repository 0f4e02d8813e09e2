import unittest

from fastapi import HTTPException
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from core.database import Base
import models_bootstrap  # noqa: F401

from user.models import User, UserRole
from category import service as category_service
from category.schema import CategoryCreate, CategoryUpdate
from question import service as question_service
from question.schema import QuestionCreate, QuestionUpdate
from department import service as department_service
from department.schema import DepartmentCreate, DepartmentUpdate


class CatalogueServiceTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        Session = sessionmaker(bind=self.engine, future=True)
        self.db = Session()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    # --- categories ---

    def test_category_crud(self):
        cat = category_service.create_category(self.db, CategoryCreate(name="Teamwork", description="Works with others"))
        self.assertEqual(category_service.get_category(self.db, cat.id).name, "Teamwork")

        out = category_service.update_category(self.db, cat.id, CategoryUpdate(description=""))
        self.assertIsNone(out.description)

        category_service.delete_category(self.db, cat.id)
        self.assertIsNone(category_service.get_category(self.db, cat.id))

    def test_delete_category_with_questions_refused(self):
        cat = category_service.create_category(self.db, CategoryCreate(name="Leadership"))
        question_service.create_question(self.db, QuestionCreate(category_id=cat.id, text="Inspires"))
        with self.assertRaises(HTTPException) as ctx:
            category_service.delete_category(self.db, cat.id)
        self.assertEqual(ctx.exception.status_code, 400)

    def test_update_missing_category_404(self):
        with self.assertRaises(HTTPException) as ctx:
            category_service.update_category(self.db, 999, CategoryUpdate(name="x"))
        self.assertEqual(ctx.exception.status_code, 404)

    # --- questions ---

    def test_questions_ordered_by_category_name(self):
        b = category_service.create_category(self.db, CategoryCreate(name="B-team"))
        a = category_service.create_category(self.db, CategoryCreate(name="A-team"))
        question_service.create_question(self.db, QuestionCreate(category_id=b.id, text="b1"))
        question_service.create_question(self.db, QuestionCreate(category_id=a.id, text="a1"))
        question_service.create_question(self.db, QuestionCreate(category_id=a.id, text="a2"))

        self.assertEqual([q.text for q in question_service.list_questions(self.db)], ["a1", "a2", "b1"])
        self.assertEqual([q.text for q in question_service.list_questions(self.db, category_id=b.id)], ["b1"])

    def test_create_question_unknown_category_404(self):
        with self.assertRaises(HTTPException) as ctx:
            question_service.create_question(self.db, QuestionCreate(category_id=42, text="?"))
        self.assertEqual(ctx.exception.detail, "category not found")

    def test_move_question_between_categories(self):
        a = category_service.create_category(self.db, CategoryCreate(name="A"))
        b = category_service.create_category(self.db, CategoryCreate(name="B"))
        q = question_service.create_question(self.db, QuestionCreate(category_id=a.id, text="q"))
        out = question_service.update_question(self.db, q.id, QuestionUpdate(category_id=b.id))
        self.assertEqual(out.category_id, b.id)

    # --- departments ---

    def test_department_unique_name(self):
        department_service.create_department(self.db, DepartmentCreate(name="Sales"))
        with self.assertRaises(IntegrityError):
            department_service.create_department(self.db, DepartmentCreate(name="Sales"))
        self.db.rollback()

    def test_delete_department_unassigns_users(self):
        dept = department_service.create_department(self.db, DepartmentCreate(name="Ops"))
        user = User(name="U", email="u@x.com", password_hash="x", role=UserRole.EMPLOYEE, department_id=dept.id)
        self.db.add(user)
        self.db.commit()

        self.assertTrue(department_service.delete_department(self.db, dept.id))
        self.db.expire_all()
        self.assertIsNone(self.db.get(User, user.id).department_id)

    def test_rename_department(self):
        dept = department_service.create_department(self.db, DepartmentCreate(name="Ops"))
        out = department_service.update_department(self.db, dept.id, DepartmentUpdate(name="Operations"))
        self.assertEqual(out.name, "Operations")
        self.assertIsNone(department_service.update_department(self.db, 999, DepartmentUpdate(name="x")))


if __name__ == "__main__":
    unittest.main()
