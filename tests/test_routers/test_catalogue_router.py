# tests/test_routers/test_catalogue_router.py

import unittest
from types import SimpleNamespace as Obj
from unittest.mock import patch

from fastapi import HTTPException
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from main import app
from core.database import get_db
from auth.services.auth_service import get_current_active_user
from user.models import UserRole


class CatalogueRouterTests(unittest.TestCase):
    def setUp(self):
        class FakeDB:
            def rollback(self): pass
        def _fake_db():
            yield FakeDB()

        self.user = Obj(id=1, role=UserRole.ADMIN, is_active=True)
        app.dependency_overrides[get_db] = _fake_db
        app.dependency_overrides[get_current_active_user] = lambda: self.user

        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)
        app.dependency_overrides.pop(get_current_active_user, None)

    # --- departments ---

    @patch("department.router.service.list_departments")
    def test_list_departments_for_employee(self, mock_list):
        self.user = Obj(id=2, role=UserRole.EMPLOYEE, is_active=True)
        mock_list.return_value = [Obj(id=1, name="Ops", created_at=None)]
        resp = self.client.get("/api/departments")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()[0]["name"], "Ops")

    @patch("department.router.service.create_department")
    def test_create_department_duplicate_409(self, mock_create):
        mock_create.side_effect = IntegrityError("stmt", "params", Exception("dup"))
        resp = self.client.post("/api/departments", json={"name": "Ops"})
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["detail"], "department already exists")

    def test_create_department_employee_403(self):
        self.user = Obj(id=2, role=UserRole.EMPLOYEE, is_active=True)
        resp = self.client.post("/api/departments", json={"name": "Ops"})
        self.assertEqual(resp.status_code, 403)

    @patch("department.router.service.get_department")
    def test_delete_department_404(self, mock_get):
        mock_get.return_value = None
        self.assertEqual(self.client.delete("/api/departments/3").status_code, 404)

    # --- categories ---

    @patch("category.router.service.list_categories")
    def test_list_categories_with_questions(self, mock_list):
        mock_list.return_value = [Obj(
            id=1, name="Teamwork", description=None, created_at=None,
            questions=[Obj(id=5, text="Shares knowledge", created_at=None)],
        )]
        resp = self.client.get("/api/categories")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()[0]["questions"][0]["text"], "Shares knowledge")

    @patch("category.router.service.delete_category")
    def test_delete_category_with_questions_400(self, mock_delete):
        mock_delete.side_effect = HTTPException(
            status_code=400,
            detail="cannot delete category with existing questions, delete its questions first",
        )
        resp = self.client.delete("/api/categories/1")
        self.assertEqual(resp.status_code, 400)

    def test_create_category_extra_field_422(self):
        resp = self.client.post("/api/categories", json={"name": "X", "colour": "red"})
        self.assertEqual(resp.status_code, 422)

    # --- questions ---

    @patch("question.router.service.create_question")
    def test_create_question_201(self, mock_create):
        mock_create.return_value = Obj(id=9, category_id=1, text="Listens", created_at=None,
                                       category=Obj(id=1, name="Communication"))
        resp = self.client.post("/api/questions", json={"category_id": 1, "text": "Listens"})
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertEqual(resp.json()["category"]["name"], "Communication")

    @patch("question.router.service.create_question")
    def test_create_question_unknown_category_404(self, mock_create):
        mock_create.side_effect = HTTPException(status_code=404, detail="category not found")
        resp = self.client.post("/api/questions", json={"category_id": 99, "text": "Listens"})
        self.assertEqual(resp.status_code, 404)

    @patch("question.router.service.list_questions")
    def test_questions_by_category(self, mock_list):
        mock_list.return_value = []
        resp = self.client.get("/api/questions/category/4")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(mock_list.call_args.kwargs["category_id"], 4)


if __name__ == "__main__":
    unittest.main()
