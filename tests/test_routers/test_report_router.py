# tests/test_routers/test_report_router.py

import unittest
from types import SimpleNamespace as Obj
from unittest.mock import patch

from fastapi.testclient import TestClient

from main import app
from core.database import get_db
from auth.services.auth_service import get_current_active_user
from user.models import UserRole


class ReportRouterTests(unittest.TestCase):
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

    def test_reports_are_admin_only(self):
        self.user = Obj(id=2, role=UserRole.EMPLOYEE, is_active=True)
        self.assertEqual(self.client.get("/api/reports/summary").status_code, 403)

    @patch("report.router.service.scores_by_category")
    def test_scores_by_category_filters(self, mock_scores):
        mock_scores.return_value = [
            {"category_id": 1, "category_name": "Leadership", "average": 3.5, "total_responses": 4},
        ]
        resp = self.client.get("/api/reports/scores-by-category?reviewee_id=3&relation_type=PEER")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()[0]["average"], 3.5)
        kwargs = mock_scores.call_args.kwargs
        self.assertEqual(kwargs["reviewee_id"], 3)
        self.assertEqual(kwargs["relation_type"], "PEER")

    def test_scores_by_category_bad_relation_422(self):
        resp = self.client.get("/api/reports/scores-by-category?relation_type=BOSS")
        self.assertEqual(resp.status_code, 422)

    @patch("report.router.service.detailed_report")
    def test_detailed_requires_both_ids(self, mock_detail):
        resp = self.client.get("/api/reports/detailed?reviewee_id=3")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "reviewee_id and review_cycle_id are required")
        mock_detail.assert_not_called()

    @patch("report.router.service.detailed_report")
    def test_detailed_ok(self, mock_detail):
        mock_detail.return_value = {"reviewee": None, "review_cycle": None, "categories": []}
        resp = self.client.get("/api/reports/detailed?reviewee_id=3&review_cycle_id=1")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["categories"], [])

    @patch("report.router.service.summary")
    def test_summary(self, mock_summary):
        mock_summary.return_value = {
            "total_assignments": 4, "completed_assignments": 3, "total_feedbacks": 10,
            "average_score": 3.2, "completion_rate": 75.0,
            "relation_type_stats": [{"relation_type": "SELF", "count": 4}],
            "overall_stats": {"total_employees": 4, "total_review_cycles": 1,
                              "total_categories": 4, "total_questions": 12},
        }
        resp = self.client.get("/api/reports/summary?review_cycle_id=1")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["completion_rate"], 75.0)

    @patch("report.router.service.pair_scores")
    def test_pairs(self, mock_pairs):
        mock_pairs.return_value = [{
            "reviewer_id": 2, "reviewer_name": "Anna", "reviewee_id": 1, "reviewee_name": "Boss",
            "average": 4.0, "total_responses": 3,
        }]
        resp = self.client.get("/api/reports/pairs")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()[0]["reviewer_name"], "Anna")

    def test_pair_categories_requires_both_ids(self):
        resp = self.client.get("/api/reports/pair-categories?reviewer_id=2")
        self.assertEqual(resp.status_code, 400)

    @patch("report.router.service.scores_by_category")
    def test_pair_categories(self, mock_scores):
        mock_scores.return_value = []
        resp = self.client.get("/api/reports/pair-categories?reviewer_id=2&reviewee_id=1")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(mock_scores.call_args.kwargs["reviewer_id"], 2)


if __name__ == "__main__":
    unittest.main()
