# tests/test_routers/test_feedback_router.py

import unittest
from types import SimpleNamespace as Obj
from unittest.mock import patch

from fastapi import HTTPException
from fastapi.testclient import TestClient

from main import app
from core.database import get_db
from auth.services.auth_service import get_current_active_user
from user.models import UserRole


def fb(id=1, reviewer_id=10, score=4):
    return Obj(id=id, review_assignment_id=3, question_id=2, score=score, comment=None,
               created_at=None, updated_at=None,
               review_assignment=Obj(id=3, review_cycle_id=1, reviewer_id=reviewer_id, reviewee_id=11,
                                     relation_type="PEER", created_at=None))


class FeedbackRouterTests(unittest.TestCase):
    def setUp(self):
        self.assignments = {}

        test = self

        class FakeDB:
            def rollback(self): pass
            def get(self, model, pk):
                return test.assignments.get(pk)
        def _fake_db():
            yield FakeDB()

        self.user = Obj(id=10, role=UserRole.EMPLOYEE, is_active=True)
        app.dependency_overrides[get_db] = _fake_db
        app.dependency_overrides[get_current_active_user] = lambda: self.user

        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)
        app.dependency_overrides.pop(get_current_active_user, None)

    # --- SUBMIT ---

    @patch("feedback.router.service.submit_feedback")
    def test_submit_200(self, mock_submit):
        mock_submit.return_value = fb(score=5)
        resp = self.client.post("/api/feedbacks", json={"review_assignment_id": 3, "question_id": 2, "score": 5})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["score"], 5)
        self.assertEqual(mock_submit.call_args.args[1], 10)

    @patch("feedback.router.service.submit_feedback")
    def test_submit_score_out_of_range_422(self, mock_submit):
        resp = self.client.post("/api/feedbacks", json={"review_assignment_id": 3, "question_id": 2, "score": 6})
        self.assertEqual(resp.status_code, 422)
        mock_submit.assert_not_called()

    @patch("feedback.router.service.submit_feedback")
    def test_submit_closed_cycle_400(self, mock_submit):
        mock_submit.side_effect = HTTPException(status_code=400, detail="review cycle is not active")
        resp = self.client.post("/api/feedbacks", json={"review_assignment_id": 3, "question_id": 2, "score": 3})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "review cycle is not active")

    # --- BY ASSIGNMENT ---

    @patch("feedback.router.service.get_feedback_for_assignment")
    def test_for_assignment_as_reviewer(self, mock_list):
        self.assignments[3] = Obj(id=3, reviewer_id=10)
        mock_list.return_value = [fb()]
        resp = self.client.get("/api/feedbacks/assignment/3")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(len(resp.json()), 1)

    def test_for_assignment_not_reviewer_403(self):
        self.assignments[3] = Obj(id=3, reviewer_id=77)
        resp = self.client.get("/api/feedbacks/assignment/3")
        self.assertEqual(resp.status_code, 403)

    def test_for_assignment_missing_404(self):
        resp = self.client.get("/api/feedbacks/assignment/3")
        self.assertEqual(resp.status_code, 404)

    # --- ADMIN LIST / RESET ---

    def test_list_requires_admin(self):
        self.assertEqual(self.client.get("/api/feedbacks").status_code, 403)

    @patch("feedback.router.service.list_feedbacks")
    def test_list_with_limit(self, mock_list):
        self.user = Obj(id=1, role=UserRole.ADMIN, is_active=True)
        mock_list.return_value = [fb()]
        resp = self.client.get("/api/feedbacks?limit=5")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(mock_list.call_args.kwargs["limit"], 5)

    @patch("feedback.router.service.reset_feedback")
    def test_reset_for_cycle(self, mock_reset):
        self.user = Obj(id=1, role=UserRole.ADMIN, is_active=True)
        mock_reset.return_value = 12
        resp = self.client.post("/api/feedbacks/reset?review_cycle_id=4")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["deleted"], 12)
        self.assertEqual(mock_reset.call_args.kwargs["review_cycle_id"], 4)

    # --- SINGLE ---

    @patch("feedback.router.service.get_feedback")
    def test_detail_other_reviewer_403(self, mock_get):
        mock_get.return_value = fb(reviewer_id=77)
        resp = self.client.get("/api/feedbacks/1")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["detail"], "not allowed to view this feedback")

    @patch("feedback.router.service.update_feedback")
    @patch("feedback.router.service.get_feedback")
    def test_patch_own_feedback(self, mock_get, mock_update):
        mock_get.return_value = fb()
        mock_update.return_value = fb(score=2)
        resp = self.client.patch("/api/feedbacks/1", json={"score": 2})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["score"], 2)

    @patch("feedback.router.service.delete_feedback")
    @patch("feedback.router.service.get_feedback")
    def test_delete_as_admin(self, mock_get, mock_delete):
        self.user = Obj(id=1, role=UserRole.ADMIN, is_active=True)
        mock_get.return_value = fb(reviewer_id=77)
        resp = self.client.delete("/api/feedbacks/1")
        self.assertEqual(resp.status_code, 200)
        mock_delete.assert_called_once()

    @patch("feedback.router.service.get_feedback")
    def test_delete_missing_404(self, mock_get):
        mock_get.return_value = None
        self.assertEqual(self.client.delete("/api/feedbacks/1").status_code, 404)


if __name__ == "__main__":
    unittest.main()
