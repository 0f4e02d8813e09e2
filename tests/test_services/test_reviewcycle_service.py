import unittest
from datetime import date, timedelta

from fastapi import HTTPException
from sqlalchemy import create_engine, select, func
from sqlalchemy.orm import sessionmaker

from core.database import Base
import models_bootstrap  # noqa: F401

from user.models import User, UserRole
from reviewcycle.models import ReviewCycle, CycleStatus
from assignment.models import ReviewAssignment
from assignment.schema import RelationConfig

from reviewcycle import service
from reviewcycle.schema import ReviewCycleCreatePayload, ReviewCycleUpdate, GenerateRequest


class ReviewCycleServiceTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        Session = sessionmaker(bind=self.engine, future=True)
        self.db = Session()

        lead = User(name="Lead", email="lead@x.com", password_hash="x", role=UserRole.EMPLOYEE)
        self.db.add(lead)
        self.db.flush()
        self.db.add_all([
            User(name="Dev A", email="a@x.com", password_hash="x", role=UserRole.EMPLOYEE, manager_id=lead.id),
            User(name="Dev B", email="b@x.com", password_hash="x", role=UserRole.EMPLOYEE, manager_id=lead.id),
        ])
        self.db.commit()

        self.today = date.today()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def _payload(self, **overrides):
        data = {
            "name": "H1 review",
            "start_date": self.today - timedelta(days=1),
            "end_date": self.today + timedelta(days=30),
            "config": {"self": True, "manager": True, "subordinate": True, "peer": True},
        }
        data.update(overrides)
        return ReviewCycleCreatePayload.model_validate(data)

    def test_create_cycle_generates_assignments(self):
        out = service.create_review_cycle(self.db, self._payload())
        self.assertEqual(out["assignments_requested"], 9)
        self.assertEqual(out["assignments_created"], 9)
        self.assertEqual(out["assignments_skipped"], 0)

        cycle = self.db.get(ReviewCycle, out["cycle_id"])
        self.assertEqual(cycle.config, {"self": True, "manager": True, "subordinate": True, "peer": True})
        self.assertEqual(cycle.status, CycleStatus.active)

    def test_create_cycle_with_approved_subset(self):
        ids = [u.id for u in self.db.scalars(select(User).order_by(User.id))]
        payload = self._payload(assignments=[
            {"reviewer_id": ids[0], "reviewee_id": ids[1], "relation_type": "MANAGER", "enabled": True,
             "reviewer_name": "Lead"},
            {"reviewer_id": ids[0], "reviewee_id": ids[2], "relation_type": "MANAGER", "enabled": False},
        ])
        out = service.create_review_cycle(self.db, payload)
        self.assertEqual(out["assignments_requested"], 1)
        self.assertEqual(out["assignments_created"], 1)

    def test_generate_again_creates_nothing(self):
        out = service.create_review_cycle(self.db, self._payload())
        again = service.generate_for_cycle(self.db, out["cycle_id"], GenerateRequest())
        self.assertEqual(again["assignments_created"], 0)
        self.assertEqual(again["assignments_skipped"], 9)
        total = self.db.scalar(select(func.count(ReviewAssignment.id)))
        self.assertEqual(total, 9)

    def test_generate_with_new_config_adds_missing(self):
        out = service.create_review_cycle(self.db, self._payload(config={"self": True}))
        again = service.generate_for_cycle(
            self.db, out["cycle_id"], GenerateRequest(config=RelationConfig(self_review=True, manager=True))
        )
        self.assertEqual(again["assignments_created"], 2)
        self.assertEqual(again["assignments_skipped"], 3)

    def test_generate_unknown_cycle_404(self):
        with self.assertRaises(HTTPException) as ctx:
            service.generate_for_cycle(self.db, 999, GenerateRequest())
        self.assertEqual(ctx.exception.status_code, 404)

    def test_list_newest_first_with_counts(self):
        first = service.create_review_cycle(self.db, self._payload(name="first", config={"self": True}))
        second = service.create_review_cycle(self.db, self._payload(name="second", config={"manager": True}))
        rows = service.get_review_cycles(self.db)
        self.assertEqual([r["id"] for r in rows], [second["cycle_id"], first["cycle_id"]])
        self.assertEqual(rows[0]["assignment_count"], 2)
        self.assertEqual(rows[1]["assignment_count"], 3)

    def test_get_review_cycle_loads_assignments(self):
        out = service.create_review_cycle(self.db, self._payload(config={"self": True}))
        cycle = service.get_review_cycle(self.db, out["cycle_id"])
        self.assertEqual(len(cycle.assignments), 3)
        self.assertIsNotNone(cycle.assignments[0].reviewer)

    def test_update_rejects_end_before_start(self):
        out = service.create_review_cycle(self.db, self._payload())
        with self.assertRaises(HTTPException) as ctx:
            service.update_review_cycle(
                self.db, out["cycle_id"], ReviewCycleUpdate(end_date=self.today - timedelta(days=5))
            )
        self.assertEqual(ctx.exception.status_code, 400)

    def test_update_name_and_config(self):
        out = service.create_review_cycle(self.db, self._payload())
        row = service.update_review_cycle(
            self.db, out["cycle_id"], ReviewCycleUpdate(name="renamed", config=RelationConfig(peer=True))
        )
        self.assertEqual(row.name, "renamed")
        self.assertEqual(row.config["peer"], True)
        self.assertEqual(row.config["self"], False)

    def test_update_missing_returns_none(self):
        self.assertIsNone(service.update_review_cycle(self.db, 999, ReviewCycleUpdate(name="x")))

    def test_delete_cascades_assignments(self):
        out = service.create_review_cycle(self.db, self._payload())
        self.assertTrue(service.delete_review_cycle(self.db, out["cycle_id"]))
        self.assertEqual(self.db.scalar(select(func.count(ReviewAssignment.id))), 0)
        self.assertFalse(service.delete_review_cycle(self.db, out["cycle_id"]))


class CycleStatusTests(unittest.TestCase):
    def test_status_from_dates(self):
        c = ReviewCycle(name="c", start_date=date(2025, 1, 1), end_date=date(2025, 1, 31), config={})
        self.assertEqual(c.status_on(date(2024, 12, 31)), CycleStatus.upcoming)
        self.assertEqual(c.status_on(date(2025, 1, 1)), CycleStatus.active)
        self.assertEqual(c.status_on(date(2025, 1, 31)), CycleStatus.active)
        self.assertEqual(c.status_on(date(2025, 2, 1)), CycleStatus.ended)
        self.assertTrue(c.is_open(date(2025, 1, 15)))
        self.assertFalse(c.is_open(date(2025, 2, 15)))


class ReviewCyclePayloadTests(unittest.TestCase):
    def test_end_must_follow_start(self):
        with self.assertRaises(ValueError):
            ReviewCycleCreatePayload.model_validate({
                "name": "x", "start_date": "2025-01-10", "end_date": "2025-01-10", "config": {"self": True},
            })

    def test_all_false_config_rejected(self):
        with self.assertRaises(ValueError):
            ReviewCycleCreatePayload.model_validate({
                "name": "x", "start_date": "2025-01-10", "end_date": "2025-02-10", "config": {},
            })


if __name__ == "__main__":
    unittest.main()
