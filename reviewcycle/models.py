from __future__ import annotations
from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import String, Date, DateTime, JSON, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base


class CycleStatus(str, Enum):
    upcoming = "upcoming"
    active = "active"
    ended = "ended"


class ReviewCycle(Base):
    __tablename__ = "review_cycles"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    start_date: Mapped[date] = mapped_column(Date(), nullable=False)
    end_date:   Mapped[date] = mapped_column(Date(), nullable=False)

    # relation-type switches the cycle was generated with: {"self", "manager", "subordinate", "peer"}
    config: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    created_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), index=True, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    assignments = relationship(
        "ReviewAssignment",
        back_populates="review_cycle",
        cascade="all, delete-orphan",
        order_by="ReviewAssignment.id",
    )

    __table_args__ = (
        CheckConstraint("end_date > start_date", name="ck_review_cycle_dates"),
    )

    def status_on(self, day: date) -> CycleStatus:
        if day < self.start_date:
            return CycleStatus.upcoming
        if day > self.end_date:
            return CycleStatus.ended
        return CycleStatus.active

    @property
    def status(self) -> CycleStatus:
        return self.status_on(date.today())

    def is_open(self, day: Optional[date] = None) -> bool:
        return self.status_on(day or date.today()) == CycleStatus.active
