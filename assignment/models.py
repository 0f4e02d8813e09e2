from __future__ import annotations
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Enum as SAEnum, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base


class RelationType(str, Enum):
    SELF = "SELF"
    MANAGER = "MANAGER"
    PEER = "PEER"
    SUBORDINATE = "SUBORDINATE"


class ReviewAssignment(Base):
    __tablename__ = "review_assignments"

    id: Mapped[int] = mapped_column(primary_key=True)
    review_cycle_id: Mapped[int] = mapped_column(
        ForeignKey("review_cycles.id", ondelete="CASCADE"), index=True
    )
    reviewer_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    reviewee_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    relation_type: Mapped[RelationType] = mapped_column(
        SAEnum(RelationType, name="relation_type"), nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # relationships
    review_cycle = relationship("ReviewCycle", back_populates="assignments")
    reviewer = relationship("User", foreign_keys=[reviewer_id])
    reviewee = relationship("User", foreign_keys=[reviewee_id])
    feedbacks = relationship(
        "Feedback",
        back_populates="review_assignment",
        cascade="all, delete-orphan",
        order_by="Feedback.id",
    )

    __table_args__ = (
        UniqueConstraint(
            "review_cycle_id", "reviewer_id", "reviewee_id", "relation_type",
            name="uq_assignment_cycle_pair_relation",
        ),
    )
