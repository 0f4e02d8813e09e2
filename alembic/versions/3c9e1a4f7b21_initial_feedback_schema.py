"""initial feedback schema: users, departments, categories, questions, cycles, assignments, feedbacks

Revision ID: 3c9e1a4f7b21
Revises:
Create Date: 2026-10-19 10:12:41.503118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c9e1a4f7b21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum("ADMIN", "EMPLOYEE", name="user_role")
relation_type = sa.Enum("SELF", "MANAGER", "PEER", "SUBORDINATE", name="relation_type")


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    op.create_table(
        "departments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        *_timestamps(),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("manager_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("department_id", sa.Integer(), sa.ForeignKey("departments.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_manager_id", "users", ["manager_id"])
    op.create_index("ix_users_department_id", "users", ["department_id"])

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "questions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id", ondelete="CASCADE"), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_questions_category_id", "questions", ["category_id"])

    op.create_table(
        "review_cycles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("config", sa.JSON(), nullable=False),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("end_date > start_date", name="ck_review_cycle_dates"),
    )
    op.create_index("ix_review_cycles_created_by", "review_cycles", ["created_by"])

    op.create_table(
        "review_assignments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("review_cycle_id", sa.Integer(), sa.ForeignKey("review_cycles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("reviewer_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("reviewee_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("relation_type", relation_type, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint(
            "review_cycle_id", "reviewer_id", "reviewee_id", "relation_type",
            name="uq_assignment_cycle_pair_relation",
        ),
    )
    op.create_index("ix_review_assignments_review_cycle_id", "review_assignments", ["review_cycle_id"])
    op.create_index("ix_review_assignments_reviewer_id", "review_assignments", ["reviewer_id"])
    op.create_index("ix_review_assignments_reviewee_id", "review_assignments", ["reviewee_id"])

    op.create_table(
        "feedbacks",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("review_assignment_id", sa.Integer(), sa.ForeignKey("review_assignments.id", ondelete="CASCADE"), nullable=False),
        sa.Column("question_id", sa.Integer(), sa.ForeignKey("questions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("review_assignment_id", "question_id", name="uq_feedback_assignment_question"),
        sa.CheckConstraint("score BETWEEN 1 AND 5", name="ck_feedback_score_range"),
    )
    op.create_index("ix_feedbacks_review_assignment_id", "feedbacks", ["review_assignment_id"])
    op.create_index("ix_feedbacks_question_id", "feedbacks", ["question_id"])


def downgrade():
    op.drop_table("feedbacks")
    op.drop_table("review_assignments")
    op.drop_table("review_cycles")
    op.drop_table("questions")
    op.drop_table("categories")
    op.drop_table("users")
    op.drop_table("departments")

    # Postgres keeps enum types around after the tables are gone
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        relation_type.drop(bind, checkfirst=True)
        user_role.drop(bind, checkfirst=True)
