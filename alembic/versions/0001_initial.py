"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 12:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "check_ins",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("emotions", sa.JSON(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("timestamp", sa.String(64), nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
    )
    op.create_index("ix_check_ins_created_at", "check_ins", ["created_at"])

    op.create_table(
        "automation_suggestions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("check_in_id", sa.String(36), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("type", sa.Enum("SMART_HOME", "SOCIAL_SUPPORT", "WELLNESS", "THERAPEUTIC", "EMERGENCY",
                                  name="suggestion_type", native_enum=False, length=32), nullable=False),
        sa.Column("priority", sa.String(16), nullable=False),
        sa.Column("actions", sa.JSON(), nullable=False),
        sa.Column("reasoning", sa.Text(), nullable=False),
        sa.Column("estimated_duration", sa.String(64), nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
        sa.Column("status", sa.Enum("ACTIVE", "DISMISSED", "EXECUTED",
                                    name="suggestion_status", native_enum=False, length=16), nullable=False),
        sa.Column("executed_at", sa.BigInteger(), nullable=True),
    )
    op.create_index("ix_automation_suggestions_status", "automation_suggestions", ["status"])
    op.create_index("ix_automation_suggestions_check_in_id", "automation_suggestions", ["check_in_id"])

    op.create_table(
        "contacts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("phone_number", sa.String(64), nullable=False),
        sa.Column("relationship", sa.String(32), nullable=False),
        sa.Column("is_frequent", sa.Boolean(), nullable=False),
        sa.Column("last_contacted_at", sa.BigInteger(), nullable=True),
        sa.Column("added_at", sa.BigInteger(), nullable=False),
    )

    op.create_table(
        "automation_executions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("suggestion_id", sa.String(36), nullable=False),
        sa.Column("check_in_id", sa.String(36), nullable=False),
        sa.Column("executed_at", sa.BigInteger(), nullable=False),
        sa.Column("action_type", sa.String(64), nullable=True),
        sa.Column("was_helpful", sa.Boolean(), nullable=True),
        sa.Column("user_feedback", sa.Text(), nullable=True),
        sa.Column("completion_status", sa.Enum("COMPLETED", "PARTIALLY_COMPLETED", "CANCELLED",
                                               name="completion_status", native_enum=False, length=32),
                  nullable=False),
    )
    op.create_index("ix_automation_executions_suggestion_id", "automation_executions", ["suggestion_id"])


def downgrade() -> None:
    op.drop_index("ix_automation_executions_suggestion_id", table_name="automation_executions")
    op.drop_table("automation_executions")
    op.drop_table("contacts")
    op.drop_index("ix_automation_suggestions_check_in_id", table_name="automation_suggestions")
    op.drop_index("ix_automation_suggestions_status", table_name="automation_suggestions")
    op.drop_table("automation_suggestions")
    op.drop_index("ix_check_ins_created_at", table_name="check_ins")
    op.drop_table("check_ins")
