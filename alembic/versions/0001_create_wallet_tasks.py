"""create wallet_tasks table

Revision ID: 0001
Revises:
"""

import sqlalchemy as sa

from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

_STATUSES = ("PENDING", "EXECUTING", "COMPLETED", "FAILED", "CANCELLED")


def upgrade() -> None:
    op.create_table(
        "wallet_tasks",
        sa.Column("seq", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("id", sa.String(length=64), nullable=False, unique=True),
        sa.Column("task_type", sa.String(length=64), nullable=False),
        sa.Column("parameters", sa.JSON(), nullable=False),
        sa.Column("status", sa.Enum(*_STATUSES, name="task_status"), nullable=False),
        sa.Column("wallet_address", sa.String(length=128), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("executed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("finished_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("result", sa.JSON(), nullable=True),
        sa.Column("error", sa.Text(), nullable=True),
    )
    op.create_index(
        "ix_wallet_tasks_owner_created", "wallet_tasks", ["wallet_address", "created_at"]
    )
    op.create_index("ix_wallet_tasks_status_created", "wallet_tasks", ["status", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_wallet_tasks_status_created", table_name="wallet_tasks")
    op.drop_index("ix_wallet_tasks_owner_created", table_name="wallet_tasks")
    op.drop_table("wallet_tasks")
    sa.Enum(name="task_status").drop(op.get_bind(), checkfirst=True)
