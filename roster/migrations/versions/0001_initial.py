"""Initial roster schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

employee_role = postgresql.ENUM(
    "INFRA_ANALYST",
    "DBA",
    "TECH_RELATIONSHIP",
    "PROJECT_ANALYST",
    "SUPERVISOR",
    "MONITORING_ANALYST",
    "INTERN",
    "INFRA_ASSISTANT",
    "MONITORING_ASSISTANT",
    "DB_ASSISTANT",
    name="employee_role",
    create_type=False,
)
employee_squad = postgresql.ENUM(
    "LAKERS",
    "BULLS",
    "WARRIORS",
    "ROCKETS",
    name="employee_squad",
    create_type=False,
)


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_by", sa.String(length=255), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column("updated_by", sa.String(length=255), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    employee_role.create(bind, checkfirst=True)
    employee_squad.create(bind, checkfirst=True)

    op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("registration_number", sa.String(length=64), nullable=False),
        sa.Column("first_name", sa.String(length=255), nullable=False),
        sa.Column("last_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("role", employee_role, nullable=False),
        sa.Column("squad", employee_squad, nullable=False),
        sa.Column("shift_start", sa.String(length=5), nullable=False),
        sa.Column("shift_end", sa.String(length=5), nullable=False),
        sa.UniqueConstraint("registration_number", name="uq_employees_registration_number"),
    )

    op.create_table(
        "shift_changes",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("original_shift_start", sa.String(length=5), nullable=False),
        sa.Column("original_shift_end", sa.String(length=5), nullable=False),
        sa.Column("new_shift_start", sa.String(length=5), nullable=False),
        sa.Column("new_shift_end", sa.String(length=5), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("reason", sa.String(length=1000), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"]),
    )
    op.create_index("ix_shift_changes_employee_id", "shift_changes", ["employee_id"], unique=False)

    op.create_table(
        "absences",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("reason", sa.String(length=1000), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("observation", sa.Text(), nullable=True),
        sa.Column("approved", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"]),
    )
    op.create_index("ix_absences_employee_id", "absences", ["employee_id"], unique=False)
    op.create_index("ix_absences_date", "absences", ["date"], unique=False)

    op.create_table(
        "on_call_shifts",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("observation", sa.Text(), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"]),
        sa.UniqueConstraint("employee_id", "date", name="uq_on_call_shifts_employee_date"),
    )
    op.create_index("ix_on_call_shifts_employee_id", "on_call_shifts", ["employee_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_on_call_shifts_employee_id", table_name="on_call_shifts")
    op.drop_table("on_call_shifts")
    op.drop_index("ix_absences_date", table_name="absences")
    op.drop_index("ix_absences_employee_id", table_name="absences")
    op.drop_table("absences")
    op.drop_index("ix_shift_changes_employee_id", table_name="shift_changes")
    op.drop_table("shift_changes")
    op.drop_table("employees")

    bind = op.get_bind()
    employee_squad.drop(bind, checkfirst=True)
    employee_role.drop(bind, checkfirst=True)
