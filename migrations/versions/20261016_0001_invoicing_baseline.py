"""invoicing baseline: entities, company profiles, invoices, tasks and charges

Revision ID: 20261016_0001
Revises:
Create Date: 2026-10-16 00:00:01
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261016_0001"
down_revision = None
branch_labels = None
depends_on = None

INVOICE_STATUS = sa.Enum("DRAFT", "ISSUED", "PAID", "CANCELLED", name="invoicestatus")
TASK_STATUS = sa.Enum(
    "PENDING", "IN_PROGRESS", "ON_HOLD", "PENDING_CLIENT_INPUT", "COMPLETED", "CANCELLED", name="taskstatus"
)
TASK_TYPE = sa.Enum("STANDARD", "SYSTEM_ADHOC", name="tasktype")
CHARGE_TYPE = sa.Enum("SERVICE_FEE", "GOVERNMENT_FEE", "EXTERNAL_CHARGE", "OTHER_CHARGES", name="chargetype")
CHARGE_STATUS = sa.Enum("NOT_PAID", "PAID", "WRITTEN_OFF", "CANCELLED", name="chargestatus")
CHARGE_BEARER = sa.Enum("CLIENT", "FIRM", name="chargebearer")


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "entities",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("status", sa.String(40), nullable=False, server_default="ACTIVE"),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "company_profiles",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "invoices",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("internal_number", sa.String(64), nullable=False),
        sa.Column("external_number", sa.String(50), nullable=True),
        sa.Column("status", INVOICE_STATUS, nullable=False),
        sa.Column("invoice_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("entity_id", sa.String(36), sa.ForeignKey("entities.id", ondelete="RESTRICT"), nullable=False),
        sa.Column(
            "company_profile_id",
            sa.String(36),
            sa.ForeignKey("company_profiles.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(64), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("internal_number"),
    )
    op.create_index("idx_invoices_entity_status", "invoices", ["entity_id", "status"])
    op.create_index("idx_invoices_company_profile", "invoices", ["company_profile_id"])

    op.create_table(
        "tasks",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("entity_id", sa.String(36), sa.ForeignKey("entities.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("status", TASK_STATUS, nullable=False),
        sa.Column("task_type", TASK_TYPE, nullable=False),
        sa.Column("is_system", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "invoice_internal_number",
            sa.String(64),
            sa.ForeignKey("invoices.internal_number", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("invoiced_at", sa.DateTime(timezone=True), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_tasks_invoice_internal_number", "tasks", ["invoice_internal_number"])
    op.create_index("idx_tasks_entity_status", "tasks", ["entity_id", "status"])

    op.create_table(
        "task_charges",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("task_id", sa.String(36), sa.ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("charge_type", CHARGE_TYPE, nullable=False),
        sa.Column("status", CHARGE_STATUS, nullable=False),
        sa.Column("bearer", CHARGE_BEARER, nullable=False),
        sa.Column("remark", sa.Text(), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_task_charges_task", "task_charges", ["task_id"])
    op.create_index("idx_task_charges_status_bearer", "task_charges", ["status", "bearer"])


def downgrade() -> None:
    op.drop_index("idx_task_charges_status_bearer", table_name="task_charges")
    op.drop_index("idx_task_charges_task", table_name="task_charges")
    op.drop_table("task_charges")

    op.drop_index("idx_tasks_entity_status", table_name="tasks")
    op.drop_index("idx_tasks_invoice_internal_number", table_name="tasks")
    op.drop_table("tasks")

    op.drop_index("idx_invoices_company_profile", table_name="invoices")
    op.drop_index("idx_invoices_entity_status", table_name="invoices")
    op.drop_table("invoices")

    op.drop_table("company_profiles")
    op.drop_table("entities")

    bind = op.get_bind()
    for enum_type in (CHARGE_BEARER, CHARGE_STATUS, CHARGE_TYPE, TASK_TYPE, TASK_STATUS, INVOICE_STATUS):
        enum_type.drop(bind, checkfirst=True)
