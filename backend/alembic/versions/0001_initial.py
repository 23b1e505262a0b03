"""initial helpdesk schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    ticket_status = postgresql.ENUM("open", "in_progress", "closed", name="ticket_status")
    ticket_priority = postgresql.ENUM("low", "medium", "high", name="ticket_priority")

    ticket_status_col = postgresql.ENUM("open", "in_progress", "closed", name="ticket_status", create_type=False)
    ticket_priority_col = postgresql.ENUM("low", "medium", "high", name="ticket_priority", create_type=False)

    bind = op.get_bind()
    ticket_status.create(bind, checkfirst=True)
    ticket_priority.create(bind, checkfirst=True)

    for table in ("areas", "proyectos", "tipos_problema"):
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
            sa.Column("nombre", sa.String(length=120), nullable=False),
        )

    op.create_table(
        "user_roles",
        sa.Column("user_id", sa.String(length=64), primary_key=True, nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="user"),
        sa.Column("area_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["area_id"], ["areas.id"]),
    )

    op.create_table(
        "tickets",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("nombre_usuario", sa.String(length=255), nullable=False),
        sa.Column("asunto", sa.String(length=255), nullable=False),
        sa.Column("descripcion", sa.Text(), nullable=True),
        sa.Column("tipo_problema_id", sa.Integer(), nullable=False),
        sa.Column("proyecto_id", sa.Integer(), nullable=True),
        sa.Column("area_id", sa.Integer(), nullable=False),
        sa.Column("status", ticket_status_col, nullable=False, server_default="open"),
        sa.Column("priority", ticket_priority_col, nullable=False, server_default="low"),
        sa.Column("visto", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["tipo_problema_id"], ["tipos_problema.id"]),
        sa.ForeignKeyConstraint(["proyecto_id"], ["proyectos.id"]),
        sa.ForeignKeyConstraint(["area_id"], ["areas.id"]),
    )
    op.create_index(op.f("ix_tickets_user_id"), "tickets", ["user_id"], unique=False)
    op.create_index(op.f("ix_tickets_area_id"), "tickets", ["area_id"], unique=False)
    op.create_index(op.f("ix_tickets_created_at"), "tickets", ["created_at"], unique=False)

    op.create_table(
        "ticket_responses",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("ticket_id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("mensaje", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["ticket_id"], ["tickets.id"]),
    )
    op.create_index(op.f("ix_ticket_responses_ticket_id"), "ticket_responses", ["ticket_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_ticket_responses_ticket_id"), table_name="ticket_responses")
    op.drop_table("ticket_responses")
    op.drop_index(op.f("ix_tickets_created_at"), table_name="tickets")
    op.drop_index(op.f("ix_tickets_area_id"), table_name="tickets")
    op.drop_index(op.f("ix_tickets_user_id"), table_name="tickets")
    op.drop_table("tickets")
    op.drop_table("user_roles")
    for table in ("tipos_problema", "proyectos", "areas"):
        op.drop_table(table)

    bind = op.get_bind()
    sa.Enum("low", "medium", "high", name="ticket_priority").drop(bind, checkfirst=True)
    sa.Enum("open", "in_progress", "closed", name="ticket_status").drop(bind, checkfirst=True)
