"""Ticket and response models.

Column names follow the hosted schema (``asunto``, ``mensaje``, ``visto`` ...);
attribute names are the English ones used across the codebase.
"""

from __future__ import annotations

import datetime as dt
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from helpdesk.db.base import Base
from helpdesk.models.enums import TicketPriority, TicketStatus
from helpdesk.models.reference import Area, ProblemType, Project


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def new_id() -> str:
    return str(uuid4())


class Ticket(Base):
    __tablename__ = "tickets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    submitter_name: Mapped[str] = mapped_column("nombre_usuario", String(255), nullable=False)
    subject: Mapped[str] = mapped_column("asunto", String(255), nullable=False)
    description: Mapped[str | None] = mapped_column("descripcion", Text, nullable=True)
    problem_type_id: Mapped[int] = mapped_column(
        "tipo_problema_id", ForeignKey("tipos_problema.id"), nullable=False
    )
    project_id: Mapped[int | None] = mapped_column("proyecto_id", ForeignKey("proyectos.id"), nullable=True)
    area_id: Mapped[int] = mapped_column(ForeignKey("areas.id"), nullable=False, index=True)
    status: Mapped[TicketStatus] = mapped_column(
        Enum(TicketStatus, name="ticket_status", values_callable=lambda x: [e.value for e in x]),
        default=TicketStatus.open,
        nullable=False,
    )
    priority: Mapped[TicketPriority] = mapped_column(
        Enum(TicketPriority, name="ticket_priority", values_callable=lambda x: [e.value for e in x]),
        default=TicketPriority.low,
        nullable=False,
    )
    seen: Mapped[bool] = mapped_column("visto", Boolean, default=False, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    responded_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    responses: Mapped[list[TicketResponse]] = relationship(
        "TicketResponse",
        back_populates="ticket",
        order_by="TicketResponse.created_at",
    )
    area: Mapped[Area] = relationship(Area)
    project: Mapped[Project | None] = relationship(Project)
    problem_type: Mapped[ProblemType] = relationship(ProblemType)


class TicketResponse(Base):
    __tablename__ = "ticket_responses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    ticket_id: Mapped[str] = mapped_column(ForeignKey("tickets.id"), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    message: Mapped[str] = mapped_column("mensaje", Text, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    ticket: Mapped[Ticket] = relationship("Ticket", back_populates="responses")
