"""Query/mutation facade over the ticket store.

Every call commits its own unit of work. Database failures are rolled back,
logged and re-raised as ``GatewayError``; callers must not assume success.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from helpdesk.core.exceptions import GatewayError
from helpdesk.models.enums import TicketPriority, TicketStatus
from helpdesk.models.reference import Area, ProblemType, Project
from helpdesk.models.ticket import Ticket, TicketResponse, new_id
from helpdesk.models.user_role import UserRoleRecord
from helpdesk.services.lifecycle import INITIAL_STATUS

logger = logging.getLogger(__name__)

T = TypeVar("T")

_RESPONSE_ORDER_STEP = dt.timedelta(microseconds=1)

# Everything TicketOut serialises, loaded up front inside the wrapped call.
_TICKET_LOADS = (
    selectinload(Ticket.responses),
    selectinload(Ticket.area),
    selectinload(Ticket.project),
    selectinload(Ticket.problem_type),
)


def _to_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def _run(db: Session, operation: str, fn: Callable[[], T]) -> T:
    try:
        return fn()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Ticket store operation failed: %s (%s)", operation, exc)
        raise GatewayError(operation) from exc


def list_tickets(db: Session) -> list[Ticket]:
    query = select(Ticket).options(*_TICKET_LOADS).order_by(Ticket.created_at.desc())
    return _run(db, "list_tickets", lambda: list(db.scalars(query)))


def get_ticket(db: Session, ticket_id: str) -> Ticket | None:
    return _run(db, "get_ticket", lambda: db.get(Ticket, ticket_id))


def create_ticket(db: Session, fields: dict[str, Any]) -> Ticket:
    values = dict(fields)

    def _create() -> Ticket:
        ticket = Ticket(
            id=new_id(),
            status=INITIAL_STATUS,
            priority=values.pop("priority", None) or TicketPriority.low,
            seen=False,
            created_at=dt.datetime.now(dt.timezone.utc),
            responded_at=None,
            **values,
        )
        db.add(ticket)
        db.commit()
        db.refresh(ticket)
        return ticket

    ticket = _run(db, "create_ticket", _create)
    logger.info("Ticket created: %s (area=%s)", ticket.id, ticket.area_id)
    return ticket


def update_status(db: Session, ticket_id: str, status: TicketStatus) -> None:
    def _update() -> bool:
        ticket = db.get(Ticket, ticket_id)
        if ticket is None:
            logger.warning("Ticket status update failed (not found): %s", ticket_id)
            return False
        ticket.status = status
        db.commit()
        return True

    if _run(db, "update_status", _update):
        logger.info("Ticket status updated: %s -> %s", ticket_id, TicketStatus(status).value)


def append_response(db: Session, ticket_id: str, author_id: str, message: str) -> TicketResponse:
    def _append() -> TicketResponse:
        created_at = dt.datetime.now(dt.timezone.utc)
        last = db.scalar(
            select(TicketResponse.created_at)
            .where(TicketResponse.ticket_id == ticket_id)
            .order_by(TicketResponse.created_at.desc())
            .limit(1)
        )
        if last is not None and _to_utc(last) >= created_at:
            created_at = _to_utc(last) + _RESPONSE_ORDER_STEP
        response = TicketResponse(
            id=new_id(),
            ticket_id=ticket_id,
            user_id=author_id,
            message=message,
            created_at=created_at,
        )
        db.add(response)
        db.commit()
        return response

    response = _run(db, "append_response", _append)
    logger.info("Response added to ticket %s by %s", ticket_id, author_id)
    return response


def record_response_effects(
    db: Session,
    ticket_id: str,
    *,
    responded_at: dt.datetime,
    status: TicketStatus | None = None,
) -> None:
    """Stamp the last-responded time and, when given, move the ticket to ``status``."""

    def _touch() -> None:
        ticket = db.get(Ticket, ticket_id)
        if ticket is None:
            return
        ticket.responded_at = responded_at
        if status is not None:
            ticket.status = status
        db.commit()

    _run(db, "record_response_effects", _touch)


def mark_seen(db: Session, ticket_id: str) -> None:
    def _mark() -> bool:
        ticket = db.get(Ticket, ticket_id)
        if ticket is None or ticket.seen:
            return False
        ticket.seen = True
        db.commit()
        return True

    if _run(db, "mark_seen", _mark):
        logger.info("Ticket marked as seen: %s", ticket_id)


def refresh_ticket(db: Session, ticket: Ticket) -> Ticket:
    def _refresh() -> Ticket:
        # Responses are inserted by ticket_id, so drop any stale collection too.
        db.expire(ticket)
        db.refresh(ticket)
        return ticket

    return _run(db, "refresh_ticket", _refresh)


def get_role_record(db: Session, user_id: str) -> UserRoleRecord | None:
    return _run(db, "get_role_record", lambda: db.get(UserRoleRecord, user_id))


def list_areas(db: Session) -> list[Area]:
    return _run(db, "list_areas", lambda: list(db.scalars(select(Area).order_by(Area.id))))


def list_projects(db: Session) -> list[Project]:
    return _run(db, "list_projects", lambda: list(db.scalars(select(Project).order_by(Project.id))))


def list_problem_types(db: Session) -> list[ProblemType]:
    return _run(
        db,
        "list_problem_types",
        lambda: list(db.scalars(select(ProblemType).order_by(ProblemType.id))),
    )


def reference_exists(db: Session, model: type, ref_id: int | None) -> bool:
    if ref_id is None:
        return False
    return _run(db, "reference_exists", lambda: db.get(model, ref_id) is not None)
