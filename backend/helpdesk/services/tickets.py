"""Ticket workflows built on the store gateway and the lifecycle rules."""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from helpdesk.core.exceptions import (
    GatewayError,
    InsufficientPermissionsError,
    InvalidResponseError,
    InvalidTicketDataError,
    NotFoundError,
)
from helpdesk.core.rbac import can_manage_ticket, can_respond_ticket, can_view_ticket, filter_tickets_for_identity
from helpdesk.models.enums import TicketStatus
from helpdesk.models.identity import Identity
from helpdesk.models.reference import Area, ProblemType, Project
from helpdesk.models.ticket import Ticket, TicketResponse
from helpdesk.schemas.ticket import TicketCreate
from helpdesk.services import gateway
from helpdesk.services.lifecycle import check_transition, status_after_response

logger = logging.getLogger(__name__)

STATUS_FILTER_ALL = "all"


@dataclass
class ResponseOutcome:
    ticket: Ticket
    response: TicketResponse
    status_transition_failed: bool = False


def list_tickets_for(db: Session, identity: Identity) -> list[Ticket]:
    return filter_tickets_for_identity(identity, gateway.list_tickets(db))


def filter_tickets(
    tickets: list[Ticket],
    *,
    status: TicketStatus | str | None = None,
    search: str | None = None,
) -> list[Ticket]:
    wanted = None
    if status and str(status) != STATUS_FILTER_ALL:
        wanted = TicketStatus(status)
    needle = (search or "").strip().lower()

    def _matches(ticket: Ticket) -> bool:
        if wanted is not None and ticket.status != wanted:
            return False
        if not needle:
            return True
        haystack = (ticket.subject or "", ticket.submitter_name or "", ticket.id or "")
        return any(needle in value.lower() for value in haystack)

    return [ticket for ticket in tickets if _matches(ticket)]


def compute_stats(tickets: list[Ticket]) -> dict:
    return {
        "total": len(tickets),
        "open": sum(1 for t in tickets if t.status == TicketStatus.open),
        "in_progress": sum(1 for t in tickets if t.status == TicketStatus.in_progress),
        "closed": sum(1 for t in tickets if t.status == TicketStatus.closed),
    }


def _visible_ticket(db: Session, identity: Identity, ticket_id: str) -> Ticket:
    ticket = gateway.get_ticket(db, ticket_id)
    if ticket is None or not can_view_ticket(identity, ticket):
        raise NotFoundError("ticket_not_found", details={"ticket_id": ticket_id})
    return ticket


def create_ticket_for(db: Session, identity: Identity, data: TicketCreate) -> Ticket:
    if not data.subject:
        raise InvalidTicketDataError("subject_required", field="subject")
    if not data.submitter_name:
        raise InvalidTicketDataError("submitter_name_required", field="submitter_name")
    if not gateway.reference_exists(db, Area, data.area_id):
        raise InvalidTicketDataError("unknown_area", field="area_id")
    if not gateway.reference_exists(db, ProblemType, data.problem_type_id):
        raise InvalidTicketDataError("unknown_problem_type", field="problem_type_id")
    if data.project_id is not None and not gateway.reference_exists(db, Project, data.project_id):
        raise InvalidTicketDataError("unknown_project", field="project_id")

    return gateway.create_ticket(
        db,
        {
            "user_id": identity.user_id,
            "submitter_name": data.submitter_name,
            "subject": data.subject,
            "description": data.description,
            "area_id": data.area_id,
            "problem_type_id": data.problem_type_id,
            "project_id": data.project_id,
            "priority": data.priority,
        },
    )


def get_ticket_detail(db: Session, identity: Identity, ticket_id: str) -> Ticket:
    """Load a visible ticket; the first staff view flips its seen flag."""
    ticket = _visible_ticket(db, identity, ticket_id)
    if not ticket.seen and identity.is_staff and can_manage_ticket(identity, ticket):
        gateway.mark_seen(db, ticket.id)
        ticket = gateway.refresh_ticket(db, ticket)
    return ticket


def set_status(db: Session, identity: Identity, ticket_id: str, status: TicketStatus) -> Ticket:
    ticket = _visible_ticket(db, identity, ticket_id)
    if not can_manage_ticket(identity, ticket):
        raise InsufficientPermissionsError("forbidden")
    if not check_transition(ticket.status, status):
        return ticket
    gateway.update_status(db, ticket.id, status)
    return gateway.refresh_ticket(db, ticket)


def append_response(db: Session, identity: Identity, ticket_id: str, message: str) -> ResponseOutcome:
    """Record a response, then stamp the ticket and move it out of ``open``.

    The two writes are independent: if the second one fails the response stays
    recorded and the outcome reports ``status_transition_failed``.
    """
    text = (message or "").strip()
    if not text:
        raise InvalidResponseError()

    ticket = _visible_ticket(db, identity, ticket_id)
    if not can_respond_ticket(identity, ticket):
        raise InsufficientPermissionsError("forbidden")

    response = gateway.append_response(db, ticket.id, identity.user_id, text)

    transition_failed = False
    next_status = status_after_response(ticket.status)
    try:
        gateway.record_response_effects(
            db,
            ticket.id,
            responded_at=response.created_at or dt.datetime.now(dt.timezone.utc),
            status=next_status if next_status != ticket.status else None,
        )
    except GatewayError:
        transition_failed = True
        logger.warning("Response %s stored but ticket %s was not updated", response.id, ticket.id)

    ticket = gateway.refresh_ticket(db, ticket)
    return ResponseOutcome(ticket=ticket, response=response, status_transition_failed=transition_failed)
