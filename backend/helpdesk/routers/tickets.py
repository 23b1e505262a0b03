"""Ticket endpoints: listing, creation, detail, status and responses."""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy.orm import Session

from helpdesk.core.deps import get_current_identity
from helpdesk.db.session import get_db
from helpdesk.models.identity import Identity
from helpdesk.schemas.ticket import (
    ResponseOutcomeOut,
    TicketCreate,
    TicketOut,
    TicketResponseCreate,
    TicketResponseOut,
    TicketStats,
    TicketStatusUpdate,
)
from helpdesk.services.tickets import (
    append_response,
    compute_stats,
    create_ticket_for,
    filter_tickets,
    get_ticket_detail,
    list_tickets_for,
    set_status,
)

router = APIRouter(dependencies=[Depends(get_current_identity)])
_STATUS_FILTER_PATTERN = "^(all|open|in_progress|closed)$"


@router.get("/", response_model=list[TicketOut])
def get_all_tickets(
    status_filter: str | None = Query(default=None, alias="status", pattern=_STATUS_FILTER_PATTERN),
    search: str | None = Query(default=None, max_length=120),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> list[TicketOut]:
    tickets = filter_tickets(list_tickets_for(db, identity), status=status_filter, search=search)
    return [TicketOut.model_validate(t) for t in tickets]


@router.get("/stats", response_model=TicketStats)
def get_stats(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> TicketStats:
    return TicketStats(**compute_stats(list_tickets_for(db, identity)))


@router.post("/", response_model=TicketOut, status_code=status.HTTP_201_CREATED)
def create_new_ticket(
    payload: TicketCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> TicketOut:
    ticket = create_ticket_for(db, identity, payload)
    return TicketOut.model_validate(ticket)


@router.get("/{ticket_id}", response_model=TicketOut)
def get_ticket_by_id(
    ticket_id: str = Path(..., min_length=1, max_length=64),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> TicketOut:
    return TicketOut.model_validate(get_ticket_detail(db, identity, ticket_id))


@router.patch("/{ticket_id}/status", response_model=TicketOut)
def update_ticket_status(
    ticket_id: str = Path(..., min_length=1, max_length=64),
    payload: TicketStatusUpdate = Body(...),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> TicketOut:
    ticket = set_status(db, identity, ticket_id, payload.status)
    return TicketOut.model_validate(ticket)


@router.post("/{ticket_id}/responses", response_model=ResponseOutcomeOut, status_code=status.HTTP_201_CREATED)
def add_ticket_response(
    ticket_id: str = Path(..., min_length=1, max_length=64),
    payload: TicketResponseCreate = Body(...),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> ResponseOutcomeOut:
    outcome = append_response(db, identity, ticket_id, payload.message)
    return ResponseOutcomeOut(
        ticket=TicketOut.model_validate(outcome.ticket),
        response=TicketResponseOut.model_validate(outcome.response),
        status_transition_failed=outcome.status_transition_failed,
    )
