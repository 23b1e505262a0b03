"""Ticket views backing the admin, worker and requester dashboards."""

from __future__ import annotations

from typing import Literal

from sqlalchemy.orm import Session

from helpdesk.models.identity import Identity
from helpdesk.models.ticket import Ticket
from helpdesk.services import gateway
from helpdesk.services.tickets import compute_stats, filter_tickets, list_tickets_for

WorkerView = Literal["received", "sent"]


def _view(tickets: list[Ticket], *, status: str | None, search: str | None) -> dict:
    return {
        "stats": compute_stats(tickets),
        "tickets": filter_tickets(tickets, status=status, search=search),
    }


def admin_dashboard(db: Session, identity: Identity, *, status: str | None = None, search: str | None = None) -> dict:
    return _view(list_tickets_for(db, identity), status=status, search=search)


def worker_dashboard(
    db: Session,
    identity: Identity,
    *,
    view: WorkerView = "received",
    status: str | None = None,
    search: str | None = None,
) -> dict:
    tickets = gateway.list_tickets(db)
    if view == "sent":
        selected = [t for t in tickets if str(t.user_id) == identity.user_id]
    elif identity.is_admin:
        selected = tickets
    else:
        selected = [t for t in tickets if identity.area_id is not None and t.area_id == identity.area_id]
    payload = _view(selected, status=status, search=search)
    payload["view"] = view
    payload["area_id"] = identity.area_id
    return payload


def my_tickets(db: Session, identity: Identity, *, status: str | None = None, search: str | None = None) -> dict:
    own = [t for t in gateway.list_tickets(db) if str(t.user_id) == identity.user_id]
    return _view(own, status=status, search=search)
