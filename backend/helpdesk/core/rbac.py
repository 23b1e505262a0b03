"""Ticket visibility and action scope per role."""

from __future__ import annotations

from collections.abc import Iterable

from helpdesk.models.identity import Identity
from helpdesk.models.ticket import Ticket


def _owns(identity: Identity, ticket: Ticket) -> bool:
    return str(ticket.user_id) == str(identity.user_id)


def _in_worker_area(identity: Identity, ticket: Ticket) -> bool:
    if not identity.is_worker or identity.area_id is None:
        return False
    return ticket.area_id == identity.area_id


def can_view_ticket(identity: Identity, ticket: Ticket) -> bool:
    if identity.is_admin:
        return True
    return _owns(identity, ticket) or _in_worker_area(identity, ticket)


def can_manage_ticket(identity: Identity, ticket: Ticket) -> bool:
    """Status changes and the seen flag: admins anywhere, workers in their own area."""
    if identity.is_admin:
        return True
    return _in_worker_area(identity, ticket)


def can_respond_ticket(identity: Identity, ticket: Ticket) -> bool:
    return can_view_ticket(identity, ticket)


def filter_tickets_for_identity(identity: Identity, tickets: Iterable[Ticket]) -> list[Ticket]:
    if identity.is_admin:
        return list(tickets)
    return [ticket for ticket in tickets if can_view_ticket(identity, ticket)]
