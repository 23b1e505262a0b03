"""Ticket status rules.

Statuses only move forward along ``STATUS_ORDER``. ``closed`` is terminal:
there is no reopen action.
"""

from __future__ import annotations

from helpdesk.core.exceptions import InvalidStatusTransitionError
from helpdesk.models.enums import TicketStatus

STATUS_ORDER: tuple[TicketStatus, ...] = (
    TicketStatus.open,
    TicketStatus.in_progress,
    TicketStatus.closed,
)
INITIAL_STATUS = TicketStatus.open


def status_rank(status: TicketStatus) -> int:
    return STATUS_ORDER.index(TicketStatus(status))


def can_transition(current: TicketStatus, requested: TicketStatus) -> bool:
    """Same-status requests count as allowed so callers can treat them as no-ops."""
    return status_rank(requested) >= status_rank(current)


def check_transition(current: TicketStatus, requested: TicketStatus) -> bool:
    """Return True when a write is needed, False for a no-op; raise on a backward move."""
    current = TicketStatus(current)
    requested = TicketStatus(requested)
    if not can_transition(current, requested):
        raise InvalidStatusTransitionError(current.value, requested.value)
    return requested != current


def status_after_response(current: TicketStatus) -> TicketStatus:
    if TicketStatus(current) == TicketStatus.open:
        return TicketStatus.in_progress
    return TicketStatus(current)


def next_manual_status(current: TicketStatus) -> TicketStatus | None:
    """Status offered by the one-click advance action, or None once closed."""
    rank = status_rank(current)
    if rank + 1 >= len(STATUS_ORDER):
        return None
    return STATUS_ORDER[rank + 1]
