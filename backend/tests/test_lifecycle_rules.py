from __future__ import annotations

import itertools

import pytest

from helpdesk.core.exceptions import InvalidStatusTransitionError
from helpdesk.models.enums import TicketStatus
from helpdesk.services.lifecycle import (
    STATUS_ORDER,
    can_transition,
    check_transition,
    next_manual_status,
    status_after_response,
    status_rank,
)


def test_forward_transitions_are_allowed() -> None:
    assert check_transition(TicketStatus.open, TicketStatus.in_progress)
    assert check_transition(TicketStatus.in_progress, TicketStatus.closed)
    assert check_transition(TicketStatus.open, TicketStatus.closed)


def test_same_status_is_a_no_op() -> None:
    for status in TicketStatus:
        assert check_transition(status, status) is False


def test_closed_is_terminal() -> None:
    for status in (TicketStatus.open, TicketStatus.in_progress):
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            check_transition(TicketStatus.closed, status)
        assert exc_info.value.status_code == 409
        assert exc_info.value.details == {"current": "closed", "requested": status.value}


def test_transitions_never_decrease_rank() -> None:
    for current, requested in itertools.product(STATUS_ORDER, repeat=2):
        assert can_transition(current, requested) is (status_rank(requested) >= status_rank(current))


def test_response_moves_open_ticket_to_in_progress_only() -> None:
    assert status_after_response(TicketStatus.open) == TicketStatus.in_progress
    assert status_after_response(TicketStatus.in_progress) == TicketStatus.in_progress
    assert status_after_response(TicketStatus.closed) == TicketStatus.closed


def test_next_manual_status_advances_one_step() -> None:
    assert next_manual_status(TicketStatus.open) == TicketStatus.in_progress
    assert next_manual_status(TicketStatus.in_progress) == TicketStatus.closed
    assert next_manual_status(TicketStatus.closed) is None


def test_status_strings_are_accepted() -> None:
    assert check_transition("open", "in_progress")
