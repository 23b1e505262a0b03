from __future__ import annotations

import logging

import pytest
from sqlalchemy import event

from helpdesk.core.exceptions import (
    GatewayError,
    InsufficientPermissionsError,
    InvalidResponseError,
    InvalidStatusTransitionError,
    InvalidTicketDataError,
    NotFoundError,
)
from helpdesk.models.enums import TicketPriority, TicketStatus, UserRole
from helpdesk.models.identity import Identity
from helpdesk.schemas.ticket import TicketCreate
from helpdesk.services import gateway, tickets

REQUESTER = Identity(user_id="user-1", email="user-1@example.com", role=UserRole.user)
WORKER = Identity(user_id="worker-1", email="worker-1@example.com", role=UserRole.worker, area_id=4)
OTHER_WORKER = Identity(user_id="worker-2", email="worker-2@example.com", role=UserRole.worker, area_id=1)
ADMIN = Identity(user_id="admin-1", email="admin-1@example.com", role=UserRole.admin)


def _broken_effects(*_args, **_kwargs):  # noqa: ANN002, ANN003, ANN202
    raise GatewayError("record_response_effects")


def _create(db, *, subject: str = "No cargan archivos", owner: Identity = REQUESTER):  # noqa: ANN001, ANN202
    payload = TicketCreate(
        submitter_name="Ana Pérez",
        subject=subject,
        description="El adjunto se queda cargando",
        area_id=4,
        problem_type_id=3,
        project_id=9,
    )
    return tickets.create_ticket_for(db, owner, payload)


def test_created_ticket_starts_open_low_and_unseen(db_session) -> None:  # noqa: ANN001
    ticket = _create(db_session)

    assert ticket.status == TicketStatus.open
    assert ticket.priority == TicketPriority.low
    assert ticket.seen is False
    assert ticket.responded_at is None
    assert ticket.user_id == REQUESTER.user_id


def test_blank_subject_is_rejected_before_any_write(db_session, monkeypatch) -> None:  # noqa: ANN001
    def _fail(*_args, **_kwargs):  # noqa: ANN002, ANN003, ANN202
        raise AssertionError("store should not be called")

    monkeypatch.setattr(gateway, "create_ticket", _fail)

    with pytest.raises(InvalidTicketDataError) as exc_info:
        _create(db_session, subject="   ")
    assert exc_info.value.details == {"field": "subject"}


def test_unknown_area_is_rejected(db_session) -> None:  # noqa: ANN001
    payload = TicketCreate(submitter_name="Ana", subject="Bug", area_id=99, problem_type_id=3)

    with pytest.raises(InvalidTicketDataError):
        tickets.create_ticket_for(db_session, REQUESTER, payload)


def test_worker_response_moves_open_ticket_to_in_progress(db_session) -> None:  # noqa: ANN001
    ticket = _create(db_session)

    outcome = tickets.append_response(db_session, WORKER, ticket.id, "we're looking into it")

    assert outcome.status_transition_failed is False
    assert outcome.ticket.status == TicketStatus.in_progress
    assert outcome.ticket.responded_at is not None
    assert [(r.user_id, r.message) for r in outcome.ticket.responses] == [("worker-1", "we're looking into it")]


def test_responses_keep_append_order(db_session) -> None:  # noqa: ANN001
    ticket = _create(db_session)

    tickets.append_response(db_session, WORKER, ticket.id, "first")
    tickets.append_response(db_session, REQUESTER, ticket.id, "second")
    outcome = tickets.append_response(db_session, WORKER, ticket.id, "third")

    assert [r.message for r in outcome.ticket.responses] == ["first", "second", "third"]


@pytest.mark.parametrize("status", [TicketStatus.in_progress, TicketStatus.closed])
def test_response_does_not_change_non_open_status(db_session, status: TicketStatus) -> None:  # noqa: ANN001
    ticket = _create(db_session)
    tickets.set_status(db_session, WORKER, ticket.id, status)

    outcome = tickets.append_response(db_session, REQUESTER, ticket.id, "any update?")

    assert outcome.ticket.status == status


def test_empty_response_is_rejected(db_session) -> None:  # noqa: ANN001
    ticket = _create(db_session)

    with pytest.raises(InvalidResponseError):
        tickets.append_response(db_session, WORKER, ticket.id, "  \n ")
    assert gateway.refresh_ticket(db_session, ticket).responses == []


def test_failed_transition_keeps_the_response(db_session, monkeypatch) -> None:  # noqa: ANN001
    ticket = _create(db_session)

    monkeypatch.setattr(gateway, "record_response_effects", _broken_effects)

    outcome = tickets.append_response(db_session, WORKER, ticket.id, "on it")

    assert outcome.status_transition_failed is True
    assert outcome.ticket.status == TicketStatus.open
    assert [r.message for r in outcome.ticket.responses] == ["on it"]


def test_rerunning_after_partial_failure_completes_transition(db_session, monkeypatch) -> None:  # noqa: ANN001
    ticket = _create(db_session)
    original = gateway.record_response_effects
    monkeypatch.setattr(gateway, "record_response_effects", _broken_effects)
    tickets.append_response(db_session, WORKER, ticket.id, "on it")
    monkeypatch.setattr(gateway, "record_response_effects", original)

    outcome = tickets.append_response(db_session, WORKER, ticket.id, "still on it")

    assert outcome.ticket.status == TicketStatus.in_progress
    assert len(outcome.ticket.responses) == 2


def test_set_status_is_idempotent(db_session) -> None:  # noqa: ANN001
    ticket = _create(db_session)

    once = tickets.set_status(db_session, ADMIN, ticket.id, TicketStatus.in_progress)
    twice = tickets.set_status(db_session, ADMIN, ticket.id, TicketStatus.in_progress)

    assert once.status == twice.status == TicketStatus.in_progress


def test_closed_ticket_cannot_be_reopened(db_session) -> None:  # noqa: ANN001
    ticket = _create(db_session)
    tickets.set_status(db_session, WORKER, ticket.id, TicketStatus.closed)

    with pytest.raises(InvalidStatusTransitionError):
        tickets.set_status(db_session, ADMIN, ticket.id, TicketStatus.open)
    assert gateway.get_ticket(db_session, ticket.id).status == TicketStatus.closed


def test_status_changes_need_staff_in_the_ticket_area(db_session) -> None:  # noqa: ANN001
    ticket = _create(db_session)

    with pytest.raises(InsufficientPermissionsError):
        tickets.set_status(db_session, REQUESTER, ticket.id, TicketStatus.closed)
    with pytest.raises(NotFoundError):
        tickets.set_status(db_session, OTHER_WORKER, ticket.id, TicketStatus.closed)


def test_first_staff_view_marks_ticket_seen(db_session) -> None:  # noqa: ANN001
    ticket = _create(db_session)

    assert tickets.get_ticket_detail(db_session, REQUESTER, ticket.id).seen is False
    seen = tickets.get_ticket_detail(db_session, WORKER, ticket.id)

    assert seen.seen is True
    assert seen.status == TicketStatus.open
    assert tickets.get_ticket_detail(db_session, REQUESTER, ticket.id).seen is True


def test_filter_and_stats(db_session) -> None:  # noqa: ANN001
    first = _create(db_session, subject="Error en el sistema")
    _create(db_session, subject="Bug en CRM")
    tickets.set_status(db_session, ADMIN, first.id, TicketStatus.closed)
    visible = tickets.list_tickets_for(db_session, ADMIN)

    assert tickets.compute_stats(visible) == {"total": 2, "open": 1, "in_progress": 0, "closed": 1}
    assert [t.subject for t in tickets.filter_tickets(visible, search="crm")] == ["Bug en CRM"]
    assert [t.id for t in tickets.filter_tickets(visible, status="closed")] == [first.id]
    assert len(tickets.filter_tickets(visible, status="all", search="ana")) == 2


def test_listing_loads_responses_and_references_up_front(db_session) -> None:  # noqa: ANN001
    for subject in ("Uno", "Dos", "Tres"):
        ticket = _create(db_session, subject=subject)
        tickets.append_response(db_session, WORKER, ticket.id, "revisando")
    db_session.expunge_all()
    listed = gateway.list_tickets(db_session)

    statements: list[str] = []

    def _record(_conn, _cursor, statement, *_args) -> None:  # noqa: ANN001, ANN002
        statements.append(statement)

    engine = db_session.get_bind()
    event.listen(engine, "before_cursor_execute", _record)
    try:
        loaded = [(t.area.name, t.problem_type.name, t.project.name, len(t.responses)) for t in listed]
    finally:
        event.remove(engine, "before_cursor_execute", _record)

    assert loaded == [("Soporte", "Bug", "CRM", 1)] * 3
    assert statements == []


def test_store_writes_are_logged_only_when_something_changed(db_session, caplog) -> None:  # noqa: ANN001
    ticket = _create(db_session)

    with caplog.at_level(logging.INFO, logger="helpdesk.services.gateway"):
        gateway.mark_seen(db_session, ticket.id)
        gateway.mark_seen(db_session, ticket.id)
        gateway.update_status(db_session, "missing-ticket", TicketStatus.closed)

    messages = [record.getMessage() for record in caplog.records]
    assert messages.count(f"Ticket marked as seen: {ticket.id}") == 1
    assert not any(message.startswith("Ticket status updated") for message in messages)
    assert "Ticket status update failed (not found): missing-ticket" in messages
