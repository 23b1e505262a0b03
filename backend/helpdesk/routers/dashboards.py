"""Dashboard endpoints for admins, workers and requesters."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from helpdesk.core.deps import get_current_identity, require_admin, require_roles
from helpdesk.db.session import get_db
from helpdesk.models.enums import UserRole
from helpdesk.models.identity import Identity
from helpdesk.schemas.ticket import TicketOut, TicketStats
from helpdesk.services import dashboards

router = APIRouter()
_STATUS_FILTER_PATTERN = "^(all|open|in_progress|closed)$"


class DashboardOut(BaseModel):
    stats: TicketStats
    tickets: list[TicketOut]


class WorkerDashboardOut(DashboardOut):
    view: Literal["received", "sent"]
    area_id: int | None = None


@router.get("/admin", response_model=DashboardOut)
def get_admin_dashboard(
    status_filter: str | None = Query(default=None, alias="status", pattern=_STATUS_FILTER_PATTERN),
    search: str | None = Query(default=None, max_length=120),
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_admin),
) -> DashboardOut:
    return DashboardOut.model_validate(
        dashboards.admin_dashboard(db, identity, status=status_filter, search=search),
        from_attributes=True,
    )


@router.get("/worker", response_model=WorkerDashboardOut)
def get_worker_dashboard(
    view: Literal["received", "sent"] = Query(default="received"),
    status_filter: str | None = Query(default=None, alias="status", pattern=_STATUS_FILTER_PATTERN),
    search: str | None = Query(default=None, max_length=120),
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_roles(UserRole.worker, UserRole.admin)),
) -> WorkerDashboardOut:
    return WorkerDashboardOut.model_validate(
        dashboards.worker_dashboard(db, identity, view=view, status=status_filter, search=search),
        from_attributes=True,
    )


@router.get("/my-tickets", response_model=DashboardOut)
def get_my_tickets(
    status_filter: str | None = Query(default=None, alias="status", pattern=_STATUS_FILTER_PATTERN),
    search: str | None = Query(default=None, max_length=120),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> DashboardOut:
    return DashboardOut.model_validate(
        dashboards.my_tickets(db, identity, status=status_filter, search=search),
        from_attributes=True,
    )
