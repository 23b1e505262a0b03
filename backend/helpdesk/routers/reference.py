"""Read-only lookup data for the ticket creation form."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from helpdesk.core.deps import get_current_identity
from helpdesk.db.session import get_db
from helpdesk.schemas.reference import ReferenceOut
from helpdesk.services import gateway

router = APIRouter(dependencies=[Depends(get_current_identity)])


@router.get("/areas", response_model=list[ReferenceOut])
def get_areas(db: Session = Depends(get_db)) -> list[ReferenceOut]:
    return [ReferenceOut.model_validate(a) for a in gateway.list_areas(db)]


@router.get("/projects", response_model=list[ReferenceOut])
def get_projects(db: Session = Depends(get_db)) -> list[ReferenceOut]:
    return [ReferenceOut.model_validate(p) for p in gateway.list_projects(db)]


@router.get("/problem-types", response_model=list[ReferenceOut])
def get_problem_types(db: Session = Depends(get_db)) -> list[ReferenceOut]:
    return [ReferenceOut.model_validate(t) for t in gateway.list_problem_types(db)]
