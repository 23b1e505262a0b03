"""Session introspection and route access endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from helpdesk.core.access import allowed_prefixes, landing_page, resolve
from helpdesk.core.deps import get_session_context
from helpdesk.schemas.session import AccessDecisionOut, IdentityOut, SessionOut
from helpdesk.services.session import SessionContext

router = APIRouter()


@router.get("/session", response_model=SessionOut)
def get_session(context: SessionContext = Depends(get_session_context)) -> SessionOut:
    if not context.authenticated:
        return SessionOut(user=None, role=None, area_id=None, error=context.error)
    return SessionOut(
        user=IdentityOut.model_validate(context.user),
        role=context.role,
        area_id=context.area_id,
        error=context.error,
        landing_page=landing_page(context.role),
        allowed_paths=list(allowed_prefixes(context.role)),
    )


@router.get("/access", response_model=AccessDecisionOut)
def check_access(
    path: str = Query(..., min_length=1, max_length=512),
    context: SessionContext = Depends(get_session_context),
) -> AccessDecisionOut:
    decision = resolve(context.role, path, authenticated=context.authenticated)
    return AccessDecisionOut(
        path=path,
        allowed=decision.allowed,
        redirect_to=decision.redirect_to,
        from_path=decision.from_path,
    )
