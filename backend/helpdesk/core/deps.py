"""Common FastAPI dependencies for session resolution and role checks."""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from helpdesk.core.config import settings
from helpdesk.core.exceptions import AuthenticationException, InsufficientPermissionsError
from helpdesk.db.session import get_db
from helpdesk.models.enums import UserRole
from helpdesk.models.identity import Identity
from helpdesk.services.session import SessionContext, resolve_session


def _extract_bearer_token(request: Request) -> str | None:
    authorization = request.headers.get("Authorization", "")
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    cleaned = token.strip()
    return cleaned or None


def get_session_context(request: Request, db: Session = Depends(get_db)) -> SessionContext:
    token = _extract_bearer_token(request) or request.cookies.get(settings.SESSION_COOKIE_NAME)
    return resolve_session(db, token)


def get_current_identity(context: SessionContext = Depends(get_session_context)) -> Identity:
    if context.user is None:
        error = context.error or "not_authenticated"
        raise AuthenticationException(
            error,
            error_code=error.upper(),
            details={"login": settings.LOGIN_PATH},
        )
    return context.user


def require_roles(*required: UserRole):
    allowed = set(required)

    def _checker(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role not in allowed:
            raise InsufficientPermissionsError("forbidden")
        return identity

    return _checker


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if identity.role != UserRole.admin:
        raise InsufficientPermissionsError("forbidden")
    return identity
