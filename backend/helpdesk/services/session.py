"""Resolve the ambient session into an identity with its role and area.

Resolution never raises: a missing or bad session yields ``user=None`` with
``error`` set, and a failed role lookup falls back to the ``user`` role.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from helpdesk.core.exceptions import GatewayError
from helpdesk.core.security import decode_session_token
from helpdesk.models.enums import UserRole, parse_role
from helpdesk.models.identity import Identity
from helpdesk.services import gateway

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionContext:
    user: Identity | None
    role: UserRole | None = None
    area_id: int | None = None
    error: str | None = None

    @property
    def authenticated(self) -> bool:
        return self.user is not None


def _anonymous(error: str) -> SessionContext:
    return SessionContext(user=None, error=error)


def lookup_role(db: Session, user_id: str) -> tuple[UserRole, int | None, str | None]:
    """Return (role, area_id, error) for a user id; absent rows mean a plain user."""
    try:
        record = gateway.get_role_record(db, user_id)
    except GatewayError:
        logger.warning("Role lookup failed for %s; defaulting to user", user_id)
        return UserRole.user, None, "role_lookup_failed"
    if record is None:
        return UserRole.user, None, None
    role = parse_role(record.role)
    area_id = record.area_id if role == UserRole.worker else None
    return role, area_id, None


def resolve_session(db: Session, token: str | None) -> SessionContext:
    if not token:
        return _anonymous("not_authenticated")
    try:
        claims = decode_session_token(token)
    except ValueError as exc:
        return _anonymous(str(exc))

    user_id = str(claims.get("sub") or "").strip()
    if not user_id:
        return _anonymous("invalid_token")

    role, area_id, error = lookup_role(db, user_id)
    identity = Identity(
        user_id=user_id,
        email=str(claims.get("email") or ""),
        role=role,
        area_id=area_id,
    )
    return SessionContext(user=identity, role=role, area_id=area_id, error=error)
