"""Shared enum values used by the database models and schemas."""

from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    admin = "admin"
    worker = "worker"
    user = "user"


# Values found in user_roles rows written by older clients.
ROLE_ALIASES: dict[str, UserRole] = {
    "trabajador": UserRole.worker,
}


def parse_role(value: str | UserRole | None) -> UserRole:
    """Map a stored role value onto the enum; anything unrecognised is a plain user."""
    if isinstance(value, UserRole):
        return value
    normalized = (value or "").strip().lower()
    if normalized in ROLE_ALIASES:
        return ROLE_ALIASES[normalized]
    try:
        return UserRole(normalized)
    except ValueError:
        return UserRole.user


class TicketStatus(str, enum.Enum):
    open = "open"
    in_progress = "in_progress"
    closed = "closed"


class TicketPriority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"
