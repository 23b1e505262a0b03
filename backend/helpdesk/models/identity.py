"""Authenticated caller as seen by this application (not persisted here)."""

from __future__ import annotations

from dataclasses import dataclass

from helpdesk.models.enums import UserRole


@dataclass(frozen=True)
class Identity:
    user_id: str
    email: str
    role: UserRole = UserRole.user
    # Only workers carry an area.
    area_id: int | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

    @property
    def is_worker(self) -> bool:
        return self.role == UserRole.worker

    @property
    def is_staff(self) -> bool:
        return self.role in {UserRole.admin, UserRole.worker}
