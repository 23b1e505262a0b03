"""Schemas describing the resolved session and route access decisions."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from helpdesk.models.enums import UserRole


class IdentityOut(BaseModel):
    user_id: str
    email: str
    role: UserRole
    area_id: int | None = None

    model_config = ConfigDict(from_attributes=True)


class SessionOut(BaseModel):
    user: IdentityOut | None
    role: UserRole | None
    area_id: int | None
    error: str | None
    landing_page: str | None = None
    allowed_paths: list[str] = []


class AccessDecisionOut(BaseModel):
    path: str
    allowed: bool
    redirect_to: str | None = None
    from_path: str | None = None
