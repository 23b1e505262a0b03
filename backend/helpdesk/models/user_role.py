"""Role assignments for identities owned by the external identity provider."""

from __future__ import annotations

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from helpdesk.db.base import Base


class UserRoleRecord(Base):
    __tablename__ = "user_roles"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    # Stored as free text upstream; parse with models.enums.parse_role.
    role: Mapped[str] = mapped_column(String(32), nullable=False, default="user")
    area_id: Mapped[int | None] = mapped_column(ForeignKey("areas.id"), nullable=True)
