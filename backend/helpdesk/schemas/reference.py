"""Schemas for reference lookup rows."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ReferenceOut(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)
