"""Pydantic schemas for tickets, responses, and dashboard stats."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from helpdesk.core.sanitize import clean_multiline, clean_single_line
from helpdesk.models.enums import TicketPriority, TicketStatus
from helpdesk.schemas.reference import ReferenceOut
from helpdesk.services.lifecycle import next_manual_status

MAX_SUBJECT_LEN = 255
MAX_DESCRIPTION_LEN = 4000
MAX_MESSAGE_LEN = 4000
MAX_NAME_LEN = 120


class TicketResponseOut(BaseModel):
    id: str
    ticket_id: str
    user_id: str
    message: str
    created_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


class TicketCreate(BaseModel):
    submitter_name: str = Field(max_length=MAX_NAME_LEN)
    subject: str = Field(max_length=MAX_SUBJECT_LEN)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LEN)
    area_id: int
    problem_type_id: int
    project_id: int | None = None
    priority: TicketPriority = TicketPriority.low

    @field_validator("submitter_name", "subject", mode="before")
    @classmethod
    def normalize_single_line(cls, value: str) -> str:
        return clean_single_line(value)

    @field_validator("description", mode="before")
    @classmethod
    def normalize_description(cls, value: str | None) -> str | None:
        cleaned = clean_multiline(value)
        return cleaned or None


class TicketStatusUpdate(BaseModel):
    status: TicketStatus


class TicketResponseCreate(BaseModel):
    message: str = Field(max_length=MAX_MESSAGE_LEN)

    @field_validator("message", mode="before")
    @classmethod
    def normalize_message(cls, value: str) -> str:
        return clean_multiline(value)


class TicketOut(BaseModel):
    id: str
    user_id: str
    submitter_name: str
    subject: str
    description: str | None
    area_id: int
    project_id: int | None
    problem_type_id: int
    area: ReferenceOut | None = None
    project: ReferenceOut | None = None
    problem_type: ReferenceOut | None = None
    status: TicketStatus
    priority: TicketPriority
    seen: bool
    created_at: dt.datetime
    responded_at: dt.datetime | None
    responses: list[TicketResponseOut]

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def next_status(self) -> TicketStatus | None:
        return next_manual_status(self.status)


class ResponseOutcomeOut(BaseModel):
    ticket: TicketOut
    response: TicketResponseOut
    status_transition_failed: bool = False


class TicketStats(BaseModel):
    total: int
    open: int
    in_progress: int
    closed: int
