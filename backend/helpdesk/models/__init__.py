"""Convenience imports for Alembic metadata discovery."""

from helpdesk.models.reference import Area, ProblemType, Project
from helpdesk.models.ticket import Ticket, TicketResponse
from helpdesk.models.user_role import UserRoleRecord  # noqa: F401
