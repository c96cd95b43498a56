"""
Pydantic schemas for stored records, inputs and reports.
"""

from eventdesk.schemas.common import RecordModel, parse_model, utcnow
from eventdesk.schemas.event import Event, EventInput, EVENT_REQUIRED_FIELDS
from eventdesk.schemas.account import (
    Account,
    AccountPublic,
    SessionUser,
    RegisterRequest,
    UpdateProfileRequest,
    UserStats,
    ActivityReport,
)
from eventdesk.schemas.report import DashboardStats

__all__ = [
    "RecordModel",
    "parse_model",
    "utcnow",
    "Event",
    "EventInput",
    "EVENT_REQUIRED_FIELDS",
    "Account",
    "AccountPublic",
    "SessionUser",
    "RegisterRequest",
    "UpdateProfileRequest",
    "UserStats",
    "ActivityReport",
    "DashboardStats",
]
