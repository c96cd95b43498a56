"""
Report Pydantic Schemas
"""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    """Administrator dashboard counts across events and accounts."""

    total_events: int
    upcoming_events: int
    past_events: int
    events_this_month: int
    total_users: int
