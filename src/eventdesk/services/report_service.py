"""
Report Service

Administrator dashboard statistics combining the event and account stores.
"""

import logging
from datetime import datetime
from typing import Optional

from eventdesk.repositories.event_repository import EventStore
from eventdesk.schemas.report import DashboardStats
from eventdesk.services.account_service import AccountStore

logger = logging.getLogger(__name__)


class ReportService:
    """Read-only reports; every report requires an admin session."""

    def __init__(self, events: EventStore, accounts: AccountStore):
        self.events = events
        self.accounts = accounts

    def dashboard(self, now: Optional[datetime] = None) -> DashboardStats:
        """
        Event and account counts for the admin dashboard.

        Args:
            now: Naive local reference time (defaults to datetime.now())

        Raises:
            AuthorizationException: If the current session is not an admin
        """
        self.accounts.require_admin()
        now = now or datetime.now()
        events = self.events.get_all()
        users = self.accounts.get_all_users()

        upcoming = sum(1 for event in events if event.scheduled_at > now)
        return DashboardStats(
            total_events=len(events),
            upcoming_events=upcoming,
            past_events=len(events) - upcoming,
            events_this_month=sum(
                1 for event in events
                if event.date.year == now.year and event.date.month == now.month
            ),
            total_users=len(users),
        )
