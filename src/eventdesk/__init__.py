"""
eventdesk: record store for community events and user accounts.

Usage:
    from eventdesk import build_stores

    stores = build_stores()
    session = stores.accounts.authenticate("admin", "password")
    stores.events.create({...}, created_by=session.username)
"""

from eventdesk.container import Stores, build_stores
from eventdesk.repositories.event_repository import EventStore
from eventdesk.services.account_service import AccountStore
from eventdesk.services.report_service import ReportService

__version__ = "1.0.0"

__all__ = [
    "Stores",
    "build_stores",
    "EventStore",
    "AccountStore",
    "ReportService",
]
