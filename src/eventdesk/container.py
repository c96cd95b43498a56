"""
Composition root.

Builds the persistence adapter and the stores that share it. Hosts own the
returned Stores object; nothing here is cached at module level.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from eventdesk.core.config import Settings, get_settings
from eventdesk.integrations.persistence import PersistenceAdapter, create_persistence_adapter
from eventdesk.repositories.event_repository import EventStore
from eventdesk.services.account_service import AccountStore
from eventdesk.services.report_service import ReportService

logger = logging.getLogger('CONTAINER')


@dataclass
class Stores:
    """Everything a presentation layer needs, wired to one adapter."""

    adapter: PersistenceAdapter
    events: EventStore
    accounts: AccountStore
    reports: ReportService


def build_stores(
    settings: Optional[Settings] = None,
    adapter: Optional[PersistenceAdapter] = None,
) -> Stores:
    """
    Construct the stores.

    Args:
        settings: Application settings (defaults to get_settings())
        adapter: Persistence adapter (defaults to the configured backend)

    Returns:
        Stores: Event store, account store and report service
    """
    settings = settings or get_settings()
    adapter = adapter or create_persistence_adapter(settings)

    events = EventStore(adapter, settings.events_collection)
    accounts = AccountStore(adapter, settings)
    logger.info(f"{settings.app_name} stores ready ({type(adapter).__name__})")
    return Stores(
        adapter=adapter,
        events=events,
        accounts=accounts,
        reports=ReportService(events, accounts),
    )
