"""
Seed data for first start and for demos.

- default_accounts(): the administrator and demo user created the first time
  an account collection is opened
- seed_sample_events(): two demo events for a fresh event collection
"""

import logging
from datetime import datetime
from typing import List, Optional

from eventdesk.core.config import Settings
from eventdesk.models.enums import Role
from eventdesk.repositories.event_repository import EventStore
from eventdesk.schemas.account import Account
from eventdesk.schemas.common import utcnow
from eventdesk.schemas.event import Event

logger = logging.getLogger(__name__)

SAMPLE_EVENTS = [
    {
        "title": "Summer Festival",
        "description": "Annual summer festival with music, food, and activities",
        "date": "2025-08-20",
        "time": "10:00",
        "location": "Central Park",
        "created_by": "admin",
    },
    {
        "title": "Workshop: Web Development",
        "description": "Learn the basics of web development with HTML, CSS, and JavaScript",
        "date": "2025-07-25",
        "time": "14:00",
        "location": "Tech Hub",
        "created_by": "user",
    },
]


def default_accounts(settings: Settings, now: Optional[datetime] = None) -> List[Account]:
    """The two well-known accounts, ids 1 (admin) and 2 (user)."""
    now = now or utcnow()
    return [
        Account(
            id=1,
            username=settings.default_admin_username,
            password=settings.default_admin_password,
            email=settings.default_admin_email,
            full_name=settings.default_admin_full_name,
            phone=settings.default_admin_phone,
            role=Role.ADMIN,
            created_at=now,
        ),
        Account(
            id=2,
            username=settings.default_user_username,
            password=settings.default_user_password,
            email=settings.default_user_email,
            full_name=settings.default_user_full_name,
            phone=settings.default_user_phone,
            role=Role.USER,
            created_at=now,
        ),
    ]


def seed_sample_events(store: EventStore) -> List[Event]:
    """Add the demo events to store and return them."""
    created = [store.create(data, created_by=data["created_by"]) for data in SAMPLE_EVENTS]
    logger.info(f"Added {len(created)} sample events")
    return created
