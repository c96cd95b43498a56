"""
Enumeration types shared by records and stores.
"""

import enum


class Role(str, enum.Enum):
    """
    Account roles.

    Attributes:
        ADMIN: May list, search and manage every account
        USER: Regular account; the role given to every registration
    """
    ADMIN = "admin"
    USER = "user"
