"""
Application configuration management using Pydantic Settings.

This module centralizes all environment-based configuration for the record
stores, providing type-safe access to configuration values with validation.
Every variable is read with the ``EVENTDESK_`` prefix, e.g.
``EVENTDESK_STORAGE_BACKEND=redis``.
"""

from typing import Optional
from functools import lru_cache
import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger('CORE_CONFIG')

STORAGE_BACKENDS = {"memory", "database", "redis"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Name of the application
        log_level: Level passed to configure_logging()

        # Storage Configuration
        storage_backend: One of memory, database, redis
        database_url: SQLAlchemy URL for the database backend
        db_echo: Echo SQL statements
        redis_url: Redis connection URL
        redis_key_prefix: Prefix applied to every Redis key

        # Collection keys
        events_collection: Key of the event collection blob
        users_collection: Key of the account collection blob
        session_collection: Key of the persisted current-user blob

        # Seeded accounts
        default_admin_*: Credentials of the seeded administrator
        default_user_*: Credentials of the seeded regular user

        # Validation rules
        username_min_length: Minimum username length
        password_min_length: Minimum password length
        recent_user_days: Window used by the "recent users" statistic
    """

    model_config = SettingsConfigDict(
        env_prefix="EVENTDESK_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "Event Desk"
    log_level: str = "INFO"

    # Storage Configuration
    storage_backend: str = "memory"
    database_url: str = "sqlite:///eventdesk.db"
    db_echo: bool = False
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_pre_ping: bool = True
    redis_url: str = "redis://localhost:6379/0"
    redis_key_prefix: str = "eventdesk:"

    # Collection keys
    events_collection: str = "events"
    users_collection: str = "users"
    session_collection: str = "currentUser"

    # Seeded accounts
    default_admin_username: str = "admin"
    default_admin_password: str = "password"
    default_admin_email: str = "admin@eventmanager.com"
    default_admin_full_name: str = "System Administrator"
    default_admin_phone: Optional[str] = "+1-555-0100"
    default_user_username: str = "user"
    default_user_password: str = "123456"
    default_user_email: str = "user@eventmanager.com"
    default_user_full_name: str = "Demo User"
    default_user_phone: Optional[str] = "+1-555-0101"

    # Validation rules
    username_min_length: int = 3
    password_min_length: int = 6
    recent_user_days: int = 7

    @field_validator("storage_backend")
    @classmethod
    def normalize_storage_backend(cls, v: str) -> str:
        return v.strip().lower()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Cached settings object
    """
    return Settings()
