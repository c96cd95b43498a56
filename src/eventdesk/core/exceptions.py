"""
Custom exceptions for the application.

This module defines domain-specific exceptions for better error handling
and more meaningful error messages throughout the record stores.

Absence of a record is never an exception: lookups return None.
"""

from typing import Optional, Any, Dict


class ApplicationException(Exception):
    """Base exception for all application-specific exceptions."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(ApplicationException):
    """Exception raised for malformed or missing input."""
    pass


class DuplicateException(ValidationException):
    """Exception raised when a unique field collides with an existing record."""

    def __init__(self, resource: str, field: str, value: Any):
        message = f"{resource} already exists with {field}: {value}"
        super().__init__(message, {"resource": resource, "field": field, "value": value})

    @property
    def field(self) -> str:
        return self.details["field"]


class AuthenticationException(ApplicationException):
    """Exception raised for credential mismatches or a missing session."""
    pass


class AuthorizationException(ApplicationException):
    """Exception raised when the current session lacks the required role."""

    def __init__(self, message: str = "Access denied. Admin privileges required.",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class ConfigurationException(ApplicationException):
    """Exception raised for configuration-related errors."""
    pass


class PersistenceException(ApplicationException):
    """Exception raised when a persistence adapter cannot read or write a collection."""
    pass


class DatabaseException(PersistenceException):
    """Exception raised for database-related errors."""
    pass


class RedisException(PersistenceException):
    """Exception raised for Redis-specific errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        details = details or {}
        details["service"] = "Redis"
        super().__init__(f"Redis error: {message}", details)
