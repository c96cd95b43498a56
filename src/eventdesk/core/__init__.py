"""
Core module for configuration, database setup and shared infrastructure.

This module contains the foundational pieces used by every store:
- Configuration management
- Database engine creation
- Custom exceptions
- Field validators
"""
