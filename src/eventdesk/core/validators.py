"""
Field validation helpers shared by the event and account stores.
"""

import re
from typing import Any, Iterable, List, Mapping

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"\+?[1-9]\d{0,15}")
USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9_]+")

# Separators allowed in phone numbers and ignored by PHONE_PATTERN
PHONE_SEPARATORS = re.compile(r"[\s\-()]")


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after trimming."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def missing_fields(data: Mapping[str, Any], fields: Iterable[str]) -> List[str]:
    """Names of the fields that are absent or blank in data, in the given order."""
    return [field for field in fields if is_blank(data.get(field))]


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.fullmatch(email))


def is_valid_phone(phone: str) -> bool:
    return bool(PHONE_PATTERN.fullmatch(PHONE_SEPARATORS.sub("", phone)))


def is_valid_username(username: str) -> bool:
    return bool(USERNAME_PATTERN.fullmatch(username))
