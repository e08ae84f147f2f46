"""
Field checks applied before any row is written.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from phonebook_api.app.core.errors import ValidationError

COMPANY_NAME_MAX_LENGTH = 120
FULL_NAME_MAX_LENGTH = 160
ADDRESS_MAX_LENGTH = 200

# Range of a SQLite INTEGER column; row ids outside it cannot be stored.
SQLITE_INTEGER_MIN = -(2**63)
SQLITE_INTEGER_MAX = 2**63 - 1

# Digits, spaces and the usual separators, optionally led by "+".
PHONE_NUMBER_RE = re.compile(r"^\+?[0-9 ()./-]{3,}$")

logger = logging.getLogger(__name__)


def require_text(value: Optional[str], field: str, max_length: int) -> str:
    """Return ``value`` if it is a non-blank string no longer than ``max_length``."""
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required")
    if len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return value


def optional_text(value: Optional[str], field: str, max_length: int) -> Optional[str]:
    if value is not None and len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return value


def check_phone_number(value: Optional[str]) -> Optional[str]:
    """Warn about, but accept, phone numbers that do not look like one."""
    if value and not (PHONE_NUMBER_RE.match(value) and any(ch.isdigit() for ch in value)):
        logger.warning("Phone number %r does not match the expected format", value)
    return value


def validate_company_name(name: Optional[str]) -> str:
    return require_text(name, "Company name", COMPANY_NAME_MAX_LENGTH)


def validate_person_fields(
    full_name: Optional[str],
    phone_number: Optional[str],
    address: Optional[str],
) -> None:
    require_text(full_name, "Full name", FULL_NAME_MAX_LENGTH)
    optional_text(address, "Address", ADDRESS_MAX_LENGTH)
    check_phone_number(phone_number)


def is_storable_id(value: int) -> bool:
    """Return whether ``value`` fits a SQLite INTEGER and can name a row."""
    return SQLITE_INTEGER_MIN <= value <= SQLITE_INTEGER_MAX
