"""
Shared utilities for the Wellness Booking API.

Security helpers (rate limiting) and request validators.
"""

from wellness_booking.api.security import (
    RATE_LIMITS,
    check_rate_limit,
    get_client_ip,
)

from .validators import (
    parse_add_on_ids,
    validate_date_string,
    validate_datetime_string,
    validate_docname,
    validate_positive_int,
    validate_year,
)

__all__ = [
    # Security
    "RATE_LIMITS",
    "check_rate_limit",
    "get_client_ip",
    # Validators
    "parse_add_on_ids",
    "validate_date_string",
    "validate_datetime_string",
    "validate_docname",
    "validate_positive_int",
    "validate_year",
]
