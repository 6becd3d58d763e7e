"""
Wellness Booking API

Structure:
    api/
    ├── __init__.py              # This file
    ├── scheduling_api.py        # Whitelisted scheduling endpoints
    ├── security.py              # Rate limiting and sanitization
    └── shared/                  # Shared utilities
        ├── __init__.py          # Re-exports security + validators
        └── validators.py        # Request validators

Usage:
    frappe.call("wellness_booking.api.scheduling_api.get_available_slots", ...)
"""

from . import shared

__all__ = [
    "shared",
]
