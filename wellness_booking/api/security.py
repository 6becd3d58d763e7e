"""
Security Utilities for Public APIs

Per-IP rate limiting for the booking calendar endpoints that allow guest
access. Limits are declared per endpoint in RATE_LIMITS.
"""

import frappe
from frappe import _
from frappe.utils import cint


# action -> (max requests, window in seconds)
RATE_LIMITS = {
    "get_closed_dates": (30, 60),
    "get_available_slots": (30, 60),
    "get_available_times": (30, 60),
    "get_add_on_catalog": (30, 60),
    "check_booking": (20, 60),
}
DEFAULT_RATE_LIMIT = (10, 60)


def check_rate_limit(action: str, limit: int = None, seconds: int = None) -> None:
    """
    Count a request for `action` from the caller's IP and reject it when the
    window is full.

    Args:
        action: endpoint name, also the key into RATE_LIMITS
        limit: override for the max requests in the window
        seconds: override for the window length

    Raises:
        frappe.TooManyRequestsError: If the limit is exceeded
    """
    default_limit, default_seconds = RATE_LIMITS.get(action, DEFAULT_RATE_LIMIT)
    limit = limit or default_limit
    seconds = seconds or default_seconds

    ip = get_client_ip()
    cache_key = f"wellness_booking:rate_limit:{action}:{ip}"
    count = cint(frappe.cache.get_value(cache_key)) + 1

    if count > limit:
        frappe.logger("wellness_booking").warning(
            f"Rate limit hit: {action} from {ip} ({limit}/{seconds}s)"
        )
        frappe.throw(
            _("Demasiadas solicitudes. Espere un momento e intente de nuevo."),
            frappe.TooManyRequestsError
        )

    frappe.cache.set_value(cache_key, count, expires_in_sec=seconds)


def get_client_ip() -> str:
    """
    Caller IP, preferring the proxy headers set by nginx.

    Returns:
        str: IP address, or "unknown" outside a request
    """
    request = getattr(frappe.local, "request", None)
    if request is None:
        return "unknown"

    # X-Forwarded-For: client, proxy1, proxy2
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        return forwarded.split(",")[0].strip()

    return (
        request.headers.get("X-Real-IP", "").strip()
        or getattr(frappe.local, "request_ip", None)
        or request.remote_addr
        or "unknown"
    )
