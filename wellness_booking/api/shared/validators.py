"""
Scheduling Validators

Parse and validate request arguments for the scheduling API. Each validator
returns the parsed value (date, datetime, int, list) or raises
frappe.ValidationError through frappe.throw.
"""

import re
import frappe
from frappe import _
from frappe.utils import cint
from datetime import date, datetime
from typing import Any, List


DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DATETIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}[ T]\d{2}:\d{2}(:\d{2})?$")
DOCNAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 _\-\.]{0,139}$")
ADD_ON_ID_PATTERN = re.compile(r"^[a-z0-9_\-]{1,60}$")


def validate_date_string(value: Any, field_name: str = "date") -> date:
    """
    Parse YYYY-MM-DD into a date.

    Raises:
        frappe.ValidationError: If missing, malformed or not a real date
    """
    value = str(value or "").strip()
    if not DATE_PATTERN.match(value):
        frappe.throw(_(f"{field_name}: use el formato YYYY-MM-DD"), frappe.ValidationError)

    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        frappe.throw(_(f"{field_name}: fecha inválida ({value})"), frappe.ValidationError)


def validate_datetime_string(value: Any, field_name: str = "datetime") -> datetime:
    """
    Parse "YYYY-MM-DD HH:MM[:SS]" (a "T" separator is accepted) into a
    naive local datetime.

    Raises:
        frappe.ValidationError: If missing, malformed or not a real datetime
    """
    value = str(value or "").strip()
    if not DATETIME_PATTERN.match(value):
        frappe.throw(
            _(f"{field_name}: use el formato YYYY-MM-DD HH:MM"), frappe.ValidationError
        )

    value = value.replace("T", " ")
    fmt = "%Y-%m-%d %H:%M:%S" if value.count(":") == 2 else "%Y-%m-%d %H:%M"
    try:
        return datetime.strptime(value, fmt)
    except ValueError:
        frappe.throw(_(f"{field_name}: fecha/hora inválida ({value})"), frappe.ValidationError)


def validate_year(year: Any, field_name: str = "year") -> int:
    """Validate a four digit calendar year."""
    if not re.match(r"^\d{4}$", str(year or "").strip()):
        frappe.throw(_(f"{field_name}: use el formato YYYY"), frappe.ValidationError)

    return cint(year)


def validate_positive_int(value: Any, field_name: str = "value", maximum: int = 24 * 60) -> int:
    """
    Validate a positive integer such as a duration in minutes.

    Raises:
        frappe.ValidationError: If value is missing, not a number, <= 0 or > maximum
    """
    if not re.match(r"^\d+$", str(value or "").strip()):
        frappe.throw(_(f"{field_name} debe ser un número positivo"), frappe.ValidationError)

    number = cint(value)
    if number <= 0 or number > maximum:
        frappe.throw(
            _(f"{field_name} debe estar entre 1 y {maximum}"), frappe.ValidationError
        )

    return number


def parse_add_on_ids(add_ons: Any) -> List[str]:
    """
    Parse the selected add-ons from a request.

    Accepts a list, a JSON list string or a comma-separated string.
    Unknown ids are not rejected here; the duration adjuster ignores them.

    Returns:
        list[str]: add-on ids without blanks or duplicates
    """
    if not add_ons:
        return []

    if isinstance(add_ons, str):
        add_ons = add_ons.strip()
        if add_ons.startswith("["):
            add_ons = frappe.parse_json(add_ons)
        else:
            add_ons = add_ons.split(",")

    ids = []
    for add_on in add_ons:
        add_on = str(add_on).strip()
        if not add_on:
            continue
        if not ADD_ON_ID_PATTERN.match(add_on):
            frappe.throw(_(f"Add-on inválido: '{add_on[:60]}'"), frappe.ValidationError)
        if add_on not in ids:
            ids.append(add_on)

    return ids


def validate_docname(name: Any, field_name: str = "name") -> str:
    """
    Validate a document name such as SB-00001 or a session type like 60min.

    Only letters, digits, spaces, "_", "-" and "." are allowed.

    Raises:
        frappe.ValidationError: If name is missing or has other characters
    """
    name = str(name or "").strip()
    if not DOCNAME_PATTERN.match(name):
        frappe.throw(_(f"{field_name} inválido"), frappe.ValidationError)

    return name
