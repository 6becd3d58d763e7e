"""
Scheduling Snapshot

Reads settings, overrides, admin blocks, bookings and the add-on catalog
from the database and returns the plain values the engine consumes.
Everything else in this package is pure; this module is the only one that
touches frappe.db.
"""

import calendar
from datetime import datetime, date
from typing import Any, Dict, List, Optional, Union

import frappe
import pytz
from frappe.utils import cint

from .business_hours import BusinessHoursPolicy
from .durations import DEFAULT_ADD_ON_CATALOG
from .entities import (
	AddOn,
	AvailabilitySlot,
	Booking,
	BusinessHoursOverride,
	DayHours,
	RELEASED_STATUSES,
	to_date,
	to_time,
)


SETTINGS_DOCTYPE = "Wellness Booking Settings"
WEEKDAY_NAMES = list(calendar.day_name)  # "Monday" == calendar.MONDAY


def get_settings() -> Any:
	return frappe.get_cached_doc(SETTINGS_DOCTYPE)


def get_practitioner_timezone(settings: Optional[Any] = None) -> pytz.tzinfo.BaseTzInfo:
	"""
	Timezone del practitioner según Wellness Booking Settings.

	Si el timezone es inválido se usa UTC y se registra el error.
	"""
	settings = settings or get_settings()

	tz_name = settings.timezone or "UTC"
	if tz_name == "system timezone":
		tz_name = frappe.utils.get_system_timezone()

	try:
		return pytz.timezone(tz_name)
	except pytz.UnknownTimeZoneError:
		frappe.log_error(
			f"Invalid timezone '{tz_name}' in {SETTINGS_DOCTYPE}, usando UTC",
			"Scheduling Snapshot"
		)
		return pytz.UTC


def practitioner_now(settings: Optional[Any] = None) -> datetime:
	"""Hora local actual del practitioner (datetime naive)."""
	tz = get_practitioner_timezone(settings)
	return datetime.now(tz).replace(tzinfo=None)


def load_policy(settings: Optional[Any] = None) -> BusinessHoursPolicy:
	"""
	BusinessHoursPolicy desde la tabla semanal de settings y los overrides.

	Weekdays ausentes en la tabla conservan el horario por defecto del engine.
	"""
	settings = settings or get_settings()

	weekly_hours = {}
	for row in settings.get("weekly_hours") or []:
		if row.weekday not in WEEKDAY_NAMES:
			continue
		weekly_hours[WEEKDAY_NAMES.index(row.weekday)] = DayHours(
			to_time(row.start_time),
			to_time(row.end_time),
			enabled=bool(cint(row.enabled))
		)

	overrides = [
		BusinessHoursOverride.from_record(record)
		for record in frappe.get_all(
			"Business Hours Override",
			fields=[
				"override_date",
				"holiday_override",
				"day_override",
				"custom_start_time",
				"custom_end_time"
			]
		)
	]

	return BusinessHoursPolicy(weekly_hours, overrides)


def load_bookings(
	start_date: Union[date, str],
	end_date: Union[date, str],
	include_released: bool = False
) -> List[Booking]:
	"""Session Bookings con fecha entre start_date y end_date (inclusive)."""
	filters: Dict[str, Any] = {
		"scheduled_date": ["between", [to_date(start_date), to_date(end_date)]]
	}
	if not include_released:
		filters["status"] = ["not in", list(RELEASED_STATUSES)]

	records = frappe.get_all(
		"Session Booking",
		filters=filters,
		fields=[
			"name",
			"scheduled_date",
			"scheduled_time",
			"duration_minutes",
			"client_name",
			"status"
		],
		order_by="scheduled_date asc, scheduled_time asc"
	)

	bookings = [Booking.from_record(record) for record in records]
	frappe.logger("wellness_booking").debug(
		f"Snapshot: {len(bookings)} bookings entre {start_date} y {end_date}"
	)
	return bookings


def load_availability_slots(
	start_date: Union[date, str],
	end_date: Union[date, str]
) -> List[AvailabilitySlot]:
	"""Bloques del admin entre start_date y end_date (inclusive)."""
	records = frappe.get_all(
		"Availability Slot",
		filters={"slot_date": ["between", [to_date(start_date), to_date(end_date)]]},
		fields=["slot_date", "start_time", "end_time", "is_available"]
	)
	return [AvailabilitySlot.from_record(record) for record in records]


def load_add_on_catalog() -> List[AddOn]:
	"""
	Catálogo de add-ons activos.

	Si no hay Wellness Add On creados se usa DEFAULT_ADD_ON_CATALOG.
	"""
	records = frappe.get_all(
		"Wellness Add On",
		filters={"is_active": 1},
		fields=[
			"name",
			"add_on_name",
			"price",
			"duration_extension_minutes",
			"available_for"
		]
	)

	if not records:
		return list(DEFAULT_ADD_ON_CATALOG)

	return [AddOn.from_record(record) for record in records]


def slot_rules(settings: Optional[Any] = None) -> Dict[str, Any]:
	"""
	Reglas de generación de slots como kwargs para slots_in_range.
	"""
	settings = settings or get_settings()

	window = settings.booked_slot_window_minutes
	notice = cint(settings.first_of_day_notice_hours)

	return {
		"booked_window_minutes": 30 if window is None else cint(window),
		"exact_overlap": bool(cint(settings.use_exact_overlap)),
		"first_of_day_notice_hours": notice or None,
	}


def restrict_alternatives(settings: Optional[Any] = None) -> bool:
	settings = settings or get_settings()
	return bool(cint(settings.restrict_alternatives_to_business_hours))
