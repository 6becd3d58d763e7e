"""
Installation hooks

Seeds Wellness Booking Settings with the engine's default weekly hours and
creates the default add-on catalog, so a fresh site can take bookings
without manual setup.
"""

import frappe

from wellness_booking.wellness_booking.scheduling.business_hours import DEFAULT_WEEKLY_HOURS
from wellness_booking.wellness_booking.scheduling.durations import DEFAULT_ADD_ON_CATALOG
from wellness_booking.wellness_booking.scheduling.snapshot import SETTINGS_DOCTYPE, WEEKDAY_NAMES


def after_install() -> None:
	_seed_settings()
	_seed_add_ons()
	frappe.db.commit()


def _seed_settings() -> None:
	"""Carga la tabla semanal por defecto si settings está vacío."""
	settings = frappe.get_single(SETTINGS_DOCTYPE)
	if settings.get("weekly_hours"):
		return

	for weekday, hours in sorted(DEFAULT_WEEKLY_HOURS.items()):
		settings.append("weekly_hours", {
			"weekday": WEEKDAY_NAMES[weekday],
			"start_time": hours.start.strftime("%H:%M:%S"),
			"end_time": hours.end.strftime("%H:%M:%S"),
			"enabled": 1 if hours.enabled else 0
		})

	settings.save(ignore_permissions=True)


def _seed_add_ons() -> None:
	"""Crea los add-ons por defecto que no existan."""
	for add_on in DEFAULT_ADD_ON_CATALOG:
		if frappe.db.exists("Wellness Add On", add_on.id):
			continue

		frappe.get_doc({
			"doctype": "Wellness Add On",
			"add_on_id": add_on.id,
			"add_on_name": add_on.name,
			"price": add_on.price_additive,
			"duration_extension_minutes": add_on.duration_extension_minutes,
			"available_for": ", ".join(add_on.available_for),
			"is_active": 1
		}).insert(ignore_permissions=True)

	frappe.logger("wellness_booking").info(
		f"Catálogo de add-ons inicializado ({len(DEFAULT_ADD_ON_CATALOG)} add-ons)"
	)
