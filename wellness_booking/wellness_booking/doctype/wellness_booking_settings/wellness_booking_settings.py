# Copyright (c) 2026, ITT Heal and contributors
# For license information, please see license.txt

"""
Wellness Booking Settings DocType

Configuración única del practitioner: timezone, reglas de slots y la tabla
semanal de horarios.
"""

import frappe
import pytz
from frappe import _
from frappe.model.document import Document
from frappe.utils import cint

from wellness_booking.wellness_booking.scheduling.durations import SESSION_DURATIONS
from wellness_booking.wellness_booking.scheduling.entities import to_time


class WellnessBookingSettings(Document):
	"""
	Wellness Booking Settings with validations.

	Validations:
	- timezone is a valid pytz timezone (or "system timezone")
	- numeric settings non-negative
	- default_session_type is a known session type
	- each weekday at most once in weekly_hours, start_time < end_time
	"""

	def validate(self) -> None:
		"""
		Validación antes de guardar.
		"""
		self._validate_timezone()
		self._validate_numbers()
		self._validate_session_type()
		self._validate_weekly_hours()

	def on_update(self) -> None:
		frappe.logger("wellness_booking").info("Wellness Booking Settings actualizados")

	def _validate_timezone(self) -> None:
		if not self.timezone or self.timezone == "system timezone":
			return

		if self.timezone not in pytz.all_timezones_set:
			frappe.throw(_(f"Timezone inválido: {self.timezone}"))

	def _validate_numbers(self) -> None:
		if cint(self.booked_slot_window_minutes) < 0:
			frappe.throw(_("Booked Slot Window no puede ser negativo"))

		if cint(self.first_of_day_notice_hours) < 0:
			frappe.throw(_("First Of Day Notice Hours no puede ser negativo"))

	def _validate_session_type(self) -> None:
		if self.default_session_type and self.default_session_type not in SESSION_DURATIONS:
			frappe.throw(_(f"Session Type desconocido: {self.default_session_type}"))

	def _validate_weekly_hours(self) -> None:
		"""Un weekday por fila y start_time < end_time."""
		seen = set()

		for row in self.weekly_hours or []:
			if row.weekday in seen:
				frappe.throw(_(f"Fila {row.idx}: {row.weekday} está repetido"))
			seen.add(row.weekday)

			if not row.start_time or not row.end_time:
				frappe.throw(_(f"Fila {row.idx}: Start Time y End Time son requeridos"))

			start = to_time(row.start_time)
			end = to_time(row.end_time)

			if start >= end:
				frappe.throw(
					_(f"Fila {row.idx}: Start Time ({start.strftime('%H:%M')}) debe ser menor que End Time ({end.strftime('%H:%M')})")
				)
