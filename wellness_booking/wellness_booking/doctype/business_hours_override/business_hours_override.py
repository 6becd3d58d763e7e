# Copyright (c) 2026, ITT Heal and contributors
# For license information, please see license.txt

"""
Business Hours Override DocType

Excepción del horario semanal para una fecha exacta:
- Holiday Override: abre un feriado con el horario normal del día
- Day Override: abre un día normalmente cerrado
- Custom Hours: horario explícito para esa fecha
"""

import frappe
from frappe import _
from frappe.model.document import Document
from frappe.utils import cint

from wellness_booking.wellness_booking.scheduling.entities import has_value, to_time
from wellness_booking.wellness_booking.scheduling.holidays import holiday_names


class BusinessHoursOverride(Document):
	"""
	Business Hours Override with validations.

	Validations:
	- override_date required and unique
	- at least one of holiday_override, day_override or custom hours
	- custom_start_time and custom_end_time both set or both empty
	- custom_start_time < custom_end_time
	- warn when holiday_override is set on a date that is not a holiday
	"""

	def validate(self) -> None:
		"""
		Validación antes de guardar.
		"""
		self._validate_required_fields()
		self._validate_unique_date()
		self._validate_custom_hours()
		self._validate_has_effect()
		self._warn_holiday_override_on_regular_day()

	def on_update(self) -> None:
		frappe.logger("wellness_booking").info(
			f"Business Hours Override guardado para {self.override_date}"
		)

	def _validate_required_fields(self) -> None:
		"""Valida campos requeridos."""
		if not self.override_date:
			frappe.throw(_("Override Date es requerido"))

	def _validate_unique_date(self) -> None:
		"""Solo un override por fecha."""
		existing = frappe.db.exists(
			"Business Hours Override",
			{"override_date": self.override_date, "name": ["!=", self.name]}
		)
		if existing:
			frappe.throw(_(f"Ya existe un override para {self.override_date}: {existing}"))

	def _validate_custom_hours(self) -> None:
		"""Las horas custom van juntas y start < end."""
		if has_value(self.custom_start_time) != has_value(self.custom_end_time):
			frappe.throw(_("Custom Start Time y Custom End Time deben indicarse juntos"))

		if has_value(self.custom_start_time) and has_value(self.custom_end_time):
			start = to_time(self.custom_start_time)
			end = to_time(self.custom_end_time)

			if start >= end:
				frappe.throw(
					_(f"Custom Start Time ({start.strftime('%H:%M')}) debe ser menor que Custom End Time ({end.strftime('%H:%M')})")
				)

	def _validate_has_effect(self) -> None:
		if not (
			cint(self.holiday_override)
			or cint(self.day_override)
			or (has_value(self.custom_start_time) and has_value(self.custom_end_time))
		):
			frappe.throw(_("Indique Holiday Override, Day Override o un horario custom"))

	def _warn_holiday_override_on_regular_day(self) -> None:
		"""No bloquea: el override simplemente no tiene efecto en días normales."""
		if not cint(self.holiday_override) or not self.override_date:
			return

		target_date = frappe.utils.getdate(self.override_date)
		if target_date not in holiday_names(target_date.year):
			frappe.msgprint(
				_(f"{self.override_date} no es feriado; Holiday Override no tendrá efecto."),
				indicator="orange",
				alert=True
			)
