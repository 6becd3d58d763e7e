# Copyright (c) 2026, ITT Heal and contributors
# For license information, please see license.txt

"""
Availability Slot DocType

Bloque explícito del admin para una fecha: abre (is_available) o cierra un
rango dentro del horario de ese día.
"""

import frappe
from frappe import _
from frappe.model.document import Document

from wellness_booking.wellness_booking.scheduling.availability import find_overlapping_slots
from wellness_booking.wellness_booking.scheduling.entities import AvailabilitySlot as SlotValue


class AvailabilitySlot(Document):
	"""
	Availability Slot with validations.

	Validations:
	- slot_date, start_time, end_time required
	- start_time < end_time
	- No overlap with other slots on the same date
	"""

	def validate(self) -> None:
		"""
		Validación antes de guardar.
		"""
		self._validate_required_fields()
		self._validate_times()
		self._validate_no_overlapping_slots()

	def _validate_required_fields(self) -> None:
		"""Valida campos requeridos."""
		if not self.slot_date:
			frappe.throw(_("Slot Date es requerido"))

		if not self.start_time or not self.end_time:
			frappe.throw(_("Start Time y End Time son requeridos"))

	def _validate_times(self) -> None:
		"""Valida que start_time < end_time."""
		slot = self._as_value(self)

		if slot.start_time >= slot.end_time:
			frappe.throw(
				_(f"Start Time ({slot.start_time.strftime('%H:%M')}) debe ser menor que End Time ({slot.end_time.strftime('%H:%M')})")
			)

	def _validate_no_overlapping_slots(self) -> None:
		"""
		Valida que no haya solapamiento con otros bloques de la misma fecha.
		"""
		others = frappe.get_all(
			"Availability Slot",
			filters={"slot_date": self.slot_date, "name": ["!=", self.name]},
			fields=["name", "slot_date", "start_time", "end_time", "is_available"]
		)

		current = self._as_value(self)
		names = {}
		slots = [current]
		for other in others:
			value = self._as_value(other)
			names[value] = other.name
			slots.append(value)

		for first, second in find_overlapping_slots(slots):
			if current not in (first, second):
				continue
			other = second if first == current else first
			frappe.throw(
				_(f"Este bloque ({current.start_time.strftime('%H:%M')}-{current.end_time.strftime('%H:%M')}) "
				  f"se solapa con {names.get(other, '')} ({other.start_time.strftime('%H:%M')}-{other.end_time.strftime('%H:%M')})")
			)

	@staticmethod
	def _as_value(record) -> SlotValue:
		return SlotValue.from_record({
			"slot_date": record.slot_date,
			"start_time": record.start_time,
			"end_time": record.end_time,
			"is_available": record.is_available
		})
