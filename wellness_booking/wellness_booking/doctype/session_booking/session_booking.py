# Copyright (c) 2026, ITT Heal and contributors
# For license information, please see license.txt

"""
Session Booking DocType

A client's appointment with the practitioner. Duration is computed from the
session type and the selected add-ons; saves that would overlap another
booking are rejected with suggested alternatives.
"""

import frappe
from frappe import _
from frappe.model.document import Document
from frappe.utils import cint
from datetime import datetime, timedelta
from typing import List

# Import scheduling services
from wellness_booking.wellness_booking.scheduling import snapshot
from wellness_booking.wellness_booking.scheduling.alternatives import suggest_alternatives
from wellness_booking.wellness_booking.scheduling.availability import (
	interval_fits,
	open_intervals_for_day,
)
from wellness_booking.wellness_booking.scheduling.conflicts import check_conflicts
from wellness_booking.wellness_booking.scheduling.durations import (
	adjusted_duration,
	base_duration_for,
	index_catalog,
	is_add_on_available,
)
from wellness_booking.wellness_booking.scheduling.entities import (
	BOOKING_STATUSES,
	RELEASED_STATUSES,
	has_value,
	to_date,
	to_time,
)


class BookingConflictError(frappe.ValidationError):
	"""El horario se solapa con otro Session Booking."""


class SessionBooking(Document):
	"""
	Session Booking with scheduling validation.

	Validations:
	- client_name, scheduled_date, scheduled_time, session_type required
	- status must be a known booking status
	- add-ons must exist and be available for the session type
	- duration_minutes = base duration + add-on extensions
	- no overlap with other bookings (unless allow_conflict)
	- warning when the session falls outside business hours
	"""

	def validate(self) -> None:
		"""
		Validación antes de guardar.

		Ejecuta:
		1. Campos requeridos y status
		2. Add-ons válidos para el tipo de sesión
		3. Calcular duration_minutes
		4. Conflictos (bloquea salvo allow_conflict)
		5. Horario de atención (warning)
		"""
		self._validate_required_fields()
		self._validate_status()

		catalog = snapshot.load_add_on_catalog()
		self._validate_add_ons(catalog)
		self._compute_duration(catalog)

		if self.status in RELEASED_STATUSES:
			return

		self._validate_conflicts()
		self._warn_outside_business_hours()

	# ===== VALIDATION METHODS =====

	def _validate_required_fields(self) -> None:
		"""Valida campos requeridos."""
		if not self.client_name:
			frappe.throw(_("Client Name es requerido"))

		if not self.scheduled_date or not has_value(self.scheduled_time):
			frappe.throw(_("Scheduled Date y Scheduled Time son requeridos"))

		if not self.session_type:
			frappe.throw(_("Session Type es requerido"))

	def _validate_status(self) -> None:
		if not self.status:
			self.status = "scheduled"

		if self.status not in BOOKING_STATUSES:
			frappe.throw(_(f"Status inválido: {self.status}"))

	def _validate_add_ons(self, catalog) -> None:
		"""Cada add-on debe existir, estar activo y aplicar al tipo de sesión."""
		index = index_catalog(catalog)

		for add_on_id in self.get_add_on_ids():
			if add_on_id not in index:
				frappe.throw(_(f"Add-on '{add_on_id}' no existe o no está activo"))

			if not is_add_on_available(add_on_id, self.session_type, index):
				frappe.throw(
					_(f"Add-on '{index[add_on_id].name}' no está disponible para sesiones {self.session_type}")
				)

	def _compute_duration(self, catalog) -> None:
		"""duration_minutes = base (o la del session_type) + extensiones."""
		if not cint(self.base_duration_minutes):
			self.base_duration_minutes = base_duration_for(self.session_type)

		self.duration_minutes = adjusted_duration(
			cint(self.base_duration_minutes),
			self.get_add_on_ids(),
			catalog
		)

	def _validate_conflicts(self) -> None:
		"""
		Bloquea el guardado si el horario se solapa con otro booking.

		Con allow_conflict se guarda igual y solo se registra en el log.
		"""
		start = self.get_scheduled_start()
		bookings = snapshot.load_bookings(start.date(), start.date())

		result = check_conflicts(
			start,
			cint(self.duration_minutes),
			bookings,
			exclude_booking_id=self.name if not self.is_new() else None
		)

		if not result["has_conflict"]:
			return

		conflicting = ", ".join(result["conflicting_bookings"])

		if cint(self.allow_conflict):
			frappe.logger("wellness_booking").info(
				f"Session Booking {self.name} guardado con conflicto contra {conflicting}"
			)
			return

		settings = snapshot.get_settings()
		policy = snapshot.load_policy(settings) if snapshot.restrict_alternatives(settings) else None
		alternatives = suggest_alternatives(
			start,
			cint(self.duration_minutes),
			bookings,
			policy=policy,
			availability_slots=snapshot.load_availability_slots(start.date(), start.date()),
			exclude_booking_id=self.name if not self.is_new() else None
		)

		message = _(f"El horario se solapa con: {conflicting}.")
		if alternatives:
			times = ", ".join(a["start"].strftime("%H:%M") for a in alternatives)
			message += " " + _(f"Horarios alternativos: {times}")
		else:
			message += " " + _("No hay horarios alternativos cercanos ese día.")

		frappe.throw(message, BookingConflictError, title=_("Conflicto de horario"))

	def _warn_outside_business_hours(self) -> None:
		"""Advierte (sin bloquear) si la sesión cae fuera del horario abierto."""
		start = self.get_scheduled_start()
		end = self.get_scheduled_end()

		policy = snapshot.load_policy()
		blocks = snapshot.load_availability_slots(start.date(), start.date())

		if not interval_fits(start, end, open_intervals_for_day(start.date(), policy, blocks)):
			frappe.msgprint(
				_(f"La sesión ({start.strftime('%H:%M')}-{end.strftime('%H:%M')}) "
				  f"está fuera del horario de atención del {start.strftime('%Y-%m-%d')}"),
				indicator="orange",
				alert=True
			)

	# ===== HELPERS =====

	def get_add_on_ids(self) -> List[str]:
		return [row.add_on for row in (self.add_ons or []) if row.add_on]

	def get_scheduled_start(self) -> datetime:
		return datetime.combine(to_date(self.scheduled_date), to_time(self.scheduled_time))

	def get_scheduled_end(self) -> datetime:
		return self.get_scheduled_start() + timedelta(minutes=cint(self.duration_minutes))
