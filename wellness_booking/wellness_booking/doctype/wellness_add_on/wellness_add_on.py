# Copyright (c) 2026, ITT Heal and contributors
# For license information, please see license.txt

"""
Wellness Add On DocType

Entrada del catálogo de add-ons. duration_extension_minutes alarga la
sesión; available_for lista los tipos de sesión (separados por coma).
"""

import frappe
from frappe import _
from frappe.model.document import Document
from frappe.utils import cint, flt

from wellness_booking.wellness_booking.scheduling.durations import SESSION_DURATIONS


class WellnessAddOn(Document):
	"""
	Wellness Add On with validations.

	Validations:
	- add_on_id and add_on_name required
	- price and duration_extension_minutes non-negative
	- available_for only contains known session types
	"""

	def validate(self) -> None:
		if not self.add_on_id:
			frappe.throw(_("Add On ID es requerido"))

		if not self.add_on_name:
			frappe.throw(_("Add On Name es requerido"))

		if flt(self.price) < 0:
			frappe.throw(_("Price no puede ser negativo"))

		if cint(self.duration_extension_minutes) < 0:
			frappe.throw(_("Duration Extension no puede ser negativa"))

		self._normalize_available_for()

	def _normalize_available_for(self) -> None:
		"""Limpia la lista y rechaza tipos de sesión desconocidos."""
		session_types = [
			part.strip() for part in (self.available_for or "").split(",") if part.strip()
		]

		unknown = [t for t in session_types if t not in SESSION_DURATIONS]
		if unknown:
			frappe.throw(
				_(f"Tipos de sesión desconocidos: {', '.join(unknown)}. "
				  f"Use: {', '.join(SESSION_DURATIONS)}")
			)

		self.available_for = ", ".join(dict.fromkeys(session_types))
