# Copyright (c) 2026, ITT Heal and contributors
# For license information, please see license.txt

from frappe.model.document import Document


class WeeklyHoursRow(Document):
	pass
