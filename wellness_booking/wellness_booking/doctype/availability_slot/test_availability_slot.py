# Copyright (c) 2026, ITT Heal and Contributors
# See license.txt

"""
Tests for Availability Slot DocType
"""

import frappe
from frappe.tests.utils import FrappeTestCase


class TestAvailabilitySlot(FrappeTestCase):
	"""Tests for Availability Slot DocType."""

	def _slot(self, start_time, end_time, is_available=0):
		return frappe.get_doc({
			"doctype": "Availability Slot",
			"slot_date": "2031-06-03",
			"start_time": start_time,
			"end_time": end_time,
			"is_available": is_available
		})

	def test_start_before_end(self):
		"""Test that start_time must be before end_time."""
		with self.assertRaises(frappe.ValidationError):
			self._slot("13:00:00", "12:00:00").insert(ignore_permissions=True)

	def test_overlapping_slots_rejected(self):
		"""Test two blocks on the same date cannot overlap."""
		self._slot("12:00:00", "13:00:00").insert(ignore_permissions=True)

		with self.assertRaises(frappe.ValidationError):
			self._slot("12:30:00", "14:00:00", is_available=1).insert(ignore_permissions=True)

	def test_touching_slots_allowed(self):
		"""Test adjacent blocks are fine."""
		self._slot("08:00:00", "09:00:00").insert(ignore_permissions=True)
		self._slot("09:00:00", "10:00:00").insert(ignore_permissions=True)

	def tearDown(self):
		"""Clean up after tests."""
		frappe.db.rollback()
