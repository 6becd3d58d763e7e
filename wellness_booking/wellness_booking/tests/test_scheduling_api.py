"""
Tests for api/scheduling_api.py

Tests the public availability endpoints. The snapshot loaders and the rate
limiter are patched so the endpoints run without a site.
"""

import unittest
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from wellness_booking.api import scheduling_api
from wellness_booking.wellness_booking.scheduling.business_hours import BusinessHoursPolicy
from wellness_booking.wellness_booking.scheduling.durations import DEFAULT_ADD_ON_CATALOG


SUNDAY_MORNING = datetime(2025, 6, 1, 8, 0)


class TestAvailabilityEndpoints(unittest.TestCase):
	"""Tests for get_available_slots and get_available_times."""

	def setUp(self):
		loaders = MagicMock()
		loaders.get_settings.return_value = SimpleNamespace(default_session_type="60min")
		loaders.practitioner_now.return_value = SUNDAY_MORNING
		loaders.load_policy.return_value = BusinessHoursPolicy()
		loaders.load_bookings.return_value = []
		loaders.load_availability_slots.return_value = []
		loaders.load_add_on_catalog.return_value = DEFAULT_ADD_ON_CATALOG
		loaders.slot_rules.return_value = {}

		patchers = [
			patch.object(scheduling_api, "snapshot", loaders),
			patch.object(scheduling_api, "check_rate_limit"),
		]
		for patcher in patchers:
			patcher.start()
			self.addCleanup(patcher.stop)

	def test_available_times_grouped_by_date(self):
		"""Test Saturday hours stepped by the adjusted duration."""
		result = scheduling_api.get_available_times(
			"2025-06-07", "2025-06-08", session_type="60min", add_ons="reflexology"
		)

		self.assertEqual(result, {"2025-06-07": ["10:00", "11:15", "12:30", "13:45", "15:00"]})

	def test_request_dedupes_repeated_add_on(self):
		"""Test a repeated add-on in the request is counted once."""
		result = scheduling_api.get_available_times(
			"2025-06-07", "2025-06-07", add_ons=["reflexology", "reflexology"]
		)

		self.assertEqual(result, {"2025-06-07": ["10:00", "11:15", "12:30", "13:45", "15:00"]})

	def test_slots_and_times_agree(self):
		"""Test both endpoints return the same start times."""
		slots = scheduling_api.get_available_slots("2025-06-02", "2025-06-07")
		times = scheduling_api.get_available_times("2025-06-02", "2025-06-07")

		self.assertEqual(
			[(slot["date"], slot["time"]) for slot in slots],
			[(day, t) for day, day_times in times.items() for t in day_times]
		)
		self.assertEqual(slots[0]["start"], "2025-06-02 09:00:00")
		self.assertEqual(slots[0]["end"], "2025-06-02 10:00:00")


def run_tests():
	"""Run all tests in this module."""
	unittest.main()
