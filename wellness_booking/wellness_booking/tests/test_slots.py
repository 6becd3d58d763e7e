"""
Tests for scheduling/slots.py

Tests slot generation, past-time filtering, booked-slot rules and the
first-of-day notice.
"""

import unittest
from datetime import date, datetime, time

from wellness_booking.wellness_booking.scheduling.business_hours import BusinessHoursPolicy
from wellness_booking.wellness_booking.scheduling.entities import AvailabilitySlot, Booking, DayHours
from wellness_booking.wellness_booking.scheduling.slots import (
	available_times_by_date,
	count_available_slots,
	slots_in_range,
)


MONDAY = date(2025, 6, 2)
TUESDAY = date(2025, 6, 3)
SUNDAY_MORNING = datetime(2025, 6, 1, 8, 0)


def booking(hour, minute=0, duration=60, status="scheduled", booking_id="SB-00001"):
	return Booking(
		booking_id,
		datetime.combine(MONDAY, time(hour, minute)),
		duration,
		status=status
	)


def monday_starts(bookings=(), now=SUNDAY_MORNING, duration=60, **kwargs):
	return [
		slot["start"].strftime("%H:%M")
		for slot in slots_in_range(MONDAY, TUESDAY, duration, bookings, now, **kwargs)
	]


class TestSlots(unittest.TestCase):
	"""Tests for slot generation."""

	def test_full_monday(self):
		"""Test an empty Monday has eight 60-minute slots."""
		self.assertEqual(monday_starts(), [
			"09:00", "10:00", "11:00", "12:00", "13:00", "14:00", "15:00", "16:00"
		])

	def test_slot_fields(self):
		"""Test each slot carries its date, start and end."""
		slot = next(slots_in_range(MONDAY, TUESDAY, 90, [], SUNDAY_MORNING))

		self.assertEqual(slot["date"], MONDAY)
		self.assertEqual(slot["start"], datetime(2025, 6, 2, 9, 0))
		self.assertEqual(slot["end"], datetime(2025, 6, 2, 10, 30))

	def test_booking_window_excludes_neighbours(self):
		"""Test a 10:30 booking removes the 10:00 and 11:00 slots."""
		starts = monday_starts([booking(10, 30)])

		self.assertEqual(len(starts), 6)
		self.assertNotIn("10:00", starts)
		self.assertNotIn("11:00", starts)

	def test_released_booking_ignored(self):
		"""Test cancelled and rescheduled bookings free their time."""
		starts = monday_starts([
			booking(10, status="cancelled"),
			booking(11, status="rescheduled", booking_id="SB-00002"),
		])

		self.assertEqual(len(starts), 8)

	def test_exact_overlap(self):
		"""Test exact overlap compares against the real booking interval."""
		short_booking = [booking(10, 30, duration=15)]

		self.assertEqual(len(monday_starts(short_booking)), 6)

		starts = monday_starts(short_booking, exact_overlap=True)
		self.assertEqual(len(starts), 7)
		self.assertNotIn("10:00", starts)
		self.assertIn("11:00", starts)

	def test_custom_booking_window(self):
		"""Test a zero window only blocks the exact start."""
		starts = monday_starts([booking(10)], booked_window_minutes=0)

		self.assertEqual(len(starts), 7)
		self.assertNotIn("10:00", starts)

	def test_past_slots_excluded(self):
		"""Test only slots strictly after now are kept."""
		starts = monday_starts(now=datetime(2025, 6, 2, 12, 0))

		self.assertEqual(starts, ["13:00", "14:00", "15:00", "16:00"])

	def test_first_of_day_notice_on_empty_day(self):
		"""Test an empty day needs the advance notice."""
		starts = monday_starts(
			now=datetime(2025, 6, 1, 22, 0),
			first_of_day_notice_hours=12
		)

		self.assertEqual(starts[0], "10:00")
		self.assertEqual(len(starts), 7)

	def test_first_of_day_notice_skipped_when_day_has_bookings(self):
		"""Test the notice only applies before the first booking of the day."""
		starts = monday_starts(
			[booking(16)],
			now=datetime(2025, 6, 1, 22, 0),
			first_of_day_notice_hours=12
		)

		self.assertEqual(starts[0], "09:00")
		self.assertNotIn("16:00", starts)

	def test_zero_duration_yields_nothing(self):
		"""Test non-positive durations produce no slots."""
		self.assertEqual(monday_starts(duration=0), [])

	def test_slot_may_run_past_close(self):
		"""Test starts are stepped within hours even if the session ends later."""
		starts = monday_starts(duration=180)

		self.assertEqual(starts, ["09:00", "12:00", "15:00"])

	def test_closed_days_skipped(self):
		"""Test a week only counts open days."""
		count = count_available_slots(MONDAY, date(2025, 6, 9), 60, [], SUNDAY_MORNING)

		# 5 weekdays x 8 + Saturday 10:00-16:00
		self.assertEqual(count, 46)

	def test_admin_blocks_applied(self):
		"""Test a closed block removes its slots."""
		lunch = AvailabilitySlot(MONDAY, time(12, 0), time(14, 0), False)

		starts = monday_starts(availability_slots=[lunch])
		self.assertNotIn("12:00", starts)
		self.assertNotIn("13:00", starts)
		self.assertEqual(len(starts), 6)

	def test_policy_overrides_used(self):
		"""Test a custom policy replaces the default weekly hours."""
		policy = BusinessHoursPolicy(weekly_hours={0: DayHours(time(9, 0), time(11, 0))})

		self.assertEqual(monday_starts(policy=policy), ["09:00", "10:00"])

	def test_generator_restartable(self):
		"""Test calling again yields the same slots."""
		first = list(slots_in_range(MONDAY, TUESDAY, 60, [], SUNDAY_MORNING))
		second = list(slots_in_range(MONDAY, TUESDAY, 60, [], SUNDAY_MORNING))

		self.assertEqual(first, second)

	def test_count_matches_generator(self):
		"""Test count_available_slots equals the number of yielded slots."""
		bookings = [booking(14)]

		self.assertEqual(
			count_available_slots(MONDAY, TUESDAY, 60, bookings, SUNDAY_MORNING),
			len(list(slots_in_range(MONDAY, TUESDAY, 60, bookings, SUNDAY_MORNING)))
		)

	def test_available_times_by_date(self):
		"""Test grouping by ISO date with HH:MM times."""
		result = available_times_by_date(
			date(2025, 6, 7), date(2025, 6, 9), 120, [], SUNDAY_MORNING
		)

		self.assertEqual(result, {"2025-06-07": ["10:00", "12:00", "14:00"]})


def run_tests():
	"""Run all tests in this module."""
	unittest.main()
