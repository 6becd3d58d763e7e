"""
Tests for scheduling/availability.py

Tests open intervals per day, admin blocks and interval mathematics.
"""

import unittest
from datetime import date, datetime, time

from wellness_booking.wellness_booking.scheduling.availability import (
	find_overlapping_slots,
	get_effective_availability,
	interval_fits,
	open_intervals_for_day,
	_interval_subtract,
	_merge_intervals,
)
from wellness_booking.wellness_booking.scheduling.business_hours import BusinessHoursPolicy
from wellness_booking.wellness_booking.scheduling.entities import AvailabilitySlot


MONDAY = date(2025, 6, 2)
SUNDAY = date(2025, 6, 8)


def at(hour, minute=0, day=MONDAY):
	return datetime.combine(day, time(hour, minute))


def block(start_hour, end_hour, is_available, day=MONDAY):
	return AvailabilitySlot(day, time(start_hour, 0), time(end_hour, 0), is_available)


class TestAvailability(unittest.TestCase):
	"""Tests for availability calculation functions."""

	def setUp(self):
		self.policy = BusinessHoursPolicy()

	def test_open_day_without_blocks(self):
		"""Test a regular Monday is one 09:00-17:00 interval."""
		intervals = open_intervals_for_day(MONDAY, self.policy)

		self.assertEqual(intervals, [{"start": at(9), "end": at(17)}])

	def test_closed_day_has_no_intervals(self):
		"""Test Sunday yields nothing."""
		self.assertEqual(open_intervals_for_day(SUNDAY, self.policy), [])

	def test_closed_block_splits_day(self):
		"""Test a lunch block splits the day in two."""
		intervals = open_intervals_for_day(MONDAY, self.policy, [block(12, 13, False)])

		self.assertEqual(intervals, [
			{"start": at(9), "end": at(12)},
			{"start": at(13), "end": at(17)},
		])

	def test_open_block_extends_day(self):
		"""Test an adjacent open block is merged into the day."""
		intervals = open_intervals_for_day(MONDAY, self.policy, [block(17, 19, True)])

		self.assertEqual(intervals, [{"start": at(9), "end": at(19)}])

	def test_open_block_does_not_open_closed_day(self):
		"""Test blocks never open a closed date."""
		intervals = open_intervals_for_day(
			SUNDAY, self.policy, [block(10, 12, True, day=SUNDAY)]
		)

		self.assertEqual(intervals, [])

	def test_closed_blocks_applied_before_open_blocks(self):
		"""Test result does not depend on block order."""
		blocks = [block(13, 15, True), block(12, 14, False)]

		expected = [
			{"start": at(9), "end": at(12)},
			{"start": at(13), "end": at(17)},
		]
		self.assertEqual(open_intervals_for_day(MONDAY, self.policy, blocks), expected)
		self.assertEqual(open_intervals_for_day(MONDAY, self.policy, blocks[::-1]), expected)

	def test_blocks_of_other_dates_ignored(self):
		"""Test a block on another date has no effect."""
		intervals = open_intervals_for_day(
			MONDAY, self.policy, [block(9, 17, False, day=date(2025, 6, 3))]
		)

		self.assertEqual(len(intervals), 1)

	def test_effective_availability_range(self):
		"""Test closed dates are omitted and end date is exclusive."""
		result = get_effective_availability(
			date(2025, 6, 7), date(2025, 6, 9), self.policy
		)

		self.assertEqual(list(result), ["2025-06-07"])
		self.assertEqual(result["2025-06-07"][0]["start"], at(10, day=date(2025, 6, 7)))

	def test_interval_fits(self):
		"""Test containment inside open intervals."""
		intervals = [{"start": at(9), "end": at(17)}]

		self.assertTrue(interval_fits(at(16), at(17), intervals))
		self.assertFalse(interval_fits(at(16), at(17, 15), intervals))

	def test_find_overlapping_slots(self):
		"""Test overlapping blocks on the same date are reported."""
		first = block(10, 12, False)
		second = block(11, 13, True)
		other_day = block(11, 13, True, day=date(2025, 6, 3))

		self.assertEqual(find_overlapping_slots([second, first, other_day]), [(first, second)])

	def test_touching_slots_do_not_overlap(self):
		"""Test blocks that only touch are fine."""
		self.assertEqual(find_overlapping_slots([block(10, 12, False), block(12, 13, False)]), [])

	def test_long_block_overlaps_every_later_block(self):
		"""Test a wide block is paired with each block inside it."""
		all_day = block(9, 17, False)
		ten = block(10, 11, True)
		noon = block(12, 13, True)

		self.assertEqual(
			find_overlapping_slots([noon, all_day, ten]),
			[(all_day, ten), (all_day, noon)]
		)

	def test_merge_intervals_no_overlap(self):
		"""Test merging intervals with no overlap."""
		intervals = [
			{"start": at(9), "end": at(10)},
			{"start": at(11), "end": at(12)},
		]

		self.assertEqual(len(_merge_intervals(intervals)), 2)

	def test_merge_intervals_with_overlap(self):
		"""Test merging overlapping intervals."""
		intervals = [
			{"start": at(11), "end": at(13)},
			{"start": at(9), "end": at(11, 30)},
		]

		result = _merge_intervals(intervals)
		self.assertEqual(result, [{"start": at(9), "end": at(13)}])

	def test_merge_intervals_adjacent(self):
		"""Test merging adjacent intervals."""
		intervals = [
			{"start": at(9), "end": at(10)},
			{"start": at(10), "end": at(11)},
		]

		self.assertEqual(_merge_intervals(intervals), [{"start": at(9), "end": at(11)}])

	def test_merge_intervals_does_not_mutate_input(self):
		"""Test input dicts are left untouched."""
		first = {"start": at(9), "end": at(10)}
		_merge_intervals([first, {"start": at(10), "end": at(11)}])

		self.assertEqual(first["end"], at(10))

	def test_interval_subtract_no_overlap(self):
		"""Test subtracting a block that doesn't overlap."""
		interval = {"start": at(9), "end": at(12)}

		result = _interval_subtract(interval, {"start": at(13), "end": at(14)})
		self.assertEqual(result, [interval])

	def test_interval_subtract_full_overlap(self):
		"""Test subtracting a block that covers the whole interval."""
		result = _interval_subtract(
			{"start": at(10), "end": at(11)},
			{"start": at(9), "end": at(12)}
		)

		self.assertEqual(result, [])

	def test_interval_subtract_start(self):
		"""Test subtracting a block at the start."""
		result = _interval_subtract(
			{"start": at(9), "end": at(12)},
			{"start": at(8), "end": at(10)}
		)

		self.assertEqual(result, [{"start": at(10), "end": at(12)}])

	def test_interval_subtract_end(self):
		"""Test subtracting a block at the end."""
		result = _interval_subtract(
			{"start": at(9), "end": at(12)},
			{"start": at(11), "end": at(13)}
		)

		self.assertEqual(result, [{"start": at(9), "end": at(11)}])

	def test_interval_subtract_middle(self):
		"""Test subtracting a block in the middle (split)."""
		result = _interval_subtract(
			{"start": at(9), "end": at(17)},
			{"start": at(12), "end": at(13)}
		)

		self.assertEqual(result, [
			{"start": at(9), "end": at(12)},
			{"start": at(13), "end": at(17)},
		])


def run_tests():
	"""Run all tests in this module."""
	unittest.main()
