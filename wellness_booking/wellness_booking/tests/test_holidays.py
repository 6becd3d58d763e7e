"""
Tests for scheduling/holidays.py

Tests fixed and floating holiday rules, year determinism, and ranges.
"""

import calendar
import unittest
from datetime import date

from wellness_booking.wellness_booking.scheduling.holidays import (
	holiday_names,
	holidays_between,
	holidays_for,
	is_holiday,
	last_weekday,
	nth_weekday,
)


class TestHolidays(unittest.TestCase):
	"""Tests for the holiday calendar."""

	def test_nth_weekday_mlk_day(self):
		"""Test third Monday of January 2025."""
		self.assertEqual(nth_weekday(2025, 1, calendar.MONDAY, 3), date(2025, 1, 20))

	def test_nth_weekday_when_month_starts_on_weekday(self):
		"""Test Labor Day 2025 (September 1st is itself a Monday)."""
		self.assertEqual(nth_weekday(2025, 9, calendar.MONDAY, 1), date(2025, 9, 1))

	def test_last_weekday_memorial_day(self):
		"""Test last Monday of May 2025."""
		self.assertEqual(last_weekday(2025, 5, calendar.MONDAY), date(2025, 5, 26))

	def test_last_weekday_when_month_ends_on_weekday(self):
		"""Test last Saturday of May 2025 (May 31st)."""
		self.assertEqual(last_weekday(2025, 5, calendar.SATURDAY), date(2025, 5, 31))

	def test_holidays_2025(self):
		"""Test the full 2025 holiday set."""
		holidays = holidays_for(2025)

		self.assertEqual(len(holidays), 14)
		for expected in (
			date(2025, 1, 1),
			date(2025, 1, 20),
			date(2025, 2, 17),
			date(2025, 5, 26),
			date(2025, 6, 19),
			date(2025, 7, 4),
			date(2025, 9, 1),
			date(2025, 10, 13),
			date(2025, 11, 11),
			date(2025, 11, 26),
			date(2025, 11, 27),
			date(2025, 12, 24),
			date(2025, 12, 25),
			date(2025, 12, 31),
		):
			self.assertIn(expected, holidays)

	def test_thanksgiving_eve_is_named(self):
		"""Test the day before Thanksgiving is closed and named."""
		names = holiday_names(2025)

		self.assertEqual(names[date(2025, 11, 27)], "Thanksgiving")
		self.assertEqual(names[date(2025, 11, 26)], "Thanksgiving Eve")

	def test_holiday_names_sorted(self):
		"""Test holiday_names is ordered by date."""
		dates = list(holiday_names(2026))
		self.assertEqual(dates, sorted(dates))

	def test_holidays_are_deterministic(self):
		"""Test the same year always yields the same set."""
		self.assertEqual(holidays_for(2027), holidays_for(2027))

	def test_holidays_stay_in_requested_year(self):
		"""Test every holiday falls within its year."""
		for year in (2024, 2025, 2026, 2030):
			self.assertTrue(all(d.year == year for d in holidays_for(year)))

	def test_is_holiday(self):
		"""Test single date lookup, with date or string."""
		self.assertTrue(is_holiday(date(2025, 7, 4)))
		self.assertTrue(is_holiday("2025-12-25"))
		self.assertFalse(is_holiday(date(2025, 7, 3)))

	def test_holidays_between_spans_years(self):
		"""Test an inclusive range that crosses New Year."""
		result = holidays_between(date(2025, 12, 24), date(2026, 1, 1))

		self.assertEqual(result, [
			date(2025, 12, 24),
			date(2025, 12, 25),
			date(2025, 12, 31),
			date(2026, 1, 1),
		])

	def test_holidays_between_empty(self):
		"""Test a range without holidays."""
		self.assertEqual(holidays_between(date(2025, 3, 1), date(2025, 3, 31)), [])


def run_tests():
	"""Run all tests in this module."""
	unittest.main()
