"""
Holiday Calendar

Derives the closed calendar dates for a year:
- Fixed-date holidays (New Year's Day, Juneteenth, Christmas, ...)
- Floating holidays defined by an Nth-weekday-of-month rule
- Floating holidays defined by a last-weekday-of-month rule

Holidays are never stored; they are recomputed from these rules every time a
year is requested, so the same year always yields the same set.
"""

import calendar
from datetime import date, timedelta
from typing import Dict, FrozenSet, List, Union

from .entities import to_date


# (month, day, name)
FIXED_HOLIDAYS = (
	(1, 1, "New Year's Day"),
	(6, 19, "Juneteenth"),
	(7, 4, "Independence Day"),
	(11, 11, "Veterans Day"),
	(12, 24, "Christmas Eve"),
	(12, 25, "Christmas Day"),
	(12, 31, "New Year's Eve"),
)

# (month, weekday, n, name)
NTH_WEEKDAY_HOLIDAYS = (
	(1, calendar.MONDAY, 3, "Martin Luther King Jr. Day"),
	(2, calendar.MONDAY, 3, "Presidents' Day"),
	(9, calendar.MONDAY, 1, "Labor Day"),
	(10, calendar.MONDAY, 2, "Columbus Day"),
	(11, calendar.THURSDAY, 4, "Thanksgiving"),
)

# (month, weekday, name)
LAST_WEEKDAY_HOLIDAYS = (
	(5, calendar.MONDAY, "Memorial Day"),
)


def nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
	"""
	N-ésima ocurrencia de un día de semana en un mes.

	Args:
		year: año
		month: mes (1-12)
		weekday: día de semana (calendar.MONDAY == 0 ... calendar.SUNDAY == 6)
		n: ocurrencia (1 = primera)

	Returns:
		date: primera ocurrencia de weekday en el mes + (n-1) semanas

	Ejemplo:
		nth_weekday(2025, 1, calendar.MONDAY, 3) -> 2025-01-20
	"""
	first_of_month = date(year, month, 1)
	days_until = (weekday - first_of_month.weekday()) % 7
	first_occurrence = first_of_month + timedelta(days=days_until)
	return first_occurrence + timedelta(days=(n - 1) * 7)


def last_weekday(year: int, month: int, weekday: int) -> date:
	"""
	Última ocurrencia de un día de semana en un mes.

	Parte del último día del mes y retrocede hasta el weekday buscado.

	Ejemplo:
		last_weekday(2025, 5, calendar.MONDAY) -> 2025-05-26
	"""
	last_day = date(year, month, calendar.monthrange(year, month)[1])
	days_back = (last_day.weekday() - weekday) % 7
	return last_day - timedelta(days=days_back)


def holiday_names(year: int) -> Dict[date, str]:
	"""
	Feriados del año con su nombre para mostrar.

	Returns:
		dict: {date(2025, 1, 1): "New Year's Day", ...} ordenado por fecha
	"""
	names: Dict[date, str] = {}

	for month, day, name in FIXED_HOLIDAYS:
		names[date(year, month, day)] = name

	for month, weekday, n, name in NTH_WEEKDAY_HOLIDAYS:
		names[nth_weekday(year, month, weekday, n)] = name

	for month, weekday, name in LAST_WEEKDAY_HOLIDAYS:
		names[last_weekday(year, month, weekday)] = name

	# El día antes de Thanksgiving también se cierra
	thanksgiving = nth_weekday(year, 11, calendar.THURSDAY, 4)
	names[thanksgiving - timedelta(days=1)] = "Thanksgiving Eve"

	return dict(sorted(names.items()))


def holidays_for(year: int) -> FrozenSet[date]:
	"""Conjunto de fechas cerradas por feriado en el año."""
	return frozenset(holiday_names(year))


def is_holiday(target_date: Union[date, str]) -> bool:
	target_date = to_date(target_date)
	return target_date in holidays_for(target_date.year)


def holidays_between(
	start_date: Union[date, str],
	end_date: Union[date, str]
) -> List[date]:
	"""
	Feriados entre dos fechas (ambas inclusive), aunque el rango cruce años.
	"""
	start_date = to_date(start_date)
	end_date = to_date(end_date)

	result = []
	for year in range(start_date.year, end_date.year + 1):
		result.extend(d for d in holidays_for(year) if start_date <= d <= end_date)

	return sorted(result)
