"""
Business Hours Policy

Resolves the opening hours for any date, considering:
- Default weekly hours (one window per weekday, some weekdays disabled)
- Holidays (closed unless overridden)
- Business Hours Overrides for exact dates (custom hours, forced-open day,
  forced-open holiday)

Overrides are sparse escape hatches; they never modify the weekly table.
"""

import calendar
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Mapping, Optional, Union

from .entities import BusinessHoursOverride, DayHours, to_date
from .holidays import holidays_for


DEFAULT_WEEKLY_HOURS: Dict[int, DayHours] = {
	calendar.MONDAY: DayHours(time(9, 0), time(17, 0)),
	calendar.TUESDAY: DayHours(time(9, 0), time(17, 0)),
	calendar.WEDNESDAY: DayHours(time(9, 0), time(17, 0)),
	calendar.THURSDAY: DayHours(time(9, 0), time(17, 0)),
	calendar.FRIDAY: DayHours(time(9, 0), time(17, 0)),
	calendar.SATURDAY: DayHours(time(10, 0), time(16, 0)),
	calendar.SUNDAY: DayHours(time(10, 0), time(14, 0), enabled=False),
}

# Ventana usada cuando un day_override abre un día deshabilitado
FALLBACK_HOURS = DayHours(time(9, 0), time(17, 0))

OverridesInput = Union[
	Mapping[Union[date, str], BusinessHoursOverride],
	Iterable[BusinessHoursOverride],
	None
]


class BusinessHoursPolicy:
	"""
	Default weekly hours plus per-date overrides.

	Args:
		weekly_hours: {weekday: DayHours}; weekdays not given keep the default
		overrides: BusinessHoursOverride keyed by date, or an iterable of them
	"""

	def __init__(
		self,
		weekly_hours: Optional[Mapping[int, DayHours]] = None,
		overrides: OverridesInput = None
	) -> None:
		self.weekly_hours: Dict[int, DayHours] = dict(DEFAULT_WEEKLY_HOURS)
		if weekly_hours:
			self.weekly_hours.update(weekly_hours)

		self.overrides: Dict[date, BusinessHoursOverride] = {}
		if isinstance(overrides, Mapping):
			for key, override in overrides.items():
				self.overrides[to_date(key)] = override
		elif overrides:
			for override in overrides:
				self.overrides[override.override_date] = override

	def default_hours_for(self, weekday: int) -> Optional[DayHours]:
		"""Horario de la tabla semanal, None si el día está deshabilitado."""
		hours = self.weekly_hours.get(weekday)
		if not hours or not hours.enabled:
			return None
		return hours

	def hours_for(self, target_date: Union[date, str]) -> Optional[DayHours]:
		"""
		Resuelve el horario de una fecha.

		Orden de precedencia:
			1. custom hours del override de esa fecha
			2. day_override: abre el día (horario del weekday o FALLBACK_HOURS)
			3. holiday_override en feriado: horario normal del weekday
			4. feriado sin override: cerrado
			5. tabla semanal

		Returns:
			DayHours si está abierto, None si está cerrado
		"""
		target_date = to_date(target_date)
		weekday = target_date.weekday()
		override = self.overrides.get(target_date)

		if override and override.has_custom_hours:
			return DayHours(override.custom_start, override.custom_end)

		if override and override.day_override:
			return self.default_hours_for(weekday) or FALLBACK_HOURS

		if target_date in holidays_for(target_date.year):
			if override and override.holiday_override:
				return self.default_hours_for(weekday)
			return None

		return self.default_hours_for(weekday)

	def is_open(self, target_date: Union[date, str]) -> bool:
		return self.hours_for(target_date) is not None

	def open_window(self, target_date: Union[date, str]) -> Optional[Dict[str, datetime]]:
		"""
		Ventana abierta de la fecha como datetimes locales.

		Returns:
			{"start": datetime, "end": datetime} o None si está cerrado
		"""
		target_date = to_date(target_date)
		hours = self.hours_for(target_date)
		if hours is None:
			return None

		return {
			"start": datetime.combine(target_date, hours.start),
			"end": datetime.combine(target_date, hours.end),
		}

	def closed_dates_between(
		self,
		start_date: Union[date, str],
		end_date: Union[date, str]
	) -> List[date]:
		"""Fechas cerradas entre start_date y end_date (ambas inclusive)."""
		start_date = to_date(start_date)
		end_date = to_date(end_date)

		closed = []
		current_date = start_date

		while current_date <= end_date:
			if not self.is_open(current_date):
				closed.append(current_date)
			current_date += timedelta(days=1)

		return closed
