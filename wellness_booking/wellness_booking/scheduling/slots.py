"""
Slot Generation Service

Generates discrete bookable time slots over a date range, considering:
- Effective availability (business hours, holidays, overrides, admin blocks)
- Past time (only slots strictly after "now")
- Existing bookings
- First-appointment-of-the-day advance notice

The output is used to count and show capacity; it never reserves a slot.
"""

from datetime import datetime, timedelta, date
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from .availability import open_intervals_for_day
from .business_hours import BusinessHoursPolicy
from .conflicts import intervals_overlap
from .entities import AvailabilitySlot, Booking, to_date


BOOKED_SLOT_WINDOW_MINUTES = 30


def slots_in_range(
	start_date: Union[date, str],
	end_date: Union[date, str],
	session_duration: int,
	existing_bookings: Iterable[Booking],
	now: datetime,
	policy: Optional[BusinessHoursPolicy] = None,
	availability_slots: Optional[Iterable[AvailabilitySlot]] = None,
	booked_window_minutes: int = BOOKED_SLOT_WINDOW_MINUTES,
	exact_overlap: bool = False,
	first_of_day_notice_hours: Optional[int] = None
) -> Iterator[Dict[str, Any]]:
	"""
	Genera slots disponibles para fechas en [start_date, end_date).

	Es un generador: se consume una sola vez; para otro rango (o para volver a
	recorrer el mismo) se llama de nuevo.

	Args:
		start_date: fecha inicial (inclusive)
		end_date: fecha final (exclusiva)
		session_duration: minutos de la sesión, también el paso entre slots
		existing_bookings: bookings existentes
		now: hora local actual (inyectada)
		policy: BusinessHoursPolicy (default: horario semanal por defecto)
		availability_slots: bloques del admin
		booked_window_minutes: ventana alrededor del inicio de cada booking
		exact_overlap: usar overlap real contra la duración de cada booking
		first_of_day_notice_hours: anticipación mínima si el día no tiene bookings

	Yields:
		dict: {"date": date, "start": datetime, "end": datetime}

	Algoritmo:
		1. Para cada fecha, obtener intervalos abiertos (cerrado -> saltar)
		2. Recorrer cada intervalo en pasos de session_duration
		3. Descartar slots pasados, ocupados o sin anticipación suficiente
	"""
	if session_duration <= 0:
		return

	start_date = to_date(start_date)
	end_date = to_date(end_date)
	policy = policy or BusinessHoursPolicy()
	availability_slots = list(availability_slots or ())
	step = timedelta(minutes=session_duration)

	bookings_by_date: Dict[date, List[Booking]] = {}
	for booking in existing_bookings:
		if booking.occupies_time:
			bookings_by_date.setdefault(booking.booking_date, []).append(booking)

	current_date = start_date

	while current_date < end_date:
		day_bookings = bookings_by_date.get(current_date, [])

		earliest = now
		if first_of_day_notice_hours and not day_bookings:
			earliest = now + timedelta(hours=first_of_day_notice_hours)

		for interval in open_intervals_for_day(current_date, policy, availability_slots):
			slot_start = interval["start"]

			while slot_start < interval["end"]:
				slot_end = slot_start + step

				if (
					slot_start > now
					and slot_start >= earliest
					and not _is_booked(
						slot_start, slot_end, day_bookings,
						booked_window_minutes, exact_overlap
					)
				):
					yield {
						"date": current_date,
						"start": slot_start,
						"end": slot_end
					}

				slot_start = slot_end

		current_date += timedelta(days=1)


def count_available_slots(*args: Any, **kwargs: Any) -> int:
	"""Cantidad de slots disponibles; mismos argumentos que slots_in_range."""
	return sum(1 for _ in slots_in_range(*args, **kwargs))


def available_times_by_date(*args: Any, **kwargs: Any) -> Dict[str, List[str]]:
	"""
	Horas disponibles agrupadas por fecha, para el calendario público.

	Returns:
		dict: {"2025-06-02": ["09:00", "10:00", ...], ...}
	"""
	result: Dict[str, List[str]] = {}
	for slot in slots_in_range(*args, **kwargs):
		result.setdefault(slot["date"].strftime("%Y-%m-%d"), []).append(
			slot["start"].strftime("%H:%M")
		)
	return result


def _is_booked(
	slot_start: datetime,
	slot_end: datetime,
	day_bookings: List[Booking],
	window_minutes: int,
	exact_overlap: bool
) -> bool:
	"""
	Verifica si el slot choca con algún booking del día.

	Por defecto un slot está ocupado si su inicio cae a window_minutes o menos
	del inicio de un booking. Con exact_overlap se compara contra el intervalo
	real [inicio, inicio + duración) del booking.
	"""
	window = timedelta(minutes=window_minutes)

	for booking in day_bookings:
		if exact_overlap:
			if intervals_overlap(slot_start, slot_end, booking.scheduled_start, booking.scheduled_end):
				return True
		elif abs(slot_start - booking.scheduled_start) <= window:
			return True

	return False
