"""
Conflict Detection Service

Detects scheduling conflicts (time overlaps) between a candidate appointment
and existing bookings, considering:
- Same calendar date only (times compared as minutes of the day)
- Booking status (cancelled / rescheduled bookings release their time)
- The booking being edited (excluded from the comparison)
"""

from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from .entities import Booking, minutes_of_day


def intervals_overlap(start1: Any, end1: Any, start2: Any, end2: Any) -> bool:
	"""
	Overlap de intervalos semiabiertos [start, end).

	Los extremos que se tocan (10:00-11:00 vs 11:00-12:00) no son conflicto.
	"""
	return start1 < end2 and start2 < end1


def find_conflicts(
	candidate_start: datetime,
	candidate_duration_minutes: int,
	bookings: Iterable[Booking],
	exclude_booking_id: Optional[str] = None
) -> List[Booking]:
	"""
	Bookings que se solapan con el candidato.

	Args:
		candidate_start: inicio propuesto (hora local)
		candidate_duration_minutes: duración ya ajustada por add-ons
		bookings: bookings existentes (snapshot)
		exclude_booking_id: booking a excluir (para ediciones)

	Returns:
		list[Booking]: en el mismo orden en que vienen

	Algoritmo:
		1. Descartar bookings de otra fecha, liberados o excluidos
		2. Pasar inicio/fin a minutos del día
		3. Comparar con overlap semiabierto
	"""
	candidate_date = candidate_start.date()
	candidate_from = minutes_of_day(candidate_start)
	candidate_to = candidate_from + candidate_duration_minutes

	conflicts = []

	for booking in bookings:
		if booking.booking_date != candidate_date:
			continue
		if not booking.occupies_time:
			continue
		if exclude_booking_id and booking.id == exclude_booking_id:
			continue

		booking_from = minutes_of_day(booking.scheduled_start)
		booking_to = booking_from + booking.duration_minutes

		if intervals_overlap(candidate_from, candidate_to, booking_from, booking_to):
			conflicts.append(booking)

	return conflicts


def check_conflicts(
	candidate_start: datetime,
	candidate_duration_minutes: int,
	bookings: Iterable[Booking],
	exclude_booking_id: Optional[str] = None
) -> Dict[str, Any]:
	"""
	Resumen de conflictos para la API y los DocTypes.

	Returns:
		dict: {
			"has_conflict": bool,
			"conflicting_bookings": [list of booking ids],
			"candidate_start": datetime,
			"candidate_end": datetime
		}
	"""
	conflicts = find_conflicts(
		candidate_start,
		candidate_duration_minutes,
		bookings,
		exclude_booking_id=exclude_booking_id
	)

	return {
		"has_conflict": bool(conflicts),
		"conflicting_bookings": [b.id for b in conflicts],
		"candidate_start": candidate_start,
		"candidate_end": candidate_start + timedelta(minutes=candidate_duration_minutes)
	}
