"""
Alternative Slot Finder

When a candidate appointment conflicts, proposes nearby start times by
shifting the candidate a few whole hours earlier or later.
"""

from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

from .availability import interval_fits, open_intervals_for_day
from .business_hours import BusinessHoursPolicy
from .conflicts import find_conflicts
from .entities import AvailabilitySlot, Booking


# Orden fijo de búsqueda; el 0 (horario original) nunca se propone
ALTERNATIVE_HOUR_OFFSETS = (-3, -2, -1, 1, 2, 3)
MAX_ALTERNATIVES = 4


def suggest_alternatives(
	candidate_start: datetime,
	candidate_duration_minutes: int,
	bookings: Iterable[Booking],
	policy: Optional[BusinessHoursPolicy] = None,
	availability_slots: Optional[Iterable[AvailabilitySlot]] = None,
	exclude_booking_id: Optional[str] = None,
	limit: int = MAX_ALTERNATIVES
) -> List[Dict[str, datetime]]:
	"""
	Propone horarios alternativos sin conflicto.

	Args:
		candidate_start: inicio que generó el conflicto
		candidate_duration_minutes: duración ya ajustada por add-ons
		bookings: bookings existentes
		policy: si se pasa, las alternativas deben caer dentro del horario abierto
		availability_slots: bloques del admin (solo se usan con policy)
		exclude_booking_id: booking a excluir (para ediciones)
		limit: máximo de alternativas (nunca más de MAX_ALTERNATIVES)

	Returns:
		list[dict]: [{"start": datetime, "end": datetime}, ...] en orden de búsqueda

	Algoritmo:
		1. Recorrer offsets -3..+3 horas (sin 0)
		2. Saltar desplazamientos que cambian de fecha
		3. Con policy, saltar los que no caben en un intervalo abierto
		4. Aceptar si no hay conflicto; parar al llegar al límite
	"""
	bookings = list(bookings)
	limit = min(limit, MAX_ALTERNATIVES)
	duration = timedelta(minutes=candidate_duration_minutes)
	candidate_date = candidate_start.date()

	open_intervals = None
	if policy is not None:
		open_intervals = open_intervals_for_day(candidate_date, policy, availability_slots)

	suggestions = []

	for offset in ALTERNATIVE_HOUR_OFFSETS:
		if len(suggestions) >= limit:
			break

		start = candidate_start + timedelta(hours=offset)
		end = start + duration

		if start.date() != candidate_date:
			continue

		if open_intervals is not None and not interval_fits(start, end, open_intervals):
			continue

		conflicts = find_conflicts(
			start,
			candidate_duration_minutes,
			bookings,
			exclude_booking_id=exclude_booking_id
		)
		if not conflicts:
			suggestions.append({"start": start, "end": end})

	return suggestions
