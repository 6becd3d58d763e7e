"""
Availability Service

Calculates the open intervals of a day, considering:
- Business Hours Policy (weekly hours, holidays, overrides)
- Availability Slots (explicit admin blocks: open or closed)
"""

from datetime import datetime, timedelta, date
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .business_hours import BusinessHoursPolicy
from .entities import AvailabilitySlot, to_date


def open_intervals_for_day(
	target_date: Union[date, str],
	policy: BusinessHoursPolicy,
	availability_slots: Optional[Iterable[AvailabilitySlot]] = None
) -> List[Dict[str, datetime]]:
	"""
	Obtiene los intervalos abiertos de un día.

	Args:
		target_date: fecha (date object o string YYYY-MM-DD)
		policy: BusinessHoursPolicy
		availability_slots: bloques del admin (se ignoran los de otras fechas)

	Returns:
		list[dict]: [
			{"start": datetime, "end": datetime},
			...
		]

	Algoritmo:
		1. Resolver horario del día con la policy
		2. Si está cerrado, retornar vacío (los bloques no abren días cerrados)
		3. Aplicar bloques (cerrados restan, abiertos agregan)
		4. Merge intervalos adyacentes/overlapping
		5. Retornar lista ordenada
	"""
	target_date = to_date(target_date)

	window = policy.open_window(target_date)
	if window is None:
		return []

	intervals = [window]

	day_slots = [
		slot for slot in (availability_slots or ())
		if slot.slot_date == target_date
	]
	if day_slots:
		intervals = _apply_availability_slots(intervals, day_slots, target_date)

	intervals = _merge_intervals(intervals)

	return intervals


def get_effective_availability(
	start_date: Union[date, str],
	end_date: Union[date, str],
	policy: BusinessHoursPolicy,
	availability_slots: Optional[Iterable[AvailabilitySlot]] = None
) -> Dict[str, List[Dict[str, datetime]]]:
	"""
	Obtiene disponibilidad efectiva para un rango de fechas [start_date, end_date).

	Returns:
		dict: {
			"2025-06-02": [{"start": datetime, "end": datetime}, ...],
			"2025-06-03": [...],
			...
		}
	"""
	start_date = to_date(start_date)
	end_date = to_date(end_date)
	availability_slots = list(availability_slots or ())

	result = {}
	current_date = start_date

	while current_date < end_date:
		intervals = open_intervals_for_day(current_date, policy, availability_slots)
		if intervals:
			result[current_date.strftime("%Y-%m-%d")] = intervals
		current_date += timedelta(days=1)

	return result


def interval_fits(
	start: datetime,
	end: datetime,
	intervals: Iterable[Dict[str, datetime]]
) -> bool:
	"""True si [start, end) cae completo dentro de alguno de los intervalos."""
	return any(i["start"] <= start and end <= i["end"] for i in intervals)


def find_overlapping_slots(
	slots: Iterable[AvailabilitySlot]
) -> List[Tuple[AvailabilitySlot, AvailabilitySlot]]:
	"""
	Detecta bloques solapados dentro de una misma fecha.

	Dos bloques se solapan si:
	- Son de la misma fecha
	- slot1.start < slot2.end AND slot1.end > slot2.start

	Un bloque largo puede solapar con varios bloques posteriores (09-17 contra
	10-11 y 12-13): se reportan todos los pares.

	Returns:
		list: pares (slot_anterior, slot_posterior) que se solapan, ordenados
		por inicio del bloque anterior
	"""
	slots_by_date: Dict[date, List[AvailabilitySlot]] = {}
	for slot in slots:
		slots_by_date.setdefault(slot.slot_date, []).append(slot)

	overlapping = []
	for day_slots in slots_by_date.values():
		day_slots.sort(key=lambda s: s.start_time)
		for i, current in enumerate(day_slots):
			for later in day_slots[i + 1:]:
				if later.start_time >= current.end_time:
					break
				overlapping.append((current, later))

	return overlapping


def _apply_availability_slots(
	intervals: List[Dict[str, datetime]],
	slots: List[AvailabilitySlot],
	target_date: date
) -> List[Dict[str, datetime]]:
	"""
	Aplica bloques del admin a los intervalos base.

	Los bloques cerrados se restan primero y luego se agregan los abiertos,
	así el resultado no depende del orden en que vienen.
	"""
	for slot in slots:
		if slot.is_available:
			continue

		block = {
			"start": datetime.combine(target_date, slot.start_time),
			"end": datetime.combine(target_date, slot.end_time),
		}

		# Restar este rango de todos los intervalos
		new_intervals = []
		for interval in intervals:
			new_intervals.extend(_interval_subtract(interval, block))
		intervals = new_intervals

	for slot in slots:
		if slot.is_available:
			intervals.append({
				"start": datetime.combine(target_date, slot.start_time),
				"end": datetime.combine(target_date, slot.end_time),
			})

	return intervals


def _merge_intervals(intervals: List[Dict[str, datetime]]) -> List[Dict[str, datetime]]:
	"""
	Une intervalos adyacentes o overlapping.

	Args:
		intervals: lista de intervalos {"start": datetime, "end": datetime}

	Returns:
		list: intervalos merged, ordenados por start
	"""
	if not intervals:
		return []

	intervals = sorted(intervals, key=lambda x: x["start"])

	merged = [dict(intervals[0])]

	for current in intervals[1:]:
		last_merged = merged[-1]

		# Si current se solapa o es adyacente a last_merged, merge
		if current["start"] <= last_merged["end"]:
			if current["end"] > last_merged["end"]:
				last_merged["end"] = current["end"]
		else:
			merged.append(dict(current))

	return merged


def _interval_subtract(
	interval: Dict[str, datetime],
	block: Dict[str, datetime]
) -> List[Dict[str, datetime]]:
	"""
	Resta un bloqueo de un intervalo.

	Returns:
		list: lista de intervalos resultantes (puede ser 0, 1 o 2 intervalos)
	"""
	# Sin overlap
	if block["end"] <= interval["start"] or block["start"] >= interval["end"]:
		return [interval]

	# Block cubre todo
	if block["start"] <= interval["start"] and block["end"] >= interval["end"]:
		return []

	# Block cubre parte inicial
	if block["start"] <= interval["start"]:
		return [{"start": block["end"], "end": interval["end"]}]

	# Block cubre parte final
	if block["end"] >= interval["end"]:
		return [{"start": interval["start"], "end": block["start"]}]

	# Block está en medio (split en dos)
	return [
		{"start": interval["start"], "end": block["start"]},
		{"start": block["end"], "end": interval["end"]}
	]
