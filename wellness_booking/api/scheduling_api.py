"""
Scheduling API Endpoints

Whitelisted functions for the public booking calendar and the desk.
Public endpoints allow guest access with security protections:
- Rate limiting by IP address
- Input validation

Every endpoint loads a snapshot (settings, overrides, blocks, bookings,
add-on catalog) and hands plain values to the scheduling engine.
"""

import frappe
from frappe import _
from datetime import timedelta
from typing import Any, Dict, List, Optional

# Import scheduling services
from wellness_booking.wellness_booking.scheduling import snapshot
from wellness_booking.wellness_booking.scheduling.availability import interval_fits, open_intervals_for_day
from wellness_booking.wellness_booking.scheduling.alternatives import suggest_alternatives
from wellness_booking.wellness_booking.scheduling.conflicts import check_conflicts
from wellness_booking.wellness_booking.scheduling.durations import (
	add_on_price_total,
	adjusted_duration,
	available_add_ons,
	base_duration_for,
)
from wellness_booking.wellness_booking.scheduling.holidays import holiday_names, holidays_between
from wellness_booking.wellness_booking.scheduling.slots import available_times_by_date, slots_in_range

from wellness_booking.api.shared import (
	check_rate_limit,
	parse_add_on_ids,
	validate_date_string,
	validate_datetime_string,
	validate_docname,
	validate_positive_int,
	validate_year,
)


# Rango máximo consultable en los endpoints públicos
MAX_RANGE_DAYS = 366


@frappe.whitelist(allow_guest=True, methods=['GET'])
def get_closed_dates(start_date: str, end_date: str) -> Dict[str, Any]:
	"""
	Fechas cerradas (feriados, días deshabilitados) en un rango.

	Usado por el date picker público para deshabilitar días.

	Rate limited: 30 requests per minute per IP.

	Args:
		start_date: fecha inicial (YYYY-MM-DD, inclusive)
		end_date: fecha final (YYYY-MM-DD, inclusive)

	Returns:
		dict: {
			"closed_dates": ["2025-07-04", "2025-07-06", ...],
			"holidays": {"2025-07-04": "Independence Day"}
		}
	"""
	check_rate_limit("get_closed_dates")

	start = validate_date_string(start_date, "start_date")
	end = validate_date_string(end_date, "end_date")
	_validate_range(start, end)

	try:
		policy = snapshot.load_policy()

		holidays = {}
		for holiday in holidays_between(start, end):
			holidays[holiday.strftime("%Y-%m-%d")] = holiday_names(holiday.year)[holiday]

		return {
			"closed_dates": [
				d.strftime("%Y-%m-%d") for d in policy.closed_dates_between(start, end)
			],
			"holidays": holidays
		}

	except Exception as e:
		frappe.log_error(f"Error in get_closed_dates: {str(e)}", "API Error")
		frappe.throw(_("Error al obtener fechas cerradas"))


@frappe.whitelist(allow_guest=True, methods=['GET'])
def get_available_slots(
	from_date: str,
	to_date: str,
	session_type: Optional[str] = None,
	add_ons: Optional[Any] = None
) -> List[Dict[str, str]]:
	"""
	Slots disponibles para un rango de fechas [from_date, to_date].

	La duración de cada slot es la del tipo de sesión más la extensión de los
	add-ons elegidos.

	Rate limited: 30 requests per minute per IP.

	Args:
		from_date: fecha inicial (YYYY-MM-DD)
		to_date: fecha final (YYYY-MM-DD, inclusive)
		session_type: "60min", "90min", "120min" o "consultation"
		add_ons: ids de add-ons (lista, JSON o separados por coma)

	Returns:
		list[dict]: [
			{
				"date": "2025-06-02",
				"start": "2025-06-02 09:00:00",
				"end": "2025-06-02 10:15:00",
				"time": "09:00"
			},
			...
		]

	Example:
		```javascript
		frappe.call({
			method: "wellness_booking.api.scheduling_api.get_available_slots",
			args: {
				from_date: "2025-06-02",
				to_date: "2025-06-06",
				session_type: "60min",
				add_ons: ["reflexology"]
			}
		});
		```
	"""
	check_rate_limit("get_available_slots")

	args = _validate_slot_request(from_date, to_date, session_type, add_ons)

	try:
		slots = slots_in_range(**_slot_query(*args))

		return [
			{
				"date": slot["date"].strftime("%Y-%m-%d"),
				"start": slot["start"].strftime("%Y-%m-%d %H:%M:%S"),
				"end": slot["end"].strftime("%Y-%m-%d %H:%M:%S"),
				"time": slot["start"].strftime("%H:%M")
			}
			for slot in slots
		]

	except Exception as e:
		frappe.log_error(f"Error in get_available_slots: {str(e)}", "API Error")
		frappe.throw(_("Error al obtener slots disponibles"))


@frappe.whitelist(allow_guest=True, methods=['GET'])
def get_available_times(
	from_date: str,
	to_date: str,
	session_type: Optional[str] = None,
	add_ons: Optional[Any] = None
) -> Dict[str, List[str]]:
	"""
	Horas de inicio disponibles agrupadas por fecha.

	Mismos argumentos que get_available_slots; el calendario público lo usa
	para pintar los horarios de cada día.

	Rate limited: 30 requests per minute per IP.

	Returns:
		dict: {"2025-06-02": ["09:00", "10:15", ...], ...}
	"""
	check_rate_limit("get_available_times")

	args = _validate_slot_request(from_date, to_date, session_type, add_ons)

	try:
		return available_times_by_date(**_slot_query(*args))

	except Exception as e:
		frappe.log_error(f"Error in get_available_times: {str(e)}", "API Error")
		frappe.throw(_("Error al obtener horarios disponibles"))


@frappe.whitelist(methods=['GET'])
def get_business_hours(date: str) -> Dict[str, Any]:
	"""
	Horario resuelto de una fecha.

	Returns:
		dict: {"date": "2025-06-02", "closed": False, "start": "09:00", "end": "17:00"}
		      o {"date": ..., "closed": True, "holiday": "Independence Day" | None}
	"""
	target_date = validate_date_string(date, "date")

	policy = snapshot.load_policy()
	hours = policy.hours_for(target_date)

	result = {"date": target_date.strftime("%Y-%m-%d")}
	if hours is None:
		result["closed"] = True
		result["holiday"] = holiday_names(target_date.year).get(target_date)
		return result

	result["closed"] = False
	result["start"] = hours.start.strftime("%H:%M")
	result["end"] = hours.end.strftime("%H:%M")
	return result


@frappe.whitelist(methods=['GET'])
def get_holidays(year: str) -> List[Dict[str, str]]:
	"""
	Feriados de un año, ordenados por fecha.

	Returns:
		list[dict]: [{"date": "2025-01-01", "name": "New Year's Day"}, ...]
	"""
	year = validate_year(year)

	return [
		{"date": d.strftime("%Y-%m-%d"), "name": name}
		for d, name in holiday_names(year).items()
	]


@frappe.whitelist(methods=['GET', 'POST'])
def check_booking(
	start_datetime: str,
	base_duration_minutes: Any,
	add_ons: Optional[Any] = None,
	booking_name: Optional[str] = None
) -> Dict[str, Any]:
	"""
	Valida un horario ANTES de guardar un Session Booking.

	Útil para el desk: muestra la duración ajustada, los bookings en conflicto
	y alternativas cercanas si las hay.

	Args:
		start_datetime: inicio propuesto (YYYY-MM-DD HH:MM[:SS], hora local)
		base_duration_minutes: duración de la sesión sin add-ons
		add_ons: ids de add-ons elegidos
		booking_name: Session Booking que se está editando (se excluye)

	Returns:
		dict: {
			"duration_minutes": 75,
			"price_additive": 25.0,
			"start": "2025-06-02 14:00:00",
			"end": "2025-06-02 15:15:00",
			"has_conflict": True,
			"conflicting_bookings": ["SB-0001"],
			"within_business_hours": True,
			"alternatives": [{"start": "...", "end": "..."}]
		}
	"""
	check_rate_limit("check_booking")

	start = validate_datetime_string(start_datetime, "start_datetime")
	base_duration = validate_positive_int(base_duration_minutes, "base_duration_minutes")
	add_on_ids = parse_add_on_ids(add_ons)
	if booking_name:
		booking_name = validate_docname(booking_name, "booking_name")

	try:
		settings = snapshot.get_settings()
		catalog = snapshot.load_add_on_catalog()
		policy = snapshot.load_policy(settings)
		blocks = snapshot.load_availability_slots(start.date(), start.date())
		bookings = snapshot.load_bookings(start.date(), start.date())

		duration = adjusted_duration(base_duration, add_on_ids, catalog)
		result = check_conflicts(start, duration, bookings, exclude_booking_id=booking_name)

		alternatives = []
		if result["has_conflict"]:
			restrict = snapshot.restrict_alternatives(settings)
			alternatives = suggest_alternatives(
				start,
				duration,
				bookings,
				policy=policy if restrict else None,
				availability_slots=blocks,
				exclude_booking_id=booking_name
			)

		return {
			"duration_minutes": duration,
			"price_additive": add_on_price_total(add_on_ids, catalog),
			"start": _format(result["candidate_start"]),
			"end": _format(result["candidate_end"]),
			"has_conflict": result["has_conflict"],
			"conflicting_bookings": result["conflicting_bookings"],
			"within_business_hours": _within_business_hours(
				start, result["candidate_end"], policy, blocks
			),
			"alternatives": [
				{"start": _format(a["start"]), "end": _format(a["end"])}
				for a in alternatives
			]
		}

	except Exception as e:
		frappe.log_error(f"Error in check_booking: {str(e)}", "API Error")
		frappe.throw(_("Error al validar el horario"))


@frappe.whitelist(allow_guest=True, methods=['GET'])
def get_add_on_catalog(session_type: Optional[str] = None) -> List[Dict[str, Any]]:
	"""
	Catálogo de add-ons activos, filtrado por tipo de sesión si se indica.

	Rate limited: 30 requests per minute per IP.

	Returns:
		list[dict]: [
			{
				"id": "reflexology",
				"name": "Reflexology",
				"price": 25.0,
				"duration_extension_minutes": 15,
				"available_for": ["60min", "90min", "120min"]
			},
			...
		]
	"""
	check_rate_limit("get_add_on_catalog")

	catalog = snapshot.load_add_on_catalog()
	if session_type:
		catalog = available_add_ons(validate_docname(session_type, "session_type"), catalog)

	return [
		{
			"id": add_on.id,
			"name": add_on.name,
			"price": add_on.price_additive,
			"duration_extension_minutes": add_on.duration_extension_minutes,
			"available_for": list(add_on.available_for)
		}
		for add_on in catalog
	]


def _validate_range(start, end) -> None:
	if start > end:
		frappe.throw(_("La fecha inicial debe ser menor o igual que la final"))
	if (end - start).days > MAX_RANGE_DAYS:
		frappe.throw(_(f"El rango no puede superar {MAX_RANGE_DAYS} días"))


def _validate_slot_request(from_date, to_date, session_type, add_ons):
	start = validate_date_string(from_date, "from_date")
	end = validate_date_string(to_date, "to_date")
	_validate_range(start, end)
	if session_type:
		session_type = validate_docname(session_type, "session_type")

	return start, end, session_type, parse_add_on_ids(add_ons)


def _slot_query(start, end, session_type, add_on_ids) -> Dict[str, Any]:
	"""kwargs de slots_in_range para [start, end] cargados desde la DB."""
	settings = snapshot.get_settings()
	session_type = session_type or settings.default_session_type or "60min"
	catalog = snapshot.load_add_on_catalog()

	return dict(
		start_date=start,
		end_date=end + timedelta(days=1),
		session_duration=adjusted_duration(base_duration_for(session_type), add_on_ids, catalog),
		existing_bookings=snapshot.load_bookings(start, end),
		now=snapshot.practitioner_now(settings),
		policy=snapshot.load_policy(settings),
		availability_slots=snapshot.load_availability_slots(start, end),
		**snapshot.slot_rules(settings)
	)


def _within_business_hours(start, end, policy, blocks) -> bool:
	return interval_fits(start, end, open_intervals_for_day(start.date(), policy, blocks))


def _format(value) -> str:
	return value.strftime("%Y-%m-%d %H:%M:%S")
