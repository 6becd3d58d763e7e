"""
Scheduling Entities

Value types consumed by the scheduling engine:
- Booking (existing appointments)
- AddOn (catalog entries that may extend a session)
- DayHours / BusinessHoursOverride (business hours policy)
- AvailabilitySlot (explicit admin blocks, open or closed)

Parsing from stored documents and request payloads happens here, at the
boundary. The rest of the engine only sees date, time and naive local
datetime objects.
"""

from dataclasses import dataclass
from datetime import datetime, time, timedelta, date
from typing import Any, Mapping, Optional, Tuple, Union

from frappe.utils import cint, flt, get_datetime, get_time, getdate


BOOKING_STATUSES = ("scheduled", "completed", "cancelled", "no-show", "rescheduled")

# Estos estados liberan el horario: no bloquean slots ni generan conflictos
RELEASED_STATUSES = ("cancelled", "rescheduled")


def to_time(time_value: Union[time, timedelta, datetime, str]) -> time:
	"""
	Convierte diferentes formatos de tiempo a datetime.time.

	Args:
		time_value: puede ser time, timedelta (desde medianoche), datetime o string "HH:MM"

	Returns:
		datetime.time object
	"""
	if isinstance(time_value, datetime):
		return time_value.time()
	elif isinstance(time_value, time):
		return time_value
	elif isinstance(time_value, timedelta):
		# timedelta representa tiempo desde medianoche
		return (datetime.min + time_value).time()
	elif isinstance(time_value, str):
		return get_time(time_value)
	else:
		raise ValueError(f"Cannot convert {type(time_value)} to time")


def to_date(date_value: Union[date, datetime, str]) -> date:
	"""Convierte date, datetime o string YYYY-MM-DD a datetime.date."""
	if isinstance(date_value, datetime):
		return date_value.date()
	if isinstance(date_value, date):
		return date_value
	return getdate(date_value)


def to_datetime(value: Union[datetime, date, str]) -> datetime:
	"""Convierte a datetime naive (hora local del practitioner)."""
	if isinstance(value, datetime):
		return value
	if isinstance(value, date):
		return datetime.combine(value, time.min)
	return get_datetime(value)


def minutes_of_day(value: Union[time, datetime]) -> int:
	"""Minutos desde medianoche (HH*60 + MM)."""
	return value.hour * 60 + value.minute


def has_value(value: Any) -> bool:
	"""True si el campo está cargado. 00:00 llega como timedelta(0), que es falsy."""
	return value not in (None, "")


@dataclass(frozen=True)
class Booking:
	"""An existing appointment. The engine only reads bookings."""

	id: str
	scheduled_start: datetime
	duration_minutes: int
	client_name: str = ""
	status: str = "scheduled"

	@property
	def scheduled_end(self) -> datetime:
		return self.scheduled_start + timedelta(minutes=self.duration_minutes)

	@property
	def booking_date(self) -> date:
		return self.scheduled_start.date()

	@property
	def occupies_time(self) -> bool:
		return self.status not in RELEASED_STATUSES

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "Booking":
		"""
		Construye un Booking desde un dict (frappe.get_all, payload JSON).

		Acepta scheduled_start completo o el par scheduled_date + scheduled_time
		tal como se guarda en Session Booking.
		"""
		if record.get("scheduled_start"):
			start = to_datetime(record["scheduled_start"])
		else:
			start = datetime.combine(
				to_date(record["scheduled_date"]),
				to_time(record["scheduled_time"])
			)

		return cls(
			id=str(record.get("id") or record.get("name") or ""),
			scheduled_start=start,
			duration_minutes=cint(record.get("duration_minutes")),
			client_name=record.get("client_name") or "",
			status=record.get("status") or "scheduled",
		)


@dataclass(frozen=True)
class AddOn:
	"""Catalog entry. Only duration_extension_minutes matters for scheduling."""

	id: str
	name: str
	price_additive: float = 0.0
	duration_extension_minutes: int = 0
	available_for: Tuple[str, ...] = ()

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "AddOn":
		available_for = record.get("available_for") or ()
		if isinstance(available_for, str):
			available_for = tuple(p.strip() for p in available_for.split(",") if p.strip())

		return cls(
			id=str(record.get("id") or record.get("add_on_id") or record.get("name")),
			name=record.get("add_on_name") or record.get("name") or "",
			price_additive=flt(record.get("price_additive", record.get("price"))),
			duration_extension_minutes=cint(record.get("duration_extension_minutes")),
			available_for=tuple(available_for),
		)


@dataclass(frozen=True)
class DayHours:
	"""Opening window for one day."""

	start: time
	end: time
	enabled: bool = True


@dataclass(frozen=True)
class BusinessHoursOverride:
	"""
	Excepción del admin para una fecha exacta.

	Puede combinar: holiday_override (abrir un feriado), day_override (abrir un
	día normalmente cerrado) y custom_start/custom_end (horario explícito).
	"""

	override_date: date
	holiday_override: bool = False
	day_override: bool = False
	custom_start: Optional[time] = None
	custom_end: Optional[time] = None

	@property
	def has_custom_hours(self) -> bool:
		return self.custom_start is not None and self.custom_end is not None

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "BusinessHoursOverride":
		custom_start = record.get("custom_start_time")
		custom_end = record.get("custom_end_time")

		return cls(
			override_date=to_date(record["override_date"]),
			holiday_override=bool(cint(record.get("holiday_override"))),
			day_override=bool(cint(record.get("day_override"))),
			custom_start=to_time(custom_start) if has_value(custom_start) else None,
			custom_end=to_time(custom_end) if has_value(custom_end) else None,
		)


@dataclass(frozen=True)
class AvailabilitySlot:
	"""Explicit admin block for one date: open (adds time) or closed (removes it)."""

	slot_date: date
	start_time: time
	end_time: time
	is_available: bool

	@classmethod
	def from_record(cls, record: Mapping[str, Any]) -> "AvailabilitySlot":
		return cls(
			slot_date=to_date(record["slot_date"]),
			start_time=to_time(record["start_time"]),
			end_time=to_time(record["end_time"]),
			is_available=bool(cint(record.get("is_available"))),
		)
