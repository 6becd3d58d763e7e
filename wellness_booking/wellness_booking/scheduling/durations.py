"""
Duration Adjuster

Maps the selected add-ons of a booking to the session's adjusted duration,
plus small catalog helpers (prices, which add-ons fit which session type).

The catalog is always passed in explicitly; DEFAULT_ADD_ON_CATALOG is only
the fallback used when no Wellness Add On documents exist.
"""

from typing import Dict, Iterable, List, Mapping, Union

from .entities import AddOn


SESSION_DURATIONS = {
	"60min": 60,
	"90min": 90,
	"120min": 120,
	"consultation": 30,
}

DEFAULT_ADD_ON_CATALOG = (
	AddOn("reflexology", "Reflexology", 25.0, 15, ("60min", "90min", "120min")),
	AddOn("aromatherapy", "Aromatherapy", 15.0, 0, ("60min", "90min", "120min")),
	AddOn("hot_stones", "Hot Stones", 30.0, 0, ("90min", "120min")),
	AddOn("cupping", "Cupping Therapy", 20.0, 0, ("60min", "90min", "120min")),
)

Catalog = Union[Mapping[str, AddOn], Iterable[AddOn]]


def index_catalog(catalog: Catalog) -> Dict[str, AddOn]:
	"""Catálogo indexado por id."""
	if isinstance(catalog, Mapping):
		return dict(catalog)
	return {add_on.id: add_on for add_on in catalog}


def _selected(selected_add_on_ids: Iterable[str], catalog: Catalog) -> List[AddOn]:
	# Ids desconocidos se ignoran; un add-on repetido suma cada vez
	index = index_catalog(catalog)
	return [index[i] for i in (selected_add_on_ids or ()) if i in index]


def adjusted_duration(
	base_duration: int,
	selected_add_on_ids: Iterable[str],
	catalog: Catalog
) -> int:
	"""
	Duración de la sesión más la extensión de los add-ons elegidos.

	Ejemplo:
		adjusted_duration(60, ["reflexology"], DEFAULT_ADD_ON_CATALOG) -> 75
	"""
	return base_duration + sum(
		add_on.duration_extension_minutes
		for add_on in _selected(selected_add_on_ids, catalog)
	)


def add_on_price_total(selected_add_on_ids: Iterable[str], catalog: Catalog) -> float:
	"""Suma de precios de los add-ons elegidos."""
	return sum(add_on.price_additive for add_on in _selected(selected_add_on_ids, catalog))


def available_add_ons(session_type: str, catalog: Catalog) -> List[AddOn]:
	"""Add-ons que se pueden agregar a un tipo de sesión."""
	return [
		add_on for add_on in index_catalog(catalog).values()
		if session_type in add_on.available_for
	]


def is_add_on_available(add_on_id: str, session_type: str, catalog: Catalog) -> bool:
	add_on = index_catalog(catalog).get(add_on_id)
	return bool(add_on and session_type in add_on.available_for)


def base_duration_for(session_type: str, default: int = 60) -> int:
	"""Duración base de un tipo de sesión ("90min" -> 90)."""
	return SESSION_DURATIONS.get(session_type, default)
