"""Travel-type selection for the group booking wizard.

Transit is exclusive: picking it drops arrival/departure, and picking arrival or
departure drops transit. Pickup/dropoff areas are cleared whenever the selection
stops requiring them.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class TravelType(str, Enum):
    ARRIVAL = "arrival"
    DEPARTURE = "departure"
    TRANSIT = "transit"

    @property
    def label(self) -> str:
        return self.value.capitalize()


AREA_MISMATCH_MESSAGE = "Pilih lokasi yang sesuai dengan jenis perjalanan yang dipilih"


def needs_pickup(selected) -> bool:
    return TravelType.ARRIVAL in selected or TravelType.TRANSIT in selected


def needs_dropoff(selected) -> bool:
    return TravelType.DEPARTURE in selected or TravelType.TRANSIT in selected


@dataclass(frozen=True)
class SelectionState:
    selected: tuple[TravelType, ...] = ()
    pickup_area: str = ""
    dropoff_area: str = ""

    @property
    def name(self) -> str:
        if not self.selected:
            return "NoneSelected"
        if self.selected == (TravelType.TRANSIT,):
            return "TransitOnly"
        return "ArrivalAndOrDeparture"

    def select(self, travel_type: TravelType) -> SelectionState:
        travel_type = TravelType(travel_type)
        if travel_type is TravelType.TRANSIT:
            return SelectionState(selected=(TravelType.TRANSIT,))
        if travel_type in self.selected:
            return self
        kept = tuple(t for t in self.selected if t is not TravelType.TRANSIT)
        return replace(self, selected=kept + (travel_type,))

    def deselect(self, travel_type: TravelType) -> SelectionState:
        travel_type = TravelType(travel_type)
        remaining = tuple(t for t in self.selected if t is not travel_type)
        return SelectionState(
            selected=remaining,
            pickup_area=self.pickup_area if needs_pickup(remaining) else "",
            dropoff_area=self.dropoff_area if needs_dropoff(remaining) else "",
        )

    def toggle(self, travel_type: TravelType, checked: bool) -> SelectionState:
        return self.select(travel_type) if checked else self.deselect(travel_type)


def validate_areas(selected, pickup_area: str | None, dropoff_area: str | None) -> str | None:
    """Return the form error when a required area is blank, else None."""
    if needs_pickup(selected) and not (pickup_area or "").strip():
        return AREA_MISMATCH_MESSAGE
    if needs_dropoff(selected) and not (dropoff_area or "").strip():
        return AREA_MISMATCH_MESSAGE
    return None


def parse_selection(values) -> tuple[TravelType, ...]:
    """Coerce raw identifiers, dropping duplicates and keeping first-seen order."""
    out: list[TravelType] = []
    for v in values or []:
        t = TravelType(v)
        if t not in out:
            out.append(t)
    return tuple(out)


def is_consistent(selected) -> bool:
    return bool(selected) and not (TravelType.TRANSIT in selected and len(selected) > 1)


def travel_type_labels(stored: str | None) -> str:
    """'arrival, departure' as stored on a booking -> 'Arrival, Departure'."""
    parts = [p.strip() for p in (stored or "").split(",") if p.strip()]
    out = []
    for p in parts:
        try:
            out.append(TravelType(p.lower()).label)
        except ValueError:
            out.append(p)
    return ", ".join(out)
