import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from handling_portal.core.config import settings
from handling_portal.models.handling_service import HandlingService
from handling_portal.services.travel_selection import TravelType

log = logging.getLogger(__name__)

PRICE_KEYS = ("arrival", "departure", "transit", "arrival_departure")

# Used only when the catalog cannot be read at all.
FALLBACK_SELL_PRICES = {"arrival": 25000, "departure": 25000, "transit": 50000}
FALLBACK_ADDITIONAL_PRICES = {"arrival": 0, "departure": 0, "transit": 0}


@dataclass
class PriceTable:
    sell: dict[str, int] = field(default_factory=dict)
    additional: dict[str, int] = field(default_factory=dict)
    is_fallback: bool = False

    def as_dict(self) -> dict:
        return {
            "sellPrice": {k: self.sell[k] for k in PRICE_KEYS if k in self.sell},
            "additionalPrice": {k: self.additional.get(k, 0) for k in PRICE_KEYS if k in self.sell},
            "fallback": self.is_fallback,
        }


@dataclass
class PriceBreakdown:
    service_unit: int
    baggage_unit: int
    passengers: int
    additional_baggage: int
    service_total: int
    baggage_total: int

    @property
    def subtotal(self) -> int:
        return self.service_total + self.baggage_total

    def baggage_descriptor(self) -> str | None:
        """Stored on the booking as '<qty> x <unit>'."""
        if not self.additional_baggage:
            return None
        return f"{self.additional_baggage} x {self.baggage_unit}"


def fallback_price_table() -> PriceTable:
    return PriceTable(
        sell=dict(FALLBACK_SELL_PRICES),
        additional=dict(FALLBACK_ADDITIONAL_PRICES),
        is_fallback=True,
    )


def load_price_table(db: Session) -> PriceTable:
    """Group handling prices keyed by trip type. An empty catalog yields an empty table."""
    try:
        rows = (
            db.query(HandlingService)
            .filter(
                HandlingService.service_type == settings.HANDLING_SERVICE_TYPE,
                HandlingService.category == settings.HANDLING_GROUP_CATEGORY,
                HandlingService.id.in_(list(settings.HANDLING_PRICE_IDS.values())),
            )
            .order_by(HandlingService.id.asc())
            .all()
        )
    except SQLAlchemyError as e:
        db.rollback()
        log.warning("handling price lookup failed, using fallback prices", extra={"error": str(e)})
        return fallback_price_table()

    table = PriceTable()
    for row in rows:
        if settings.HANDLING_PRICE_IDS.get(row.trip_type) != row.id:
            log.warning("catalog row does not match its trip type, skipped",
                        extra={"service_id": row.id, "trip_type": row.trip_type})
            continue
        table.sell[row.trip_type] = int(row.sell_price or 0)
        table.additional[row.trip_type] = int(row.additional or 0)
    if not rows:
        log.info("handling price catalog is empty")
    return table


def unit_price(prices: dict[str, int], selected) -> int:
    selected = [TravelType(t) for t in selected]
    if TravelType.ARRIVAL in selected and TravelType.DEPARTURE in selected:
        return int(prices.get("arrival_departure") or 0)
    return sum(int(prices.get(t.value) or 0) for t in selected)


def calculate_price(table: PriceTable, selected, passengers: int, additional_baggage: int = 0) -> PriceBreakdown:
    service_unit = unit_price(table.sell, selected)
    # no baggage means no surcharge, whatever the additional table holds
    baggage_unit = unit_price(table.additional, selected) if additional_baggage else 0
    return PriceBreakdown(
        service_unit=service_unit,
        baggage_unit=baggage_unit,
        passengers=passengers,
        additional_baggage=additional_baggage or 0,
        service_total=service_unit * passengers,
        baggage_total=baggage_unit * additional_baggage if additional_baggage else 0,
    )
