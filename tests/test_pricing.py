from sqlalchemy.exc import OperationalError

from handling_portal.services.pricing_service import (
    FALLBACK_SELL_PRICES, PriceTable, calculate_price, load_price_table, unit_price,
)
from handling_portal.services.travel_selection import TravelType
from handling_portal.core.config import settings
from handling_portal.models.handling_service import HandlingService
from handling_portal import seed

A, D, T = TravelType.ARRIVAL, TravelType.DEPARTURE, TravelType.TRANSIT

TABLE = PriceTable(
    sell={"arrival": 25000, "departure": 25000, "transit": 50000, "arrival_departure": 45000},
    additional={"arrival": 10000, "departure": 10000, "transit": 15000, "arrival_departure": 15000},
)


def test_arrival_and_departure_use_combined_price():
    assert unit_price(TABLE.sell, [A, D]) == 45000
    assert unit_price(TABLE.sell, [D, A]) == 45000


def test_single_types_use_own_price():
    assert unit_price(TABLE.sell, [A]) == 25000
    assert unit_price(TABLE.sell, [T]) == 50000


def test_missing_key_prices_as_zero():
    assert unit_price({"arrival": 25000}, [A, D]) == 0
    assert unit_price({}, [T]) == 0


def test_group_of_three_arrival_departure():
    b = calculate_price(TABLE, [A, D], passengers=3)
    assert b.service_total == 135000
    assert b.baggage_total == 0
    assert b.subtotal == 135000


def test_transit_group_of_five():
    assert calculate_price(TABLE, [T], passengers=5).subtotal == 250000


def test_baggage_surcharge_is_per_piece():
    b = calculate_price(TABLE, [A], passengers=2, additional_baggage=4)
    assert b.baggage_unit == 10000
    assert b.baggage_total == 40000
    assert b.subtotal == 2 * 25000 + 40000
    assert b.baggage_descriptor() == "4 x 10000"


def test_no_baggage_means_no_surcharge():
    b = calculate_price(TABLE, [T], passengers=1, additional_baggage=0)
    assert b.baggage_unit == 0
    assert b.baggage_descriptor() is None


def test_load_price_table_reads_catalog(db, prices):
    table = load_price_table(db)
    assert not table.is_fallback
    assert table.sell == {"arrival": 25000, "departure": 25000, "transit": 50000, "arrival_departure": 45000}
    assert table.additional["transit"] == 15000


def test_empty_catalog_is_not_replaced_by_fallback(db):
    table = load_price_table(db)
    assert not table.is_fallback
    assert table.sell == {}


def test_lookup_failure_uses_fallback(db, monkeypatch):
    def boom(*a, **kw):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    monkeypatch.setattr(db, "query", boom)
    table = load_price_table(db)
    assert table.is_fallback
    assert table.sell == FALLBACK_SELL_PRICES
    assert all(v == 0 for v in table.additional.values())


def test_public_prices_endpoint(client, prices):
    r = client.get("/api/v1/public/handling-prices")
    assert r.status_code == 200
    body = r.json()
    assert body["fallback"] is False
    assert body["sellPrice"]["arrival_departure"] == 45000
    assert body["additionalPrice"]["transit"] == 15000
    assert body["sellPrice"]["transit"] == 50000


def _add_service(db, sid, trip_type, sell):
    db.add(HandlingService(id=sid, service_type=settings.HANDLING_SERVICE_TYPE,
                           category=settings.HANDLING_GROUP_CATEGORY, trip_type=trip_type,
                           sell_price=sell, additional=0))
    db.commit()


def test_rows_outside_configured_ids_are_ignored(db, prices):
    _add_service(db, 99, "arrival", 99999)
    table = load_price_table(db)
    assert table.sell["arrival"] == 25000


def test_row_under_wrong_id_is_skipped(db):
    _add_service(db, 40, "transit", 77777)
    _add_service(db, 46, "transit", 50000)
    table = load_price_table(db)
    assert table.sell == {"transit": 50000}


def test_seed_catalog_matches_configured_ids(SessionTesting):
    seed.run(SessionTesting())
    db = SessionTesting()
    by_id = {s.id: s.trip_type for s in db.query(HandlingService).all()}
    assert {t: i for i, t in by_id.items()} == settings.HANDLING_PRICE_IDS
    table = load_price_table(db)
    assert table.sell["arrival_departure"] == 45000
    assert table.sell["transit"] == 50000
    db.close()
