import logging
import uuid

from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import OperationalError, ProgrammingError

from handling_portal.db.session import SessionLocal
from handling_portal.core.config import settings
from handling_portal.models.handling_service import HandlingService
from handling_portal.models.location import City, Country, Location
from handling_portal.models.payment_method import PaymentMethod

log = logging.getLogger(__name__)

# (id, trip_type, sell_price, additional)
HANDLING_CATALOG = [
    (40, "arrival", 25000, 10000),
    (41, "departure", 25000, 10000),
    (42, "arrival_departure", 45000, 15000),
    (46, "transit", 50000, 15000),
]

BANK_METHODS = [
    ("BCA", "Bank Central Asia", "PT Layanan Handling Bandara", "1234567890"),
    ("Mandiri", "Bank Mandiri", "PT Layanan Handling Bandara", "1370012345678"),
]

COUNTRIES = [("IDN", "Indonesia"), ("SAU", "Saudi Arabia")]

CITIES = {
    ("IDN", "Jakarta"): ["Terminal 1", "Terminal 2", "Terminal 3"],
    ("IDN", "Surabaya"): ["Terminal 1", "Terminal 2"],
}


def ensure_catalog(db: Session):
    for sid, trip_type, sell, additional in HANDLING_CATALOG:
        if db.get(HandlingService, sid):
            continue
        db.add(HandlingService(
            id=sid,
            service_type=settings.HANDLING_SERVICE_TYPE,
            category=settings.HANDLING_GROUP_CATEGORY,
            trip_type=trip_type,
            sell_price=sell,
            additional=additional,
        ))
    db.commit()


def ensure_bank_methods(db: Session):
    for name, bank_name, holder, number in BANK_METHODS:
        if db.query(PaymentMethod).filter(PaymentMethod.name == name).first():
            continue
        db.add(PaymentMethod(
            id=str(uuid.uuid4()),
            name=name,
            bank_name=bank_name,
            account_holder=holder,
            account_number=number,
            type="manual",
            is_active=True,
        ))
    db.commit()


def ensure_locations(db: Session):
    for code, name in COUNTRIES:
        if not db.get(Country, code):
            db.add(Country(code=code, name=name))
    for (code, city_name), areas in CITIES.items():
        city = db.query(City).filter(City.name == city_name, City.country_code == code).first()
        if not city:
            city = City(id=str(uuid.uuid4()), name=city_name, country_code=code)
            db.add(city)
            db.flush()
        for area in areas:
            if not db.query(Location).filter(Location.city_id == city.id, Location.name == area).first():
                db.add(Location(id=str(uuid.uuid4()), name=area, city_id=city.id))
    db.commit()


def run(db=None):
    if db is None:
        db = SessionLocal()
    try:
        # If migrations haven't been applied yet, seeding must not crash the API.
        try:
            db.execute(text("SELECT 1 FROM airport_handling_services LIMIT 1"))
        except (ProgrammingError, OperationalError):
            db.rollback()
            log.warning("catalog table not found yet, skipping seed (run alembic upgrade head)")
            return

        ensure_catalog(db)
        ensure_bank_methods(db)
        ensure_locations(db)
        log.info("seed complete")
    finally:
        db.close()


if __name__ == "__main__":
    run()
