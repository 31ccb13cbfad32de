from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from handling_portal.db.session import get_db
from handling_portal.models.location import City, Country, Location
from handling_portal.services.pricing_service import load_price_table

router = APIRouter(tags=["public"])


@router.get("/public/handling-prices")
def handling_prices(db: Session = Depends(get_db)):
    """Sell and baggage prices per travel type. Falls back to built-in prices when the catalog can't be read."""
    return load_price_table(db).as_dict()


@router.get("/public/countries")
def list_countries(db: Session = Depends(get_db)):
    items = db.query(Country).order_by(Country.name).all()
    return [{"code": c.code, "name": c.name} for c in items]


@router.get("/public/cities")
def list_cities(country: Optional[str] = None, db: Session = Depends(get_db)):
    query = db.query(City)
    if country:
        query = query.filter(City.country_code == country.strip().upper())
    return [{"id": c.id, "name": c.name, "countryCode": c.country_code} for c in query.order_by(City.name).all()]


@router.get("/public/locations")
def list_locations(city: Optional[str] = None, db: Session = Depends(get_db)):
    """Pickup / dropoff areas, optionally for one city id."""
    query = db.query(Location)
    if city:
        query = query.filter(Location.city_id == city)
    return [{"id": l.id, "name": l.name, "cityId": l.city_id} for l in query.order_by(Location.name).all()]
