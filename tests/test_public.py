from handling_portal.models.handling_service import HandlingService
from handling_portal.models.payment_method import PaymentMethod
from handling_portal.seed import run as run_seed


def test_seed_is_idempotent(SessionTesting):
    run_seed(SessionTesting())
    run_seed(SessionTesting())
    db = SessionTesting()
    assert sorted(s.id for s in db.query(HandlingService).all()) == [40, 41, 42, 46]
    assert db.query(PaymentMethod).count() == 2
    db.close()


def test_cities_and_locations(client, SessionTesting):
    run_seed(SessionTesting())
    countries = client.get("/api/v1/public/countries").json()
    assert {"code": "IDN", "name": "Indonesia"} in countries

    cities = client.get("/api/v1/public/cities", params={"country": "idn"}).json()
    jakarta = next(c for c in cities if c["name"] == "Jakarta")
    areas = client.get("/api/v1/public/locations", params={"city": jakarta["id"]}).json()
    assert sorted(a["name"] for a in areas) == ["Terminal 1", "Terminal 2", "Terminal 3"]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert "X-Trace-Id" in client.get("/health").headers
