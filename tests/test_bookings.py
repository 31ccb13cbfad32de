import pytest

from handling_portal.models.handling_booking import HandlingBooking
from handling_portal.models.payment import Payment, PaymentBooking
from handling_portal.models.transaction import TransactionHistory
from handling_portal.models.user import User
from handling_portal.schemas.booking import GroupBookingDraft, PaymentIn
from handling_portal.services import booking_service
from handling_portal.services.agent_session import build_session
from handling_portal.services.booking_service import make_booking_code, submit_group_booking
from conftest import auth, draft, make_user


def test_booking_code_shape():
    code = make_booking_code()
    prefix, day, clock, seq = code.split("-")
    assert prefix == "HSA"
    assert len(day) == 8 and len(clock) == 6 and len(seq) == 3


def test_quote_without_discount(client, db, prices):
    agent = make_user(db, saldo=0)
    r = client.post("/api/v1/booking/group/quote", headers=auth(agent), json=draft())
    assert r.status_code == 200, r.text
    q = r.json()
    assert q["serviceUnitPrice"] == 45000
    assert q["originalTotal"] == 135000
    assert q["totalPayable"] == 135000
    assert q["saldoAllowed"] is False


def test_quote_with_agent_discount(client, db, prices):
    agent = make_user(db, saldo=100000, discount=10000)
    r = client.post("/api/v1/booking/group/quote", headers=auth(agent), json=draft())
    q = r.json()
    assert q["agentDiscountAmount"] == 30000
    assert q["totalPayable"] == 105000
    assert q["saldoAllowed"] is False


def test_quote_transit_group(client, db, prices):
    agent = make_user(db)
    r = client.post("/api/v1/booking/group/quote", headers=auth(agent),
                    json=draft(passengers=5, travelTypes=["transit"]))
    assert r.json()["originalTotal"] == 250000


def test_quote_rejects_transit_mix(client, db, prices):
    agent = make_user(db)
    r = client.post("/api/v1/booking/group/quote", headers=auth(agent),
                    json=draft(travelTypes=["transit", "arrival"]))
    assert r.status_code == 422


def test_quote_rejects_missing_area(client, db, prices):
    agent = make_user(db)
    r = client.post("/api/v1/booking/group/quote", headers=auth(agent),
                    json=draft(travelTypes=["arrival"], pickupArea=""))
    assert r.status_code == 422


@pytest.mark.parametrize("email", ["budi santoso@x.co", "budi@x..co", "budi@@x.co", "budi@x"])
def test_quote_rejects_malformed_email(client, db, prices, email):
    agent = make_user(db)
    r = client.post("/api/v1/booking/group/quote", headers=auth(agent), json=draft(email=email))
    assert r.status_code == 422


def test_quote_requires_login(client, prices):
    assert client.post("/api/v1/booking/group/quote", json=draft()).status_code == 401


def test_saldo_short_by_discounted_total_is_rejected(client, db, prices):
    agent = make_user(db, saldo=100000, discount=10000)
    r = client.post("/api/v1/booking/group", headers=auth(agent),
                    json={"draft": draft(), "payment": {"method": "use_saldo"}})
    assert r.status_code == 402
    assert "Saldo tidak mencukupi" in r.json()["detail"]
    assert db.query(HandlingBooking).count() == 0


def test_cash_booking(client, db, prices):
    agent = make_user(db)
    r = client.post("/api/v1/booking/group", headers=auth(agent),
                    json={"draft": draft(), "payment": {"method": "cash"}})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["bookingCode"].startswith("HSA-")
    assert body["status"] == "pending"
    assert body["paymentStatus"] == "Paid"

    b = db.query(HandlingBooking).one()
    assert b.travel_type == "arrival, departure"
    assert b.original_total == 135000
    assert b.total_price == 135000
    p = db.query(Payment).one()
    assert p.status == "auto paid" and p.payment_status == "completed"
    assert db.query(PaymentBooking).one().booking_type == "handling"


def test_bank_transfer_booking_waits_for_admin(client, db, prices, bank):
    agent = make_user(db)
    r = client.post("/api/v1/booking/group", headers=auth(agent),
                    json={"draft": draft(), "payment": {"method": "bank_transfer", "bankMethodId": bank.id}})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["paymentStatus"] == "tunggu konfirmasi Admin"
    assert body["bankName"] == "BCA"
    assert db.query(Payment).one().payment_status == "pending"


def test_bank_transfer_without_bank(client, db, prices):
    agent = make_user(db)
    r = client.post("/api/v1/booking/group", headers=auth(agent),
                    json={"draft": draft(), "payment": {"method": "bank_transfer"}})
    assert r.status_code == 400
    assert r.json()["detail"] == "Silakan pilih bank untuk transfer"


def test_no_payment_method(client, db, prices):
    agent = make_user(db)
    r = client.post("/api/v1/booking/group", headers=auth(agent), json={"draft": draft(), "payment": {}})
    assert r.status_code == 400
    assert r.json()["detail"] == "Silakan pilih metode pembayaran"


def test_saldo_booking_debits_wallet_and_writes_ledger(client, db, prices):
    agent = make_user(db, saldo=150000, discount=10000)
    r = client.post("/api/v1/booking/group", headers=auth(agent),
                    json={"draft": draft(), "payment": {"method": "use_saldo"}})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["status"] == "confirmed"
    assert body["totalPayable"] == 105000
    assert body["saldo"] == 45000

    db.expire_all()
    assert db.get(User, agent.id).saldo == 45000
    entry = db.query(TransactionHistory).one()
    assert entry.nominal == -105000
    assert entry.balance_after == 45000
    assert entry.description == f"Pembayaran booking {body['bookingCode']} - Handling Group"


def test_failed_write_rolls_back_everything(db, prices, monkeypatch):
    agent = make_user(db, saldo=200000)

    def broken_debit(*a, **kw):
        raise RuntimeError("ledger unavailable")

    monkeypatch.setattr(booking_service, "debit_for_booking", broken_debit)
    session = build_session(db, agent)
    with pytest.raises(RuntimeError):
        submit_group_booking(db, session, GroupBookingDraft(**draft()), PaymentIn(method="use_saldo"))

    db.expire_all()
    assert db.query(HandlingBooking).count() == 0
    assert db.query(Payment).count() == 0
    assert db.get(User, agent.id).saldo == 200000


def test_options_lists_active_banks(client, db, bank):
    agent = make_user(db, saldo=5000)
    r = client.get("/api/v1/booking/group/options", headers=auth(agent))
    assert r.status_code == 200
    body = r.json()
    assert [b["name"] for b in body["bankMethods"]] == ["BCA"]
    assert body["saldo"] == 5000


def test_suspended_agent_is_refused(client, db, prices):
    agent = make_user(db, status="suspended")
    r = client.post("/api/v1/booking/group/quote", headers=auth(agent), json=draft())
    assert r.status_code == 403
