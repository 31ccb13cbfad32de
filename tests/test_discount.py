import pytest

from handling_portal.services.discount_service import (
    Discount, MembershipDiscount, apply_discount, apply_membership, quote, save_discount_snapshot,
)
from conftest import auth, make_user


def test_inactive_discount_changes_nothing():
    r = apply_discount(135000, Discount(kind="AMOUNT", value=10000, active=False), 3)
    assert r.discount_amount == 0
    assert r.payable_total == 135000


def test_flat_discount_per_passenger():
    r = apply_discount(135000, Discount(kind="AMOUNT", value=10000, active=True), 3)
    assert r.discount_amount == 30000
    assert r.payable_total == 105000


def test_discount_never_exceeds_subtotal():
    r = apply_discount(20000, Discount(kind="AMOUNT", value=50000, active=True), 2)
    assert r.discount_amount == 20000
    assert r.payable_total == 0


def test_fractional_value_is_floored():
    r = apply_discount(100000, Discount(kind="AMOUNT", value=999.9, active=True), 2)
    assert r.discount_amount == 1998


def test_membership_before_agent_discount():
    q = quote(100000, 2, Discount(kind="AMOUNT", value=5000, active=True), MembershipDiscount(percentage=10, active=True))
    assert q.membership_amount == 10000
    assert q.agent_discount_amount == 10000
    assert q.payable_total == 80000
    assert q.has_discount


def test_membership_inactive():
    assert apply_membership(100000, MembershipDiscount(percentage=10, active=False)).payable_total == 100000


def test_save_snapshot(db):
    u = make_user(db)
    r = save_discount_snapshot(db, u, 10000, 3, 45000)
    db.refresh(u)
    assert r.discount_amount == 30000
    assert u.handling_discount_kind == "AMOUNT"
    assert u.handling_discount_value == 10000
    assert u.handling_discount_amount == 30000
    assert u.total_after_discount == 105000
    assert u.handling_discount_active is True
    assert u.handling_discount_is_percentage is False


def test_save_snapshot_rejects_negative(db):
    u = make_user(db)
    with pytest.raises(ValueError):
        save_discount_snapshot(db, u, -1, 3, 45000)


def test_admin_sets_agent_discount(client, db, prices):
    admin = make_user(db, role="Admin")
    agent = make_user(db)
    r = client.put(f"/api/v1/agents/{agent.id}/discount", headers=auth(admin),
                   json={"value": 10000, "passengers": 3, "travelTypes": ["arrival", "departure"]})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["perPassenger"] == 10000
    assert body["discountAmount"] == 30000
    assert body["totalAfterDiscount"] == 105000


def test_agent_cannot_set_discount(client, db, prices):
    agent = make_user(db)
    r = client.put(f"/api/v1/agents/{agent.id}/discount", headers=auth(agent),
                   json={"value": 10000, "passengers": 3, "travelTypes": ["arrival"]})
    assert r.status_code == 403
